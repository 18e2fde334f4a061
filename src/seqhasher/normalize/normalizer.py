"""Deterministic sequence normalization.

Normalization removes all whitespace from residue data and, unless
hashing is case-sensitive, upper-cases it. The same normalized bytes are
hashed and written to the output, so two records that differ only in
line wrapping or letter case collapse to one fingerprint.
"""

import re

__all__ = ["WHITESPACE_CHARS", "normalize_sequence", "realign_quality"]

# Unicode White_Space code points
WHITESPACE_CHARS = (
    "\t\n\v\f\r "
    "\x85\xa0"
    "\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

# Sequences are bytes, so match each code point by its UTF-8 encoding
_WHITESPACE_RE = re.compile(
    b"(?:" + b"|".join(re.escape(ch.encode("utf-8")) for ch in WHITESPACE_CHARS) + b")+"
)


def normalize_sequence(sequence: bytes, case_sensitive: bool = False) -> bytes:
    """Normalize raw sequence bytes for hashing and output.

    Parameters
    ----------
    sequence : bytes
        Raw residue bytes, possibly containing line breaks or other
        whitespace anywhere.
    case_sensitive : bool, optional
        If False, upper-case the result (ASCII only), by default False.

    Returns
    -------
    bytes
        New bytes with every whitespace character removed.

    Notes
    -----
    Idempotent: ``normalize_sequence(normalize_sequence(s)) ==
    normalize_sequence(s)`` for any flag value.
    """
    stripped = _WHITESPACE_RE.sub(b"", sequence)
    if case_sensitive:
        return stripped
    return stripped.upper()


def realign_quality(sequence: bytes, quality: bytes) -> bytes:
    """Drop quality scores that belonged to removed whitespace.

    Parameters
    ----------
    sequence : bytes
        Raw (un-normalized) sequence bytes.
    quality : bytes
        Quality string as read from the FASTQ record.

    Returns
    -------
    bytes
        ``quality`` with the positions of whitespace runs in ``sequence``
        removed. Returned unchanged when the two lengths differ (there is
        no positional correspondence to preserve) or when the sequence
        has no whitespace.
    """
    if len(sequence) != len(quality):
        return quality

    spans = [match.span() for match in _WHITESPACE_RE.finditer(sequence)]
    if not spans:
        return quality

    kept: list[bytes] = []
    position = 0
    for start, end in spans:
        kept.append(quality[position:start])
        position = end
    kept.append(quality[position:])
    return b"".join(kept)
