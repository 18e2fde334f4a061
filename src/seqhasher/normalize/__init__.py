"""Sequence normalization (whitespace removal, case folding)."""

from seqhasher.normalize.normalizer import (
    WHITESPACE_CHARS,
    normalize_sequence,
    realign_quality,
)

__all__ = [
    "WHITESPACE_CHARS",
    "normalize_sequence",
    "realign_quality",
]
