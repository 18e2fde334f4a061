"""Record serialization for FASTA, FASTQ and headers-only output."""

from seqhasher.models import Record, SequenceFormat

__all__ = ["OUTPUT_ENCODING", "OUTPUT_ERRORS", "encode_text", "format_record"]

OUTPUT_ENCODING = "utf-8"
# Undecodable input bytes come back out unchanged
OUTPUT_ERRORS = "surrogateescape"


def encode_text(text: str) -> bytes:
    """Encode header text for the output stream."""
    return text.encode(OUTPUT_ENCODING, OUTPUT_ERRORS)


def format_record(
    record: Record,
    header: str,
    sequence: bytes,
    quality: bytes | None = None,
    headers_only: bool = False,
) -> bytes:
    """Serialize one processed record.

    Parameters
    ----------
    record : Record
        Source record; only its format is consulted.
    header : str
        Composed header without marker.
    sequence : bytes
        Normalized sequence to write as the body.
    quality : bytes | None, optional
        Quality string for FASTQ output. Defaults to the record's own.
    headers_only : bool, optional
        Emit just ``header`` and a newline, by default False.

    Returns
    -------
    bytes
        Newline-terminated output for this record.
    """
    header_bytes = encode_text(header)

    if headers_only:
        return header_bytes + b"\n"

    marker = record.format.marker.encode("ascii")
    body = marker + header_bytes + b"\n" + sequence + b"\n"

    if record.format is SequenceFormat.FASTQ:
        qual = quality if quality is not None else record.quality or b""
        body += b"+\n" + qual + b"\n"

    return body
