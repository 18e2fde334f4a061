"""FASTA/FASTQ input handling.

Main entry points:
- open_input: path or ``-`` to a binary stream
- read_records: sniff compression and format, then iterate records
"""

from seqhasher.parse.base import (
    detect_compression,
    open_decompressed,
    open_input,
    skip_leading_whitespace,
    sniff_format,
)
from seqhasher.parse.reader import RecordReader, read_records

__all__ = [
    "RecordReader",
    "detect_compression",
    "open_decompressed",
    "open_input",
    "read_records",
    "skip_leading_whitespace",
    "sniff_format",
]
