"""Content-derived fingerprints for FASTA/FASTQ sequences.

This package provides:
- Data models (seqhasher.models): sequence records
- Hashing (seqhasher.hashing): digest algorithm registry
- Normalization (seqhasher.normalize): whitespace and case handling
- Output (seqhasher.output): header composition and record formatting
- Parsing (seqhasher.parse): input opening, decompression, record framing
- Engine (seqhasher.engine): configuration, pipeline and runner
- Audit (seqhasher.audit): JSONL event logging
- CLI (seqhasher.cli): command-line interface
- Public API (seqhasher.api): high-level convenience functions
"""

__version__ = "1.0.2"
__license__ = "GPL-3.0-or-later"

from seqhasher.api import HashingError, hash_file, hash_sequence, hash_text
from seqhasher.engine import HasherConfig, HasherResult
from seqhasher.errors import (
    InputFormatError,
    OutputError,
    RecordParseError,
    SeqHasherError,
    UnsupportedHashError,
)
from seqhasher.hashing import SUPPORTED_HASH_TYPES
from seqhasher.models import Record, SequenceFormat

__all__ = [
    "__version__",
    "__license__",
    "SUPPORTED_HASH_TYPES",
    "HasherConfig",
    "HasherResult",
    "HashingError",
    "InputFormatError",
    "OutputError",
    "Record",
    "RecordParseError",
    "SeqHasherError",
    "SequenceFormat",
    "UnsupportedHashError",
    "hash_file",
    "hash_sequence",
    "hash_text",
]
