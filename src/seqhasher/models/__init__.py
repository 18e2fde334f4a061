"""Data models for seqhasher."""

from seqhasher.models.records import Record, SequenceFormat

__all__ = [
    "Record",
    "SequenceFormat",
]
