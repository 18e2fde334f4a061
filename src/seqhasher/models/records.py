"""Sequence record data model.

Records are produced by the input collaborator (``seqhasher.parse``) and
consumed once by the record pipeline.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = ["SequenceFormat", "Record"]


class SequenceFormat(str, Enum):
    """Structural format of a record's origin."""

    FASTA = "fasta"
    FASTQ = "fastq"

    @property
    def marker(self) -> str:
        """Header marker character for this format."""
        return ">" if self is SequenceFormat.FASTA else "@"


@dataclass(frozen=True)
class Record:
    """One sequence entry.

    Attributes
    ----------
    identifier : str
        Header token up to the first whitespace.
    sequence : bytes
        Raw residue bytes as framed by the parser.
    format : SequenceFormat
        FASTA or FASTQ.
    quality : bytes | None
        Quality string for FASTQ records, None for FASTA.
    description : str
        Rest of the header line after the identifier (may be empty).
    index : int
        0-based position of the record in the input.
    """

    identifier: str
    sequence: bytes
    format: SequenceFormat = SequenceFormat.FASTA
    quality: bytes | None = None
    description: str = ""
    index: int = 0

    def __post_init__(self) -> None:
        """Check FASTA/FASTQ consistency."""
        if self.format is SequenceFormat.FASTQ and self.quality is None:
            raise ValueError(f"FASTQ record {self.identifier!r} has no quality string")
        if self.format is SequenceFormat.FASTA and self.quality is not None:
            raise ValueError(f"FASTA record {self.identifier!r} cannot carry quality")

    @property
    def is_fastq(self) -> bool:
        """Whether the record came from a FASTQ source."""
        return self.format is SequenceFormat.FASTQ

    @classmethod
    def from_title(
        cls,
        title: str,
        sequence: bytes,
        quality: bytes | None = None,
        index: int = 0,
    ) -> "Record":
        """Build a record from a full header line (without marker).

        Parameters
        ----------
        title : str
            Header text after ``>`` or ``@``.
        sequence : bytes
            Residue bytes.
        quality : bytes | None, optional
            Quality bytes; their presence makes the record FASTQ.
        index : int, optional
            0-based record position, by default 0.

        Returns
        -------
        Record
            New record with identifier and description split on the
            first whitespace run.
        """
        parts = title.split(None, 1)
        identifier = parts[0] if parts else ""
        description = parts[1].strip() if len(parts) > 1 else ""
        return cls(
            identifier=identifier,
            sequence=sequence,
            format=SequenceFormat.FASTQ if quality is not None else SequenceFormat.FASTA,
            quality=quality,
            description=description,
            index=index,
        )
