"""Exception hierarchy for seqhasher.

Fatal errors (``InputFormatError``, ``OutputError``) abort a run.
``RecordParseError`` is per-record and recoverable; the pipeline records
it and keeps reading. ``UnsupportedHashError`` is raised while building
the configuration, before any record is read.
"""

__all__ = [
    "SeqHasherError",
    "UnsupportedHashError",
    "InputFormatError",
    "RecordParseError",
    "OutputError",
]


class SeqHasherError(Exception):
    """Base class for seqhasher errors."""


class UnsupportedHashError(SeqHasherError, ValueError):
    """Raised when a hash algorithm name is not in the registry."""

    def __init__(self, name: str, supported: tuple[str, ...]) -> None:
        """Initialize unsupported hash error.

        Parameters
        ----------
        name : str
            The rejected algorithm name.
        supported : tuple[str, ...]
            All supported algorithm names, in registry order.
        """
        super().__init__(
            f"Invalid hash type: {name}. Supported types are: {', '.join(supported)}"
        )
        self.name = name
        self.supported = supported


class InputFormatError(SeqHasherError):
    """Raised when the input is not a recognizable FASTA/FASTQ stream."""


class RecordParseError(SeqHasherError):
    """Raised by a record source when a single entry is malformed."""

    def __init__(self, message: str, index: int | None = None) -> None:
        """Initialize record parse error.

        Parameters
        ----------
        message : str
            Error message.
        index : int | None, optional
            0-based position of the failing record, if known.
        """
        super().__init__(message)
        self.index = index


class OutputError(SeqHasherError):
    """Raised when the output stream cannot be opened or finalized."""
