"""Record framing on top of Biopython's low-level FASTA/FASTQ parsers.

Biopython's iterators stop at the first malformed entry. ``RecordReader``
keeps the lines the parser consumed since the last good record and, after
a failure, restarts a fresh parser at the next header line among them, so
one bad entry costs only that entry.
"""

import io
from collections import deque
from collections.abc import Callable, Iterator
from typing import BinaryIO

from Bio.SeqIO.FastaIO import SimpleFastaParser
from Bio.SeqIO.QualityIO import FastqGeneralIterator

from seqhasher.errors import RecordParseError
from seqhasher.models import Record, SequenceFormat
from seqhasher.parse.base import open_decompressed, skip_leading_whitespace, sniff_format

__all__ = ["INPUT_ENCODING", "RecordReader", "read_records"]

INPUT_ENCODING = "utf-8"
_INPUT_ERRORS = "surrogateescape"

_PARSERS: dict[SequenceFormat, Callable[..., Iterator[tuple[str, ...]]]] = {
    SequenceFormat.FASTA: SimpleFastaParser,
    SequenceFormat.FASTQ: FastqGeneralIterator,
}


def _to_bytes(text: str) -> bytes:
    return text.encode(INPUT_ENCODING, _INPUT_ERRORS)


class _ReplayableLines:
    """Text line iterator that remembers lines read since the last record."""

    def __init__(self, handle: io.TextIOBase) -> None:
        self._handle = handle
        self._pending: deque[str] = deque()
        self.consumed: list[str] = []

    def __iter__(self) -> "_ReplayableLines":
        return self

    def __next__(self) -> str:
        line = self._pending.popleft() if self._pending else next(self._handle)
        self.consumed.append(line)
        return line

    def read(self, size: int = -1) -> str:
        # Biopython checks for text mode with read(0)
        if size == 0:
            return ""
        return "".join(self)

    def mark_record(self, marker: str) -> None:
        """Forget lines of the record just returned, keeping a read-ahead header."""
        if self.consumed and self.consumed[-1].startswith(marker):
            self.consumed = self.consumed[-1:]
        else:
            self.consumed = []

    def rewind_to_next_header(self, marker: str) -> None:
        """Queue consumed lines again from the first header after the failed one."""
        for position in range(1, len(self.consumed)):
            if self.consumed[position].startswith(marker):
                self._pending.extendleft(reversed(self.consumed[position:]))
                break
        self.consumed = []


class RecordReader:
    """Iterator over records of one FASTA or FASTQ stream.

    The format is sniffed when the reader is created, so a stream that is
    not a sequence file fails before any record is handed out. A
    malformed entry raises ``RecordParseError`` from ``__next__``; the
    next call resumes at the following record.

    Attributes
    ----------
    format : SequenceFormat | None
        Detected format, None for empty input.
    records_read : int
        Records returned so far.
    records_skipped : int
        Malformed entries reported so far.
    """

    def __init__(self, stream: BinaryIO) -> None:
        """Prepare the reader and sniff the input format.

        Parameters
        ----------
        stream : BinaryIO
            Raw (possibly compressed) binary input.

        Raises
        ------
        InputFormatError
            If the input is not FASTA/FASTQ.
        """
        binary = open_decompressed(stream)
        self.format = sniff_format(skip_leading_whitespace(binary))
        self.records_read = 0
        self.records_skipped = 0

        self._lines: _ReplayableLines | None = None
        self._entries: Iterator[tuple[str, ...]] | None = None
        if self.format is not None:
            handle = io.TextIOWrapper(
                binary,  # type: ignore[arg-type]
                encoding=INPUT_ENCODING,
                errors=_INPUT_ERRORS,
                newline=None,
            )
            self._lines = _ReplayableLines(handle)
            self._entries = _PARSERS[self.format](self._lines)

    def __iter__(self) -> "RecordReader":
        return self

    def __next__(self) -> Record:
        if self._entries is None or self._lines is None or self.format is None:
            raise StopIteration

        position = self.records_read + self.records_skipped
        try:
            entry = next(self._entries)
        except StopIteration:
            self._entries = None
            raise
        except ValueError as e:
            self.records_skipped += 1
            self._lines.rewind_to_next_header(self.format.marker)
            self._entries = _PARSERS[self.format](self._lines)
            raise RecordParseError(
                f"Error reading record {position + 1}: {e}", index=position
            ) from e

        self._lines.mark_record(self.format.marker)

        if self.format is SequenceFormat.FASTA:
            title, seq = entry
            qual = None
        else:
            title, seq, qual_text = entry
            qual = _to_bytes(qual_text)

        self.records_read += 1
        return Record.from_title(title, _to_bytes(seq), quality=qual, index=position)


def read_records(stream: BinaryIO) -> RecordReader:
    """Open a record reader over ``stream``.

    Parameters
    ----------
    stream : BinaryIO
        Raw binary input (gzip, bzip2, xz and zstd are decompressed).

    Returns
    -------
    RecordReader
        Iterator of records. Iteration may raise ``RecordParseError`` for
        a malformed entry and can be continued afterwards.

    Raises
    ------
    InputFormatError
        If the input is not a recognizable sequence format.
    """
    return RecordReader(stream)
