"""Input stream helpers: opening, decompression and format sniffing."""

import bz2
import gzip
import io
import lzma
import sys
from pathlib import Path
from typing import BinaryIO

import zstandard

from seqhasher.errors import InputFormatError
from seqhasher.models import SequenceFormat

__all__ = [
    "SNIFF_BYTES",
    "detect_compression",
    "open_decompressed",
    "open_input",
    "skip_leading_whitespace",
    "sniff_format",
]

SNIFF_BYTES = 4096

_GZIP_MAGIC = b"\x1f\x8b"
_BZIP2_MAGIC = b"BZh"
_XZ_MAGIC = b"\xfd7zXZ\x00"
_ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


def open_input(input_name: str | Path) -> BinaryIO:
    """Open the input designator as a binary stream.

    Parameters
    ----------
    input_name : str | Path
        File path, or ``-`` (or empty) for standard input.

    Returns
    -------
    BinaryIO
        Readable binary stream. The caller owns it (stdin included).

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    if str(input_name) in ("", "-"):
        return sys.stdin.buffer

    path = Path(input_name)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {input_name}")
    return path.open("rb")


def _peekable(stream: BinaryIO) -> io.BufferedReader:
    if hasattr(stream, "peek"):
        return stream  # type: ignore[return-value]
    return io.BufferedReader(stream)  # type: ignore[arg-type]


def detect_compression(head: bytes) -> str | None:
    """Detect the compression format from leading magic bytes.

    Parameters
    ----------
    head : bytes
        First bytes of the stream.

    Returns
    -------
    str | None
        'gzip', 'bzip2', 'xz', 'zstd', or None for uncompressed data.
    """
    if head.startswith(_GZIP_MAGIC):
        return "gzip"
    if head.startswith(_BZIP2_MAGIC):
        return "bzip2"
    if head.startswith(_XZ_MAGIC):
        return "xz"
    if head.startswith(_ZSTD_MAGIC):
        return "zstd"
    return None


def open_decompressed(stream: BinaryIO) -> io.BufferedIOBase:
    """Wrap ``stream`` so reads return decompressed bytes.

    Parameters
    ----------
    stream : BinaryIO
        Raw input stream, compressed or not.

    Returns
    -------
    io.BufferedIOBase
        Stream supporting ``peek`` that yields plain sequence-file bytes.
    """
    buffered = _peekable(stream)
    compression = detect_compression(buffered.peek(len(_XZ_MAGIC))[: len(_XZ_MAGIC)])

    if compression == "gzip":
        return gzip.GzipFile(fileobj=buffered, mode="rb")
    if compression == "bzip2":
        return bz2.BZ2File(buffered, mode="rb")
    if compression == "xz":
        return lzma.LZMAFile(buffered, mode="rb")
    if compression == "zstd":
        reader = zstandard.ZstdDecompressor().stream_reader(buffered, read_across_frames=True)
        return io.BufferedReader(reader)  # type: ignore[arg-type]
    return buffered


def sniff_format(head: bytes) -> SequenceFormat | None:
    """Sniff FASTA or FASTQ from the first non-whitespace byte.

    Parameters
    ----------
    head : bytes
        Leading (decompressed) bytes of the input.

    Returns
    -------
    SequenceFormat | None
        Detected format, or None if ``head`` holds only whitespace.

    Raises
    ------
    InputFormatError
        If the first character is neither ``>`` nor ``@``.
    """
    first = head.lstrip()[:1]

    if not first:
        return None
    if first == b">":
        return SequenceFormat.FASTA
    if first == b"@":
        return SequenceFormat.FASTQ

    raise InputFormatError("invalid FASTA/Q format")


def skip_leading_whitespace(stream: io.BufferedIOBase) -> bytes:
    """Consume whitespace at the start of ``stream`` and peek what follows.

    Parameters
    ----------
    stream : io.BufferedIOBase
        Decompressed stream supporting ``peek``.

    Returns
    -------
    bytes
        Buffered bytes starting at the first non-whitespace byte, or
        ``b""`` if the stream holds only whitespace.
    """
    while True:
        head = stream.peek(SNIFF_BYTES)
        if not head:
            return b""
        stripped = head.lstrip()
        if stripped:
            stream.read(len(head) - len(stripped))
            return stream.peek(SNIFF_BYTES)
        stream.read(len(head))
