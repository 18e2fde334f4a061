"""Public API for hashing sequence files.

This module provides the high-level entry points for seqhasher:
- Hashing a single sequence
- Hashing FASTA/FASTQ text held in memory
- Hashing a file (plain or gzip/bzip2/xz compressed) to a file or stdout
"""

from __future__ import annotations

import io
import sys
from collections.abc import Sequence
from pathlib import Path

from seqhasher.engine import HasherConfig, HasherResult, hash_stream, run_hasher
from seqhasher.errors import OutputError, SeqHasherError
from seqhasher.hashing import DEFAULT_HASH_TYPE, get_hash_function
from seqhasher.normalize import normalize_sequence

__all__ = [
    "HashingError",
    "hash_file",
    "hash_sequence",
    "hash_text",
]


class HashingError(SeqHasherError):
    """Raised when a hashing run fails."""

    def __init__(self, message: str, file: str | None = None) -> None:
        """Initialize hashing error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            Input file being processed.
        """
        super().__init__(message)
        self.file = file


def hash_sequence(
    sequence: bytes | str,
    hash_types: Sequence[str] | str = (DEFAULT_HASH_TYPE,),
    *,
    case_sensitive: bool = False,
) -> list[str]:
    """Fingerprint one sequence.

    Parameters
    ----------
    sequence : bytes | str
        Residues; whitespace is removed and, unless ``case_sensitive``,
        letters are upper-cased before hashing.
    hash_types : Sequence[str] | str, optional
        Algorithms, as a sequence or comma-separated string,
        by default ("sha1",).
    case_sensitive : bool, optional
        Keep letter case, by default False.

    Returns
    -------
    list[str]
        One hex digest per algorithm, in order.

    Examples
    --------
        >>> from seqhasher import hash_sequence
        >>> hash_sequence("acgt\\nacgt", "sha1,xxhash")
    """
    if isinstance(sequence, str):
        sequence = sequence.encode("utf-8")

    config = HasherConfig(hash_types=hash_types, case_sensitive=case_sensitive)
    normalized = normalize_sequence(sequence, config.case_sensitive)
    return [get_hash_function(name)(normalized) for name in config.hash_types]


def hash_text(
    text: str | bytes,
    config: HasherConfig | None = None,
) -> str:
    """Hash FASTA/FASTQ content held in memory.

    Parameters
    ----------
    text : str | bytes
        Sequence-file content.
    config : HasherConfig | None, optional
        Run options. If None, uses defaults (sha1, source name "stdin").

    Returns
    -------
    str
        The rewritten records.

    Raises
    ------
    InputFormatError
        If ``text`` is not FASTA/FASTQ.
    """
    if config is None:
        config = HasherConfig()

    data = text.encode("utf-8") if isinstance(text, str) else text
    output = io.BytesIO()
    hash_stream(io.BytesIO(data), output, config)
    return output.getvalue().decode("utf-8", "surrogateescape")


def hash_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    *,
    hash_types: Sequence[str] | str = (DEFAULT_HASH_TYPE,),
    headers_only: bool = False,
    omit_source_name: bool = False,
    case_sensitive: bool = False,
    name: str | None = None,
) -> HasherResult:
    """Hash every record of a sequence file.

    Parameters
    ----------
    input_path : str | Path
        FASTA/FASTQ file, optionally gzip/bzip2/xz compressed.
    output_path : str | Path | None, optional
        Destination file. If None, writes to stdout.
    hash_types : Sequence[str] | str, optional
        Algorithms in header order, by default ("sha1",).
    headers_only : bool, optional
        Write only the rewritten headers, by default False.
    omit_source_name : bool, optional
        Leave the file name out of headers, by default False.
    case_sensitive : bool, optional
        Keep letter case when hashing, by default False.
    name : str | None, optional
        Text to use instead of the file name in headers.

    Returns
    -------
    HasherResult
        Run statistics, including per-record warnings.

    Raises
    ------
    FileNotFoundError
        If the input file does not exist.
    UnsupportedHashError
        If an algorithm name is unknown.
    HashingError
        If the run fails.

    Examples
    --------
        >>> from seqhasher import hash_file
        >>> result = hash_file("otus.fasta.gz", "otus.hashed.fasta", hash_types="sha1,md5")
        >>> print(result.records_processed)
    """
    input_path_obj = Path(input_path)
    if not input_path_obj.exists():
        raise FileNotFoundError(f"File not found: {input_path}")

    config = HasherConfig(
        hash_types=hash_types,
        headers_only=headers_only,
        omit_source_name=omit_source_name,
        case_sensitive=case_sensitive,
        name_override=name,
        input_name=str(input_path_obj),
    )

    if output_path is None:
        result = run_hasher(config, sys.stdout.buffer)
    else:
        output_path_obj = Path(output_path)
        try:
            output = output_path_obj.open("wb")
        except OSError as e:
            raise OutputError(f"Error opening output: {e}") from e
        with output:
            result = run_hasher(config, output)

    if not result.success:
        raise HashingError(
            f"Hashing failed: {result.error_message}",
            file=str(input_path_obj),
        )

    return result
