"""End-to-end hashing run.

Opens the input, frames records, drives the ``RecordPipeline`` and turns
fatal errors into a failed ``HasherResult``. Output written before a fatal
error is left in place.
"""

import sys
import time
from dataclasses import asdict, dataclass, field
from typing import Any, BinaryIO

from seqhasher.audit.logger import AuditLogger
from seqhasher.engine.config import HasherConfig
from seqhasher.engine.pipeline import PipelineStats, RecordPipeline
from seqhasher.output import STDIN_MARKER
from seqhasher.parse import open_input, read_records

__all__ = ["HasherResult", "hash_stream", "run_hasher"]


@dataclass
class HasherResult:
    """Results from one hashing run.

    Attributes
    ----------
    success : bool
        Whether the run reached end of input and flushed its output.
    source_name : str
        Source name embedded in headers.
    records_processed : int
        Records hashed and written.
    records_skipped : int
        Malformed entries skipped.
    write_errors : int
        Records that could not be written.
    warnings : list[str]
        Per-record warnings (e.g. empty sequences).
    errors : list[str]
        Per-record recoverable errors.
    error_message : str | None
        Fatal error message if failed.
    """

    success: bool
    source_name: str
    records_processed: int = 0
    records_skipped: int = 0
    write_errors: int = 0
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    error_message: str | None = None

    @classmethod
    def from_stats(
        cls,
        stats: PipelineStats,
        source_name: str,
        error_message: str | None = None,
    ) -> "HasherResult":
        """Build a result from pipeline counters."""
        return cls(
            success=error_message is None,
            source_name=source_name,
            records_processed=stats.records_processed,
            records_skipped=stats.records_skipped,
            write_errors=stats.write_errors,
            warnings=list(stats.warnings),
            errors=list(stats.errors),
            error_message=error_message,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def hash_stream(
    input_stream: BinaryIO,
    output: BinaryIO,
    config: HasherConfig,
    logger: AuditLogger | None = None,
) -> PipelineStats:
    """Hash every record of an open input stream.

    Parameters
    ----------
    input_stream : BinaryIO
        Raw binary input; gzip, bzip2 and xz are decompressed.
    output : BinaryIO
        Writable binary destination.
    config : HasherConfig
        Run options.
    logger : AuditLogger | None, optional
        Audit logger.

    Returns
    -------
    PipelineStats
        Counters and diagnostics.

    Raises
    ------
    InputFormatError
        If the input is not FASTA/FASTQ. Raised before any output.
    OutputError
        If the output cannot be flushed.
    """
    records = read_records(input_stream)
    pipeline = RecordPipeline(config, output, logger=logger)
    return pipeline.run(records)


def run_hasher(
    config: HasherConfig,
    output: BinaryIO,
    input_stream: BinaryIO | None = None,
    logger: AuditLogger | None = None,
    command: list[str] | None = None,
) -> HasherResult:
    """Run a complete hashing pass.

    Parameters
    ----------
    config : HasherConfig
        Run options; ``config.input_name`` is opened unless
        ``input_stream`` is given.
    output : BinaryIO
        Writable binary destination. Not closed by this function.
    input_stream : BinaryIO | None, optional
        Already-open input. If None, the input is opened and closed here.
    logger : AuditLogger | None, optional
        Audit logger for run and record events.
    command : list[str] | None, optional
        Command line recorded in the ``run_started`` event.

    Returns
    -------
    HasherResult
        Run outcome. Fatal errors (unreadable input, unrecognized format,
        failed flush) give ``success=False`` with ``error_message`` set.

    Examples
    --------
        >>> import sys
        >>> from seqhasher.engine import HasherConfig, run_hasher
        >>> config = HasherConfig(hash_types=("sha1", "xxhash"), input_name="reads.fq.gz")
        >>> result = run_hasher(config, sys.stdout.buffer)
        >>> result.records_processed
    """
    start_time = time.perf_counter()

    if logger:
        logger.run_started(
            command=command if command is not None else list(sys.argv),
            parameters=config.to_dict(),
        )

    pipeline = RecordPipeline(config, output, logger=logger)
    owns_input = input_stream is None and config.input_name not in ("", STDIN_MARKER)

    try:
        if input_stream is None:
            input_stream = open_input(config.input_name)
        try:
            pipeline.run(read_records(input_stream))
        finally:
            if owns_input:
                input_stream.close()

        result = HasherResult.from_stats(pipeline.stats, config.source_name)

    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        if logger:
            logger.run_failed(e, stage=pipeline.state.value)
        result = HasherResult.from_stats(pipeline.stats, config.source_name, error_msg)

    if logger:
        logger.run_finished(
            status="success" if result.success else "failed",
            duration_seconds=time.perf_counter() - start_time,
            counters=pipeline.stats.counters(),
        )

    return result
