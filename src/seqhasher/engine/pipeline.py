"""Per-record hashing pipeline.

Each record goes READY -> HASHING -> EMITTING -> READY; the pipeline
enters DONE once the record source is exhausted and the output has been
flushed. Exactly one record is held at a time and output order matches
input order.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO

from seqhasher.audit.logger import AuditLogger
from seqhasher.engine.config import HasherConfig
from seqhasher.errors import OutputError, RecordParseError
from seqhasher.hashing import HashFunction, get_hash_function
from seqhasher.models import Record
from seqhasher.normalize import normalize_sequence, realign_quality
from seqhasher.output import compose_header, format_record

__all__ = ["PipelineState", "PipelineStats", "RecordPipeline"]


class PipelineState(str, Enum):
    """Pipeline states."""

    READY = "ready"
    HASHING = "hashing"
    EMITTING = "emitting"
    DONE = "done"


@dataclass
class PipelineStats:
    """Counters and diagnostics accumulated over one run.

    Attributes
    ----------
    records_processed : int
        Records hashed and written.
    records_skipped : int
        Entries the record source failed to parse.
    write_errors : int
        Records hashed but not written because the output failed.
    empty_sequences : int
        Records whose normalized sequence was empty.
    warnings : list[str]
        Warning messages, in order of occurrence.
    errors : list[str]
        Recoverable error messages, in order of occurrence.
    """

    records_processed: int = 0
    records_skipped: int = 0
    write_errors: int = 0
    empty_sequences: int = 0
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def counters(self) -> dict[str, int]:
        """Return numeric counters only."""
        return {
            "records_processed": self.records_processed,
            "records_skipped": self.records_skipped,
            "write_errors": self.write_errors,
            "empty_sequences": self.empty_sequences,
        }


class RecordPipeline:
    """Normalize, hash, relabel and emit records one at a time.

    Attributes
    ----------
    config : HasherConfig
        Run options.
    output : BinaryIO
        Destination stream; flushed once by ``finish``.
    logger : AuditLogger | None
        Optional audit logger for warnings and skipped records.
    state : PipelineState
        Current state.
    stats : PipelineStats
        Counters for the run so far.
    """

    def __init__(
        self,
        config: HasherConfig,
        output: BinaryIO,
        logger: AuditLogger | None = None,
    ) -> None:
        """Initialize the pipeline.

        Parameters
        ----------
        config : HasherConfig
            Validated run options.
        output : BinaryIO
            Writable binary stream.
        logger : AuditLogger | None, optional
            Audit logger. If None, diagnostics are only kept in ``stats``.
        """
        self.config = config
        self.output = output
        self.logger = logger
        self.state = PipelineState.READY
        self.stats = PipelineStats()
        self._hash_functions: list[HashFunction] = [
            get_hash_function(name) for name in config.hash_types
        ]

    def _set_state(self, state: PipelineState) -> None:
        self.state = state
        if self.logger:
            self.logger.set_stage(state.value)

    def _warn(self, message: str, rid: str) -> None:
        self.stats.warnings.append(message)
        if self.logger:
            self.logger.record_warning(rid, message)

    def _record_error(self, error: Exception, rid: str | None = None) -> None:
        self.stats.errors.append(str(error))
        if self.logger:
            self.logger.record_error(type(error).__name__, str(error), rid=rid)

    def hash_sequence(self, sequence: bytes) -> list[str]:
        """Digest normalized bytes with every configured algorithm.

        Parameters
        ----------
        sequence : bytes
            Normalized sequence.

        Returns
        -------
        list[str]
            One digest per configured algorithm, in configured order.
        """
        return [hash_fn(sequence) for hash_fn in self._hash_functions]

    def process_record(self, record: Record) -> bytes:
        """Run one record through normalization, hashing and formatting.

        Parameters
        ----------
        record : Record
            Parsed input record.

        Returns
        -------
        bytes
            Serialized output for the record.
        """
        self._set_state(PipelineState.HASHING)

        sequence = normalize_sequence(record.sequence, self.config.case_sensitive)
        if not sequence:
            self.stats.empty_sequences += 1
            self._warn(
                f"Empty sequence for record '{record.identifier}', digest left empty",
                record.identifier,
            )

        digests = self.hash_sequence(sequence)

        quality = record.quality
        if quality is not None and len(quality) != len(sequence):
            quality = realign_quality(record.sequence, quality)
            if len(quality) != len(sequence):
                self._warn(
                    f"Quality length {len(quality)} does not match sequence length "
                    f"{len(sequence)} for record '{record.identifier}'",
                    record.identifier,
                )

        self._set_state(PipelineState.EMITTING)

        header = compose_header(
            self.config.source_name,
            digests,
            record.identifier,
            self.config.omit_source_name,
        )
        return format_record(
            record,
            header,
            sequence,
            quality=quality,
            headers_only=self.config.headers_only,
        )

    def run(self, records: Iterable[Record]) -> PipelineStats:
        """Process every record from ``records`` and flush the output.

        Malformed entries (``RecordParseError`` from the source) and
        failed writes are recorded in ``stats`` and skipped.

        Parameters
        ----------
        records : Iterable[Record]
            Record source.

        Returns
        -------
        PipelineStats
            Counters and diagnostics for the run.

        Raises
        ------
        OutputError
            If the output cannot be flushed at the end.
        """
        iterator = iter(records)

        while True:
            self._set_state(PipelineState.READY)

            try:
                record = next(iterator)
            except StopIteration:
                break
            except RecordParseError as e:
                self.stats.records_skipped += 1
                self._record_error(e)
                continue

            data = self.process_record(record)

            try:
                self.output.write(data)
            except OSError as e:
                self.stats.write_errors += 1
                self._record_error(
                    OutputError(f"Error writing record '{record.identifier}': {e}"),
                    rid=record.identifier,
                )
                continue

            self.stats.records_processed += 1

        self.finish()
        return self.stats

    def finish(self) -> None:
        """Flush the output and enter the DONE state.

        Raises
        ------
        OutputError
            If flushing fails.
        """
        try:
            self.output.flush()
        except OSError as e:
            raise OutputError(f"Error flushing output: {e}") from e
        self._set_state(PipelineState.DONE)
