"""Tests for the per-record hashing pipeline."""

import io
import json
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

import pytest

from seqhasher.audit import AuditLogger
from seqhasher.engine import HasherConfig, PipelineState, RecordPipeline
from seqhasher.errors import OutputError, RecordParseError
from seqhasher.models import Record

SHA1_AAAA = "e2512172abf8cc9f67fdd49eb6cacf2df71bbad3"
SHA1_ACTG = "65c89f59d38cdbf90dfaf0b0a6884829df8396b0"
SHA1_LOWER_ACTG = "80a8d5427ee0f280d9d7ec809b7184e12959b85b"
MD5_ACTG = "86bfb9f78dd8b6cd35962bb7324fdbf8"
XXHASH_AAAA = "cf40b5b72bc43e77"
XXHASH_ACTG = "704b34bf20faedf2"

MakeRecord = Callable[..., Record]


class _FailingWriter(io.BytesIO):
    """Output that refuses writes for selected payloads."""

    def __init__(self, fail_on: bytes) -> None:
        super().__init__()
        self.fail_on = fail_on

    def write(self, data: bytes) -> int:  # type: ignore[override]
        if self.fail_on in data:
            raise OSError("disk full")
        return super().write(data)


class _UnflushableWriter(io.BytesIO):
    """Output whose final flush fails."""

    def flush(self) -> None:
        raise OSError("broken pipe")


class _ResumingSource:
    """Record source that can continue after raising a parse error."""

    def __init__(self, items: list[Record | Exception]) -> None:
        self._items = list(items)

    def __iter__(self) -> "_ResumingSource":
        return self

    def __next__(self) -> Record:
        if not self._items:
            raise StopIteration
        item = self._items.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _three_records(make_record: MakeRecord) -> list[Record]:
    return [
        make_record("seq1", b"AAAA", index=0),
        make_record("seq2", b"ACTG", index=1),
        make_record("seq3", b"AAAA", index=2),
    ]


def _run(config: HasherConfig, records: Iterable[Record]) -> tuple[bytes, RecordPipeline]:
    output = io.BytesIO()
    pipeline = RecordPipeline(config, output)
    pipeline.run(records)
    return output.getvalue(), pipeline


# ---------------------------------------------------------------------------
# Output layout
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_identical_sequences_share_digest(make_record: MakeRecord) -> None:
    """Test default config relabels FASTA with source;sha1;id."""
    config = HasherConfig(input_name="test.fasta")

    data, pipeline = _run(config, _three_records(make_record))

    assert data == (
        f">test.fasta;{SHA1_AAAA};seq1\nAAAA\n"
        f">test.fasta;{SHA1_ACTG};seq2\nACTG\n"
        f">test.fasta;{SHA1_AAAA};seq3\nAAAA\n"
    ).encode()
    assert pipeline.stats.records_processed == 3


@pytest.mark.unit
def test_headers_only_without_source_name(make_record: MakeRecord) -> None:
    """Test headers-only output is one digest;id line per record."""
    config = HasherConfig(input_name="test.fasta", headers_only=True, omit_source_name=True)

    data, _ = _run(config, _three_records(make_record))

    assert data == f"{SHA1_AAAA};seq1\n{SHA1_ACTG};seq2\n{SHA1_AAAA};seq3\n".encode()


@pytest.mark.unit
def test_multiple_algorithms_case_sensitive(make_record: MakeRecord) -> None:
    """Test digests appear in configured order before the identifier."""
    config = HasherConfig(
        hash_types=("sha1", "xxhash"),
        case_sensitive=True,
        headers_only=True,
        omit_source_name=True,
    )

    data, _ = _run(config, _three_records(make_record))
    lines = data.decode().splitlines()

    assert lines[0] == f"{SHA1_AAAA};{XXHASH_AAAA};seq1"
    assert lines[1] == f"{SHA1_ACTG};{XXHASH_ACTG};seq2"
    assert all(line.count(";") == 2 for line in lines)


@pytest.mark.unit
def test_case_folding_collapses_lowercase(make_record: MakeRecord) -> None:
    """Test lowercase input hashes like uppercase unless case-sensitive."""
    records = [make_record("lower", b"actg")]

    folded, _ = _run(HasherConfig(headers_only=True, omit_source_name=True), records)
    exact, _ = _run(
        HasherConfig(headers_only=True, omit_source_name=True, case_sensitive=True), records
    )

    assert folded == f"{SHA1_ACTG};lower\n".encode()
    assert exact == f"{SHA1_LOWER_ACTG};lower\n".encode()


@pytest.mark.unit
def test_normalized_sequence_is_written(make_record: MakeRecord) -> None:
    """Test output body is the normalized sequence."""
    config = HasherConfig(input_name="in.fa", hash_types="md5")

    data, _ = _run(config, [make_record("seq1", b"ac\ntg ")])

    assert data == f">in.fa;{MD5_ACTG};seq1\nACTG\n".encode()


@pytest.mark.unit
def test_name_override_in_header(make_record: MakeRecord) -> None:
    """Test override text replaces the source name."""
    config = HasherConfig(input_name="test.fasta", name_override="sampleA", headers_only=True)

    data, _ = _run(config, [make_record("seq2", b"ACTG")])

    assert data == f"sampleA;{SHA1_ACTG};seq2\n".encode()


@pytest.mark.unit
def test_fastq_layout_is_preserved(make_record: MakeRecord) -> None:
    """Test FASTQ keeps @ marker, + line and quality."""
    config = HasherConfig(input_name="test.fastq")

    data, _ = _run(config, [make_record("seq1", b"ACTG", quality=b"DFGH")])

    assert data == f"@test.fastq;{SHA1_ACTG};seq1\nACTG\n+\nDFGH\n".encode()


@pytest.mark.unit
def test_fastq_quality_realigned_after_whitespace_removal(make_record: MakeRecord) -> None:
    """Test quality loses the positions of removed whitespace."""
    config = HasherConfig(omit_source_name=True)

    data, pipeline = _run(config, [make_record("r1", b"AC TG", quality=b"DF!GH")])

    assert data == f"@{SHA1_ACTG};r1\nACTG\n+\nDFGH\n".encode()
    assert pipeline.stats.warnings == []


@pytest.mark.unit
def test_fastq_quality_mismatch_is_warned(make_record: MakeRecord) -> None:
    """Test an unrecoverable quality length mismatch is reported, not fatal."""
    config = HasherConfig(omit_source_name=True)

    data, pipeline = _run(config, [make_record("r1", b"ACTG", quality=b"DF")])

    assert data.endswith(b"+\nDF\n")
    assert len(pipeline.stats.warnings) == 1
    assert "r1" in pipeline.stats.warnings[0]


# ---------------------------------------------------------------------------
# Empty sequences and failures
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_empty_sequence_gives_empty_digest(make_record: MakeRecord) -> None:
    """Test empty sequences warn and processing continues."""
    config = HasherConfig(input_name="in.fa", hash_types=("sha1", "md5"))
    records = [make_record("empty", b" \n"), make_record("seq2", b"ACTG", index=1)]

    data, pipeline = _run(config, records)

    assert data == f">in.fa;;;empty\n\n>in.fa;{SHA1_ACTG};{MD5_ACTG};seq2\nACTG\n".encode()
    assert pipeline.stats.empty_sequences == 1
    assert pipeline.stats.records_processed == 2
    assert pipeline.stats.warnings == ["Empty sequence for record 'empty', digest left empty"]


@pytest.mark.unit
def test_parse_error_skips_entry(make_record: MakeRecord) -> None:
    """Test a malformed entry is recorded and the next one still processed."""
    source = _ResumingSource(
        [
            make_record("seq1", b"AAAA"),
            RecordParseError("Error reading record 2: bad entry", index=1),
            make_record("seq3", b"ACTG", index=2),
        ]
    )
    config = HasherConfig(headers_only=True, omit_source_name=True)

    data, pipeline = _run(config, source)

    assert data == f"{SHA1_AAAA};seq1\n{SHA1_ACTG};seq3\n".encode()
    assert pipeline.stats.records_skipped == 1
    assert pipeline.stats.errors == ["Error reading record 2: bad entry"]


@pytest.mark.unit
def test_parse_error_ending_source(make_record: MakeRecord) -> None:
    """Test a source that stops at its malformed entry still finishes."""

    def source() -> Iterator[Record]:
        yield make_record("seq1", b"AAAA")
        raise RecordParseError("Error reading record 2: bad entry", index=1)

    config = HasherConfig(headers_only=True, omit_source_name=True)

    data, pipeline = _run(config, source())

    assert data == f"{SHA1_AAAA};seq1\n".encode()
    assert pipeline.stats.records_skipped == 1
    assert pipeline.state is PipelineState.DONE


@pytest.mark.unit
def test_write_error_is_counted(make_record: MakeRecord) -> None:
    """Test a failed write skips that record only."""
    output = _FailingWriter(b"seq2")
    pipeline = RecordPipeline(HasherConfig(headers_only=True), output)

    stats = pipeline.run(_three_records(make_record))

    assert stats.write_errors == 1
    assert stats.records_processed == 2
    assert stats.errors[0].startswith("Error writing record 'seq2'")
    assert b"seq2" not in output.getvalue()


@pytest.mark.unit
def test_flush_failure_raises_output_error(make_record: MakeRecord) -> None:
    """Test a failed final flush is fatal."""
    pipeline = RecordPipeline(HasherConfig(), _UnflushableWriter())

    with pytest.raises(OutputError, match="Error flushing output"):
        pipeline.run([make_record()])

    assert pipeline.state is not PipelineState.DONE


@pytest.mark.unit
def test_state_machine(make_record: MakeRecord) -> None:
    """Test the pipeline starts READY and ends DONE."""
    pipeline = RecordPipeline(HasherConfig(), io.BytesIO())
    assert pipeline.state is PipelineState.READY

    pipeline.process_record(make_record())
    assert pipeline.state is PipelineState.EMITTING

    pipeline.run([])
    assert pipeline.state is PipelineState.DONE


@pytest.mark.unit
def test_hash_sequence_order() -> None:
    """Test digests follow configured order, duplicates included."""
    pipeline = RecordPipeline(HasherConfig(hash_types=("md5", "sha1", "md5")), io.BytesIO())

    assert pipeline.hash_sequence(b"ACTG") == [MD5_ACTG, SHA1_ACTG, MD5_ACTG]


@pytest.mark.unit
def test_pipeline_logs_warnings(make_record: MakeRecord, tmp_path: Path) -> None:
    """Test warnings reach the audit log with record id and state."""
    log_path = tmp_path / "events.jsonl"

    with AuditLogger(run_id="r", log_path=log_path) as logger:
        pipeline = RecordPipeline(HasherConfig(), io.BytesIO(), logger=logger)
        pipeline.run([make_record("empty", b"")])

    events = [json.loads(line) for line in log_path.read_text().splitlines()]
    warnings = [e for e in events if e["event"] == "record_warning"]

    assert len(warnings) == 1
    assert warnings[0]["rid"] == "empty"
    assert warnings[0]["level"] == "WARN"
    assert warnings[0]["stage"] == "hashing"
