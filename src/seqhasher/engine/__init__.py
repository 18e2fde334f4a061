"""Pipeline orchestration engine.

This package provides the run configuration, the per-record pipeline and
the end-to-end runner.
"""

from seqhasher.engine.config import HasherConfig
from seqhasher.engine.pipeline import PipelineState, PipelineStats, RecordPipeline
from seqhasher.engine.runner import HasherResult, hash_stream, run_hasher

__all__ = [
    "HasherConfig",
    "HasherResult",
    "PipelineState",
    "PipelineStats",
    "RecordPipeline",
    "hash_stream",
    "run_hasher",
]
