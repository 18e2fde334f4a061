"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from seqhasher.models import Record  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the small FASTA/FASTQ fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """Factory for test records with minimal boilerplate."""

    def _factory(
        identifier: str = "seq1",
        sequence: bytes = b"ACTG",
        quality: bytes | None = None,
        index: int = 0,
    ) -> Record:
        return Record.from_title(identifier, sequence, quality=quality, index=index)

    return _factory
