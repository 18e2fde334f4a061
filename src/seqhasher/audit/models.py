"""Audit event envelope."""

import json
from dataclasses import asdict, dataclass
from typing import Any

__all__ = ["LogEvent", "LOG_LEVELS"]

LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


@dataclass(frozen=True)
class LogEvent:
    """One line of a seqhasher audit log.

    Attributes
    ----------
    ts : str
        UTC timestamp, ISO8601 with microseconds and ``Z`` suffix.
    run_id : str
        Identifier shared by every event of one hashing run.
    level : str
        One of ``LOG_LEVELS``.
    event : str
        Event name, e.g. ``record_warning``.
    data : dict[str, Any]
        Event payload.
    stage : str | None
        Pipeline state (ready, hashing, emitting, done) when emitted.
    rid : str | None
        Identifier of the sequence record the event is about.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any]
    stage: str | None = None
    rid: str | None = None

    def __post_init__(self) -> None:
        """Reject unknown levels."""
        if self.level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.level}")

    def to_json(self) -> str:
        """Serialize as a compact single-line JSON object."""
        return json.dumps(asdict(self), ensure_ascii=False, separators=(",", ":"))
