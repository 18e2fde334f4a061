"""JSONL audit trail for hashing runs.

Each event is one JSON object on its own line. The file is opened in
append mode and flushed after every event, so several runs can share a
log and an interrupted run still leaves a readable trail.
"""

import traceback
from collections import Counter
from pathlib import Path
from typing import Any

from seqhasher.audit.helpers import get_iso_timestamp, get_package_version
from seqhasher.audit.models import LogEvent

__all__ = ["AuditLogger"]


class AuditLogger:
    """Append-only JSONL logger bound to one run.

    Attributes
    ----------
    run_id : str
        Identifier stamped on every event.
    log_path : Path
        Destination JSONL file.
    current_stage : str | None
        Pipeline state attached to events that do not name one.
    level_counts : Counter[str]
        Number of events written per level.
    """

    def __init__(self, run_id: str, log_path: Path | str) -> None:
        """Open ``log_path`` for appending, creating parent directories.

        Parameters
        ----------
        run_id : str
            Run identifier, usually from ``generate_run_id``.
        log_path : Path | str
            JSONL file to append to.
        """
        self.run_id = run_id
        self.log_path = Path(log_path)
        self.current_stage: str | None = None
        self.level_counts: Counter[str] = Counter()

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the log file. Safe to call more than once."""
        if not self._file.closed:
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Set the pipeline state used by subsequent events."""
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Append one event to the log.

        Parameters
        ----------
        event_type : str
            Event name (e.g., "run_started").
        data : dict[str, Any] | None, optional
            JSON-serializable payload.
        level : str, optional
            "DEBUG", "INFO", "WARN" or "ERROR", by default "INFO".
        stage : str | None, optional
            Pipeline state; defaults to ``current_stage``.
        rid : str | None, optional
            Sequence record identifier.

        Raises
        ------
        ValueError
            If ``level`` is unknown.
        """
        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data if data is not None else {},
            stage=stage if stage is not None else self.current_stage,
            rid=rid,
        )
        self._file.write(log_event.to_json() + "\n")
        self._file.flush()
        self.level_counts[level] += 1

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Log the command line, configuration and package version."""
        self.event(
            "run_started",
            data={
                "command": command,
                "parameters": parameters,
                "version": get_package_version(),
            },
        )

    def run_finished(
        self,
        status: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Log the end of a run.

        Parameters
        ----------
        status : str
            "success" or "failed".
        duration_seconds : float
            Wall-clock time of the run.
        counters : dict[str, int] | None, optional
            Record counters (processed, skipped, write errors, empty).
        """
        data: dict[str, Any] = {"status": status, "duration_seconds": round(duration_seconds, 6)}
        if counters:
            data["counters"] = counters
        self.event("run_finished", data=data)

    def record_warning(self, rid: str, message: str, stage: str | None = None) -> None:
        """Log a per-record warning such as an empty sequence."""
        self.event("record_warning", data={"message": message}, level="WARN", stage=stage, rid=rid)

    def record_error(
        self,
        exception_class: str,
        message: str,
        rid: str | None = None,
        stage: str | None = None,
    ) -> None:
        """Log a record that was skipped (parse or write failure).

        Parameters
        ----------
        exception_class : str
            Name of the exception class.
        message : str
            Error message.
        rid : str | None, optional
            Record identifier; None when the entry could not be parsed.
        stage : str | None, optional
            Pipeline state; defaults to ``current_stage``.
        """
        self.event(
            "record_error",
            data={"exception_class": exception_class, "message": message},
            level="ERROR",
            stage=stage,
            rid=rid,
        )

    def run_failed(self, exc: BaseException, stage: str | None = None) -> None:
        """Log the fatal error that ended a run, with its traceback.

        Parameters
        ----------
        exc : BaseException
            The exception that aborted the run.
        stage : str | None, optional
            Pipeline state at the time of failure.
        """
        self.event(
            "error",
            data={
                "exception_class": type(exc).__name__,
                "message": str(exc),
                "traceback": "".join(traceback.format_exception(exc)),
            },
            level="ERROR",
            stage=stage,
        )
