"""Run identifiers, timestamps and version lookup for audit events."""

import importlib.metadata
import secrets
from datetime import UTC, datetime

__all__ = ["generate_run_id", "get_iso_timestamp", "get_package_version"]


def get_iso_timestamp() -> str:
    """Return the current UTC time as ISO8601 with microseconds and ``Z``.

    Example: ``2026-02-03T12:34:56.123456Z``.
    """
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def generate_run_id() -> str:
    """Generate a unique run identifier.

    Returns
    -------
    str
        ``<timestamp>__<8 hex chars>``; sorts chronologically.
    """
    return f"{get_iso_timestamp()}__{secrets.token_hex(4)}"


def get_package_version() -> str:
    """Return the installed seqhasher version, or "unknown" from a source tree."""
    try:
        return importlib.metadata.version("seqhasher")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"
