"""Audit logging subsystem for seqhasher.

Main Components
---------------
- AuditLogger: JSONL event logger
- generate_run_id: run identifier factory
- get_iso_timestamp: event timestamps
"""

from seqhasher.audit.helpers import generate_run_id, get_iso_timestamp, get_package_version
from seqhasher.audit.logger import AuditLogger
from seqhasher.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
    "get_iso_timestamp",
    "get_package_version",
]
