"""Header composition and record serialization."""

from seqhasher.output.header import (
    FIELD_SEPARATOR,
    STDIN_MARKER,
    STDIN_SOURCE_NAME,
    compose_header,
    resolve_source_name,
)
from seqhasher.output.writer import encode_text, format_record

__all__ = [
    "FIELD_SEPARATOR",
    "STDIN_MARKER",
    "STDIN_SOURCE_NAME",
    "compose_header",
    "encode_text",
    "format_record",
    "resolve_source_name",
]
