"""Run configuration for the hashing pipeline."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

from seqhasher.hashing import DEFAULT_HASH_TYPE, parse_hash_types, validate_hash_types
from seqhasher.output import STDIN_MARKER, resolve_source_name


@dataclass(frozen=True)
class HasherConfig:
    """Immutable snapshot of run options.

    Attributes
    ----------
    hash_types : tuple[str, ...]
        Algorithms to run, in header order. A comma-separated string is
        accepted and split.
    headers_only : bool
        Emit only the composed header line per record.
    omit_source_name : bool
        Drop the source name field from headers.
    case_sensitive : bool
        Skip upper-casing during normalization.
    name_override : str | None
        Literal text replacing the file/stdin name in headers.
    input_name : str
        Input path, or ``-`` for stdin.
    source_name : str
        Resolved once from ``name_override`` and ``input_name``.
    """

    hash_types: Sequence[str] = (DEFAULT_HASH_TYPE,)
    headers_only: bool = False
    omit_source_name: bool = False
    case_sensitive: bool = False
    name_override: str | None = None
    input_name: str = STDIN_MARKER
    source_name: str = field(init=False)

    def __post_init__(self) -> None:
        """Validate hash types and resolve the source name."""
        if isinstance(self.hash_types, str):
            hash_types = parse_hash_types(self.hash_types)
        else:
            hash_types = validate_hash_types(self.hash_types)

        object.__setattr__(self, "hash_types", hash_types)
        object.__setattr__(self, "input_name", str(self.input_name))
        object.__setattr__(
            self, "source_name", resolve_source_name(self.input_name, self.name_override)
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["hash_types"] = list(self.hash_types)
        return data
