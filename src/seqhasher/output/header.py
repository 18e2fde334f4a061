"""Output header composition.

Header fields are joined with a single ``;``. Semicolons inside the
identifier or the source name are not escaped, so such headers cannot be
split back unambiguously.
"""

from collections.abc import Sequence
from pathlib import PurePath

__all__ = [
    "FIELD_SEPARATOR",
    "STDIN_MARKER",
    "STDIN_SOURCE_NAME",
    "compose_header",
    "resolve_source_name",
]

FIELD_SEPARATOR = ";"
STDIN_MARKER = "-"
STDIN_SOURCE_NAME = "stdin"


def resolve_source_name(input_name: str, name_override: str | None = None) -> str:
    """Resolve the provenance label embedded in every header.

    Parameters
    ----------
    input_name : str
        Input path as given by the user, or ``-`` for stdin.
    name_override : str | None, optional
        Literal replacement text; used verbatim when non-empty.

    Returns
    -------
    str
        The override, ``"stdin"`` for the stdin marker, or the file's
        base name (compression suffix included).
    """
    if name_override:
        return name_override
    if input_name in ("", STDIN_MARKER):
        return STDIN_SOURCE_NAME
    return PurePath(input_name).name


def compose_header(
    source_name: str,
    digests: Sequence[str],
    identifier: str,
    omit_source_name: bool = False,
) -> str:
    """Build the rewritten header (without ``>``/``@`` marker).

    Parameters
    ----------
    source_name : str
        Resolved source name.
    digests : Sequence[str]
        Hex digests in configured algorithm order.
    identifier : str
        Original record identifier.
    omit_source_name : bool, optional
        Drop the leading source name field, by default False.

    Returns
    -------
    str
        ``[source_name;]digest[;digest...];identifier``.
    """
    digest_field = FIELD_SEPARATOR.join(digests)
    if omit_source_name:
        return f"{digest_field}{FIELD_SEPARATOR}{identifier}"
    return f"{source_name}{FIELD_SEPARATOR}{digest_field}{FIELD_SEPARATOR}{identifier}"
