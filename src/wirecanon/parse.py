"""
Parse direction: typed strings back to values.

The core only decodes single leaves. Rebuilding a whole structure needs
field-to-type information, which a Schema supplies; the parse_from_*
functions hand the canonical structure to the schema unchanged.
"""

from typing import Any, Protocol

from .codec import decode_scalar
from .types import Tag


class Schema(Protocol):
    """Rebuilds values from canonical forms using per-field type tags."""

    def from_json(self, target: Any) -> Any:
        ...

    def from_qso(self, target: Any) -> Any:
        ...

    def from_pso(self, target: Any) -> Any:
        ...


def parse(tag: Tag | str, text: str | None = None) -> Any:
    """
    Parse a string to a value of the given type.

    Args:
        tag: "string", "number", "boolean", "date", "regex", "undefined" or "null"
        text: Canonical text; ignored for undefined and null

    Returns:
        The decoded value

    Raises:
        ParseError: If text is not valid for the tag
        UnsupportedTypeError: If the tag cannot be parsed
    """
    return decode_scalar(tag, text)


def parse_from_json(schema: Schema, target: Any) -> Any:
    """Alias for schema.from_json(target)."""
    return schema.from_json(target)


def parse_from_qso(schema: Schema, target: Any) -> Any:
    """Alias for schema.from_qso(target)."""
    return schema.from_qso(target)


def parse_from_pso(schema: Schema, target: Any) -> Any:
    """Alias for schema.from_pso(target)."""
    return schema.from_pso(target)
