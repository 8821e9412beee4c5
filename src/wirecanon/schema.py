"""
Field-typed schema for rebuilding values from canonical forms.

A TypedSchema maps field names to a Tag, a nested TypedSchema, or a
one-element list [Tag] for arrays of scalars. Each string leaf is decoded
with parse(); JSON leaves that are already native numbers or booleans are
accepted as they are.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .canonical import Format
from .errors import ErrorCode, ParseError, UnsupportedTypeError
from .parse import parse
from .types import SCALAR_TAGS, Tag, to_tag


_LEAF_TAGS = SCALAR_TAGS | {Tag.NULL, Tag.UNDEFINED}


@dataclass(frozen=True)
class ListOf:
    """Field holding an array of scalars of one tag."""
    tag: Tag


def _mismatch(message: str, path: str) -> ParseError:
    return ParseError(message, details={"path": path}, code=ErrorCode.SCHEMA_MISMATCH)


def _leaf_tag(field_type: Any) -> Tag:
    tag = to_tag(field_type)
    if tag not in _LEAF_TAGS:
        raise UnsupportedTypeError(f"{tag.value} is not a field type", details={"tag": tag.value})
    return tag


class TypedSchema:
    """
    Schema built from a field map.

    Example:
        TypedSchema({
            "name": "string",
            "age": Tag.NUMBER,
            "tags": ["string"],
            "address": TypedSchema({"zip": "string"}),
        })
    """

    def __init__(self, fields: Mapping[str, Any]):
        self.fields: dict[str, Tag | ListOf | TypedSchema] = {}
        for name, field_type in fields.items():
            if isinstance(field_type, TypedSchema):
                self.fields[name] = field_type
            elif isinstance(field_type, ListOf):
                self.fields[name] = ListOf(_leaf_tag(field_type.tag))
            elif isinstance(field_type, (list, tuple)):
                if len(field_type) != 1:
                    raise ValueError(f"array field {name!r} needs exactly one element tag")
                self.fields[name] = ListOf(_leaf_tag(field_type[0]))
            else:
                self.fields[name] = _leaf_tag(field_type)

    def from_json(self, target: Any) -> dict[str, Any]:
        return self._rebuild(target, Format.JSON, "$")

    def from_qso(self, target: Any) -> dict[str, Any]:
        return self._rebuild(target, Format.QSO, "$")

    def from_pso(self, target: Any) -> dict[str, Any]:
        return self._rebuild(target, Format.PSO, "$")

    def _rebuild(self, target: Any, fmt: Format, path: str) -> dict[str, Any]:
        if not isinstance(target, Mapping):
            raise _mismatch(f"expected an object, got {type(target).__name__}", path)

        out: dict[str, Any] = {}
        for name, field_type in self.fields.items():
            if name not in target:
                continue
            item = target[name]
            item_path = f"{path}.{name}"

            if isinstance(field_type, TypedSchema):
                out[name] = field_type._rebuild(item, fmt, item_path)
            elif isinstance(field_type, ListOf):
                if fmt is Format.PSO:
                    raise _mismatch("a PlainStringObject cannot hold arrays", item_path)
                if not isinstance(item, list):
                    raise _mismatch(f"expected an array, got {type(item).__name__}", item_path)
                out[name] = [
                    _decode_leaf(field_type.tag, element, fmt, f"{item_path}[{index}]")
                    for index, element in enumerate(item)
                ]
            else:
                out[name] = _decode_leaf(field_type, item, fmt, item_path)
        return out


def _decode_leaf(tag: Tag, item: Any, fmt: Format, path: str) -> Any:
    if fmt is Format.JSON:
        # Native JSON scalars need no decoding
        if tag is Tag.BOOLEAN and isinstance(item, bool):
            return item
        if tag is Tag.NUMBER and isinstance(item, (int, float)) and not isinstance(item, bool):
            return item

    if tag in (Tag.NULL, Tag.UNDEFINED):
        return parse(tag)
    if not isinstance(item, str):
        raise _mismatch(f"expected a string for {tag.value}, got {type(item).__name__}", path)
    try:
        return parse(tag, item)
    except ParseError as exc:
        exc.details.setdefault("path", path)
        raise
