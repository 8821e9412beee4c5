"""
Type tags and value classification for wirecanon.

The converters never inspect Python types themselves. They ask a
Classifier for the Tag of each value and dispatch on it.
"""

import datetime as _dt
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol

from .errors import UnsupportedTypeError


class Tag(str, Enum):
    """Type tags understood by the codec and the converters."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    FUNCTION = "function"
    ARRAY = "array"
    OBJECT = "object"
    DATE = "date"
    REGEX = "regex"


SCALAR_TAGS = frozenset({Tag.STRING, Tag.NUMBER, Tag.BOOLEAN, Tag.DATE, Tag.REGEX})


class _Undefined:
    """Marker for a missing value, distinct from None."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


class Classifier(Protocol):
    """Maps a runtime value to its Tag."""

    def classify(self, value: Any) -> Tag:
        ...


class DefaultClassifier:
    """
    Classifier for plain Python values.

    Order matters: bool before int (bool is a subclass of int), datetime
    before the callable check, mappings and sequences before callables so
    that callable containers still classify by shape.
    """

    def classify(self, value: Any) -> Tag:
        if value is UNDEFINED:
            return Tag.UNDEFINED
        if value is None:
            return Tag.NULL
        if isinstance(value, bool):
            return Tag.BOOLEAN
        if isinstance(value, (int, float)):
            return Tag.NUMBER
        if isinstance(value, str):
            return Tag.STRING
        if isinstance(value, (_dt.datetime, _dt.date)):
            return Tag.DATE
        if isinstance(value, re.Pattern):
            return Tag.REGEX
        if isinstance(value, (list, tuple)):
            return Tag.ARRAY
        if isinstance(value, Mapping):
            return Tag.OBJECT
        if callable(value):
            return Tag.FUNCTION

        raise UnsupportedTypeError(
            f"cannot classify value of type {type(value).__name__}",
            details={"type": type(value).__name__},
        )


def to_tag(tag: "Tag | str") -> Tag:
    """Normalize a Tag or its string value to a Tag."""
    if isinstance(tag, Tag):
        return tag
    try:
        return Tag(tag)
    except ValueError:
        raise UnsupportedTypeError(f"unknown type tag {tag!r}", details={"tag": tag}) from None
