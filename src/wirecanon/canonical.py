"""
Canonical forms for runtime values.

Three target forms, each a freshly allocated structure:
- JSON: tree of dicts/lists, leaves keep str/int/float/bool, dates and
  patterns become strings
- QSO: every leaf a string, arrays hold strings only
- PSO: every leaf a string, no arrays anywhere

Failures raised at a leaf travel up to the nearest enclosing array or
object, which drops the child or re-raises according to the failure kind
and the strictness level of the call. Codec failures are never dropped.
"""

import logging
import math
from collections.abc import Callable
from enum import Enum
from typing import Any

from .codec import encode_scalar
from .errors import (
    ConversionError,
    ConversionResult,
    ErrorCode,
    FailureKind,
    UnsupportedTypeError,
    WirecanonError,
)
from .options import CanonicalOptions, JsonStrictness, PsoStrictness, QsoStrictness
from .types import Tag

logger = logging.getLogger(__name__)


JsonValue = str | int | float | bool | list["JsonValue"] | dict[str, "JsonValue"]
QsoValue = str | list[str] | dict[str, "QsoValue"]
PsoValue = str | dict[str, "PsoValue"]


class Format(str, Enum):
    """Target canonical forms."""
    JSON = "json"
    QSO = "qso"
    PSO = "pso"


_FORM_NAMES = {
    Format.JSON: "a JSON object",
    Format.QSO: "a QueryStringObject",
    Format.PSO: "a PlainStringObject",
}

_LEAF_FAILURES = {
    Tag.FUNCTION: (ErrorCode.FUNCTION_NOT_CONVERTIBLE, "a function"),
    Tag.NULL: (ErrorCode.NULL_NOT_CONVERTIBLE, "null"),
    Tag.UNDEFINED: (ErrorCode.UNDEFINED_NOT_CONVERTIBLE, "undefined"),
}


def _json_drops(kind: FailureKind, level: JsonStrictness) -> bool:
    if kind is FailureKind.CODEC:
        return False
    if kind is FailureKind.ABSENCE:
        return True
    return level is JsonStrictness.LENIENT


def _qso_drops(kind: FailureKind, level: QsoStrictness) -> bool:
    if kind is FailureKind.CODEC:
        return False
    if level is QsoStrictness.NORMALIZE:
        return True
    if level is QsoStrictness.REJECT_EMBEDDED:
        return kind is not FailureKind.EMBEDDED
    return kind is FailureKind.ABSENCE


def _pso_drops(kind: FailureKind, level: PsoStrictness) -> bool:
    if kind is FailureKind.CODEC:
        return False
    return level is PsoStrictness.LENIENT


def _leaf_failure(tag: Tag, fmt: Format, path: str) -> ConversionError:
    code, what = _LEAF_FAILURES[tag]
    return ConversionError(code, f"cannot convert {what} to {_FORM_NAMES[fmt]}", {"path": path})


def _key_path(path: str, key: str) -> str:
    return f"{path}.{key}"


def _index_path(path: str, index: int) -> str:
    return f"{path}[{index}]"


class Canonicalizer:
    """
    Converts values to JSON, QSO and PSO canonical forms.

    Configuration lives in a frozen CanonicalOptions and conversion keeps
    no per-call state, so one instance can be shared between threads.
    """

    def __init__(self, options: CanonicalOptions | None = None):
        self.options = options or CanonicalOptions()
        self.classifier = self.options.classifier

    # -- public API --------------------------------------------------------

    def to_json(self, value: Any, strictness: Any = None) -> JsonValue:
        """
        Convert a value to its JSON canonical form.

        Args:
            value: Value to convert
            strictness: JsonStrictness (or bool); None uses the configured default

        Returns:
            JSON-compatible structure

        Raises:
            ConversionError: If the value, or a sub-value the strictness
                level does not drop, cannot be converted
            UnsupportedTypeError: If a value has no classification
        """
        level = self._level(JsonStrictness, strictness, self.options.json_strictness)
        return self._to_json(value, level, "$")

    def to_qso(self, value: Any, strictness: Any = None, inside_seq: bool = False) -> QsoValue:
        """
        Convert a value to its QSO canonical form.

        Args:
            value: Value to convert
            strictness: QsoStrictness (or 0/1/2); None uses the configured default
            inside_seq: Treat the value as an element of an array

        Returns:
            String-leaved structure with no array or object inside an array
        """
        level = self._level(QsoStrictness, strictness, self.options.qso_strictness)
        return self._to_qso(value, level, inside_seq, "$")

    def to_pso(self, value: Any, strictness: Any = None) -> PsoValue:
        """
        Convert a value to its PSO canonical form.

        Args:
            value: Value to convert
            strictness: PsoStrictness (or bool); None uses the configured default

        Returns:
            String-leaved structure with no arrays
        """
        level = self._level(PsoStrictness, strictness, self.options.pso_strictness)
        return self._to_pso(value, level, "$")

    def convert(self, value: Any, fmt: Format | str, strictness: Any = None) -> ConversionResult:
        """
        Convert a value to the given form without raising on conversion failure.

        Invalid strictness levels and unknown formats still raise.
        """
        fmt = Format(fmt)
        converters: dict[Format, Callable[[Any, Any], Any]] = {
            Format.JSON: self.to_json,
            Format.QSO: self.to_qso,
            Format.PSO: self.to_pso,
        }
        try:
            return ConversionResult(ok=True, value=converters[fmt](value, strictness))
        except WirecanonError as exc:
            return ConversionResult(ok=False, error=exc)

    # -- recursion -----------------------------------------------------------

    @staticmethod
    def _level(enum_cls, strictness, default):
        return default if strictness is None else enum_cls.coerce(strictness)

    def _classify(self, value: Any, path: str) -> Tag:
        try:
            return self.classifier.classify(value)
        except UnsupportedTypeError as exc:
            exc.details.setdefault("path", path)
            raise

    def _convert_array(
        self,
        value: Any,
        path: str,
        convert: Callable[[Any, str], Any],
        drops: Callable[[FailureKind], bool],
    ) -> list:
        out = []
        for index, item in enumerate(value):
            try:
                out.append(convert(item, _index_path(path, index)))
            except WirecanonError as exc:
                if not drops(exc.kind):
                    raise
                logger.debug("dropped element %s: %s", exc.path, exc.code.value)
        return out

    def _convert_object(
        self,
        value: Any,
        path: str,
        convert: Callable[[Any, str], Any],
        drops: Callable[[FailureKind], bool],
    ) -> dict:
        out = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnsupportedTypeError(
                    f"object keys must be strings, got {type(key).__name__}",
                    details={"path": path, "key": repr(key)},
                )
            try:
                out[key] = convert(item, _key_path(path, key))
            except WirecanonError as exc:
                if not drops(exc.kind):
                    raise
                logger.debug("dropped key %s: %s", exc.path, exc.code.value)
        return out

    def _to_json(self, value: Any, level: JsonStrictness, path: str) -> JsonValue:
        tag = self._classify(value, path)

        if tag in _LEAF_FAILURES:
            raise _leaf_failure(tag, Format.JSON, path)

        def convert(item, item_path):
            return self._to_json(item, level, item_path)

        def drops(kind):
            return _json_drops(kind, level)

        if tag is Tag.ARRAY:
            return self._convert_array(value, path, convert, drops)
        if tag is Tag.OBJECT:
            return self._convert_object(value, path, convert, drops)
        if tag in (Tag.DATE, Tag.REGEX):
            return encode_scalar(tag, value)
        if tag is Tag.NUMBER and isinstance(value, float) and not math.isfinite(value):
            raise ConversionError(
                ErrorCode.NUMBER_NOT_REPRESENTABLE,
                f"cannot convert {encode_scalar(tag, value)} to a JSON object",
                {"path": path},
            )
        # string, number and boolean stay native
        return value

    def _to_qso(self, value: Any, level: QsoStrictness, inside_seq: bool, path: str) -> QsoValue:
        tag = self._classify(value, path)

        if tag in _LEAF_FAILURES:
            raise _leaf_failure(tag, Format.QSO, path)

        if tag in (Tag.ARRAY, Tag.OBJECT):
            if inside_seq:
                raise ConversionError(
                    ErrorCode.EMBEDDED_STRUCTURE_NOT_ALLOWED,
                    f"cannot embed an {tag.value} in an array of a QueryStringObject",
                    {"path": path},
                )

            def drops(kind):
                return _qso_drops(kind, level)

            if tag is Tag.ARRAY:
                return self._convert_array(
                    value, path, lambda item, item_path: self._to_qso(item, level, True, item_path), drops
                )
            return self._convert_object(
                value, path, lambda item, item_path: self._to_qso(item, level, inside_seq, item_path), drops
            )

        return encode_scalar(tag, value)

    def _to_pso(self, value: Any, level: PsoStrictness, path: str) -> PsoValue:
        tag = self._classify(value, path)

        if tag in _LEAF_FAILURES:
            raise _leaf_failure(tag, Format.PSO, path)

        if tag is Tag.ARRAY:
            raise ConversionError(
                ErrorCode.SEQUENCE_NOT_ALLOWED,
                "cannot convert an array to a PlainStringObject",
                {"path": path},
            )
        if tag is Tag.OBJECT:
            return self._convert_object(
                value,
                path,
                lambda item, item_path: self._to_pso(item, level, item_path),
                lambda kind: _pso_drops(kind, level),
            )

        return encode_scalar(tag, value)


_default = Canonicalizer()


def to_json(value: Any, strictness: Any = None) -> JsonValue:
    """Convert a value to JSON form with the default Canonicalizer."""
    return _default.to_json(value, strictness)


def to_qso(value: Any, strictness: Any = None, inside_seq: bool = False) -> QsoValue:
    """Convert a value to QSO form with the default Canonicalizer."""
    return _default.to_qso(value, strictness, inside_seq)


def to_pso(value: Any, strictness: Any = None) -> PsoValue:
    """Convert a value to PSO form with the default Canonicalizer."""
    return _default.to_pso(value, strictness)


def convert(value: Any, fmt: Format | str, strictness: Any = None) -> ConversionResult:
    """Convert a value to the given form with the default Canonicalizer, without raising."""
    return _default.convert(value, fmt, strictness)
