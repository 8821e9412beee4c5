"""
Error codes and types for wirecanon.

Every failure carries an ErrorCode and, derived from it, a FailureKind.
Converters inspect the kind of a child failure to decide whether the
enclosing sequence or mapping drops the child or re-raises.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    """
    Disposition classes for conversion failures.
    """
    ABSENCE = "ABSENCE"          # undefined value, always droppable
    EMBEDDED = "EMBEDDED"        # array/object nested inside an array (QSO)
    DISALLOWED = "DISALLOWED"    # null, function or non-finite JSON number
    STRUCTURAL = "STRUCTURAL"    # array in PSO
    CODEC = "CODEC"              # never absorbed by an ancestor


class ErrorCode(str, Enum):
    """
    Conversion and parse error codes.
    """
    FUNCTION_NOT_CONVERTIBLE = "FUNCTION_NOT_CONVERTIBLE"
    NULL_NOT_CONVERTIBLE = "NULL_NOT_CONVERTIBLE"
    NUMBER_NOT_REPRESENTABLE = "NUMBER_NOT_REPRESENTABLE"
    UNDEFINED_NOT_CONVERTIBLE = "UNDEFINED_NOT_CONVERTIBLE"
    EMBEDDED_STRUCTURE_NOT_ALLOWED = "EMBEDDED_STRUCTURE_NOT_ALLOWED"
    SEQUENCE_NOT_ALLOWED = "SEQUENCE_NOT_ALLOWED"
    UNSUPPORTED_TYPE = "UNSUPPORTED_TYPE"
    PARSE_ERROR = "PARSE_ERROR"
    SCHEMA_MISMATCH = "SCHEMA_MISMATCH"

    @property
    def kind(self) -> FailureKind:
        return _KIND_BY_CODE[self]


_KIND_BY_CODE: dict[ErrorCode, FailureKind] = {
    ErrorCode.FUNCTION_NOT_CONVERTIBLE: FailureKind.DISALLOWED,
    ErrorCode.NULL_NOT_CONVERTIBLE: FailureKind.DISALLOWED,
    ErrorCode.NUMBER_NOT_REPRESENTABLE: FailureKind.DISALLOWED,
    ErrorCode.UNDEFINED_NOT_CONVERTIBLE: FailureKind.ABSENCE,
    ErrorCode.EMBEDDED_STRUCTURE_NOT_ALLOWED: FailureKind.EMBEDDED,
    ErrorCode.SEQUENCE_NOT_ALLOWED: FailureKind.STRUCTURAL,
    ErrorCode.UNSUPPORTED_TYPE: FailureKind.CODEC,
    ErrorCode.PARSE_ERROR: FailureKind.CODEC,
    ErrorCode.SCHEMA_MISMATCH: FailureKind.CODEC,
}


class WirecanonError(Exception):
    """
    Base error with typed code and audit details.
    """

    def __init__(self, code: ErrorCode, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = dict(details or {})

    @property
    def kind(self) -> FailureKind:
        return self.code.kind

    @property
    def path(self) -> str:
        return self.details.get("path", "$")

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.value}, {self.message!r})"


class ConversionError(WirecanonError):
    """Raised when a value cannot be converted to a canonical form."""


class ParseError(WirecanonError):
    """Raised when text cannot be decoded to the requested type."""

    def __init__(self, message: str, details: dict[str, Any] | None = None,
                 code: ErrorCode = ErrorCode.PARSE_ERROR):
        super().__init__(code, message, details)


class UnsupportedTypeError(WirecanonError):
    """Raised when a value or tag has no scalar encoding or decoding."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(ErrorCode.UNSUPPORTED_TYPE, message, details)


class InvalidStrictnessError(ValueError):
    """Raised when a strictness level is not valid for the target format."""


@dataclass
class ConversionResult:
    """
    Result of a non-raising conversion.
    """
    ok: bool
    value: Any = None
    error: WirecanonError | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "value": self.value,
            "error": self.error.to_dict() if self.error else None,
        }
