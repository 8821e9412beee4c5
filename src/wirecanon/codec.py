"""
Scalar codec: single values to canonical strings and back.

Shared by all three canonical forms. Only scalar tags (string, number,
boolean, date, regex) have an encoding; callers handle arrays, objects,
null, undefined and functions before reaching this module.

Rules:
- Numbers: JavaScript-compatible decimal text (1.0 -> "1")
- Booleans: "true" / "false"
- Dates: ISO-8601 UTC with millisecond precision and a "Z" suffix
- Regex: pattern text, no delimiters
"""

import datetime as _dt
import math
import re
from decimal import Decimal
from typing import Any

from .errors import ParseError, UnsupportedTypeError
from .types import UNDEFINED, Tag, to_tag


_NUMBER_PATTERN = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?")


def _format_float(num: float) -> str:
    """
    Lay out the shortest round-trip digits of a finite float with the
    ECMAScript Number::toString thresholds: positional while the decimal
    exponent n satisfies -6 < n <= 21, exponent notation otherwise.
    """
    sign, digits, exponent = Decimal(repr(num)).as_tuple()
    text = "".join(str(d) for d in digits).rstrip("0") or "0"
    exponent += len(digits) - len(text)
    k = len(text)
    n = exponent + k
    prefix = "-" if sign else ""

    if k <= n <= 21:
        return prefix + text + "0" * (n - k)
    if 0 < n <= 21:
        return prefix + text[:n] + "." + text[n:]
    if -6 < n <= 0:
        return prefix + "0." + "0" * -n + text

    e = n - 1
    mantissa = text if k == 1 else text[0] + "." + text[1:]
    return f"{prefix}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def encode_number(num: int | float) -> str:
    """
    Render a number the way ECMAScript Number-to-String does for
    the common cases.
    """
    if isinstance(num, float):
        if math.isnan(num):
            return "NaN"
        if math.isinf(num):
            return "Infinity" if num > 0 else "-Infinity"
        # Integral floats below 1e21 print without fraction or exponent
        if num.is_integer() and abs(num) < 1e21:
            return str(int(num))
        return _format_float(num)

    return str(int(num))


def encode_boolean(value: bool) -> str:
    return "true" if value else "false"


def encode_date(value: _dt.date) -> str:
    """
    Render a date or datetime as an ISO-8601 UTC instant.

    Naive datetimes are taken to be UTC; plain dates are midnight UTC.
    """
    if isinstance(value, _dt.datetime):
        if value.tzinfo is None:
            instant = value.replace(tzinfo=_dt.timezone.utc)
        else:
            instant = value.astimezone(_dt.timezone.utc)
    else:
        instant = _dt.datetime(value.year, value.month, value.day, tzinfo=_dt.timezone.utc)

    text = instant.isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def encode_regex(pattern: re.Pattern) -> str:
    return pattern.pattern


def encode_scalar(tag: Tag | str, value: Any) -> str:
    """
    Encode a scalar value to its canonical string.

    Args:
        tag: Tag of the value, as returned by a Classifier
        value: The value to encode

    Returns:
        Canonical string form

    Raises:
        UnsupportedTypeError: If tag is not a scalar tag
    """
    tag = to_tag(tag)
    if tag is Tag.STRING:
        return value
    if tag is Tag.NUMBER:
        return encode_number(value)
    if tag is Tag.BOOLEAN:
        return encode_boolean(value)
    if tag is Tag.DATE:
        return encode_date(value)
    if tag is Tag.REGEX:
        return encode_regex(value)

    raise UnsupportedTypeError(f"cannot stringify {tag.value}", details={"tag": tag.value})


def decode_number(text: str) -> int | float:
    """
    Parse a base-10 number: optional sign, digits, optional fraction.

    Returns an int when the text has no fractional part, else a float.

    Raises:
        ParseError: If text does not fully match the number grammar
    """
    match = _NUMBER_PATTERN.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        raise ParseError(f"{text!r} is not a number", details={"text": text})
    if match.group(1) is None:
        return int(text)
    return float(text)


def decode_boolean(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ParseError(f"{text!r} is not a boolean", details={"text": text})


def decode_date(text: str) -> _dt.datetime:
    """
    Parse an ISO-8601 date or datetime into an aware UTC datetime.

    Raises:
        ParseError: If text is not a valid calendar instant
    """
    if not isinstance(text, str):
        raise ParseError("invalid date", details={"text": text})
    try:
        parsed = _dt.datetime.fromisoformat(text)
    except ValueError:
        raise ParseError("invalid date", details={"text": text}) from None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=_dt.timezone.utc)
    try:
        return parsed.astimezone(_dt.timezone.utc)
    except OverflowError:
        raise ParseError("invalid date", details={"text": text}) from None


def decode_regex(text: str) -> re.Pattern:
    # Pattern syntax errors are left to the caller (re.error)
    return re.compile(text)


def decode_scalar(tag: Tag | str, text: str) -> Any:
    """
    Decode canonical text to a value of the given tag.

    Args:
        tag: Target Tag (or its string value)
        text: Canonical text; ignored for undefined and null

    Returns:
        The decoded value

    Raises:
        ParseError: If text is not valid for the tag
        UnsupportedTypeError: If tag has no decoding
    """
    tag = to_tag(tag)
    if tag is Tag.STRING:
        return text
    if tag is Tag.NUMBER:
        return decode_number(text)
    if tag is Tag.BOOLEAN:
        return decode_boolean(text)
    if tag is Tag.DATE:
        return decode_date(text)
    if tag is Tag.REGEX:
        return decode_regex(text)
    if tag is Tag.UNDEFINED:
        return UNDEFINED
    if tag is Tag.NULL:
        return None

    raise UnsupportedTypeError(f"cannot parse {tag.value}", details={"tag": tag.value})
