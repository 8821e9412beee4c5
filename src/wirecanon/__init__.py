"""
wirecanon: Canonical wire forms for runtime values.

Converts values into three in-memory canonical forms and back:
- JSON: native scalars kept, dates and patterns as strings
- QSO: string leaves, arrays of strings only
- PSO: string leaves, no arrays

Each form has its own strictness levels deciding whether a failing
sub-value is dropped or fails the whole conversion.
"""

import logging

from .canonical import (
    Canonicalizer,
    Format,
    convert,
    to_json,
    to_pso,
    to_qso,
)
from .codec import decode_scalar, encode_scalar
from .errors import (
    ConversionError,
    ConversionResult,
    ErrorCode,
    FailureKind,
    InvalidStrictnessError,
    ParseError,
    UnsupportedTypeError,
    WirecanonError,
)
from .options import CanonicalOptions, JsonStrictness, PsoStrictness, QsoStrictness
from .parse import Schema, parse, parse_from_json, parse_from_pso, parse_from_qso
from .schema import ListOf, TypedSchema
from .types import UNDEFINED, Classifier, DefaultClassifier, Tag

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    # Conversion
    "Canonicalizer",
    "Format",
    "convert",
    "to_json",
    "to_qso",
    "to_pso",
    # Options
    "CanonicalOptions",
    "JsonStrictness",
    "QsoStrictness",
    "PsoStrictness",
    # Types
    "UNDEFINED",
    "Tag",
    "Classifier",
    "DefaultClassifier",
    # Codec and parsing
    "encode_scalar",
    "decode_scalar",
    "parse",
    "parse_from_json",
    "parse_from_qso",
    "parse_from_pso",
    "Schema",
    "TypedSchema",
    "ListOf",
    # Errors
    "ErrorCode",
    "FailureKind",
    "WirecanonError",
    "ConversionError",
    "ParseError",
    "UnsupportedTypeError",
    "InvalidStrictnessError",
    "ConversionResult",
]
