"""Strictness validation, options and logging tests."""

import dataclasses
import logging
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wirecanon import (
    UNDEFINED,
    CanonicalOptions,
    InvalidStrictnessError,
    JsonStrictness,
    PsoStrictness,
    QsoStrictness,
    to_json,
    to_pso,
    to_qso,
)


class TestStrictnessCoercion:
    """Levels are validated at the call boundary."""

    def test_json_legacy_booleans(self):
        assert JsonStrictness.coerce(True) is JsonStrictness.STRICT
        assert JsonStrictness.coerce(False) is JsonStrictness.LENIENT
        assert JsonStrictness.coerce("strict") is JsonStrictness.STRICT

    def test_qso_levels(self):
        assert QsoStrictness.coerce(0) is QsoStrictness.NORMALIZE
        assert QsoStrictness.coerce(1) is QsoStrictness.REJECT_EMBEDDED
        assert QsoStrictness.coerce(2) is QsoStrictness.STRICT
        assert QsoStrictness.coerce("normalize") is QsoStrictness.NORMALIZE

    def test_pso_legacy_booleans(self):
        assert PsoStrictness.coerce(True) is PsoStrictness.STRICT
        assert PsoStrictness.coerce(False) is PsoStrictness.LENIENT

    @pytest.mark.parametrize("level", [True, False, 3, -1, 1.0, "loose", None])
    def test_qso_invalid(self, level):
        """Booleans and out-of-range values are not QSO levels."""
        with pytest.raises(InvalidStrictnessError):
            QsoStrictness.coerce(level)

    @pytest.mark.parametrize("level", [0, 1, "maybe", QsoStrictness.STRICT])
    def test_json_invalid(self, level):
        with pytest.raises(InvalidStrictnessError):
            JsonStrictness.coerce(level)

    def test_invalid_level_rejected_by_converters(self):
        """Converters reject invalid levels instead of coercing them."""
        with pytest.raises(InvalidStrictnessError):
            to_qso([1], 5)
        with pytest.raises(InvalidStrictnessError):
            to_pso({}, 2)
        with pytest.raises(ValueError):
            to_json({}, "sometimes")

    def test_options_validate_fields(self):
        options = CanonicalOptions(json_strictness=True, qso_strictness=2, pso_strictness=False)
        assert options.json_strictness is JsonStrictness.STRICT
        assert options.qso_strictness is QsoStrictness.STRICT
        assert options.pso_strictness is PsoStrictness.LENIENT

        with pytest.raises(InvalidStrictnessError):
            CanonicalOptions(qso_strictness=True)

    def test_options_are_frozen(self):
        """Options cannot change after construction."""
        options = CanonicalOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.json_strictness = JsonStrictness.STRICT
        assert options.json_strictness is JsonStrictness.LENIENT


class TestDropLogging:
    """Dropped sub-values are logged at DEBUG."""

    def test_drop_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="wirecanon")
        assert to_json({"a": None, "b": [UNDEFINED]}) == {"b": []}

        messages = [record.getMessage() for record in caplog.records]
        assert any("$.a" in m and "NULL_NOT_CONVERTIBLE" in m for m in messages)
        assert any("$.b[0]" in m and "UNDEFINED_NOT_CONVERTIBLE" in m for m in messages)
