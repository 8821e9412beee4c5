"""
Strictness levels and converter options.

Each canonical form has its own strictness enum. Levels are validated at
the call boundary: legacy spellings (booleans for JSON and PSO, 0/1/2 for
QSO) are accepted, anything else raises InvalidStrictnessError.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from .errors import InvalidStrictnessError
from .types import Classifier, DefaultClassifier


class JsonStrictness(str, Enum):
    """
    JSON conversion strictness.

    LENIENT drops failing sub-values. STRICT re-raises every failure
    except absence (undefined), which is always dropped.
    """
    LENIENT = "lenient"
    STRICT = "strict"

    @classmethod
    def coerce(cls, level: Any) -> "JsonStrictness":
        if isinstance(level, cls):
            return level
        if isinstance(level, bool):
            return cls.STRICT if level else cls.LENIENT
        if isinstance(level, str):
            for member in cls:
                if level.lower() == member.value:
                    return member
        raise InvalidStrictnessError(f"invalid JSON strictness: {level!r}")


class QsoStrictness(IntEnum):
    """
    QSO conversion strictness.

    NORMALIZE (0): every failing element or key is dropped.
    REJECT_EMBEDDED (1): arrays/objects nested in arrays fail the call,
        other failures are dropped.
    STRICT (2): only undefined is dropped, everything else fails the call.
    """
    NORMALIZE = 0
    REJECT_EMBEDDED = 1
    STRICT = 2

    @classmethod
    def coerce(cls, level: Any) -> "QsoStrictness":
        if isinstance(level, cls):
            return level
        # bool is an int subclass; True/False are not QSO levels
        if isinstance(level, int) and not isinstance(level, bool):
            try:
                return cls(level)
            except ValueError:
                pass
        if isinstance(level, str) and level.upper() in cls.__members__:
            return cls[level.upper()]
        raise InvalidStrictnessError(f"invalid QSO strictness: {level!r}")


class PsoStrictness(str, Enum):
    """
    PSO conversion strictness.

    STRICT re-raises every failure. LENIENT omits the failing key.
    """
    STRICT = "strict"
    LENIENT = "lenient"

    @classmethod
    def coerce(cls, level: Any) -> "PsoStrictness":
        if isinstance(level, cls):
            return level
        if isinstance(level, bool):
            return cls.STRICT if level else cls.LENIENT
        if isinstance(level, str):
            for member in cls:
                if level.lower() == member.value:
                    return member
        raise InvalidStrictnessError(f"invalid PSO strictness: {level!r}")


@dataclass(frozen=True)
class CanonicalOptions:
    """Defaults used by a Canonicalizer when a call gives no strictness."""
    json_strictness: JsonStrictness = JsonStrictness.LENIENT
    qso_strictness: QsoStrictness = QsoStrictness.REJECT_EMBEDDED
    pso_strictness: PsoStrictness = PsoStrictness.STRICT
    classifier: Classifier = field(default_factory=DefaultClassifier)

    def __post_init__(self) -> None:
        # Frozen: normalized levels are written through object.__setattr__
        object.__setattr__(self, "json_strictness", JsonStrictness.coerce(self.json_strictness))
        object.__setattr__(self, "qso_strictness", QsoStrictness.coerce(self.qso_strictness))
        object.__setattr__(self, "pso_strictness", PsoStrictness.coerce(self.pso_strictness))
