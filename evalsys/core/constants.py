from enum import Enum


class EvaluationState(str, Enum):
    PARTIAL = "PARTIAL"
    INQUEUE = "INQUEUE"
    ACTIVE = "ACTIVE"
    GRACEPERIOD = "GRACEPERIOD"
    CLOSED = "CLOSED"
    VIEWABLE = "VIEWABLE"
    DELETED = "DELETED"


class EvaluationType(str, Enum):
    EVALUATION = "EVALUATION"
    POOL = "POOL"


class ResultsSharing(str, Enum):
    VISIBLE = "visible"
    PRIVATE = "private"
    PUBLIC = "public"


class InstructorOpt(str, Enum):
    OPT_IN = "OPT_IN"
    OPT_OUT = "OPT_OUT"
    REQUIRED = "REQUIRED"


class TriState(str, Enum):
    """Per-evaluation flag that may be left unset to defer to configuration."""

    UNSET = "UNSET"
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"

    @classmethod
    def of(cls, value: "bool | None") -> "TriState":
        if value is None:
            return cls.UNSET
        return cls.ENABLED if value else cls.DISABLED

    def resolve(self, fallback: bool) -> bool:
        if self is TriState.UNSET:
            return fallback
        return self is TriState.ENABLED


# lifecycle order; DELETED is terminal and sits outside it
STATE_ORDER: tuple[EvaluationState, ...] = (
    EvaluationState.PARTIAL,
    EvaluationState.INQUEUE,
    EvaluationState.ACTIVE,
    EvaluationState.GRACEPERIOD,
    EvaluationState.CLOSED,
    EvaluationState.VIEWABLE,
)

CATEGORY_ENTITY_PREFIX = "eval-category"
