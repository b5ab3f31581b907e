from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from evalsys.core.constants import (
    EvaluationState,
    EvaluationType,
    InstructorOpt,
    ResultsSharing,
    TriState,
)


class Evaluation(BaseModel):
    """
    The evaluation record as the rules see it. Every field may be unset;
    the defaults initializer and the date fixup fill them in.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str | None = None
    type: EvaluationType | None = None
    state: EvaluationState | None = None
    owner: str | None = None
    eval_category: str | None = None

    start_date: AwareDatetime | None = None
    due_date: AwareDatetime | None = None
    stop_date: AwareDatetime | None = None
    view_date: AwareDatetime | None = None
    students_date: AwareDatetime | None = None
    instructors_date: AwareDatetime | None = None

    use_due_date: TriState = TriState.UNSET
    use_stop_date: TriState = TriState.UNSET
    use_view_date: TriState = TriState.UNSET
    custom_start_date: TriState = TriState.UNSET

    results_sharing: ResultsSharing | None = None
    student_view_results: bool | None = None
    instructor_view_results: bool | None = None
    instructor_view_all_results: bool | None = None

    blank_responses_allowed: bool | None = None
    modify_responses_allowed: bool | None = None
    unregistered_allowed: bool | None = None
    all_roles_participate: bool | None = None
    section_awareness: bool | None = None

    reminder_days: int | None = Field(default=None, ge=0)
    reminder_from_email: str | None = None
    instructor_opt: InstructorOpt | None = None

    @field_validator(
        "use_due_date", "use_stop_date", "use_view_date", "custom_start_date", mode="before"
    )
    @classmethod
    def _tri_state_from_bool(cls, v: Any) -> Any:
        if v is None or isinstance(v, bool):
            return TriState.of(v)
        return v

    @property
    def is_new(self) -> bool:
        return self.id is None
