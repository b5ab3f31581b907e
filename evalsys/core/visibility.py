"""
Instructor result visibility.

Both the yes/no answer and the date answer come from resolve_instructor_view,
so they cannot disagree on whether results are visible.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from pydantic import BaseModel, ConfigDict

from evalsys.core.constants import EvaluationState
from evalsys.core.dates import safe_view_date
from evalsys.core.errors import InvalidArgumentError
from evalsys.core.eval_settings import SettingKey, SettingsProvider
from evalsys.core.states import is_deleted, reached
from evalsys.schemas.evaluation import Evaluation

logger = logging.getLogger(__name__)

# Maps an evaluation's state to the state it is forced to for viewing, e.g.
# VIEWABLE when results are revealed early. None means nothing is forced and
# the natural state decides.
Viewability = Callable[[EvaluationState | None], EvaluationState | None]


def no_forced_viewability(state: EvaluationState | None) -> EvaluationState | None:
    return None


class InstructorView(BaseModel):
    model_config = ConfigDict(frozen=True)

    can_view: bool
    view_date: datetime | None = None


HIDDEN = InstructorView(can_view=False, view_date=None)


def resolve_instructor_view(
    evaluation: Evaluation | None,
    *,
    settings: SettingsProvider,
    viewability: Viewability = no_forced_viewability,
    state_override: EvaluationState | None = None,
    now: datetime | None = None,
) -> InstructorView:
    """
    Decide whether instructors may view the results of `evaluation` and from
    when. `state_override` replaces the viewability lookup when the caller has
    already computed the forced state.
    """
    if evaluation is None:
        raise InvalidArgumentError("evaluation must be set to check visibility", "evaluation")

    state = evaluation.state
    if is_deleted(state):
        return HIDDEN

    forced = state_override if state_override is not None else viewability(state)

    # nothing before ACTIVE is viewable, and VIEWABLE implies ACTIVE
    if reached(forced, EvaluationState.VIEWABLE):
        candidate = evaluation.start_date
    elif reached(state, EvaluationState.VIEWABLE):
        candidate = safe_view_date(
            evaluation.view_date,
            evaluation.due_date,
            evaluation.stop_date,
            evaluation.start_date,
        )
    else:
        return HIDDEN

    allowed = settings.get(SettingKey.INSTRUCTOR_ALLOWED_VIEW_RESULTS)
    if allowed is None:
        allowed = bool(evaluation.instructor_view_results)
    if not allowed:
        return HIDDEN

    if evaluation.instructors_date is not None:
        candidate = evaluation.instructors_date
    if candidate is None:
        logger.debug("Viewable evaluation %s has no dates, visible from now", evaluation.id)
        candidate = now or datetime.now(timezone.utc)
    return InstructorView(can_view=True, view_date=candidate)


def instructor_can_view_results(
    evaluation: Evaluation | None,
    *,
    settings: SettingsProvider,
    viewability: Viewability = no_forced_viewability,
    state_override: EvaluationState | None = None,
) -> bool:
    return resolve_instructor_view(
        evaluation,
        settings=settings,
        viewability=viewability,
        state_override=state_override,
    ).can_view


def instructor_view_date(
    evaluation: Evaluation | None,
    *,
    settings: SettingsProvider,
    viewability: Viewability = no_forced_viewability,
    now: datetime | None = None,
) -> datetime | None:
    return resolve_instructor_view(
        evaluation,
        settings=settings,
        viewability=viewability,
        now=now,
    ).view_date
