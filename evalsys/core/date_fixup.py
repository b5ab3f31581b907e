from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo

from evalsys.core.constants import EvaluationState, TriState
from evalsys.core.dates import end_of_day, push_due_for_min_gap, utc_now
from evalsys.core.defaults import uses_optional_date
from evalsys.core.errors import InvalidArgumentError
from evalsys.core.eval_settings import SettingKey, SettingsProvider
from evalsys.core.states import is_before, is_deleted
from evalsys.schemas.evaluation import Evaluation

logger = logging.getLogger(__name__)


def _rounded(value: datetime, to_end_of_day: bool, tz: tzinfo | None) -> datetime:
    return end_of_day(value, tz) if to_end_of_day else value


def fixup_dates(
    evaluation: Evaluation | None,
    ignore_min_gap: bool = False,
    *,
    settings: SettingsProvider,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> Evaluation:
    """
    Normalize the dates of an edited evaluation so it saves with a valid
    ordering. Honors the per-evaluation use flags; dates are only rounded to
    end of day while the evaluation has not yet reached the state in which
    that date matters. Running it twice with the same `now` changes nothing.

    `ignore_min_gap` skips the configured minimum hours between start and due.
    A stop date earlier than the due date is always pulled up to the due date,
    with or without the minimum gap, so such input is repaired here rather than
    rejected by validation.

    `tz` sets the zone in which dates are rounded to end of day; without it
    each date is rounded in its own offset.
    """
    if evaluation is None:
        raise InvalidArgumentError("evaluation must be set to fix dates", "evaluation")

    ev = evaluation.model_copy()
    if is_deleted(ev.state):
        logger.debug("Skipping date fixup for deleted evaluation %s", ev.id)
        return ev

    get = settings.get
    now = now or utc_now()

    use_due_date = ev.use_due_date.resolve(True)
    use_stop_date = uses_optional_date(ev.use_stop_date, get(SettingKey.EVAL_USE_STOP_DATE))
    use_view_date = uses_optional_date(ev.use_view_date, get(SettingKey.EVAL_USE_VIEW_DATE))
    exact_time = bool(get(SettingKey.EVAL_USE_DATE_TIME))

    round_due = not exact_time and is_before(ev.state, EvaluationState.GRACEPERIOD)
    round_stop = not exact_time and is_before(ev.state, EvaluationState.CLOSED)
    round_view = not exact_time and is_before(ev.state, EvaluationState.VIEWABLE)

    if ev.start_date is None:
        ev.start_date = now + timedelta(hours=1)
        logger.debug("Setting start date to default of: %s", ev.start_date)

    # immediate start: a non-custom start in the future begins now
    if ev.start_date > now and ev.custom_start_date is TriState.DISABLED:
        ev.start_date = now

    if not use_due_date:
        ev.due_date = None
        ev.stop_date = None
        ev.view_date = None

    if ev.due_date is not None and ev.due_date <= ev.start_date:
        ev.due_date = ev.start_date + timedelta(hours=25)

    if ev.due_date is not None and round_due:
        logger.info("Forcing date to end of day for non null due date: %s", ev.due_date)
        ev.due_date = end_of_day(ev.due_date, tz)

    if not use_stop_date:
        ev.stop_date = None
    elif ev.stop_date is not None and round_stop:
        logger.info("Forcing date to end of day for non null stop date: %s", ev.stop_date)
        ev.stop_date = end_of_day(ev.stop_date, tz)

    if ev.due_date is not None:
        min_hours = 0 if ignore_min_gap else (get(SettingKey.EVAL_MIN_TIME_DIFF_BETWEEN_START_DUE) or 0)
        pushed = push_due_for_min_gap(ev.start_date, ev.due_date, min_hours)
        if pushed != ev.due_date:
            ev.due_date = _rounded(pushed, round_due, tz)
        if ev.stop_date is not None and ev.stop_date < ev.due_date:
            ev.stop_date = _rounded(ev.due_date, round_stop, tz)

    # the view date of an evaluation that is already running is left alone
    if not use_view_date and is_before(ev.state, EvaluationState.ACTIVE):
        ev.view_date = None
    if ev.view_date is not None and round_view:
        logger.info("Forcing date to end of day for non null view date: %s", ev.view_date)
        ev.view_date = end_of_day(ev.view_date, tz)

    if ev.view_date is not None and ev.due_date is not None and ev.view_date < ev.due_date:
        ev.view_date = _rounded(ev.due_date, round_view, tz)

    if get(SettingKey.EVAL_USE_SAME_VIEW_DATES):
        if ev.student_view_results:
            ev.students_date = ev.view_date
        if ev.instructor_view_results:
            ev.instructors_date = ev.view_date

    if not ev.student_view_results:
        ev.students_date = None
    if not ev.instructor_view_results:
        ev.instructors_date = None

    return ev
