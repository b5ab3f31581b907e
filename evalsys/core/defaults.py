from __future__ import annotations

import logging
from datetime import timedelta, tzinfo

from pydantic import BaseModel

from evalsys.core.config import Settings
from evalsys.core.constants import (
    EvaluationState,
    EvaluationType,
    InstructorOpt,
    ResultsSharing,
    TriState,
)
from evalsys.core.dates import Clock, end_of_day, utc_now
from evalsys.core.eval_settings import SettingKey, SettingsProvider
from evalsys.core.identity import ActorResolver
from evalsys.schemas.evaluation import Evaluation

logger = logging.getLogger(__name__)


class SystemDefaults(BaseModel):
    """Deployment-wide defaults, fixed for the lifetime of an EvaluationDefaults."""

    section_aware: bool = False
    results_sharing: str = ResultsSharing.VISIBLE.value
    instructor_view_responses: bool = True

    @classmethod
    def from_config(cls, config: Settings) -> "SystemDefaults":
        return cls(
            section_aware=config.SECTION_AWARE_DEFAULT,
            results_sharing=config.RESULTS_SHARING_DEFAULT,
            instructor_view_responses=config.INSTRUCTOR_VIEW_RESPONSES_DEFAULT,
        )

    def sharing(self) -> ResultsSharing:
        if self.results_sharing in {s.value for s in ResultsSharing}:
            return ResultsSharing(self.results_sharing)
        return ResultsSharing.VISIBLE


def uses_optional_date(flag: TriState, setting: bool | None) -> bool:
    """Stop/view dates: an explicit opt-out wins, otherwise the system setting decides."""
    if flag is TriState.DISABLED:
        return False
    return bool(setting)


class EvaluationDefaults:
    """
    Fills every unset field of a new (or edited) evaluation.

    Non-destructive: a field that already holds a value keeps it, except for
    the configured view-result flags, the shared per-audience view dates when
    EVAL_USE_SAME_VIEW_DATES is on, and the private/public sharing override.
    """

    def __init__(
        self,
        settings: SettingsProvider,
        actors: ActorResolver,
        system_defaults: SystemDefaults | None = None,
        clock: Clock = utc_now,
        tz: tzinfo | None = None,
    ):
        self.settings = settings
        self.actors = actors
        self.system_defaults = system_defaults or SystemDefaults()
        self.clock = clock
        self.tz = tz

    def apply(
        self,
        evaluation: Evaluation,
        evaluation_type: EvaluationType | None = None,
    ) -> Evaluation:
        ev = evaluation.model_copy()
        get = self.settings.get

        if evaluation_type is not None:
            ev.type = evaluation_type
        elif ev.type is None:
            ev.type = EvaluationType.EVALUATION

        if ev.is_new and ev.state is None:
            ev.state = EvaluationState.PARTIAL

        self._apply_dates(ev)

        same_view_dates = bool(get(SettingKey.EVAL_USE_SAME_VIEW_DATES))
        shared_date = ev.view_date if ev.view_date is not None else ev.due_date
        if ev.students_date is None or same_view_dates:
            ev.students_date = shared_date
        if ev.instructors_date is None or same_view_dates:
            ev.instructors_date = shared_date

        students_view = get(SettingKey.STUDENT_ALLOWED_VIEW_RESULTS)
        if students_view is not None:
            ev.student_view_results = students_view
        instructors_view = get(SettingKey.INSTRUCTOR_ALLOWED_VIEW_RESULTS)
        if instructors_view is not None:
            ev.instructor_view_results = instructors_view

        if ev.instructor_view_all_results is None:
            view_all = get(SettingKey.INSTRUCTOR_ALLOWED_VIEW_ALL_RESULTS)
            ev.instructor_view_all_results = bool(view_all) if view_all is not None else False

        if not ev.section_awareness:
            ev.section_awareness = self.system_defaults.section_aware

        if ev.results_sharing is None:
            ev.results_sharing = self.system_defaults.sharing()

        if ev.instructor_view_results is None:
            ev.instructor_view_results = self.system_defaults.instructor_view_responses
        if ev.instructor_view_all_results is None:
            ev.instructor_view_all_results = self.system_defaults.instructor_view_responses

        self._apply_sharing(ev)

        if ev.blank_responses_allowed is None:
            ev.blank_responses_allowed = bool(get(SettingKey.STUDENT_ALLOWED_LEAVE_UNANSWERED))
        if ev.modify_responses_allowed is None:
            ev.modify_responses_allowed = bool(get(SettingKey.STUDENT_MODIFY_RESPONSES))
        if ev.unregistered_allowed is None:
            ev.unregistered_allowed = False
        if ev.all_roles_participate is None:
            ev.all_roles_participate = bool(get(SettingKey.ALLOW_ALL_SITE_ROLES_TO_RESPOND))

        if ev.reminder_days is None:
            frequency = get(SettingKey.DEFAULT_EMAIL_REMINDER_FREQUENCY)
            ev.reminder_days = frequency if frequency is not None else 1

        if ev.reminder_from_email is None:
            ev.reminder_from_email = self._reminder_sender()

        if ev.instructor_opt is None:
            opt = get(SettingKey.INSTRUCTOR_MUST_USE_EVALS_FROM_ABOVE)
            ev.instructor_opt = InstructorOpt(opt) if opt is not None else InstructorOpt.REQUIRED

        return ev

    def _apply_dates(self, ev: Evaluation) -> None:
        get = self.settings.get
        now = self.clock()

        # a default start hour means the evaluation opens tomorrow at that hour
        hour = get(SettingKey.EVAL_DEFAULT_START_HOUR)
        if hour is not None:
            now = (now + timedelta(days=1)).replace(hour=hour, minute=0, second=0, microsecond=0)

        if ev.start_date is None:
            ev.start_date = now + timedelta(hours=1)
            logger.debug("Setting start date to default of: %s", ev.start_date)

        if ev.use_due_date is TriState.DISABLED:
            # open forever
            ev.due_date = None
            ev.stop_date = None
            ev.view_date = None
            return

        anchor = ev.start_date + timedelta(days=1)
        if ev.due_date is None:
            ev.due_date = end_of_day(anchor, self.tz)
            logger.debug("Setting due date to default of: %s", ev.due_date)
        else:
            anchor = ev.due_date

        if uses_optional_date(ev.use_stop_date, get(SettingKey.EVAL_USE_STOP_DATE)):
            if ev.stop_date is None:
                ev.stop_date = ev.due_date
                logger.debug("Setting stop date to default of: %s", ev.stop_date)
        else:
            ev.stop_date = None

        if uses_optional_date(ev.use_view_date, get(SettingKey.EVAL_USE_VIEW_DATE)):
            if ev.view_date is None:
                ev.view_date = anchor + timedelta(days=1)
                logger.debug("Setting view date to default of: %s", ev.view_date)
        else:
            ev.view_date = None

    def _apply_sharing(self, ev: Evaluation) -> None:
        if ev.results_sharing is ResultsSharing.PRIVATE:
            ev.student_view_results = False
            ev.instructor_view_results = False
            ev.instructor_view_all_results = False
        elif ev.results_sharing is ResultsSharing.PUBLIC:
            ev.student_view_results = True
            ev.instructor_view_results = True
            ev.instructor_view_all_results = True
            ev.students_date = ev.view_date
            ev.instructors_date = ev.view_date

    def _reminder_sender(self) -> str | None:
        sender = self.settings.get(SettingKey.FROM_EMAIL_ADDRESS)
        if self.settings.get(SettingKey.USE_ADMIN_AS_FROM_EMAIL):
            user_id = self.actors.current_user_id()
            owner = self.actors.user_by_id(user_id) if user_id else None
            if owner is not None and owner.email:
                sender = owner.email
        return sender
