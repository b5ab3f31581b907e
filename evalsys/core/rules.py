from __future__ import annotations

from datetime import datetime, tzinfo

from evalsys.core.categories import DirectEntityUrlBuilder, EntityUrlBuilder, validate_eval_category
from evalsys.core.constants import EvaluationState, EvaluationType
from evalsys.core.date_fixup import fixup_dates
from evalsys.core.date_validation import validate_eval_dates
from evalsys.core.dates import Clock, utc_now
from evalsys.core.defaults import EvaluationDefaults, SystemDefaults
from evalsys.core.eval_settings import SettingKey, SettingsProvider
from evalsys.core.identity import ActorResolver
from evalsys.core.permissions import check_user_permission
from evalsys.core.response_rate import responses_needed_to_view
from evalsys.core.visibility import (
    InstructorView,
    Viewability,
    no_forced_viewability,
    resolve_instructor_view,
)
from evalsys.schemas.evaluation import Evaluation


class EvaluationRules:
    """
    The evaluation rules bound to one settings provider and one acting user.
    Build one per request; every operation reads the clock once. `tz` is the
    zone dates are rounded to end of day in.
    """

    def __init__(
        self,
        settings: SettingsProvider,
        actors: ActorResolver,
        *,
        system_defaults: SystemDefaults | None = None,
        viewability: Viewability = no_forced_viewability,
        entity_urls: EntityUrlBuilder | None = None,
        clock: Clock = utc_now,
        tz: tzinfo | None = None,
    ):
        self.settings = settings
        self.actors = actors
        self.viewability = viewability
        self.entity_urls = entity_urls or DirectEntityUrlBuilder()
        self.clock = clock
        self.tz = tz
        self.defaults = EvaluationDefaults(settings, actors, system_defaults, clock, tz)

    # write path

    def apply_defaults(
        self, evaluation: Evaluation, evaluation_type: EvaluationType | None = None
    ) -> Evaluation:
        return self.defaults.apply(evaluation, evaluation_type)

    def fixup_dates(self, evaluation: Evaluation | None, ignore_min_gap: bool = False) -> Evaluation:
        return fixup_dates(
            evaluation, ignore_min_gap, settings=self.settings, now=self.clock(), tz=self.tz
        )

    def validate_dates(self, evaluation: Evaluation) -> None:
        validate_eval_dates(evaluation)

    def validate_category(self, category: str | None) -> None:
        validate_eval_category(category, entity_urls=self.entity_urls)

    def prepare_for_save(self, evaluation: Evaluation, ignore_min_gap: bool = False) -> Evaluation:
        """Fixup then validate, the sequence every edit goes through before persistence."""
        fixed = self.fixup_dates(evaluation, ignore_min_gap)
        validate_eval_dates(fixed)
        validate_eval_category(fixed.eval_category, entity_urls=self.entity_urls)
        return fixed

    # read path

    def instructor_view(
        self, evaluation: Evaluation | None, state_override: EvaluationState | None = None
    ) -> InstructorView:
        return resolve_instructor_view(
            evaluation,
            settings=self.settings,
            viewability=self.viewability,
            state_override=state_override,
            now=self.clock(),
        )

    def instructor_can_view_results(
        self, evaluation: Evaluation | None, state_override: EvaluationState | None = None
    ) -> bool:
        return self.instructor_view(evaluation, state_override).can_view

    def instructor_view_date(self, evaluation: Evaluation | None) -> datetime | None:
        return self.instructor_view(evaluation).view_date

    def responses_needed_to_view(self, responses_count: int, enrollments_count: int) -> int:
        min_responses = self.settings.get(SettingKey.RESPONSES_REQUIRED_TO_VIEW_RESULTS) or 0
        return responses_needed_to_view(
            responses_count,
            enrollments_count,
            is_admin=self.actors.is_current_user_admin(),
            min_responses_required=min_responses,
        )

    def check_user_permission(self, user_id: str, owner_id: str | None) -> bool:
        return check_user_permission(user_id, owner_id, actors=self.actors)
