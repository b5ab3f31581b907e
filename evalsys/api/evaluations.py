from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from evalsys.core.config import settings
from evalsys.core.constants import EvaluationState, EvaluationType
from evalsys.core.defaults import SystemDefaults
from evalsys.core.errors import InvalidCategoryError, InvalidDatesError
from evalsys.core.rules import EvaluationRules
from evalsys.core.security import DbActorResolver, get_current_user
from evalsys.core.settings_store import DbSettingsProvider
from evalsys.db.session import get_db
from evalsys.models.user import User
from evalsys.schemas.evaluation import Evaluation
from evalsys.schemas.rules import (
    CategoryCheck,
    PermissionCheck,
    PermissionCheckOut,
    ResponsesNeededOut,
    ResponsesNeededRequest,
)
from evalsys.schemas.validation import (
    InstructorViewOut,
    ValidationError,
    ValidationPreviewResponse,
)

router = APIRouter(prefix="/evaluations", tags=["evaluations"])


def configured_now() -> datetime:
    return datetime.now(settings.tzinfo)


def get_rules(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> EvaluationRules:
    return EvaluationRules(
        DbSettingsProvider(db),
        DbActorResolver(db, current_user),
        system_defaults=SystemDefaults.from_config(settings),
        clock=configured_now,
        tz=settings.tzinfo,
    )


@router.post("/defaults", response_model=Evaluation)
def apply_defaults(
    payload: Evaluation,
    type: EvaluationType | None = Query(default=None, description="Evaluation type to force"),
    rules: EvaluationRules = Depends(get_rules),
):
    """Fill every unset field of a new evaluation with its default."""
    return rules.apply_defaults(payload, type)


@router.post("/fixup-dates", response_model=Evaluation)
def fixup_dates(
    payload: Evaluation,
    ignore_min_gap: bool = Query(default=False, description="Skip the minimum start-to-due gap"),
    rules: EvaluationRules = Depends(get_rules),
):
    return rules.fixup_dates(payload, ignore_min_gap)


@router.post("/prepare", response_model=Evaluation)
def prepare_for_save(
    payload: Evaluation,
    ignore_min_gap: bool = Query(default=False),
    rules: EvaluationRules = Depends(get_rules),
):
    """
    Fixup + validation, exactly what runs before an edited evaluation is saved.
    Invalid dates or categories are reported as 400.
    """
    return rules.prepare_for_save(payload, ignore_min_gap)


@router.post("/validate", response_model=ValidationPreviewResponse)
def validate_preview(
    payload: Evaluation,
    rules: EvaluationRules = Depends(get_rules),
):
    """Check dates and category as they are, without fixing anything."""
    errors: list[ValidationError] = []
    try:
        rules.validate_dates(payload)
    except InvalidDatesError as e:
        errors.append(ValidationError(field=e.field, code=e.code, message=e.message))
    try:
        rules.validate_category(payload.eval_category)
    except InvalidCategoryError as e:
        errors.append(ValidationError(field=e.field, code=e.code, message=e.message))
    return ValidationPreviewResponse(valid=not errors, errors=errors)


@router.post("/validate-category", status_code=status.HTTP_204_NO_CONTENT)
def validate_category(
    payload: CategoryCheck,
    rules: EvaluationRules = Depends(get_rules),
):
    rules.validate_category(payload.eval_category)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/instructor-view", response_model=InstructorViewOut)
def instructor_view(
    payload: Evaluation,
    state_override: EvaluationState | None = Query(
        default=None, description="Forced viewability state, if already known"
    ),
    rules: EvaluationRules = Depends(get_rules),
):
    view = rules.instructor_view(payload, state_override)
    return InstructorViewOut(can_view=view.can_view, view_date=view.view_date)


@router.post("/responses-needed", response_model=ResponsesNeededOut)
def responses_needed(
    payload: ResponsesNeededRequest,
    rules: EvaluationRules = Depends(get_rules),
):
    needed = rules.responses_needed_to_view(payload.responses_count, payload.enrollments_count)
    return ResponsesNeededOut(responses_needed=needed, viewable=needed == 0)


@router.post("/check-permission", response_model=PermissionCheckOut)
def check_permission(
    payload: PermissionCheck,
    rules: EvaluationRules = Depends(get_rules),
):
    return PermissionCheckOut(allowed=rules.check_user_permission(payload.user_id, payload.owner_id))
