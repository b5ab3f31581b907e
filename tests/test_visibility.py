import pytest
from pydantic import ValidationError

from evalsys.core.constants import EvaluationState
from evalsys.core.identity import StaticActorResolver
from evalsys.core.rules import EvaluationRules
from evalsys.core.visibility import (
    instructor_can_view_results,
    instructor_view_date,
    no_forced_viewability,
    resolve_instructor_view,
)
from evalsys.schemas.evaluation import Evaluation
from tests.helpers import NOW, at, fixed_clock, make_settings

S = EvaluationState


def force_viewable(state):
    return S.VIEWABLE


def viewable_eval(**fields) -> Evaluation:
    values = dict(
        state=S.VIEWABLE,
        start_date=at(1, 9),
        due_date=at(5, 17),
        view_date=at(7, 9),
        instructor_view_results=True,
    )
    values.update(fields)
    return Evaluation(**values)


def test_viewable_evaluation_uses_safe_view_date():
    settings = make_settings()
    ev = viewable_eval()
    assert instructor_can_view_results(ev, settings=settings)
    assert instructor_view_date(ev, settings=settings) == at(7, 9)


def test_safe_view_date_is_later_of_view_and_due():
    settings = make_settings()
    assert instructor_view_date(viewable_eval(view_date=at(3, 9)), settings=settings) == at(5, 17)
    assert instructor_view_date(viewable_eval(view_date=None), settings=settings) == at(5, 17)


def test_instructors_date_overrides():
    ev = viewable_eval(instructors_date=at(9, 12))
    assert instructor_view_date(ev, settings=make_settings()) == at(9, 12)


@pytest.mark.parametrize("state", [S.PARTIAL, S.INQUEUE, S.ACTIVE, S.GRACEPERIOD, S.CLOSED])
def test_not_yet_viewable_states(state):
    ev = viewable_eval(state=state, instructors_date=at(9, 12))
    view = resolve_instructor_view(ev, settings=make_settings())
    assert not view.can_view
    assert view.view_date is None


def test_deleted_is_never_viewable():
    ev = viewable_eval(state=S.DELETED, instructors_date=at(9, 12))
    settings = make_settings(INSTRUCTOR_ALLOWED_VIEW_RESULTS=True)
    assert not instructor_can_view_results(ev, settings=settings, viewability=force_viewable)
    # the date path skips deleted evaluations too
    assert instructor_view_date(ev, settings=settings, viewability=force_viewable) is None


def test_instructor_flag_decides_without_setting():
    ev = viewable_eval(instructor_view_results=False, instructors_date=at(9, 12))
    view = resolve_instructor_view(ev, settings=make_settings())
    assert not view.can_view
    assert view.view_date is None
    assert not instructor_can_view_results(viewable_eval(instructor_view_results=None), settings=make_settings())


def test_setting_overrides_instructor_flag():
    denied = make_settings(INSTRUCTOR_ALLOWED_VIEW_RESULTS=False)
    allowed = make_settings(INSTRUCTOR_ALLOWED_VIEW_RESULTS=True)
    assert not instructor_can_view_results(viewable_eval(instructor_view_results=True), settings=denied)
    assert instructor_can_view_results(viewable_eval(instructor_view_results=False), settings=allowed)


def test_forced_viewable_is_visible_from_start_date():
    ev = viewable_eval(state=S.ACTIVE)
    view = resolve_instructor_view(ev, settings=make_settings(), viewability=force_viewable)
    assert view.can_view
    assert view.view_date == at(1, 9)


def test_forced_viewable_still_honors_instructors_date():
    ev = viewable_eval(state=S.ACTIVE, instructors_date=at(9, 12))
    assert instructor_view_date(ev, settings=make_settings(), viewability=force_viewable) == at(9, 12)


def test_state_override_replaces_viewability_lookup():
    ev = viewable_eval(state=S.CLOSED)
    settings = make_settings()
    assert instructor_can_view_results(ev, settings=settings, state_override=S.VIEWABLE)
    assert not instructor_can_view_results(ev, settings=settings, state_override=S.CLOSED)


def test_viewable_without_dates_is_visible_now():
    ev = Evaluation(state=S.VIEWABLE, instructor_view_results=True)
    view = resolve_instructor_view(ev, settings=make_settings(), now=NOW)
    assert view.can_view
    assert view.view_date == NOW


@pytest.mark.parametrize("state", list(S) + [None])
@pytest.mark.parametrize("forced", [False, True])
@pytest.mark.parametrize("flag", [None, False, True])
@pytest.mark.parametrize("instructors_date", [None, at(9, 12)])
def test_boolean_and_date_always_agree(state, forced, flag, instructors_date):
    ev = viewable_eval(state=state, instructor_view_results=flag, instructors_date=instructors_date)
    rules = EvaluationRules(
        make_settings(),
        StaticActorResolver(),
        viewability=force_viewable if forced else no_forced_viewability,
        clock=fixed_clock(),
    )
    can_view = rules.instructor_can_view_results(ev)
    assert can_view is (rules.instructor_view_date(ev) is not None)


def test_rules_default_does_not_force_viewable_evaluations():
    rules = EvaluationRules(make_settings(), StaticActorResolver(), clock=fixed_clock())
    view = rules.instructor_view(viewable_eval())
    assert view.can_view
    assert view.view_date == at(7, 9)


def test_hidden_answer_cannot_be_changed():
    view = resolve_instructor_view(viewable_eval(state=S.ACTIVE), settings=make_settings())
    with pytest.raises(ValidationError):
        view.can_view = True
    assert not resolve_instructor_view(viewable_eval(state=S.ACTIVE), settings=make_settings()).can_view
