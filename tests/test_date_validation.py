import pytest

from evalsys.core.date_fixup import fixup_dates
from evalsys.core.date_validation import validate_eval_dates
from evalsys.core.errors import InvalidDatesError
from evalsys.schemas.evaluation import Evaluation
from tests.helpers import NOW, at, make_settings


def test_due_equal_to_start_is_rejected():
    d = at(12, 10)
    with pytest.raises(InvalidDatesError) as exc:
        validate_eval_dates(Evaluation(start_date=d, due_date=d, view_date=d))
    assert exc.value.field == "dueDate"
    assert exc.value.date == d
    assert exc.value.reference == d


def test_stop_before_due_is_rejected():
    with pytest.raises(InvalidDatesError) as exc:
        validate_eval_dates(Evaluation(start_date=at(12), due_date=at(14), stop_date=at(13)))
    assert exc.value.field == "stopDate"


def test_view_before_stop_is_rejected():
    with pytest.raises(InvalidDatesError) as exc:
        validate_eval_dates(
            Evaluation(start_date=at(12), due_date=at(14), stop_date=at(16), view_date=at(15))
        )
    assert exc.value.field == "viewDate"
    assert exc.value.reference == at(16)


def test_view_before_due_is_rejected():
    with pytest.raises(InvalidDatesError) as exc:
        validate_eval_dates(Evaluation(start_date=at(12), due_date=at(14), view_date=at(13)))
    assert exc.value.field == "viewDate"
    assert exc.value.reference == at(14)


def test_due_without_start_is_rejected():
    with pytest.raises(InvalidDatesError) as exc:
        validate_eval_dates(Evaluation(due_date=at(14)))
    assert exc.value.field == "startDate"


def test_identical_due_stop_view_are_fine():
    validate_eval_dates(Evaluation(start_date=at(12), due_date=at(14), stop_date=at(14), view_date=at(14)))


def test_no_due_date_means_no_checks():
    validate_eval_dates(Evaluation(start_date=at(20), view_date=at(12)))


def test_error_detail_carries_field_and_dates():
    with pytest.raises(InvalidDatesError) as exc:
        validate_eval_dates(Evaluation(start_date=at(12), due_date=at(14), stop_date=at(13)))
    detail = exc.value.to_detail()
    assert detail["field"] == "stopDate"
    assert detail["code"] == "invalid_dates"
    assert detail["date"] == at(13).isoformat()


@pytest.mark.parametrize(
    "ev",
    [
        Evaluation(start_date=at(12, 22), due_date=at(12, 23), stop_date=at(11), view_date=at(10)),
        Evaluation(start_date=at(14, 9), due_date=at(13, 9), stop_date=at(13, 9), view_date=at(12, 9)),
        Evaluation(due_date=at(20, 9), stop_date=at(18, 9), view_date=at(25, 9)),
    ],
)
def test_fixed_dates_are_in_order(ev):
    settings = make_settings(EVAL_USE_STOP_DATE=True, EVAL_USE_VIEW_DATE=True)
    fixed = fixup_dates(ev, settings=settings, now=NOW)
    validate_eval_dates(fixed)
    assert fixed.start_date < fixed.due_date <= fixed.stop_date <= fixed.view_date
