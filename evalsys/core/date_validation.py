from evalsys.core.errors import InvalidDatesError
from evalsys.schemas.evaluation import Evaluation


def validate_eval_dates(evaluation: Evaluation) -> None:
    """
    Raise InvalidDatesError if the dates are in an improper order:
    start < due <= stop <= view, wherever each is set.
    An evaluation without a due date is not checked further.
    """
    start, due = evaluation.start_date, evaluation.due_date
    stop, view = evaluation.stop_date, evaluation.view_date
    if due is None:
        return

    if start is None:
        raise InvalidDatesError(
            f"start date must be set when a due date ({due}) is set",
            "startDate",
            date=None,
            reference=due,
        )

    if start >= due:
        raise InvalidDatesError(
            f"due date ({due}) must occur after start date ({start}), "
            "can occur on the same date but not at the same time",
            "dueDate",
            date=due,
            reference=start,
        )

    if stop is not None:
        if due > stop:
            raise InvalidDatesError(
                f"stop date ({stop}) must occur on or after due date ({due}), can be identical",
                "stopDate",
                date=stop,
                reference=due,
            )
        if view is not None and view < stop:
            raise InvalidDatesError(
                f"view date ({view}) must occur on or after stop date ({stop}), can be identical",
                "viewDate",
                date=view,
                reference=stop,
            )

    if view is not None and view < due:
        raise InvalidDatesError(
            f"view date ({view}) must occur on or after due date ({due}), can be identical",
            "viewDate",
            date=view,
            reference=due,
        )
