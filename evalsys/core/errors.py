from __future__ import annotations

from datetime import datetime


class EvalRulesError(Exception):
    """Base class for failures raised by the evaluation rules."""

    code = "invalid"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_detail(self) -> dict:
        return {"message": self.message, "field": self.field, "code": self.code}


class InvalidArgumentError(EvalRulesError, ValueError):
    code = "invalid_argument"


class InvalidDatesError(EvalRulesError):
    """
    Date ordering violation. `field` names the offending date field,
    `date` is its value and `reference` the value it was compared against.
    """

    code = "invalid_dates"

    def __init__(
        self,
        message: str,
        field: str,
        date: datetime | None = None,
        reference: datetime | None = None,
    ):
        super().__init__(message, field)
        self.date = date
        self.reference = reference

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["date"] = self.date.isoformat() if self.date else None
        detail["reference"] = self.reference.isoformat() if self.reference else None
        return detail


class InvalidCategoryError(EvalRulesError):
    code = "invalid_category"

    def __init__(self, message: str, category: str):
        super().__init__(message, "evalCategory")
        self.category = category
