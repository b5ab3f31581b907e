from datetime import datetime

from pydantic import BaseModel


class ValidationError(BaseModel):
    """Individual validation error"""
    field: str | None
    code: str  # invalid_dates, invalid_category
    message: str


class ValidationPreviewResponse(BaseModel):
    """Response from validation preview endpoint"""
    valid: bool
    errors: list[ValidationError]


class InstructorViewOut(BaseModel):
    can_view: bool
    view_date: datetime | None
