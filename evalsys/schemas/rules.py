from typing import Any

from pydantic import BaseModel, Field


class ResponsesNeededRequest(BaseModel):
    responses_count: int = Field(ge=0)
    enrollments_count: int = Field(ge=0)


class ResponsesNeededOut(BaseModel):
    responses_needed: int
    viewable: bool


class CategoryCheck(BaseModel):
    eval_category: str | None = None


class PermissionCheck(BaseModel):
    user_id: str
    owner_id: str | None = None


class PermissionCheckOut(BaseModel):
    allowed: bool


class SettingOut(BaseModel):
    key: str
    value: Any | None
    default: Any | None
    overridden: bool


class SettingUpdate(BaseModel):
    value: Any | None = None
