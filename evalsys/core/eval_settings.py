"""
System-wide evaluation settings.

Every key has a value type and a documented default. A default of None means
"no override": the consuming rule falls back to its own literal default.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Protocol

from evalsys.core.constants import InstructorOpt


class SettingKey(str, Enum):
    RESPONSES_REQUIRED_TO_VIEW_RESULTS = "RESPONSES_REQUIRED_TO_VIEW_RESULTS"
    INSTRUCTOR_ALLOWED_VIEW_RESULTS = "INSTRUCTOR_ALLOWED_VIEW_RESULTS"
    INSTRUCTOR_ALLOWED_VIEW_ALL_RESULTS = "INSTRUCTOR_ALLOWED_VIEW_ALL_RESULTS"
    STUDENT_ALLOWED_VIEW_RESULTS = "STUDENT_ALLOWED_VIEW_RESULTS"
    EVAL_USE_STOP_DATE = "EVAL_USE_STOP_DATE"
    EVAL_USE_VIEW_DATE = "EVAL_USE_VIEW_DATE"
    EVAL_USE_SAME_VIEW_DATES = "EVAL_USE_SAME_VIEW_DATES"
    EVAL_USE_DATE_TIME = "EVAL_USE_DATE_TIME"
    EVAL_MIN_TIME_DIFF_BETWEEN_START_DUE = "EVAL_MIN_TIME_DIFF_BETWEEN_START_DUE"
    EVAL_DEFAULT_START_HOUR = "EVAL_DEFAULT_START_HOUR"
    DEFAULT_EMAIL_REMINDER_FREQUENCY = "DEFAULT_EMAIL_REMINDER_FREQUENCY"
    FROM_EMAIL_ADDRESS = "FROM_EMAIL_ADDRESS"
    USE_ADMIN_AS_FROM_EMAIL = "USE_ADMIN_AS_FROM_EMAIL"
    STUDENT_ALLOWED_LEAVE_UNANSWERED = "STUDENT_ALLOWED_LEAVE_UNANSWERED"
    STUDENT_MODIFY_RESPONSES = "STUDENT_MODIFY_RESPONSES"
    ALLOW_ALL_SITE_ROLES_TO_RESPOND = "ALLOW_ALL_SITE_ROLES_TO_RESPOND"
    INSTRUCTOR_MUST_USE_EVALS_FROM_ABOVE = "INSTRUCTOR_MUST_USE_EVALS_FROM_ABOVE"

    @property
    def value_type(self) -> type:
        return SETTING_TYPES[self]

    @property
    def default(self) -> Any:
        return SETTING_DEFAULTS[self]


SETTING_TYPES: dict[SettingKey, type] = {
    SettingKey.RESPONSES_REQUIRED_TO_VIEW_RESULTS: int,
    SettingKey.INSTRUCTOR_ALLOWED_VIEW_RESULTS: bool,
    SettingKey.INSTRUCTOR_ALLOWED_VIEW_ALL_RESULTS: bool,
    SettingKey.STUDENT_ALLOWED_VIEW_RESULTS: bool,
    SettingKey.EVAL_USE_STOP_DATE: bool,
    SettingKey.EVAL_USE_VIEW_DATE: bool,
    SettingKey.EVAL_USE_SAME_VIEW_DATES: bool,
    SettingKey.EVAL_USE_DATE_TIME: bool,
    SettingKey.EVAL_MIN_TIME_DIFF_BETWEEN_START_DUE: int,
    SettingKey.EVAL_DEFAULT_START_HOUR: int,
    SettingKey.DEFAULT_EMAIL_REMINDER_FREQUENCY: int,
    SettingKey.FROM_EMAIL_ADDRESS: str,
    SettingKey.USE_ADMIN_AS_FROM_EMAIL: bool,
    SettingKey.STUDENT_ALLOWED_LEAVE_UNANSWERED: bool,
    SettingKey.STUDENT_MODIFY_RESPONSES: bool,
    SettingKey.ALLOW_ALL_SITE_ROLES_TO_RESPOND: bool,
    SettingKey.INSTRUCTOR_MUST_USE_EVALS_FROM_ABOVE: str,
}

SETTING_DEFAULTS: dict[SettingKey, Any] = {
    SettingKey.RESPONSES_REQUIRED_TO_VIEW_RESULTS: 5,
    SettingKey.INSTRUCTOR_ALLOWED_VIEW_RESULTS: None,
    SettingKey.INSTRUCTOR_ALLOWED_VIEW_ALL_RESULTS: None,
    SettingKey.STUDENT_ALLOWED_VIEW_RESULTS: None,
    SettingKey.EVAL_USE_STOP_DATE: False,
    SettingKey.EVAL_USE_VIEW_DATE: False,
    SettingKey.EVAL_USE_SAME_VIEW_DATES: True,
    SettingKey.EVAL_USE_DATE_TIME: False,
    SettingKey.EVAL_MIN_TIME_DIFF_BETWEEN_START_DUE: 4,
    SettingKey.EVAL_DEFAULT_START_HOUR: None,
    SettingKey.DEFAULT_EMAIL_REMINDER_FREQUENCY: None,
    SettingKey.FROM_EMAIL_ADDRESS: "helpdesk@institution.edu",
    SettingKey.USE_ADMIN_AS_FROM_EMAIL: False,
    SettingKey.STUDENT_ALLOWED_LEAVE_UNANSWERED: None,
    SettingKey.STUDENT_MODIFY_RESPONSES: None,
    SettingKey.ALLOW_ALL_SITE_ROLES_TO_RESPOND: False,
    SettingKey.INSTRUCTOR_MUST_USE_EVALS_FROM_ABOVE: None,
}


class SettingsProvider(Protocol):
    def get(self, key: SettingKey) -> Any | None: ...


def coerce_setting(key: SettingKey, value: Any) -> Any:
    """
    Check a raw value against the key's type. Raises ValueError on mismatch.
    None is always accepted and means "no override".
    """
    if value is None:
        return None
    expected = key.value_type
    # bool is an int subclass; keep them apart
    if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
        raise ValueError(f"{key.value} expects an integer")
    if expected is not int and not isinstance(value, expected):
        raise ValueError(f"{key.value} expects a {expected.__name__}")
    if key is SettingKey.EVAL_DEFAULT_START_HOUR and not 0 <= value <= 23:
        raise ValueError(f"{key.value} must be an hour between 0 and 23")
    if key is SettingKey.INSTRUCTOR_MUST_USE_EVALS_FROM_ABOVE:
        allowed = [opt.value for opt in InstructorOpt]
        if value not in allowed:
            raise ValueError(f"{key.value} must be one of {allowed}")
    if expected is int and value < 0:
        raise ValueError(f"{key.value} must not be negative")
    return value


class InMemorySettings:
    """Dict-backed provider. Keys without an override return their default."""

    def __init__(self, overrides: Mapping[SettingKey, Any] | None = None):
        self._values: dict[SettingKey, Any] = {}
        for key, value in (overrides or {}).items():
            self.set(key, value)

    def get(self, key: SettingKey) -> Any | None:
        if key in self._values:
            return self._values[key]
        return key.default

    def set(self, key: SettingKey, value: Any) -> None:
        key = SettingKey(key)
        self._values[key] = coerce_setting(key, value)

    def clear(self, key: SettingKey) -> None:
        self._values.pop(SettingKey(key), None)
