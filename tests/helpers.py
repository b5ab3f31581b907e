from datetime import datetime, timezone

from evalsys.core.eval_settings import InMemorySettings, SettingKey
from evalsys.models.user import User

NOW = datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)


def at(day: int, hour: int = 0, minute: int = 0, second: int = 0, month: int = 3) -> datetime:
    return datetime(2026, month, day, hour, minute, second, tzinfo=timezone.utc)


def eod(day: int, month: int = 3) -> datetime:
    return at(day, 23, 59, 59, month=month)


def fixed_clock(now: datetime = NOW):
    return lambda: now


def make_settings(**overrides) -> InMemorySettings:
    """make_settings(EVAL_USE_STOP_DATE=True) -> provider with that override."""
    return InMemorySettings({SettingKey[name]: value for name, value in overrides.items()})


def create_user(db, email: str, full_name="User", is_admin=False) -> User:
    u = User(email=email, full_name=full_name, is_active=True, is_admin=is_admin)
    db.add(u)
    db.commit()
    db.refresh(u)
    return u
