from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from evalsys.core.eval_settings import SettingKey, coerce_setting
from evalsys.models.eval_config import EvalConfig
from evalsys.models.user import User

logger = logging.getLogger(__name__)


class DbSettingsProvider:
    """
    Settings provider backed by the eval_config table.
    Rows are read once per provider, so build one per request.
    """

    def __init__(self, db: Session):
        self.db = db
        self._rows: dict[str, EvalConfig] | None = None

    def _load(self) -> dict[str, EvalConfig]:
        if self._rows is None:
            self._rows = {row.key: row for row in self.db.query(EvalConfig).all()}
        return self._rows

    def get(self, key: SettingKey) -> Any | None:
        row = self._load().get(SettingKey(key).value)
        if row is None:
            return SettingKey(key).default
        return row.value

    def is_overridden(self, key: SettingKey) -> bool:
        return SettingKey(key).value in self._load()

    def set(self, key: SettingKey, value: Any, actor: User | None = None) -> EvalConfig:
        key = SettingKey(key)
        value = coerce_setting(key, value)
        rows = self._load()
        row = rows.get(key.value)
        if row is None:
            row = EvalConfig(key=key.value)
            self.db.add(row)
            rows[key.value] = row
        row.value = value
        row.updated_by_user_id = actor.id if actor else None
        self.db.flush()
        logger.info("Setting %s overridden with %r", key.value, value)
        return row

    def clear(self, key: SettingKey) -> bool:
        key = SettingKey(key)
        row = self._load().pop(key.value, None)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        logger.info("Setting %s reset to default", key.value)
        return True
