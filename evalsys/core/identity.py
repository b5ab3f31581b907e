from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel


class EvalUser(BaseModel):
    user_id: str
    email: str | None = None
    display_name: str | None = None


class ActorResolver(Protocol):
    def current_user_id(self) -> str | None: ...

    def is_current_user_admin(self) -> bool: ...

    def is_user_admin(self, user_id: str) -> bool: ...

    def user_by_id(self, user_id: str) -> EvalUser | None: ...


class StaticActorResolver:
    """In-memory resolver for callers that already know who is acting."""

    def __init__(
        self,
        current_user_id: str | None = None,
        users: list[EvalUser] | None = None,
        admin_ids: set[str] | None = None,
    ):
        self._current_user_id = current_user_id
        self._users = {u.user_id: u for u in users or []}
        self._admin_ids = set(admin_ids or ())

    def current_user_id(self) -> str | None:
        return self._current_user_id

    def is_current_user_admin(self) -> bool:
        return self._current_user_id is not None and self.is_user_admin(self._current_user_id)

    def is_user_admin(self, user_id: str) -> bool:
        return user_id in self._admin_ids

    def user_by_id(self, user_id: str) -> EvalUser | None:
        return self._users.get(user_id)
