import uuid

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from evalsys.core.identity import EvalUser
from evalsys.db.session import get_db
from evalsys.models.user import User


def get_current_user(
    x_user_email: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    """
    DEV AUTH: pass X-User-Email header to simulate logged-in user.
    Example: X-User-Email: admin@local.test
    """
    if not x_user_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Email header (dev auth)",
        )

    user = db.query(User).filter(User.email == x_user_email).one_or_none()
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="Invalid or inactive user")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden. Requires admin")
    return user


def to_eval_user(user: User) -> EvalUser:
    return EvalUser(user_id=str(user.id), email=user.email, display_name=user.full_name)


class DbActorResolver:
    """Actor resolver for the user authenticated on the current request."""

    def __init__(self, db: Session, current_user: User):
        self.db = db
        self.current_user = current_user

    def current_user_id(self) -> str | None:
        return str(self.current_user.id)

    def is_current_user_admin(self) -> bool:
        return bool(self.current_user.is_admin)

    def _load(self, user_id: str) -> User | None:
        try:
            uid = uuid.UUID(user_id)
        except ValueError:
            return None
        return self.db.get(User, uid)

    def is_user_admin(self, user_id: str) -> bool:
        user = self._load(user_id)
        return bool(user and user.is_active and user.is_admin)

    def user_by_id(self, user_id: str) -> EvalUser | None:
        user = self._load(user_id)
        return to_eval_user(user) if user else None
