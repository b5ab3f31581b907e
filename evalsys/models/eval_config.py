import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column
import sqlalchemy as sa

from evalsys.db.base import Base


class EvalConfig(Base):
    """One system setting override. A missing row means the key's documented default applies."""

    __tablename__ = "eval_config"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)

    # JSON null is a stored "no override", distinct from a missing row
    value: Mapped[Any] = mapped_column(JSON(none_as_null=False), nullable=True)

    updated_by_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=sa.func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
        onupdate=sa.func.now(),
    )
