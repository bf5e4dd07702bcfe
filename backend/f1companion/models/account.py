"""Account ORM — one row per Supabase auth user.

Invariants:
    - id is the Supabase user id (uuid string, max 36 chars), never generated here
    - Exactly zero or one UserProfile per Account (cascade delete)
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from f1companion.db.base import Base
from f1companion.models.entity_base import utcnow


class Account(Base):
    """Authentication identity mirrored from Supabase."""
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    profile: Mapped["UserProfile | None"] = relationship(
        "UserProfile", back_populates="account", uselist=False,
    )
