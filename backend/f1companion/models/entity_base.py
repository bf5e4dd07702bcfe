"""Entity Mixins — shared columns for catalog and user-owned tables.

Invariants:
    - TrackedEntity: integer id, created/updated/deleted timestamps, soft-delete flag
    - UserOwnedEntity adds created_by (required), updated_by and deleted_by FKs to user_profiles
    - Timestamps are timezone-aware UTC

Design Decisions:
    - Mixins instead of an abstract base table: every entity keeps its own table
    - Audit FKs are RESTRICT: profiles with authored rows cannot be hard-deleted
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TrackedEntity:
    """Columns shared by every entity table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )


class UserOwnedEntity(TrackedEntity):
    """Adds the audit trail for rows created by users (teams, leagues, memberships)."""

    created_by: Mapped[int] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=False,
    )
    updated_by: Mapped[int | None] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=True,
    )
    deleted_by: Mapped[int | None] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=True,
    )
