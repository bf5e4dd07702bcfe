"""UserProfile ORM — public identity of a registered account.

Invariants:
    - account_id and email are unique
    - A profile owns at most one Team (teams.user_id is unique)
    - team and account load eagerly (selectin) so responses never lazy-load in async code
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from f1companion.db.base import Base
from f1companion.models.entity_base import utcnow


class UserProfile(Base):
    """Registered user — owner of a team and of leagues."""
    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True)
    display_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(30), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(30), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    account: Mapped["Account"] = relationship(
        "Account", back_populates="profile", lazy="selectin",
    )
    team: Mapped["Team | None"] = relationship(
        "Team", back_populates="owner", uselist=False,
        foreign_keys="Team.user_id", lazy="selectin",
    )
