"""League ORM — leagues, their member teams, and owner-issued invites.

Invariants:
    - max_teams defaults to 15; membership count never exceeds it (enforced in core/enforce_league.py)
    - (league_id, team_id) is unique in league_teams
    - One invite per league (league_invites.league_id unique); token is unique
    - Memberships and invites are removed with their league (cascade)

Design Decisions:
    - owner_id is kept apart from created_by: ownership may be transferred, authorship may not
    - No Team -> LeagueTeam relationship: league membership is always read from the league side
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from f1companion.core.domain_types import DEFAULT_MAX_TEAMS
from f1companion.db.base import Base
from f1companion.models.entity_base import UserOwnedEntity, utcnow


class League(UserOwnedEntity, Base):
    """A competition between teams; public leagues are joinable by anyone."""
    __tablename__ = "leagues"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="RESTRICT"), nullable=False, index=True,
    )
    max_teams: Mapped[int] = mapped_column(
        Integer, nullable=False, default=DEFAULT_MAX_TEAMS,
    )
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    owner: Mapped["UserProfile"] = relationship(
        "UserProfile", foreign_keys="League.owner_id", lazy="selectin",
    )
    league_teams: Mapped[list["LeagueTeam"]] = relationship(
        "LeagueTeam", back_populates="league",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="LeagueTeam.id",
    )


class LeagueTeam(UserOwnedEntity, Base):
    """Membership of one team in one league."""
    __tablename__ = "league_teams"
    __table_args__ = (
        UniqueConstraint("league_id", "team_id", name="uq_league_teams_league_team"),
    )

    league_id: Mapped[int] = mapped_column(
        ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False,
    )
    team_id: Mapped[int] = mapped_column(
        ForeignKey("teams.id", ondelete="CASCADE"), nullable=False,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )

    league: Mapped["League"] = relationship("League", back_populates="league_teams")
    team: Mapped["Team"] = relationship("Team", lazy="selectin")


class LeagueInvite(UserOwnedEntity, Base):
    """Reusable invite link for a private league."""
    __tablename__ = "league_invites"

    league_id: Mapped[int] = mapped_column(
        ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False, unique=True,
    )
    token: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)

    league: Mapped["League"] = relationship("League")
    created_by_user: Mapped["UserProfile"] = relationship(
        "UserProfile", foreign_keys="LeagueInvite.created_by", lazy="selectin",
    )
