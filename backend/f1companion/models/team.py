"""Team ORM — a user's fantasy team and its roster slots.

Invariants:
    - teams.user_id is unique: one team per user
    - (team_id, slot_position) and (team_id, entity_id) are unique per roster table
    - Roster rows are owned by the team (cascade delete-orphan)
    - Roster collections and their catalog entities load eagerly (selectin)

Design Decisions:
    - Separate TeamDriver / TeamConstructor tables instead of a polymorphic slot table,
      so each FK points at exactly one catalog table
    - Roster mutations go through the collections so the identity map stays current
"""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from f1companion.db.base import Base
from f1companion.models.entity_base import UserOwnedEntity


class Team(UserOwnedEntity, Base):
    """A user's fantasy team: up to 5 drivers and 2 constructors."""
    __tablename__ = "teams"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="RESTRICT"),
        nullable=False, unique=True,
    )

    owner: Mapped["UserProfile"] = relationship(
        "UserProfile", back_populates="team",
        foreign_keys="Team.user_id", lazy="selectin",
    )
    team_drivers: Mapped[list["TeamDriver"]] = relationship(
        "TeamDriver", back_populates="team",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="TeamDriver.slot_position",
    )
    team_constructors: Mapped[list["TeamConstructor"]] = relationship(
        "TeamConstructor", back_populates="team",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="TeamConstructor.slot_position",
    )


class TeamDriver(UserOwnedEntity, Base):
    __tablename__ = "team_drivers"
    __table_args__ = (
        UniqueConstraint("team_id", "slot_position", name="uq_team_drivers_team_slot"),
        UniqueConstraint("team_id", "driver_id", name="uq_team_drivers_team_driver"),
    )

    team_id: Mapped[int] = mapped_column(
        ForeignKey("teams.id", ondelete="CASCADE"), nullable=False,
    )
    driver_id: Mapped[int] = mapped_column(
        ForeignKey("drivers.id", ondelete="RESTRICT"), nullable=False,
    )
    slot_position: Mapped[int] = mapped_column(Integer, nullable=False)

    team: Mapped["Team"] = relationship("Team", back_populates="team_drivers")
    driver: Mapped["Driver"] = relationship("Driver", lazy="selectin")


class TeamConstructor(UserOwnedEntity, Base):
    __tablename__ = "team_constructors"
    __table_args__ = (
        UniqueConstraint("team_id", "slot_position", name="uq_team_constructors_team_slot"),
        UniqueConstraint("team_id", "constructor_id", name="uq_team_constructors_team_constructor"),
    )

    team_id: Mapped[int] = mapped_column(
        ForeignKey("teams.id", ondelete="CASCADE"), nullable=False,
    )
    constructor_id: Mapped[int] = mapped_column(
        ForeignKey("constructors.id", ondelete="RESTRICT"), nullable=False,
    )
    slot_position: Mapped[int] = mapped_column(Integer, nullable=False)

    team: Mapped["Team"] = relationship("Team", back_populates="team_constructors")
    constructor: Mapped["Constructor"] = relationship("Constructor", lazy="selectin")
