"""Team Service — team creation, team details and roster slot mutations.

Invariants:
    - One team per user (DuplicateTeamError, backed by teams.user_id unique)
    - Roster additions run core/enforce_roster.py rules before the entity lookup:
      team exists -> owner -> slot range -> capacity -> slot free -> entity unique -> entity exists
    - Removals check team exists -> owner -> an entry occupies the slot
    - Concurrent writers that pass the checks are stopped by unique constraints (409)

Design Decisions:
    - Drivers and constructors share one code path parameterized by RosterKind
    - Reads use populate_existing so details always reflect the latest commit
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.core.domain_types import (
    CONSTRUCTOR_RULES,
    DRIVER_RULES,
    RosterRules,
)
from f1companion.core.enforce_roster import check_team_owner, validate_roster_addition
from f1companion.core.errors import (
    DuplicateTeamError,
    InvalidOperationError,
    UserProfileRequiredError,
)
from f1companion.models.catalog import Constructor, Driver
from f1companion.models.entity_base import utcnow
from f1companion.models.team import Team, TeamConstructor, TeamDriver
from f1companion.models.user_profile import UserProfile
from f1companion.schemas.team import (
    TeamConstructorResponse,
    TeamDetailsResponse,
    TeamDriverResponse,
    TeamResponse,
)
from f1companion.services.profile_service import owner_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterKind:
    """How one entity type is stored on a team."""
    rules: RosterRules
    entity_model: type
    entry_model: type
    collection: str
    entity_attr: str
    label: str

    def entries(self, team: Team) -> list:
        return getattr(team, self.collection)

    def roster(self, team: Team) -> list[tuple[int, int]]:
        return [
            (entry.slot_position, getattr(entry, f"{self.entity_attr}_id"))
            for entry in self.entries(team)
        ]


DRIVERS = RosterKind(
    DRIVER_RULES, Driver, TeamDriver, "team_drivers", "driver", "Driver",
)
CONSTRUCTORS = RosterKind(
    CONSTRUCTOR_RULES, Constructor, TeamConstructor,
    "team_constructors", "constructor", "Constructor",
)


def team_response(team: Team) -> TeamResponse:
    return TeamResponse(id=team.id, name=team.name, owner_name=owner_name(team.owner))


def team_details(team: Team) -> TeamDetailsResponse:
    drivers = sorted(team.team_drivers, key=lambda e: e.slot_position)
    constructors = sorted(team.team_constructors, key=lambda e: e.slot_position)
    return TeamDetailsResponse(
        id=team.id,
        name=team.name,
        owner_name=owner_name(team.owner),
        drivers=[
            TeamDriverResponse(
                slot_position=e.slot_position,
                id=e.driver.id,
                first_name=e.driver.first_name,
                last_name=e.driver.last_name,
                abbreviation=e.driver.abbreviation,
                country_abbreviation=e.driver.country_abbreviation,
            )
            for e in drivers
        ],
        constructors=[
            TeamConstructorResponse(
                slot_position=e.slot_position,
                id=e.constructor.id,
                name=e.constructor.name,
                full_name=e.constructor.full_name,
                country_abbreviation=e.constructor.country_abbreviation,
                is_active=e.constructor.is_active,
            )
            for e in constructors
        ],
    )


class TeamService:
    """Team lifecycle and roster slot management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Reads ───────────────────────────────────────────────────

    async def _load_team(self, team_id: int) -> Team | None:
        result = await self.db.execute(
            select(Team)
            .where(Team.id == team_id, Team.is_deleted.is_(False))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_user_team(self, user_id: int) -> Team | None:
        result = await self.db.execute(
            select(Team)
            .where(Team.user_id == user_id, Team.is_deleted.is_(False))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_user_team(self, user_id: int) -> TeamDetailsResponse | None:
        team = await self.find_user_team(user_id)
        if team is None:
            logger.debug(f"User {user_id} has no team", extra={"user_id": user_id})
            return None
        return team_details(team)

    async def get_team(self, team_id: int) -> TeamDetailsResponse | None:
        team = await self._load_team(team_id)
        return team_details(team) if team is not None else None

    async def list_teams(self) -> list[TeamResponse]:
        result = await self.db.execute(
            select(Team).where(Team.is_deleted.is_(False)).order_by(Team.id)
        )
        return [team_response(t) for t in result.scalars().all()]

    # ─── Creation ────────────────────────────────────────────────

    async def create_team(self, name: str, user_id: int) -> TeamResponse:
        profile = await self.db.get(UserProfile, user_id)
        if profile is None:
            raise UserProfileRequiredError(str(user_id))

        existing = await self.find_user_team(user_id)
        if existing is not None:
            logger.warning(
                f"User {user_id} already owns team {existing.id}",
                extra={"user_id": user_id, "team_id": existing.id},
            )
            raise DuplicateTeamError(user_id, existing.id)

        team = Team(
            name=name.strip(),
            owner=profile,
            created_by=user_id,
            team_drivers=[],
            team_constructors=[],
        )
        self.db.add(team)
        await self.db.commit()

        logger.info(
            f"Created team {team.id} '{team.name}' for user {user_id}",
            extra={"user_id": user_id, "team_id": team.id},
        )
        return team_response(team)

    # ─── Roster mutations ────────────────────────────────────────

    async def _require_team(self, team_id: int) -> Team:
        team = await self._load_team(team_id)
        if team is None:
            raise InvalidOperationError("Team not found")
        return team

    async def _add_entry(
        self, kind: RosterKind, team_id: int, entity_id: int,
        slot_position: int, user_id: int,
    ) -> None:
        team = await self._require_team(team_id)
        validate_roster_addition(
            kind.rules, team.id, team.user_id, user_id,
            kind.roster(team), entity_id, slot_position,
        )

        entity = await self.db.get(kind.entity_model, entity_id)
        if entity is None:
            raise InvalidOperationError(f"{kind.label} not found")

        kind.entries(team).append(kind.entry_model(
            **{kind.entity_attr: entity},
            slot_position=slot_position,
            created_by=user_id,
        ))
        team.updated_at = utcnow()
        team.updated_by = user_id
        await self.db.commit()

        logger.info(
            f"Added {kind.entity_attr} {entity_id} to team {team.id} at slot {slot_position}",
            extra={"user_id": user_id, "team_id": team.id},
        )

    async def _remove_entry(
        self, kind: RosterKind, team_id: int, slot_position: int, user_id: int,
    ) -> None:
        team = await self._require_team(team_id)
        check_team_owner(team.id, team.user_id, user_id)

        entries = kind.entries(team)
        entry = next((e for e in entries if e.slot_position == slot_position), None)
        if entry is None:
            raise InvalidOperationError(
                f"No {kind.entity_attr} found at slot position {slot_position}",
            )

        entries.remove(entry)
        team.updated_at = utcnow()
        team.updated_by = user_id
        await self.db.commit()

        logger.info(
            f"Removed {kind.entity_attr} from team {team.id} slot {slot_position}",
            extra={"user_id": user_id, "team_id": team.id},
        )

    async def add_driver(
        self, team_id: int, driver_id: int, slot_position: int, user_id: int,
    ) -> None:
        await self._add_entry(DRIVERS, team_id, driver_id, slot_position, user_id)

    async def remove_driver(
        self, team_id: int, slot_position: int, user_id: int,
    ) -> None:
        await self._remove_entry(DRIVERS, team_id, slot_position, user_id)

    async def add_constructor(
        self, team_id: int, constructor_id: int, slot_position: int, user_id: int,
    ) -> None:
        await self._add_entry(
            CONSTRUCTORS, team_id, constructor_id, slot_position, user_id,
        )

    async def remove_constructor(
        self, team_id: int, slot_position: int, user_id: int,
    ) -> None:
        await self._remove_entry(CONSTRUCTORS, team_id, slot_position, user_id)
