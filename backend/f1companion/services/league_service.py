"""League Service — league creation, listings and public joins.

Invariants:
    - Creating a league requires the owner to have a team; the league and the
      owner's membership are committed together
    - Public join order: league exists -> public -> not full -> caller has team -> not a member
    - Available leagues: public, not full, without the caller's team, ordered by name

Design Decisions:
    - Membership rules live in core/enforce_league.py and are shared with invite joins
    - team_count is derived from the loaded memberships, not stored
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.core.domain_types import DEFAULT_MAX_TEAMS
from f1companion.core.enforce_league import (
    check_league_open,
    check_not_member,
    is_league_full,
)
from f1companion.core.errors import (
    LeagueNotFoundError,
    TeamRequiredError,
    UserProfileRequiredError,
)
from f1companion.models.league import League, LeagueTeam
from f1companion.models.team import Team
from f1companion.models.user_profile import UserProfile
from f1companion.schemas.league import (
    CreateLeagueRequest,
    LeagueDetailsResponse,
    LeagueResponse,
)
from f1companion.services.profile_service import owner_name
from f1companion.services.team_service import team_response

logger = logging.getLogger(__name__)


def league_response(league: League) -> LeagueResponse:
    return LeagueResponse(
        id=league.id,
        name=league.name,
        description=league.description,
        owner_id=league.owner_id,
        owner_name=owner_name(league.owner),
        team_count=len(league.league_teams),
        max_teams=league.max_teams,
        is_private=league.is_private,
    )


def league_details(league: League) -> LeagueDetailsResponse:
    return LeagueDetailsResponse(
        **league_response(league).model_dump(),
        teams=[team_response(lt.team) for lt in league.league_teams],
    )


class LeagueService:
    """League queries and the public join path."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load_league(self, league_id: int) -> League | None:
        result = await self.db.execute(
            select(League)
            .where(League.id == league_id, League.is_deleted.is_(False))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def require_league(self, league_id: int) -> League:
        league = await self.load_league(league_id)
        if league is None:
            raise LeagueNotFoundError(league_id)
        return league

    async def find_user_team(self, user_id: int) -> Team | None:
        result = await self.db.execute(
            select(Team).where(Team.user_id == user_id, Team.is_deleted.is_(False))
        )
        return result.scalar_one_or_none()

    async def create_league(
        self, request: CreateLeagueRequest, owner_id: int,
    ) -> LeagueResponse:
        owner = await self.db.get(UserProfile, owner_id)
        if owner is None:
            raise UserProfileRequiredError(str(owner_id))

        team = await self.find_user_team(owner_id)
        if team is None:
            logger.warning(
                f"User {owner_id} tried to create a league without a team",
                extra={"user_id": owner_id},
            )
            raise TeamRequiredError(
                owner_id, "You must create a team before creating a league.",
            )

        league = League(
            name=request.name,
            description=request.description,
            is_private=request.is_private,
            max_teams=DEFAULT_MAX_TEAMS,
            owner=owner,
            created_by=owner_id,
            league_teams=[LeagueTeam(team=team, created_by=owner_id)],
        )
        self.db.add(league)
        await self.db.commit()

        logger.info(
            f"Created league {league.id} '{league.name}' (private={league.is_private})",
            extra={"user_id": owner_id, "league_id": league.id, "team_id": team.id},
        )
        return league_response(league)

    async def list_leagues(self) -> list[LeagueResponse]:
        result = await self.db.execute(
            select(League)
            .where(League.is_deleted.is_(False))
            .order_by(League.name, League.id)
        )
        return [league_response(lg) for lg in result.scalars().all()]

    async def get_league(self, league_id: int) -> LeagueDetailsResponse:
        return league_details(await self.require_league(league_id))

    async def list_owned_leagues(self, owner_id: int) -> list[LeagueResponse]:
        result = await self.db.execute(
            select(League)
            .where(League.owner_id == owner_id, League.is_deleted.is_(False))
            .order_by(League.name, League.id)
        )
        leagues = result.scalars().all()
        logger.debug(
            f"User {owner_id} owns {len(leagues)} leagues", extra={"user_id": owner_id},
        )
        return [league_response(lg) for lg in leagues]

    async def list_available_leagues(
        self, user_id: int, search_term: str | None = None,
    ) -> list[LeagueResponse]:
        query = select(League).where(
            League.is_private.is_(False), League.is_deleted.is_(False),
        )
        term = (search_term or "").strip()
        if term:
            query = query.where(League.name.icontains(term, autoescape=True))
        result = await self.db.execute(query.order_by(League.name, League.id))

        team = await self.find_user_team(user_id)
        team_id = team.id if team is not None else None
        return [
            league_response(lg)
            for lg in result.scalars().all()
            if not is_league_full(len(lg.league_teams), lg.max_teams)
            and all(lt.team_id != team_id for lt in lg.league_teams)
        ]

    async def add_member(
        self, league: League, user_id: int, via_invite: bool = False,
    ) -> LeagueResponse:
        """Join the caller's team to an already-loaded league."""
        check_league_open(
            league.id, league.is_private, len(league.league_teams),
            league.max_teams, via_invite=via_invite,
        )
        team = await self.find_user_team(user_id)
        if team is None:
            raise TeamRequiredError(
                user_id, "You must create a team before joining a league.",
            )
        check_not_member(league.id, team.id, (lt.team_id for lt in league.league_teams))

        league.league_teams.append(LeagueTeam(team=team, created_by=user_id))
        await self.db.commit()

        logger.info(
            f"Team {team.id} joined league {league.id} (invite={via_invite})",
            extra={"user_id": user_id, "team_id": team.id, "league_id": league.id},
        )
        return league_response(league)

    async def join_league(self, league_id: int, user_id: int) -> LeagueResponse:
        league = await self.require_league(league_id)
        return await self.add_member(league, user_id)
