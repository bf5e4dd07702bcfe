"""League Invite Service — invite links for private leagues.

Invariants:
    - Only the league owner can obtain the invite, and only for private leagues
    - At most one invite per league: an existing invite is returned, not replaced
    - Token validity is checked before the league lookup; an unknown league is
      reported as an invalid token on preview and as LeagueNotFound on join
    - Invite joins skip the privacy check but keep capacity and membership rules

Design Decisions:
    - Tokens are self-describing (core/invite_token.py): the league id is read from
      the token, the stored row only anchors reuse and authorship
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.core.enforce_league import is_league_full
from f1companion.core.errors import (
    InvalidLeagueInviteTokenError,
    InvalidOperationError,
    LeagueOwnershipError,
)
from f1companion.core.invite_token import InviteTokenCodec
from f1companion.models.league import LeagueInvite
from f1companion.models.user_profile import UserProfile
from f1companion.schemas.league import (
    LeagueInvitePreviewResponse,
    LeagueInviteResponse,
    LeagueResponse,
)
from f1companion.services.league_service import LeagueService
from f1companion.services.profile_service import owner_name

logger = logging.getLogger(__name__)


def invite_response(invite: LeagueInvite) -> LeagueInviteResponse:
    return LeagueInviteResponse(
        id=invite.id,
        league_id=invite.league_id,
        token=invite.token,
        created_at=invite.created_at,
        created_by_name=owner_name(invite.created_by_user),
    )


class LeagueInviteService:
    """Issues, previews and redeems league invites."""

    def __init__(self, db: AsyncSession, codec: InviteTokenCodec):
        self.db = db
        self.codec = codec
        self.leagues = LeagueService(db)

    async def get_or_create_invite(
        self, league_id: int, requester_id: int,
    ) -> LeagueInviteResponse:
        league = await self.leagues.require_league(league_id)
        if league.owner_id != requester_id:
            logger.warning(
                f"User {requester_id} requested invite for league {league_id} they do not own",
                extra={"user_id": requester_id, "league_id": league_id},
            )
            raise LeagueOwnershipError(league_id, requester_id)
        if not league.is_private:
            raise InvalidOperationError(
                "Public leagues cannot be joined by league invite",
            )

        result = await self.db.execute(
            select(LeagueInvite).where(
                LeagueInvite.league_id == league_id,
                LeagueInvite.is_deleted.is_(False),
            )
        )
        invite = result.scalars().first()
        if invite is not None:
            logger.debug(f"Reusing invite {invite.id} for league {league_id}")
            return invite_response(invite)

        requester = await self.db.get(UserProfile, requester_id)
        invite = LeagueInvite(
            league_id=league_id,
            token=self.codec.issue(league_id),
            created_by_user=requester,
        )
        self.db.add(invite)
        await self.db.commit()

        logger.info(
            f"Created invite {invite.id} for league {league_id}",
            extra={"user_id": requester_id, "league_id": league_id},
        )
        return invite_response(invite)

    async def preview_invite(self, token: str) -> LeagueInvitePreviewResponse:
        league_id = self.codec.read_league_id(token)
        league = await self.leagues.load_league(league_id)
        if league is None:
            raise InvalidLeagueInviteTokenError("league not found")

        team_count = len(league.league_teams)
        return LeagueInvitePreviewResponse(
            league_name=league.name,
            league_description=league.description,
            owner_name=owner_name(league.owner),
            current_team_count=team_count,
            max_teams=league.max_teams,
            is_league_full=is_league_full(team_count, league.max_teams),
        )

    async def join_via_invite(self, token: str, user_id: int) -> LeagueResponse:
        league_id = self.codec.read_league_id(token)
        league = await self.leagues.require_league(league_id)
        return await self.leagues.add_member(league, user_id, via_invite=True)
