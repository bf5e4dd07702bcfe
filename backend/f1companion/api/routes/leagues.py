"""League Routes — league CRUD, public joins and invite links.

Invariants:
    - Static paths (/available, /join/{token}) are declared before /{league_id}
    - Every route requires a bearer token; writes and user-scoped reads also
      require a registered profile
"""

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.api.deps import get_current_account, get_current_profile, get_invite_codec
from f1companion.core.domain_types import MAX_DB_ID
from f1companion.core.invite_token import InviteTokenCodec
from f1companion.infrastructure.database import get_db
from f1companion.models.user_profile import UserProfile
from f1companion.schemas.league import (
    CreateLeagueRequest,
    LeagueDetailsResponse,
    LeagueInvitePreviewResponse,
    LeagueInviteResponse,
    LeagueResponse,
)
from f1companion.services.league_invite_service import LeagueInviteService
from f1companion.services.league_service import LeagueService

router = APIRouter(prefix="/api/leagues", tags=["leagues"])


@router.post("", response_model=LeagueResponse, status_code=status.HTTP_201_CREATED)
async def create_league(
    body: CreateLeagueRequest,
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
):
    return await LeagueService(db).create_league(body, profile.id)


@router.get(
    "", response_model=list[LeagueResponse],
    dependencies=[Depends(get_current_account)],
)
async def list_leagues(db: AsyncSession = Depends(get_db)):
    return await LeagueService(db).list_leagues()


@router.get("/available", response_model=list[LeagueResponse])
async def list_available_leagues(
    search_term: str | None = Query(None, alias="searchTerm"),
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
):
    return await LeagueService(db).list_available_leagues(profile.id, search_term)


@router.get("/join/{token}/preview", response_model=LeagueInvitePreviewResponse)
async def preview_invite(
    token: str,
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
    codec: InviteTokenCodec = Depends(get_invite_codec),
):
    return await LeagueInviteService(db, codec).preview_invite(token)


@router.post("/join/{token}", response_model=LeagueResponse)
async def join_via_invite(
    token: str,
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
    codec: InviteTokenCodec = Depends(get_invite_codec),
):
    return await LeagueInviteService(db, codec).join_via_invite(token, profile.id)


@router.get(
    "/{league_id}", response_model=LeagueDetailsResponse,
    dependencies=[Depends(get_current_account)],
)
async def get_league(
    league_id: int = Path(ge=1, le=MAX_DB_ID),
    db: AsyncSession = Depends(get_db),
):
    return await LeagueService(db).get_league(league_id)


@router.post("/{league_id}/join", response_model=LeagueResponse)
async def join_league(
    league_id: int = Path(ge=1, le=MAX_DB_ID),
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
):
    return await LeagueService(db).join_league(league_id, profile.id)


@router.post("/{league_id}/invite", response_model=LeagueInviteResponse)
async def get_or_create_invite(
    league_id: int = Path(ge=1, le=MAX_DB_ID),
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
    codec: InviteTokenCodec = Depends(get_invite_codec),
):
    return await LeagueInviteService(db, codec).get_or_create_invite(
        league_id, profile.id,
    )
