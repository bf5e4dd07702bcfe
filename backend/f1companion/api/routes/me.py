"""Me Routes — the caller's profile, registration, owned leagues and own team.

Invariants:
    - /me/profile and /me/register need only a valid token; everything else
      needs a registered profile
    - GET /me/team answers 200 with null when the caller has no team
    - Roster mutations answer 204, or 400 TEAM_REQUIRED when the caller has no team
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.api.deps import get_current_account, get_current_profile
from f1companion.core.errors import ResourceNotFoundError, TeamRequiredError
from f1companion.infrastructure.database import get_db
from f1companion.models.team import Team
from f1companion.models.user_profile import UserProfile
from f1companion.schemas.league import LeagueResponse
from f1companion.schemas.profile import (
    RegisterRequest,
    UpdateProfileRequest,
    UserProfileResponse,
)
from f1companion.schemas.team import (
    AddConstructorRequest,
    AddDriverRequest,
    TeamDetailsResponse,
)
from f1companion.services.auth_service import AuthenticatedAccount
from f1companion.services.league_service import LeagueService
from f1companion.services.profile_service import UserProfileService, profile_response
from f1companion.services.team_service import TeamService

router = APIRouter(prefix="/api/me", tags=["me"])


# ─── Profile ─────────────────────────────────────────────────────

@router.get("/profile", response_model=UserProfileResponse)
async def get_profile(
    account: AuthenticatedAccount = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    profile = await UserProfileService(db).get_by_account_id(account.account_id)
    if profile is None:
        raise ResourceNotFoundError("User profile", account.account_id)
    return profile_response(profile)


@router.post(
    "/register", response_model=UserProfileResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest | None = None,
    account: AuthenticatedAccount = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    display_name = body.display_name if body else None
    profile = await UserProfileService(db).register(
        account.account_id, account.email, display_name,
    )
    return profile_response(profile)


@router.patch("/profile", response_model=UserProfileResponse)
async def update_profile(
    body: UpdateProfileRequest,
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
):
    changes = body.model_dump(exclude_unset=True)
    updated = await UserProfileService(db).update_profile(profile, changes)
    return profile_response(updated)


@router.get("/leagues", response_model=list[LeagueResponse])
async def list_my_leagues(
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
):
    return await LeagueService(db).list_owned_leagues(profile.id)


# ─── Team ────────────────────────────────────────────────────────

@router.get("/team", response_model=TeamDetailsResponse | None)
async def get_my_team(
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
):
    return await TeamService(db).get_user_team(profile.id)


async def _require_own_team(service: TeamService, profile: UserProfile) -> Team:
    team = await service.find_user_team(profile.id)
    if team is None:
        raise TeamRequiredError(profile.id, "User has no team. Create a team first.")
    return team


@router.post("/team/drivers", status_code=status.HTTP_204_NO_CONTENT)
async def add_driver(
    body: AddDriverRequest,
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
):
    service = TeamService(db)
    team = await _require_own_team(service, profile)
    await service.add_driver(team.id, body.driver_id, body.slot_position, profile.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/team/drivers/{slot_position}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_driver(
    slot_position: int,
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
):
    service = TeamService(db)
    team = await _require_own_team(service, profile)
    await service.remove_driver(team.id, slot_position, profile.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/team/constructors", status_code=status.HTTP_204_NO_CONTENT)
async def add_constructor(
    body: AddConstructorRequest,
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
):
    service = TeamService(db)
    team = await _require_own_team(service, profile)
    await service.add_constructor(
        team.id, body.constructor_id, body.slot_position, profile.id,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/team/constructors/{slot_position}", status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_constructor(
    slot_position: int,
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
):
    service = TeamService(db)
    team = await _require_own_team(service, profile)
    await service.remove_constructor(team.id, slot_position, profile.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
