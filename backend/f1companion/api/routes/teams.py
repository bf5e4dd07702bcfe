"""Team Routes — create a team, list teams, read team details.

Invariants:
    - Creating requires a registered profile; listing and reading are public
    - Unknown team id → 404 RESOURCE_NOT_FOUND
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.api.deps import get_current_profile
from f1companion.core.domain_types import MAX_DB_ID
from f1companion.core.errors import ResourceNotFoundError
from f1companion.infrastructure.database import get_db
from f1companion.models.user_profile import UserProfile
from f1companion.schemas.team import CreateTeamRequest, TeamDetailsResponse, TeamResponse
from f1companion.services.team_service import TeamService

router = APIRouter(prefix="/api/teams", tags=["teams"])


@router.post("", response_model=TeamResponse, status_code=status.HTTP_201_CREATED)
async def create_team(
    body: CreateTeamRequest,
    profile: UserProfile = Depends(get_current_profile),
    db: AsyncSession = Depends(get_db),
):
    return await TeamService(db).create_team(body.name, profile.id)


@router.get("", response_model=list[TeamResponse])
async def list_teams(db: AsyncSession = Depends(get_db)):
    return await TeamService(db).list_teams()


@router.get("/{team_id}", response_model=TeamDetailsResponse)
async def get_team(
    team_id: int = Path(ge=1, le=MAX_DB_ID),
    db: AsyncSession = Depends(get_db),
):
    team = await TeamService(db).get_team(team_id)
    if team is None:
        raise ResourceNotFoundError("Team", team_id)
    return team
