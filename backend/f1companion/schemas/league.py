"""League Schemas — league creation, listings, details and invites.

Invariants:
    - CreateLeagueRequest.name: 1-50 chars after stripping; description <= 100 chars after stripping
    - Blank descriptions are stored as null
    - is_league_full in previews is computed from the live membership count
"""

from datetime import datetime

from pydantic import Field, field_validator

from f1companion.schemas.common import ApiModel, strip_text
from f1companion.schemas.team import TeamResponse


class CreateLeagueRequest(ApiModel):
    name: str = Field(min_length=1, max_length=50)
    description: str | None = Field(None, max_length=100)
    is_private: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return strip_text(v)

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, v):
        v = strip_text(v)
        return v or None


class LeagueResponse(ApiModel):
    id: int
    name: str
    description: str | None = None
    owner_id: int
    owner_name: str
    team_count: int
    max_teams: int
    is_private: bool


class LeagueDetailsResponse(LeagueResponse):
    teams: list[TeamResponse] = []


class LeagueInviteResponse(ApiModel):
    id: int
    league_id: int
    token: str
    created_at: datetime
    created_by_name: str


class LeagueInvitePreviewResponse(ApiModel):
    league_name: str
    league_description: str | None = None
    owner_name: str
    current_team_count: int
    max_teams: int
    is_league_full: bool
