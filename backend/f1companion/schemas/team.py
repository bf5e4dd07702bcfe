"""Team Schemas — team creation, roster mutation and team details.

Invariants:
    - CreateTeamRequest.name: 1-50 chars after stripping
    - Roster entries in TeamDetailsResponse are sorted by slot_position
    - Entity ids are bounded to the INTEGER key range (1..MAX_DB_ID)
    - Slot bounds are NOT validated here: core/enforce_roster.py owns them so the
      error carries the domain code (INVALID_SLOT_POSITION)
"""

from pydantic import Field, field_validator

from f1companion.core.domain_types import MAX_DB_ID
from f1companion.schemas.common import ApiModel, strip_text


class CreateTeamRequest(ApiModel):
    name: str = Field(min_length=1, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return strip_text(v)


class AddDriverRequest(ApiModel):
    driver_id: int = Field(ge=1, le=MAX_DB_ID)
    slot_position: int


class AddConstructorRequest(ApiModel):
    constructor_id: int = Field(ge=1, le=MAX_DB_ID)
    slot_position: int


class TeamResponse(ApiModel):
    """Team summary, as listed in leagues and profiles."""
    id: int
    name: str
    owner_name: str


class TeamDriverResponse(ApiModel):
    slot_position: int
    id: int
    first_name: str
    last_name: str
    abbreviation: str
    country_abbreviation: str


class TeamConstructorResponse(ApiModel):
    slot_position: int
    id: int
    name: str
    full_name: str | None = None
    country_abbreviation: str
    is_active: bool = True


class TeamDetailsResponse(ApiModel):
    id: int
    name: str
    owner_name: str
    drivers: list[TeamDriverResponse] = []
    constructors: list[TeamConstructorResponse] = []
