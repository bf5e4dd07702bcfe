"""Profile Schemas — registration, profile updates and the profile view.

Invariants:
    - UpdateProfileRequest fields are all optional; only fields present in the
      request body with a non-null value are applied
    - Length limits mirror the columns: display_name 50, first/last name 30, email 254
"""

from datetime import datetime

from pydantic import Field

from f1companion.schemas.common import ApiModel
from f1companion.schemas.team import TeamResponse


class RegisterRequest(ApiModel):
    display_name: str | None = Field(None, max_length=50)


class UpdateProfileRequest(ApiModel):
    display_name: str | None = Field(None, max_length=50)
    email: str | None = Field(None, min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    first_name: str | None = Field(None, max_length=30)
    last_name: str | None = Field(None, max_length=30)
    avatar_url: str | None = Field(None, max_length=2048)


class UserProfileResponse(ApiModel):
    id: int
    email: str
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
    team: TeamResponse | None = None
