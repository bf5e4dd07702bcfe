"""Profile Service — account registration, profile lookup and profile updates.

Invariants:
    - Registration needs the email claim and creates Account + UserProfile in one commit
    - An account registers at most once (UserAlreadyRegisteredError)
    - update_profile touches only the fields supplied with a non-null value and
      stamps updated_at
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.core.errors import (
    InvalidOperationError,
    UserAlreadyRegisteredError,
    UserProfileRequiredError,
)
from f1companion.core.names import full_name
from f1companion.models.account import Account
from f1companion.models.entity_base import utcnow
from f1companion.models.user_profile import UserProfile
from f1companion.schemas.profile import UserProfileResponse
from f1companion.schemas.team import TeamResponse

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("display_name", "email", "first_name", "last_name", "avatar_url")


def profile_response(profile: UserProfile) -> UserProfileResponse:
    team = profile.team
    return UserProfileResponse(
        id=profile.id,
        email=profile.email,
        display_name=profile.display_name,
        first_name=profile.first_name,
        last_name=profile.last_name,
        avatar_url=profile.avatar_url,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
        team=TeamResponse(
            id=team.id,
            name=team.name,
            owner_name=owner_name(profile),
        ) if team is not None else None,
    )


def owner_name(profile: UserProfile) -> str:
    return full_name(profile.first_name, profile.last_name, profile.display_name)


class UserProfileService:
    """Reads and writes user profiles for authenticated accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_account_id(self, account_id: str) -> UserProfile | None:
        result = await self.db.execute(
            select(UserProfile)
            .where(UserProfile.account_id == account_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_required(self, account_id: str) -> UserProfile:
        profile = await self.get_by_account_id(account_id)
        if profile is None:
            logger.warning(
                "Profile required but missing",
                extra={"account_id": account_id},
            )
            raise UserProfileRequiredError(account_id)
        return profile

    async def register(
        self, account_id: str, email: str | None, display_name: str | None,
    ) -> UserProfile:
        if not email:
            logger.warning(
                "Registration attempted without email",
                extra={"account_id": account_id},
            )
            raise InvalidOperationError("Email address is required for registration")

        if await self.get_by_account_id(account_id) is not None:
            raise UserAlreadyRegisteredError(account_id)

        account = await self.db.get(Account, account_id)
        if account is None:
            account = Account(id=account_id)
            self.db.add(account)
            await self.db.flush()
        account.last_login_at = utcnow()

        profile = UserProfile(
            account_id=account_id,
            email=email,
            display_name=display_name.strip() if display_name else None,
            team=None,
        )
        self.db.add(profile)
        await self.db.commit()

        logger.info(
            f"Registered account {account_id} as profile {profile.id}",
            extra={"user_id": profile.id, "account_id": account_id},
        )
        return profile

    async def update_profile(
        self, profile: UserProfile, changes: dict[str, Any],
    ) -> UserProfile:
        """Apply the supplied non-null fields; nulls and keys outside UPDATABLE_FIELDS are ignored."""
        applied = sorted(
            key for key in UPDATABLE_FIELDS if changes.get(key) is not None
        )
        for key in applied:
            setattr(profile, key, changes[key])
        profile.updated_at = utcnow()
        await self.db.commit()

        logger.info(
            f"Updated profile {profile.id}: {applied}",
            extra={"user_id": profile.id},
        )
        return profile
