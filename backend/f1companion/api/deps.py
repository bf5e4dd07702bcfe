"""Request Dependencies — authentication, profile resolution and service wiring.

Invariants:
    - get_current_account raises 401 for a missing or invalid bearer token
    - get_current_profile additionally raises 400 USER_PROFILE_REQUIRED when the
      account has not registered
    - Verifier and invite codec are built from settings, overridable in tests
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.config import get_settings
from f1companion.core.invite_token import InviteTokenCodec
from f1companion.infrastructure.database import get_db
from f1companion.models.user_profile import UserProfile
from f1companion.services.auth_service import AuthenticatedAccount, SupabaseTokenVerifier
from f1companion.services.profile_service import UserProfileService

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_verifier() -> SupabaseTokenVerifier:
    settings = get_settings()
    return SupabaseTokenVerifier(settings.supabase_jwt_secret, settings.jwt_audience)


def get_invite_codec() -> InviteTokenCodec:
    return InviteTokenCodec(get_settings().invite_token_key)


async def get_current_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    verifier: SupabaseTokenVerifier = Depends(get_token_verifier),
) -> AuthenticatedAccount:
    return verifier.verify(credentials.credentials if credentials else None)


async def get_current_profile(
    account: AuthenticatedAccount = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
) -> UserProfile:
    return await UserProfileService(db).get_required(account.account_id)
