"""Token Verification — Supabase-issued HS256 bearer tokens.

Invariants:
    - HS256 only, shared secret, audience "authenticated", zero leeway on exp
    - sub is required and becomes the account id; email is optional
    - Every verification failure raises AuthenticationRequiredError (401)

Design Decisions:
    - Issuer is not checked: the shared secret already pins the Supabase project
"""

import logging
from dataclasses import dataclass

import jwt

from f1companion.core.domain_types import AccountId
from f1companion.core.errors import AuthenticationRequiredError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedAccount:
    """Claims the API relies on after a token is verified."""
    account_id: AccountId
    email: str | None


class SupabaseTokenVerifier:
    """Decodes and validates bearer tokens."""

    def __init__(self, secret: str, audience: str = "authenticated"):
        self._secret = secret
        self._audience = audience

    def verify(self, token: str | None) -> AuthenticatedAccount:
        if not token:
            raise AuthenticationRequiredError("missing token")
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=["HS256"],
                audience=self._audience,
                leeway=0,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Rejected expired token")
            raise AuthenticationRequiredError("token expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected invalid token: {type(e).__name__}")
            raise AuthenticationRequiredError(type(e).__name__) from e

        sub = claims.get("sub")
        if not isinstance(sub, str) or not sub:
            raise AuthenticationRequiredError("missing sub claim")
        email = claims.get("email") or None
        return AuthenticatedAccount(AccountId(sub), email)
