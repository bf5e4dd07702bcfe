"""Invite Tokens — encrypted, URL-safe tokens that carry a league id.

Invariants:
    - Payload is "<league_id>:<uuid4>" so two invites for one league never collide
    - Tokens contain only [A-Za-z0-9_-] (padding stripped) and survive a URL path segment
    - Any failure to decode, decrypt or parse raises InvalidLeagueInviteTokenError

Design Decisions:
    - Fernet (AES-CBC + HMAC) so tokens are opaque and tamper-evident without a DB lookup
"""

import binascii
import uuid

from cryptography.fernet import Fernet, InvalidToken

from f1companion.core.errors import InvalidLeagueInviteTokenError


class InviteTokenCodec:
    """Issues and reads league invite tokens under a single Fernet key."""

    def __init__(self, key: str | bytes):
        self._fernet = Fernet(key)

    def issue(self, league_id: int) -> str:
        payload = f"{league_id}:{uuid.uuid4()}"
        token = self._fernet.encrypt(payload.encode("utf-8")).decode("ascii")
        return token.rstrip("=")

    def read_league_id(self, token: str) -> int:
        padded = token + "=" * (-len(token) % 4)
        try:
            payload = self._fernet.decrypt(padded.encode("utf-8")).decode("utf-8")
            league_part = payload.split(":", 1)[0]
            return int(league_part)
        except (InvalidToken, binascii.Error, UnicodeError, ValueError) as e:
            raise InvalidLeagueInviteTokenError(type(e).__name__) from e
