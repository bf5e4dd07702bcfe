"""Test factories — auth tokens and persisted rows for service and route tests."""

import time

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.config import get_settings
from f1companion.models import Account, League, LeagueTeam, Team, UserProfile


def mint_token(
    account_id: str,
    email: str | None = "driver@example.com",
    expires_in: int = 3600,
    secret: str | None = None,
    audience: str = "authenticated",
) -> str:
    claims = {"sub": account_id, "aud": audience, "exp": int(time.time()) + expires_in}
    if email is not None:
        claims["email"] = email
    return jwt.encode(
        claims, secret or get_settings().supabase_jwt_secret, algorithm="HS256",
    )


def bearer(account_id: str, **kwargs) -> dict[str, str]:
    return {"Authorization": f"Bearer {mint_token(account_id, **kwargs)}"}


async def create_profile(
    db: AsyncSession,
    account_id: str,
    email: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    display_name: str | None = None,
) -> UserProfile:
    db.add(Account(id=account_id))
    await db.flush()
    profile = UserProfile(
        account_id=account_id,
        email=email or f"{account_id}@example.com",
        first_name=first_name,
        last_name=last_name,
        display_name=display_name,
        team=None,
    )
    db.add(profile)
    await db.commit()
    return profile


async def create_team(
    db: AsyncSession, owner: UserProfile, name: str = "Scuderia Test",
) -> Team:
    team = Team(
        name=name, owner=owner, created_by=owner.id,
        team_drivers=[], team_constructors=[],
    )
    db.add(team)
    await db.commit()
    return team


async def create_league(
    db: AsyncSession,
    owner: UserProfile,
    owner_team: Team,
    name: str = "Paddock Club",
    is_private: bool = False,
    max_teams: int = 15,
) -> League:
    league = League(
        name=name, owner=owner, created_by=owner.id,
        is_private=is_private, max_teams=max_teams,
        league_teams=[LeagueTeam(team=owner_team, created_by=owner.id)],
    )
    db.add(league)
    await db.commit()
    return league
