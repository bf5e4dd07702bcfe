"""Route Guards — decide whether a page may load, or where to send the user instead.

Invariants:
    - require_auth: no signed-in user → Redirect("/")
    - require_team: auth first, then a fresh team fetch; no team → Redirect("/create-team");
      otherwise the team context is synced and {"team": team} returned
    - require_no_team: auth first; a team → Redirect("/leagues"); otherwise the
      team context is synced to None and {"team": None} returned
    - Every redirect replaces the history entry

Design Decisions:
    - Guards fetch the team themselves instead of trusting the cached team context,
      so a freshly created or deleted team is never missed
"""

from dataclasses import dataclass, field
from typing import Any

from f1companion.client.api_client import ApiClient


class Redirect(Exception):
    """Raised by a guard to abort navigation and go elsewhere."""

    def __init__(self, to: str, replace: bool = True):
        super().__init__(to)
        self.to = to
        self.replace = replace


@dataclass
class AuthState:
    user: dict[str, Any] | None = None


@dataclass
class TeamContext:
    my_team_id: int | None = None

    def set_my_team_id(self, team_id: int | None) -> None:
        self.my_team_id = team_id


@dataclass
class RouterContext:
    api: ApiClient
    auth: AuthState = field(default_factory=AuthState)
    team_context: TeamContext = field(default_factory=TeamContext)


async def require_auth(context: RouterContext) -> None:
    if not context.auth.user:
        raise Redirect("/", replace=True)


async def require_team(context: RouterContext) -> dict[str, Any]:
    await require_auth(context)
    team = await context.api.get_my_team()
    if not team:
        raise Redirect("/create-team", replace=True)
    context.team_context.set_my_team_id(team["id"])
    return {"team": team}


async def require_no_team(context: RouterContext) -> dict[str, Any]:
    await require_auth(context)
    team = await context.api.get_my_team()
    if team:
        raise Redirect("/leagues", replace=True)
    context.team_context.set_my_team_id(None)
    return {"team": None}
