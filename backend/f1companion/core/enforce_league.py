"""League Membership Enforcement — pure checks for joining a league.

Invariants:
    - Functions are PURE: they raise domain errors, never touch the DB
    - Public joins check privacy before capacity; invite joins skip privacy
    - A league is full when its team count reaches max_teams
"""

from collections.abc import Iterable

from f1companion.core.errors import (
    AlreadyInLeagueError,
    LeagueFullError,
    LeagueIsPrivateError,
)


def is_league_full(team_count: int, max_teams: int) -> bool:
    return team_count >= max_teams


def check_league_open(
    league_id: int,
    is_private: bool,
    team_count: int,
    max_teams: int,
    via_invite: bool = False,
) -> None:
    """Raise if the league cannot take another team through this join path."""
    if is_private and not via_invite:
        raise LeagueIsPrivateError(league_id)
    if is_league_full(team_count, max_teams):
        raise LeagueFullError(league_id, max_teams)


def check_not_member(
    league_id: int, team_id: int, member_team_ids: Iterable[int],
) -> None:
    if team_id in set(member_team_ids):
        raise AlreadyInLeagueError(league_id, team_id)
