"""League Service — verifies league creation, listings and public joins.

Tests:
    - create_league requires a team and enrolls the owner's team
    - Details list member teams; unknown league raises LeagueNotFoundError
    - Available leagues exclude private, full and already-joined leagues; search is case-insensitive
    - join_league check order: exists -> public -> not full -> has team -> not member
"""

import pytest

from f1companion.core.errors import (
    AlreadyInLeagueError,
    LeagueFullError,
    LeagueIsPrivateError,
    LeagueNotFoundError,
    TeamRequiredError,
)
from f1companion.schemas.league import CreateLeagueRequest
from f1companion.services.league_service import LeagueService
from tests.services.factories import create_league, create_profile, create_team


async def test_create_league_enrolls_owner_team(test_db, owner, owner_team):
    request = CreateLeagueRequest(name="  Sunday Club ", description="  ", is_private=True)
    league = await LeagueService(test_db).create_league(request, owner.id)

    assert league.name == "Sunday Club"
    assert league.description is None
    assert league.is_private is True
    assert league.max_teams == 15
    assert league.team_count == 1
    assert league.owner_id == owner.id
    assert league.owner_name == "Max Verstappen"


async def test_create_league_requires_team(test_db, owner):
    with pytest.raises(TeamRequiredError):
        await LeagueService(test_db).create_league(
            CreateLeagueRequest(name="No Team League"), owner.id,
        )


async def test_get_league_details_lists_teams(test_db, owner, owner_team, rival, rival_team):
    league = await create_league(test_db, owner, owner_team)
    service = LeagueService(test_db)
    await service.join_league(league.id, rival.id)

    details = await service.get_league(league.id)
    assert [t.name for t in details.teams] == ["Orange Army", "Papaya"]
    assert details.team_count == 2


async def test_get_unknown_league(test_db):
    with pytest.raises(LeagueNotFoundError):
        await LeagueService(test_db).get_league(404)


async def test_list_owned_leagues(test_db, owner, owner_team, rival, rival_team):
    await create_league(test_db, owner, owner_team, name="Mine")
    await create_league(test_db, rival, rival_team, name="Theirs")
    leagues = await LeagueService(test_db).list_owned_leagues(owner.id)
    assert [lg.name for lg in leagues] == ["Mine"]


async def test_list_leagues_ordered_by_name(test_db, owner, owner_team):
    await create_league(test_db, owner, owner_team, name="Zandvoort")
    await create_league(test_db, owner, owner_team, name="Monza")
    leagues = await LeagueService(test_db).list_leagues()
    assert [lg.name for lg in leagues] == ["Monza", "Zandvoort"]


async def test_available_leagues_filtering(test_db, owner, owner_team, rival, rival_team):
    await create_league(test_db, owner, owner_team, name="Open Grid")
    await create_league(test_db, owner, owner_team, name="Secret Grid", is_private=True)
    await create_league(test_db, owner, owner_team, name="Full Grid", max_teams=1)
    await create_league(test_db, rival, rival_team, name="Rival Grid")

    service = LeagueService(test_db)
    available = await service.list_available_leagues(rival.id)
    assert [lg.name for lg in available] == ["Open Grid"]

    mine = await service.list_available_leagues(owner.id)
    assert [lg.name for lg in mine] == ["Rival Grid"]


async def test_available_leagues_search_is_case_insensitive(test_db, owner, owner_team, rival):
    await create_league(test_db, owner, owner_team, name="Monaco Masters")
    await create_league(test_db, owner, owner_team, name="Silverstone Stars")
    found = await LeagueService(test_db).list_available_leagues(rival.id, "  monaco ")
    assert [lg.name for lg in found] == ["Monaco Masters"]


async def test_join_league(test_db, owner, owner_team, rival, rival_team):
    league = await create_league(test_db, owner, owner_team)
    joined = await LeagueService(test_db).join_league(league.id, rival.id)
    assert joined.team_count == 2


async def test_join_unknown_league(test_db, rival, rival_team):
    with pytest.raises(LeagueNotFoundError):
        await LeagueService(test_db).join_league(777, rival.id)


async def test_join_private_league(test_db, owner, owner_team, rival, rival_team):
    league = await create_league(test_db, owner, owner_team, is_private=True)
    with pytest.raises(LeagueIsPrivateError):
        await LeagueService(test_db).join_league(league.id, rival.id)


async def test_join_full_league(test_db, owner, owner_team, rival, rival_team):
    league = await create_league(test_db, owner, owner_team, max_teams=1)
    with pytest.raises(LeagueFullError):
        await LeagueService(test_db).join_league(league.id, rival.id)


async def test_join_without_team(test_db, owner, owner_team, rival):
    league = await create_league(test_db, owner, owner_team)
    with pytest.raises(TeamRequiredError):
        await LeagueService(test_db).join_league(league.id, rival.id)


async def test_full_reported_before_missing_team(test_db, owner, owner_team):
    league = await create_league(test_db, owner, owner_team, max_teams=1)
    newcomer = await create_profile(test_db, "acc-new")
    with pytest.raises(LeagueFullError):
        await LeagueService(test_db).join_league(league.id, newcomer.id)


async def test_join_twice(test_db, owner, owner_team):
    league = await create_league(test_db, owner, owner_team)
    with pytest.raises(AlreadyInLeagueError):
        await LeagueService(test_db).join_league(league.id, owner.id)


async def test_create_team_then_join(test_db, owner, owner_team):
    league = await create_league(test_db, owner, owner_team)
    late = await create_profile(test_db, "acc-late", display_name="late")
    await create_team(test_db, late, "Latecomers")
    joined = await LeagueService(test_db).join_league(league.id, late.id)
    assert joined.team_count == 2
