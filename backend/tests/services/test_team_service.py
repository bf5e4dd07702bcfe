"""Team Service — verifies team creation and roster slot mutations against the DB.

Tests:
    - One team per user; unknown profile rejected
    - Team details sorted by slot with owner display name
    - add_driver / add_constructor check order ends with entity existence
    - remove_* requires ownership and an occupied slot
    - Unique constraints back the roster rules
"""

import pytest
from sqlalchemy.exc import IntegrityError

from f1companion.core.errors import (
    DuplicateTeamError,
    EntityAlreadyOnTeamError,
    InvalidOperationError,
    InvalidSlotPositionError,
    SlotOccupiedError,
    TeamFullError,
    TeamOwnershipError,
    UserProfileRequiredError,
)
from f1companion.models import TeamDriver
from f1companion.services.team_service import TeamService


async def test_create_team_returns_summary(test_db, owner):
    team = await TeamService(test_db).create_team("  Orange Army  ", owner.id)
    assert team.name == "Orange Army"
    assert team.owner_name == "Max Verstappen"
    assert team.id is not None


async def test_second_team_rejected(test_db, owner, owner_team):
    with pytest.raises(DuplicateTeamError) as exc:
        await TeamService(test_db).create_team("Another", owner.id)
    assert exc.value.existing_team_id == owner_team.id


async def test_create_team_without_profile_rejected(test_db):
    with pytest.raises(UserProfileRequiredError):
        await TeamService(test_db).create_team("Phantom", 999)


async def test_get_user_team_none_without_team(test_db, owner):
    assert await TeamService(test_db).get_user_team(owner.id) is None


async def test_details_sorted_by_slot(test_db, owner, owner_team, drivers, constructors):
    service = TeamService(test_db)
    await service.add_driver(owner_team.id, drivers[2].id, 3, owner.id)
    await service.add_driver(owner_team.id, drivers[0].id, 0, owner.id)
    await service.add_constructor(owner_team.id, constructors[1].id, 1, owner.id)

    details = await service.get_user_team(owner.id)
    assert [d.slot_position for d in details.drivers] == [0, 3]
    assert [d.abbreviation for d in details.drivers] == ["VER", "LEC"]
    assert details.constructors[0].name == "Ferrari"
    assert details.constructors[0].slot_position == 1
    assert details.owner_name == "Max Verstappen"


async def test_get_team_unknown_returns_none(test_db):
    assert await TeamService(test_db).get_team(12345) is None


async def test_list_teams(test_db, owner_team, rival_team):
    teams = await TeamService(test_db).list_teams()
    assert [t.name for t in teams] == ["Orange Army", "Papaya"]
    assert teams[1].owner_name == "ln4"


async def test_add_driver_unknown_team(test_db, owner, drivers):
    with pytest.raises(InvalidOperationError, match="Team not found"):
        await TeamService(test_db).add_driver(999, drivers[0].id, 0, owner.id)


async def test_add_driver_not_owner(test_db, rival, owner_team, drivers):
    with pytest.raises(TeamOwnershipError):
        await TeamService(test_db).add_driver(owner_team.id, drivers[0].id, 0, rival.id)


async def test_add_driver_slot_out_of_range(test_db, owner, owner_team, drivers):
    with pytest.raises(InvalidSlotPositionError):
        await TeamService(test_db).add_driver(owner_team.id, drivers[0].id, 5, owner.id)


async def test_add_constructor_slot_out_of_range(test_db, owner, owner_team, constructors):
    with pytest.raises(InvalidSlotPositionError):
        await TeamService(test_db).add_constructor(
            owner_team.id, constructors[0].id, 2, owner.id,
        )


async def test_add_driver_team_full(test_db, owner, owner_team, drivers):
    service = TeamService(test_db)
    for slot in range(5):
        await service.add_driver(owner_team.id, drivers[slot].id, slot, owner.id)
    with pytest.raises(TeamFullError):
        await service.add_driver(owner_team.id, drivers[5].id, 0, owner.id)


async def test_add_driver_slot_occupied(test_db, owner, owner_team, drivers):
    service = TeamService(test_db)
    await service.add_driver(owner_team.id, drivers[0].id, 0, owner.id)
    with pytest.raises(SlotOccupiedError):
        await service.add_driver(owner_team.id, drivers[1].id, 0, owner.id)


async def test_add_driver_already_on_team(test_db, owner, owner_team, drivers):
    service = TeamService(test_db)
    await service.add_driver(owner_team.id, drivers[0].id, 0, owner.id)
    with pytest.raises(EntityAlreadyOnTeamError):
        await service.add_driver(owner_team.id, drivers[0].id, 1, owner.id)


async def test_add_unknown_driver(test_db, owner, owner_team):
    with pytest.raises(InvalidOperationError, match="Driver not found"):
        await TeamService(test_db).add_driver(owner_team.id, 4040, 0, owner.id)


async def test_add_unknown_constructor(test_db, owner, owner_team):
    with pytest.raises(InvalidOperationError, match="Constructor not found"):
        await TeamService(test_db).add_constructor(owner_team.id, 4040, 0, owner.id)


async def test_remove_driver_frees_slot(test_db, owner, owner_team, drivers):
    service = TeamService(test_db)
    await service.add_driver(owner_team.id, drivers[0].id, 2, owner.id)
    await service.remove_driver(owner_team.id, 2, owner.id)

    details = await service.get_team(owner_team.id)
    assert details.drivers == []
    await service.add_driver(owner_team.id, drivers[1].id, 2, owner.id)


async def test_remove_from_empty_slot(test_db, owner, owner_team):
    with pytest.raises(InvalidOperationError, match="No driver found at slot position 3"):
        await TeamService(test_db).remove_driver(owner_team.id, 3, owner.id)


async def test_remove_constructor_not_owner(test_db, owner, rival, owner_team, constructors):
    service = TeamService(test_db)
    await service.add_constructor(owner_team.id, constructors[0].id, 0, owner.id)
    with pytest.raises(TeamOwnershipError):
        await service.remove_constructor(owner_team.id, 0, rival.id)


async def test_slot_unique_constraint(test_db, owner, owner_team, drivers):
    test_db.add_all([
        TeamDriver(team_id=owner_team.id, driver_id=drivers[0].id, slot_position=0, created_by=owner.id),
        TeamDriver(team_id=owner_team.id, driver_id=drivers[1].id, slot_position=0, created_by=owner.id),
    ])
    with pytest.raises(IntegrityError):
        await test_db.commit()
    await test_db.rollback()
