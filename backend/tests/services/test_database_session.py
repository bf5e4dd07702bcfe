"""Database Session Manager — constraint violations leave as domain errors.

Tests:
    - A roster slot collision inside session() raises DuplicateResourceError (409)
    - SQLSTATE codes map to their domain errors
    - The session is rolled back, so the manager stays usable afterwards
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from f1companion.core.errors import (
    DuplicateResourceError,
    InvalidReferenceError,
    MissingFieldError,
)
from f1companion.infrastructure.database import DatabaseSessionManager, map_integrity_error
from f1companion.models import TeamDriver


@pytest.fixture
def manager(test_engine, test_session_factory) -> DatabaseSessionManager:
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


async def test_slot_collision_maps_to_duplicate(manager, owner, owner_team, drivers):
    with pytest.raises(DuplicateResourceError) as exc_info:
        async with manager.session() as db:
            db.add_all([
                TeamDriver(team_id=owner_team.id, driver_id=drivers[0].id,
                           slot_position=0, created_by=owner.id),
                TeamDriver(team_id=owner_team.id, driver_id=drivers[1].id,
                           slot_position=0, created_by=owner.id),
            ])
            await db.commit()

    assert exc_info.value.http_status == 409
    assert isinstance(exc_info.value.__cause__, IntegrityError)

    async with manager.session() as db:
        count = await db.scalar(select(func.count()).select_from(TeamDriver))
    assert count == 0


class _DriverError(Exception):
    def __init__(self, sqlstate: str):
        super().__init__(f"constraint violated ({sqlstate})")
        self.sqlstate = sqlstate


@pytest.mark.parametrize("sqlstate,error_cls", [
    ("23505", DuplicateResourceError),
    ("23503", InvalidReferenceError),
    ("23502", MissingFieldError),
])
def test_map_integrity_error_by_sqlstate(sqlstate, error_cls):
    error = IntegrityError("INSERT ...", {}, _DriverError(sqlstate))
    assert isinstance(map_integrity_error(error), error_cls)
