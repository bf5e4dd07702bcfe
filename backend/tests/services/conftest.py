"""Service test fixtures — async DB, FastAPI test client, auth tokens and seed data.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so readiness probes hit the test engine
    - Tokens are real HS256 JWTs signed with the configured secret

Design Decisions:
    - SQLite in-memory with StaticPool: every session sees the same database;
      PostgreSQL-specific behavior (SQLSTATE codes) is covered in core tests
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from f1companion.db.base import Base
from f1companion.infrastructure.database import get_db, DatabaseSessionManager
import f1companion.infrastructure.database as db_module
from f1companion.main import app
from f1companion.models import Constructor, Driver, Team, UserProfile
from tests.services.factories import create_profile, create_team


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def drivers(test_db) -> list[Driver]:
    rows = [
        Driver(first_name="Max", last_name="Verstappen", abbreviation="VER", country_abbreviation="NED"),
        Driver(first_name="Lando", last_name="Norris", abbreviation="NOR", country_abbreviation="GBR"),
        Driver(first_name="Charles", last_name="Leclerc", abbreviation="LEC", country_abbreviation="MON"),
        Driver(first_name="Lewis", last_name="Hamilton", abbreviation="HAM", country_abbreviation="GBR"),
        Driver(first_name="George", last_name="Russell", abbreviation="RUS", country_abbreviation="GBR"),
        Driver(first_name="Oscar", last_name="Piastri", abbreviation="PIA", country_abbreviation="AUS"),
        Driver(first_name="Jack", last_name="Doohan", abbreviation="DOO", country_abbreviation="AUS", is_active=False),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return rows


@pytest.fixture
async def constructors(test_db) -> list[Constructor]:
    rows = [
        Constructor(name="McLaren", full_name="McLaren Formula 1 Team", country_abbreviation="GBR"),
        Constructor(name="Ferrari", full_name="Scuderia Ferrari HP", country_abbreviation="ITA"),
        Constructor(name="Williams", country_abbreviation="GBR"),
        Constructor(name="Lotus", country_abbreviation="GBR", is_active=False),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return rows


@pytest.fixture
async def owner(test_db) -> UserProfile:
    return await create_profile(
        test_db, "acc-owner", email="owner@example.com",
        first_name="Max", last_name="Verstappen", display_name="mv1",
    )


@pytest.fixture
async def owner_team(test_db, owner) -> Team:
    return await create_team(test_db, owner, "Orange Army")


@pytest.fixture
async def rival(test_db) -> UserProfile:
    return await create_profile(
        test_db, "acc-rival", email="rival@example.com", display_name="ln4",
    )


@pytest.fixture
async def rival_team(test_db, rival) -> Team:
    return await create_team(test_db, rival, "Papaya")
