"""Catalog Seed — inserts the current season's drivers and constructors.

Invariants:
    - Idempotent: rows are matched on their unique key (driver abbreviation,
      constructor name) and only missing rows are inserted
    - Existing rows are never modified

Usage:
    python -m f1companion.db.seed
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.config import get_runtime_settings
from f1companion.db.session import create_session_factory
from f1companion.infrastructure.observability import setup_logging
from f1companion.models.catalog import Constructor, Driver

logger = logging.getLogger(__name__)

# (first_name, last_name, abbreviation, country, is_active)
DRIVERS: list[tuple[str, str, str, str, bool]] = [
    ("Max", "Verstappen", "VER", "NED", True),
    ("Yuki", "Tsunoda", "TSU", "JPN", True),
    ("Lando", "Norris", "NOR", "GBR", True),
    ("Oscar", "Piastri", "PIA", "AUS", True),
    ("Charles", "Leclerc", "LEC", "MON", True),
    ("Lewis", "Hamilton", "HAM", "GBR", True),
    ("George", "Russell", "RUS", "GBR", True),
    ("Andrea Kimi", "Antonelli", "ANT", "ITA", True),
    ("Fernando", "Alonso", "ALO", "ESP", True),
    ("Lance", "Stroll", "STR", "CAN", True),
    ("Pierre", "Gasly", "GAS", "FRA", True),
    ("Franco", "Colapinto", "COL", "ARG", True),
    ("Jack", "Doohan", "DOO", "AUS", False),
    ("Alexander", "Albon", "ALB", "THA", True),
    ("Carlos", "Sainz", "SAI", "ESP", True),
    ("Nico", "Hulkenberg", "HUL", "GER", True),
    ("Gabriel", "Bortoleto", "BOR", "BRA", True),
    ("Esteban", "Ocon", "OCO", "FRA", True),
    ("Oliver", "Bearman", "BEA", "GBR", True),
    ("Isack", "Hadjar", "HAD", "FRA", True),
    ("Liam", "Lawson", "LAW", "NZL", True),
]

# (name, full_name, country)
CONSTRUCTORS: list[tuple[str, str, str]] = [
    ("Red Bull Racing", "Oracle Red Bull Racing", "AUT"),
    ("McLaren", "McLaren Formula 1 Team", "GBR"),
    ("Ferrari", "Scuderia Ferrari HP", "ITA"),
    ("Mercedes", "Mercedes-AMG PETRONAS F1 Team", "GER"),
    ("Aston Martin", "Aston Martin Aramco F1 Team", "GBR"),
    ("Alpine", "BWT Alpine F1 Team", "FRA"),
    ("Williams", "Atlassian Williams Racing", "GBR"),
    ("Kick Sauber", "Stake F1 Team Kick Sauber", "SUI"),
    ("Haas", "MoneyGram Haas F1 Team", "USA"),
    ("Racing Bulls", "Visa Cash App Racing Bulls F1 Team", "ITA"),
]


async def seed_catalog(db: AsyncSession) -> tuple[int, int]:
    """Insert missing catalog rows. Returns (drivers_added, constructors_added)."""
    existing_drivers = set(
        (await db.execute(select(Driver.abbreviation))).scalars().all(),
    )
    new_drivers = [
        Driver(
            first_name=first, last_name=last, abbreviation=abbr,
            country_abbreviation=country, is_active=active,
        )
        for first, last, abbr, country, active in DRIVERS
        if abbr not in existing_drivers
    ]

    existing_constructors = set(
        (await db.execute(select(Constructor.name))).scalars().all(),
    )
    new_constructors = [
        Constructor(name=name, full_name=full, country_abbreviation=country)
        for name, full, country in CONSTRUCTORS
        if name not in existing_constructors
    ]

    db.add_all(new_drivers + new_constructors)
    await db.commit()
    return len(new_drivers), len(new_constructors)


async def main() -> None:
    settings = get_runtime_settings()
    setup_logging(settings.log_level, "text")
    session_factory = create_session_factory(settings.database_url)
    async with session_factory() as db:
        drivers, constructors = await seed_catalog(db)
    logger.info(f"Seeded {drivers} drivers and {constructors} constructors")


if __name__ == "__main__":
    asyncio.run(main())
