"""Catalog Service — read-only access to drivers and constructors."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.core.errors import ResourceNotFoundError
from f1companion.models.catalog import Constructor, Driver
from f1companion.schemas.catalog import ConstructorResponse, DriverResponse

logger = logging.getLogger(__name__)


class CatalogService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_drivers(self, active_only: bool = False) -> list[DriverResponse]:
        query = select(Driver).where(Driver.is_deleted.is_(False))
        if active_only:
            query = query.where(Driver.is_active.is_(True))
        query = query.order_by(Driver.last_name, Driver.first_name)
        result = await self.db.execute(query)
        drivers = result.scalars().all()
        logger.debug(f"Listed {len(drivers)} drivers (active_only={active_only})")
        return [DriverResponse.model_validate(d) for d in drivers]

    async def get_driver(self, driver_id: int) -> DriverResponse:
        driver = await self.db.get(Driver, driver_id)
        if driver is None or driver.is_deleted:
            raise ResourceNotFoundError("Driver", driver_id)
        return DriverResponse.model_validate(driver)

    async def list_constructors(
        self, active_only: bool = False,
    ) -> list[ConstructorResponse]:
        query = select(Constructor).where(Constructor.is_deleted.is_(False))
        if active_only:
            query = query.where(Constructor.is_active.is_(True))
        query = query.order_by(Constructor.name)
        result = await self.db.execute(query)
        constructors = result.scalars().all()
        logger.debug(
            f"Listed {len(constructors)} constructors (active_only={active_only})",
        )
        return [ConstructorResponse.model_validate(c) for c in constructors]

    async def get_constructor(self, constructor_id: int) -> ConstructorResponse:
        constructor = await self.db.get(Constructor, constructor_id)
        if constructor is None or constructor.is_deleted:
            raise ResourceNotFoundError("Constructor", constructor_id)
        return ConstructorResponse.model_validate(constructor)
