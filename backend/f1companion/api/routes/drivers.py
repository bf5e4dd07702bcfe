"""Driver catalog routes."""

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.api.deps import get_current_account
from f1companion.core.domain_types import MAX_DB_ID
from f1companion.infrastructure.database import get_db
from f1companion.schemas.catalog import DriverResponse
from f1companion.services.catalog_service import CatalogService

router = APIRouter(
    prefix="/api/drivers", tags=["drivers"],
    dependencies=[Depends(get_current_account)],
)


@router.get("", response_model=list[DriverResponse])
async def list_drivers(
    active_only: bool = Query(False, alias="activeOnly"),
    db: AsyncSession = Depends(get_db),
):
    return await CatalogService(db).list_drivers(active_only)


@router.get("/{driver_id}", response_model=DriverResponse)
async def get_driver(
    driver_id: int = Path(ge=1, le=MAX_DB_ID),
    db: AsyncSession = Depends(get_db),
):
    return await CatalogService(db).get_driver(driver_id)
