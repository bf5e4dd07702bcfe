"""Constructor catalog routes."""

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from f1companion.api.deps import get_current_account
from f1companion.core.domain_types import MAX_DB_ID
from f1companion.infrastructure.database import get_db
from f1companion.schemas.catalog import ConstructorResponse
from f1companion.services.catalog_service import CatalogService

router = APIRouter(
    prefix="/api/constructors", tags=["constructors"],
    dependencies=[Depends(get_current_account)],
)


@router.get("", response_model=list[ConstructorResponse])
async def list_constructors(
    active_only: bool = Query(False, alias="activeOnly"),
    db: AsyncSession = Depends(get_db),
):
    return await CatalogService(db).list_constructors(active_only)


@router.get("/{constructor_id}", response_model=ConstructorResponse)
async def get_constructor(
    constructor_id: int = Path(ge=1, le=MAX_DB_ID),
    db: AsyncSession = Depends(get_db),
):
    return await CatalogService(db).get_constructor(constructor_id)
