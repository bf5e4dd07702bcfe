"""Catalog ORM — drivers and constructors available for selection.

Invariants:
    - Driver.abbreviation and Constructor.name are unique
    - Catalog rows are reference data: no user audit columns
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from f1companion.db.base import Base
from f1companion.models.entity_base import TrackedEntity


class Driver(TrackedEntity, Base):
    __tablename__ = "drivers"

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    abbreviation: Mapped[str] = mapped_column(String(3), nullable=False, unique=True)
    country_abbreviation: Mapped[str] = mapped_column(String(3), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Constructor(TrackedEntity, Base):
    __tablename__ = "constructors"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    country_abbreviation: Mapped[str] = mapped_column(String(3), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
