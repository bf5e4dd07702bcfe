"""Catalog Schemas — drivers and constructors as exposed to the lineup picker.

Invariants:
    - type is a fixed discriminator ("driver" / "constructor") so mixed pools can be told apart
"""

from typing import Literal

from f1companion.schemas.common import ApiModel


class DriverResponse(ApiModel):
    id: int
    type: Literal["driver"] = "driver"
    first_name: str
    last_name: str
    abbreviation: str
    country_abbreviation: str
    is_active: bool = True


class ConstructorResponse(ApiModel):
    id: int
    type: Literal["constructor"] = "constructor"
    name: str
    full_name: str | None = None
    country_abbreviation: str
    is_active: bool = True
