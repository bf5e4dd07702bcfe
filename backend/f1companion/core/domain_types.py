"""Domain Types — roster layout and league defaults shared by core and services.

Invariants:
    - RosterRules is the single source of truth for slot counts per entity type
    - Slot positions are zero-based: 0..max_slots-1
    - Entity kinds are Enums, never raw strings

Design Decisions:
    - AccountId as NewType: the auth provider's string subject never mixes with
      integer profile ids
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


AccountId = NewType("AccountId", str)


class EntityType(str, Enum):
    """Kinds of catalog entities a roster slot can hold."""
    DRIVER = "driver"
    CONSTRUCTOR = "constructor"


# ─── Roster Rules ────────────────────────────────────────────────

@dataclass(frozen=True)
class RosterRules:
    """Slot layout for one entity type on a team."""
    entity_type: EntityType
    max_slots: int

    @property
    def max_position(self) -> int:
        return self.max_slots - 1


MAX_DRIVERS: int = 5
MAX_CONSTRUCTORS: int = 2

DRIVER_RULES = RosterRules(EntityType.DRIVER, MAX_DRIVERS)
CONSTRUCTOR_RULES = RosterRules(EntityType.CONSTRUCTOR, MAX_CONSTRUCTORS)


# ─── League Defaults ─────────────────────────────────────────────

DEFAULT_MAX_TEAMS: int = 15


# ─── Storage Limits ──────────────────────────────────────────────

MAX_DB_ID: int = 2**31 - 1  # INTEGER primary keys
