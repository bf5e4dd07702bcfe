"""Roster Enforcement — pure validation of team slot assignments.

Invariants:
    - Functions are PURE: they inspect the roster snapshot and raise, never mutate
    - Check order is fixed: ownership -> slot range -> capacity -> slot free -> entity unique
    - Slot bounds come from RosterRules (core/domain_types.py), never literals

Design Decisions:
    - Roster passed as (slot_position, entity_id) pairs so the ORM stays out of core/
    - Entity existence is checked by the shell after these rules, since it needs IO
"""

from collections.abc import Iterable

from f1companion.core.domain_types import RosterRules
from f1companion.core.errors import (
    EntityAlreadyOnTeamError,
    InvalidSlotPositionError,
    SlotOccupiedError,
    TeamFullError,
    TeamOwnershipError,
)


RosterEntry = tuple[int, int]  # (slot_position, entity_id)


def check_team_owner(team_id: int, owner_id: int, user_id: int) -> None:
    """Only the owner may mutate a team."""
    if owner_id != user_id:
        raise TeamOwnershipError(team_id, owner_id, user_id)


def check_slot_in_range(rules: RosterRules, slot_position: int) -> None:
    if slot_position < 0 or slot_position > rules.max_position:
        raise InvalidSlotPositionError(
            slot_position, rules.max_position, rules.entity_type.value,
        )


def validate_roster_addition(
    rules: RosterRules,
    team_id: int,
    owner_id: int,
    user_id: int,
    roster: Iterable[RosterEntry],
    entity_id: int,
    slot_position: int,
) -> None:
    """Apply every roster rule for placing entity_id at slot_position."""
    entries = list(roster)
    check_team_owner(team_id, owner_id, user_id)
    check_slot_in_range(rules, slot_position)

    if len(entries) >= rules.max_slots:
        raise TeamFullError(team_id, rules.max_slots, rules.entity_type.value)

    if any(slot == slot_position for slot, _ in entries):
        raise SlotOccupiedError(slot_position, team_id)

    if any(existing == entity_id for _, existing in entries):
        raise EntityAlreadyOnTeamError(entity_id, rules.entity_type.value, team_id)

