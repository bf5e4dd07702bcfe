"""Lineup Picker — slot-based roster editing with optimistic updates.

Invariants:
    - display_lineup always has exactly lineup_size entries; items sit at their
      slotPosition when they carry one, else fill the next free position
    - pool = item_pool minus every id currently in the lineup
    - While is_pending, open_picker and further mutations are ignored
    - Positions outside 0..lineup_size-1 are ignored by open_picker and both mutations
    - Add: item placed immediately; on server success the lineup is reloaded and
      the picker closes; on failure the previous lineup is restored, the picker
      stays open and error = "Failed to add <label>. Please try again."
    - Remove: same pattern with "Failed to remove <label>. Please try again."

Design Decisions:
    - Server state is the source of truth: a successful mutation is followed by
      load_lineup() when provided; a failed reload keeps the optimistic lineup
"""

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)

Item = Mapping[str, Any]


def place_by_slot(items: Sequence[Item | None], lineup_size: int) -> list[Item | None]:
    """Pad to lineup_size, putting slotted items at their slot."""
    lineup: list[Item | None] = [None] * lineup_size
    unslotted: list[Item] = []
    for item in items:
        if item is None:
            continue
        slot = item.get("slotPosition", item.get("slot_position"))
        if isinstance(slot, int) and 0 <= slot < lineup_size and lineup[slot] is None:
            lineup[slot] = item
        else:
            unslotted.append(item)
    free = (i for i, v in enumerate(lineup) if v is None)
    for item, position in zip(unslotted, free):
        lineup[position] = item
    return lineup


class LineupPicker:
    """State for one lineup (drivers or constructors) of the caller's team."""

    def __init__(
        self,
        item_pool: Sequence[Item],
        lineup_size: int,
        add_to_team: Callable[[int, int], Awaitable[Any]],
        remove_from_team: Callable[[int], Awaitable[Any]],
        item_label: str,
        lineup: Sequence[Item | None] | None = None,
        load_lineup: Callable[[], Awaitable[Sequence[Item | None]]] | None = None,
    ):
        self.item_pool = list(item_pool)
        self.lineup_size = lineup_size
        self.item_label = item_label
        self._add_to_team = add_to_team
        self._remove_from_team = remove_from_team
        self._load_lineup = load_lineup
        self._lineup = place_by_slot(lineup or [], lineup_size)
        self.selected_position: int | None = None
        self.is_pending = False
        self.error: str | None = None

    @property
    def display_lineup(self) -> list[Item | None]:
        return list(self._lineup)

    @property
    def pool(self) -> list[Item]:
        selected = {item["id"] for item in self._lineup if item is not None}
        return [item for item in self.item_pool if item["id"] not in selected]

    @property
    def is_picker_open(self) -> bool:
        return self.selected_position is not None and not self.is_pending

    def _in_range(self, position: int) -> bool:
        return 0 <= position < self.lineup_size

    def open_picker(self, position: int) -> None:
        if self.is_pending or not self._in_range(position):
            return
        self.error = None
        self.selected_position = position

    def close_picker(self) -> None:
        self.selected_position = None

    async def _reconcile(self) -> None:
        if self._load_lineup is None:
            return
        try:
            fresh = await self._load_lineup()
        except Exception as e:
            logger.warning(f"Lineup reload failed, keeping local state: {e}")
            return
        self._lineup = place_by_slot(fresh, self.lineup_size)

    async def handle_add(self, position: int, item: Item) -> None:
        if self.is_pending or not self._in_range(position):
            return
        previous = list(self._lineup)
        self._lineup[position] = item
        self.is_pending = True
        self.error = None
        try:
            await self._add_to_team(item["id"], position)
        except Exception as e:
            logger.warning(f"Failed to add {self.item_label} {item['id']} at {position}: {e}")
            self._lineup = previous
            self.error = f"Failed to add {self.item_label}. Please try again."
            self.is_pending = False
            return
        await self._reconcile()
        self.selected_position = None
        self.is_pending = False

    async def handle_remove(self, position: int) -> None:
        if self.is_pending or not self._in_range(position):
            return
        previous = list(self._lineup)
        self._lineup[position] = None
        self.is_pending = True
        self.error = None
        try:
            await self._remove_from_team(position)
        except Exception as e:
            logger.warning(f"Failed to remove {self.item_label} at {position}: {e}")
            self._lineup = previous
            self.error = f"Failed to remove {self.item_label}. Please try again."
            self.is_pending = False
            return
        await self._reconcile()
        self.is_pending = False
