"""Lineup Picker — slot placement, pool filtering and optimistic mutations.

Tests:
    - place_by_slot honours slotPosition and fills gaps sequentially
    - pool excludes items already in the lineup
    - Successful add reloads the lineup and closes the picker
    - Failed add restores the lineup, keeps the picker open, sets the error
    - Failed remove restores the item; failed reload keeps the optimistic state
    - open_picker is ignored while a mutation is pending
    - Positions outside the lineup are ignored by every operation
"""

import asyncio

from f1companion.client.lineup_picker import LineupPicker, place_by_slot

VER = {"id": 1, "abbreviation": "VER"}
NOR = {"id": 2, "abbreviation": "NOR"}
LEC = {"id": 3, "abbreviation": "LEC"}
POOL = [VER, NOR, LEC]


class Recorder:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    async def add(self, item_id, position):
        self.calls.append(("add", item_id, position))
        if self.fail:
            raise RuntimeError("boom")

    async def remove(self, position):
        self.calls.append(("remove", position))
        if self.fail:
            raise RuntimeError("boom")


def make_picker(recorder, lineup=None, load_lineup=None) -> LineupPicker:
    return LineupPicker(
        POOL, 5, recorder.add, recorder.remove, "driver",
        lineup=lineup, load_lineup=load_lineup,
    )


def test_place_by_slot():
    items = [{**NOR, "slotPosition": 3}, VER, {**LEC, "slot_position": 0}]
    lineup = place_by_slot(items, 5)
    assert [item and item["id"] for item in lineup] == [3, 1, None, 2, None]


def test_place_by_slot_out_of_range_falls_back():
    lineup = place_by_slot([{**VER, "slotPosition": 9}], 2)
    assert lineup == [{**VER, "slotPosition": 9}, None]


def test_pool_excludes_lineup():
    picker = make_picker(Recorder(), lineup=[VER])
    assert picker.pool == [NOR, LEC]
    assert len(picker.display_lineup) == 5


async def test_add_success_reloads_and_closes():
    recorder = Recorder()

    async def load():
        return [{**NOR, "slotPosition": 2}]

    picker = make_picker(recorder, load_lineup=load)
    picker.open_picker(2)
    assert picker.is_picker_open

    await picker.handle_add(2, NOR)

    assert recorder.calls == [("add", 2, 2)]
    assert picker.display_lineup[2]["id"] == 2
    assert not picker.is_picker_open
    assert picker.error is None
    assert not picker.is_pending


async def test_add_failure_rolls_back():
    picker = make_picker(Recorder(fail=True), lineup=[VER])
    picker.open_picker(1)

    await picker.handle_add(1, NOR)

    assert picker.display_lineup[1] is None
    assert picker.error == "Failed to add driver. Please try again."
    assert picker.is_picker_open


async def test_open_picker_clears_error():
    picker = make_picker(Recorder(fail=True))
    await picker.handle_add(0, VER)
    picker.open_picker(0)
    assert picker.error is None


async def test_remove_failure_restores_item():
    picker = make_picker(Recorder(fail=True), lineup=[VER])
    await picker.handle_remove(0)
    assert picker.display_lineup[0] == VER
    assert picker.error == "Failed to remove driver. Please try again."


async def test_remove_keeps_local_state_when_reload_fails():
    async def load():
        raise RuntimeError("offline")

    recorder = Recorder()
    picker = make_picker(recorder, lineup=[VER, NOR], load_lineup=load)
    await picker.handle_remove(0)

    assert recorder.calls == [("remove", 0)]
    assert picker.display_lineup[0] is None
    assert picker.display_lineup[1] == NOR
    assert picker.error is None


async def test_ignores_input_while_pending():
    gate = asyncio.Event()
    calls = []

    async def slow_add(item_id, position):
        calls.append(item_id)
        await gate.wait()

    picker = LineupPicker(POOL, 5, slow_add, Recorder().remove, "driver")
    picker.open_picker(0)
    task = asyncio.create_task(picker.handle_add(0, VER))
    await asyncio.sleep(0)

    assert picker.is_pending
    assert not picker.is_picker_open
    picker.open_picker(3)
    await picker.handle_add(1, NOR)
    assert picker.selected_position == 0
    assert calls == [1]

    gate.set()
    await task
    assert not picker.is_pending
    assert picker.display_lineup[0] == VER


async def test_out_of_range_positions_ignored():
    recorder = Recorder()
    picker = make_picker(recorder, lineup=[VER])

    picker.open_picker(5)
    picker.open_picker(-1)
    assert picker.selected_position is None

    await picker.handle_add(5, NOR)
    await picker.handle_add(-1, NOR)
    await picker.handle_remove(-1)

    assert recorder.calls == []
    assert picker.display_lineup == [VER, None, None, None, None]
    assert not picker.is_pending
