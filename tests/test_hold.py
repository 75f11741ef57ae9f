import sys

sys.path.append('src')

from tetriswave.events import EventKind
from tetriswave.game import GameCore, Intent
from tetriswave.tetromino import catalog_shape, new_piece


def started_core(seed: int = 21) -> GameCore:
    core = GameCore(seed=seed)
    core.start()
    return core


def test_first_hold_takes_next_piece():
    core = started_core()
    state = core._state
    current_type = state.current.color_id
    upcoming = state.upcoming

    assert core.hold()

    assert state.held.color_id == current_type
    assert state.current is upcoming
    assert state.upcoming is not upcoming
    assert not state.hold_allowed


def test_second_hold_before_lock_is_ignored():
    core = started_core()
    assert core.hold()
    before = core.snapshot()
    assert not core.hold()
    after = core.snapshot()
    assert (after.current, after.hold, after.next) == (before.current, before.hold, before.next)


def test_hold_swaps_after_lock_and_respawns_at_top():
    core = started_core()
    state = core._state
    core.hold()
    held_type = state.held.color_id
    core.hard_drop()
    assert state.hold_allowed

    state.current.y = 7
    outgoing_type = state.current.color_id
    assert core.hold()

    expected = catalog_shape(held_type)
    assert state.current.color_id == held_type
    assert state.current.shape == expected
    assert state.current.y == 0
    assert state.current.x == 5 - len(expected[0]) // 2
    assert state.held.color_id == outgoing_type


def test_held_piece_returns_to_spawn_orientation():
    core = started_core()
    state = core._state
    state.current = new_piece(6)
    core.rotate_cw()
    core.hold()
    assert state.held.shape == catalog_shape(6)


def test_hold_shapes_are_not_aliased():
    core = started_core()
    state = core._state
    core.hold()
    core.hard_drop()
    core.hold()
    state.current.shape[0][0] = 99
    assert state.held.shape[0][0] != 99
    assert 99 not in [cell for row in catalog_shape(state.current.color_id) for cell in row]


def test_hold_into_blocked_spawn_is_game_over():
    core = started_core()
    events = []
    core.subscribe(events.append)
    state = core._state
    state.board.grid[0:2, 2:8] = 1

    assert core.hold()

    assert core.game_over
    assert not core.running
    assert events[-1].kind is EventKind.GAME_OVER


def test_hold_intent_maps_to_hold():
    core = started_core()
    assert core.apply(Intent.HOLD)
    assert not core.apply(Intent.HOLD)
