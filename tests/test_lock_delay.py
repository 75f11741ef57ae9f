import sys

sys.path.append('src')

import pytest

from tetriswave.config import GameConfig
from tetriswave.events import EventKind
from tetriswave.game import GameCore
from tetriswave.tetromino import new_piece


def core_with_o_piece(x: int, y: int, config: GameConfig = GameConfig()) -> GameCore:
    core = GameCore(config, seed=11)
    core.start()
    piece = new_piece(4)
    piece.x, piece.y = x, y
    core._state.current = piece
    return core


def o_locked_at(core: GameCore, x: int) -> bool:
    grid = core._state.board.grid
    return bool((grid[18:20, x:x + 2] == 4).all())


def test_gravity_moves_piece_after_interval():
    core = core_with_o_piece(4, 0)
    core.tick(1000)
    assert core._state.current.y == 0
    core.tick(1)
    assert core._state.current.y == 1


def test_grounded_piece_locks_after_exactly_two_seconds():
    core = core_with_o_piece(0, 18)
    events = []
    core.subscribe(events.append)

    core.tick(1001)
    assert core._state.grounded
    assert not core._state.board.grid.any()

    core.tick(1999)
    assert not core._state.board.grid.any()

    core.tick(1)
    assert o_locked_at(core, 0)
    assert [e.kind for e in events] == [EventKind.PIECE_LOCKED]
    assert not core._state.grounded


def test_lock_delay_is_frame_rate_independent():
    core = core_with_o_piece(0, 18)
    core.soft_drop()
    for _ in range(124):
        core.tick(16)
    assert not core._state.board.grid.any()
    core.tick(16)
    assert o_locked_at(core, 0)


def test_soft_drop_on_floor_grounds_instead_of_locking():
    core = core_with_o_piece(0, 18)
    assert not core.soft_drop()
    assert core._state.grounded
    assert not core._state.board.grid.any()
    assert core._state.current.y == 18


def test_hard_drop_bypasses_lock_delay():
    core = core_with_o_piece(3, 0)
    assert core.hard_drop()
    assert o_locked_at(core, 3)


def test_moves_reset_lock_timer_until_cap():
    core = core_with_o_piece(4, 18)
    core.soft_drop()

    for i in range(14):
        core.tick(1500)
        moved = core.move_right() if i % 2 == 0 else core.move_left()
        assert moved
    assert core._state.lock_resets == 14
    assert not core._state.board.grid.any()

    core.tick(1500)
    assert core.move_right()
    assert core._state.lock_resets == 15

    core.tick(1)
    assert o_locked_at(core, 5)


def test_rotation_while_grounded_counts_as_move():
    core = core_with_o_piece(4, 18)
    core.soft_drop()
    core.tick(1000)
    assert core.rotate_cw()
    assert core._state.lock_resets == 1
    assert core._state.lock_ms == 0


def test_moves_while_falling_are_not_counted():
    core = core_with_o_piece(4, 5)
    assert core.move_left()
    assert core.rotate_cw()
    assert core._state.lock_resets == 0


def test_sliding_off_ledge_resumes_falling():
    core = core_with_o_piece(0, 17)
    board = core._state.board
    board.set_cell(19, 0, 1)
    board.set_cell(19, 1, 1)

    core.soft_drop()
    assert core._state.grounded

    assert core.move_right()
    assert core.move_right()
    core.tick(1)
    assert not core._state.grounded
    assert core._state.lock_resets == 0


def test_downward_move_leaves_grounded_state():
    core = core_with_o_piece(0, 17)
    board = core._state.board
    board.set_cell(19, 0, 1)
    board.set_cell(19, 1, 1)
    core.soft_drop()
    core.move_right()
    core.move_right()

    assert core.soft_drop()
    assert core._state.current.y == 18
    assert not core._state.grounded
    assert core._state.lock_resets == 0


def test_custom_lock_delay():
    core = core_with_o_piece(0, 18, GameConfig(lock_delay_ms=500))
    core.soft_drop()
    core.tick(499)
    assert not core._state.board.grid.any()
    core.tick(1)
    assert o_locked_at(core, 0)


def test_negative_tick_rejected():
    core = core_with_o_piece(0, 0)
    with pytest.raises(ValueError):
        core.tick(-1)


def test_ticks_ignored_before_start():
    core = GameCore(seed=1)
    core.tick(5000)
    assert core.snapshot().current is None
    assert not core.running


def test_soft_drop_spam_cannot_stall_grounded_piece():
    core = core_with_o_piece(0, 18)
    core.soft_drop()
    assert core._state.grounded

    for _ in range(19):
        core.tick(100)
        assert not core.soft_drop()
        assert not core._state.board.grid.any()
    assert core._state.lock_ms == 1900

    core.tick(100)
    assert o_locked_at(core, 0)
