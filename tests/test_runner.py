from tetriswave.game import GameCore, Intent
from tetriswave.runner import Runner
from tetriswave.tetromino import new_piece


def started_runner(**kwargs) -> Runner:
    runner = Runner(core=GameCore(seed=4), **kwargs)
    runner.start()
    runner.core._state.current = new_piece(4)
    return runner


def test_first_frame_only_sets_baseline():
    runner = started_runner()
    assert runner.frame(123456.0)
    assert runner.last_ts == 123456.0
    assert runner.core._state.current.y == 0
    assert runner.core._state.clock_ms == 0


def test_frames_integrate_elapsed_time():
    runner = started_runner()
    ts = 1000.0
    runner.frame(ts)
    for _ in range(61):
        ts += 1000.0 / 60
        runner.frame(ts)
    assert runner.core._state.current.y == 1


def test_backwards_timestamp_clamped():
    runner = started_runner()
    runner.frame(500.0)
    runner.frame(400.0)
    assert runner.core._state.clock_ms == 0
    assert runner.last_ts == 400.0


def test_continue_after_win_drops_paused_interval():
    runner = started_runner()
    runner.frame(0.0)
    state = runner.core._state
    state.score = 4995
    state.board.grid[19] = [0, 0, 0, 0, 2, 2, 2, 2, 2, 2]
    piece = new_piece(1)
    piece.x = 0
    state.current = piece
    runner.handle(Intent.HARD_DROP)
    assert not runner.core.running
    assert not runner.frame(10.0)

    assert runner.continue_after_win()
    clock_before = state.clock_ms
    assert runner.frame(600000.0)
    assert state.clock_ms == clock_before


def test_continue_ignored_without_win():
    runner = started_runner()
    assert not runner.continue_after_win()


def test_on_frame_receives_snapshots():
    frames = []
    runner = started_runner(on_frame=frames.append)
    runner.frame(0.0)
    runner.handle(Intent.MOVE_LEFT)
    assert frames[-1].current.x == 3
    assert len(frames) == 3


def test_handle_ignored_when_stopped():
    runner = Runner(core=GameCore(seed=4))
    assert not runner.handle(Intent.MOVE_LEFT)
