import random

import pytest

from galtonboard.font import glyph
from galtonboard.simulation import (
    BASE_PINS,
    FALL_STEP,
    NUM_BINS,
    ROWS,
    TOTAL_BALLS,
    Ball,
    Board,
    GaltonSimulation,
    main,
)
from galtonboard.ssd1306 import PAGE_HEIGHT, Framebuffer


class FixedBits:
    def __init__(self, bit):
        self.bit = bit

    def getrandbits(self, k):
        return self.bit


def pixel_on(fb, x, y):
    return bool(fb.buffer[(y // PAGE_HEIGHT) * fb.width + x] & (1 << (y % PAGE_HEIGHT)))


def test_pin_rows_grow_by_one():
    board = Board()
    assert len(board.pins) == ROWS
    assert [len(row) for row in board.pins] == list(range(1, BASE_PINS + 1))


def test_pins_inside_upper_half():
    board = Board()
    for row in board.pins:
        for x, y in row:
            assert 0 <= x < board.width
            assert 0 <= y < board.height // 2
    assert board.pins[0][0][1] == 0
    assert board.pins[-1][0][1] == board.height // 2 - 1


def test_pin_rows_are_symmetric():
    board = Board()
    for row in board.pins:
        for (left, _), (right, _) in zip(row, reversed(row)):
            assert abs(left + right - (board.width - 1)) <= 1


def test_bins_span_the_base():
    board = Board()
    assert len(board.bin_x) == NUM_BINS
    assert board.bin_x[0] == board.pins[-1][0][0]
    assert board.bin_x[-1] == board.pins[-1][-1][0]
    assert board.bin_x == sorted(board.bin_x)


@pytest.mark.parametrize("size", [(128, 60), (0, 64), (128, 8)])
def test_invalid_board_size(size):
    with pytest.raises(ValueError):
        Board(*size)


def test_new_ball_starts_at_top():
    board = Board()
    ball = board.new_ball()
    assert ball == Ball(x=float(board.pins[0][0][0]), y=0.0, active=True, counted=False, last_row=-1)


def test_update_moves_down_and_deflects():
    board = Board()
    ball = board.new_ball()
    start_x = ball.x
    board.update_ball(ball, FixedBits(1))
    assert ball.y == FALL_STEP
    assert ball.x == pytest.approx(start_x + board.step_x)
    assert ball.last_row >= 0


def test_update_deflects_left_on_zero():
    board = Board()
    ball = board.new_ball()
    start_x = ball.x
    board.update_ball(ball, FixedBits(0))
    assert ball.x == pytest.approx(start_x - board.step_x)


def test_update_ignores_inactive_ball():
    board = Board()
    ball = Ball(x=10.0, y=5.0, active=False)
    board.update_ball(ball, FixedBits(1))
    assert (ball.x, ball.y, ball.active) == (10.0, 5.0, False)


def test_ball_stops_at_bottom():
    board = Board()
    ball = board.new_ball()
    steps = 0
    while ball.active:
        board.update_ball(ball, FixedBits(steps % 2))
        steps += 1
    assert ball.y >= board.height
    assert ball.y - FALL_STEP < board.height


def test_ball_deflected_once_per_row():
    board = Board()
    ball = board.new_ball()
    start_x = ball.x
    while ball.active:
        board.update_ball(ball, FixedBits(1))
    moves = round((ball.x - start_x) / board.step_x)
    assert 1 <= moves <= ROWS
    assert ball.last_row == ROWS - 1


def test_nearest_bin():
    board = Board()
    for index, column in enumerate(board.bin_x):
        assert board.nearest_bin(column) == index
    assert board.nearest_bin(-50.0) == 0
    assert board.nearest_bin(500.0) == NUM_BINS - 1


def test_release_stops_at_total():
    sim = GaltonSimulation(Board(), 3, random.Random(1))
    assert [sim.release() for _ in range(5)] == [True, True, True, False, False]
    assert sim.ball_count == 3


def test_run_counts_every_ball():
    sim = GaltonSimulation(Board(), TOTAL_BALLS, random.Random(7))
    bins = sim.run()
    assert len(bins) == NUM_BINS
    assert sum(bins) == TOTAL_BALLS
    assert sim.finished
    assert all(ball.counted and not ball.active for ball in sim.balls)


def test_run_is_deterministic_for_seed():
    first = GaltonSimulation(Board(), 50, random.Random(3)).run()
    second = GaltonSimulation(Board(), 50, random.Random(3)).run()
    assert first == second


def test_run_with_no_balls():
    sim = GaltonSimulation(Board(), 0, random.Random(0))
    assert sim.run() == [0] * NUM_BINS


def test_negative_total_rejected():
    with pytest.raises(ValueError):
        GaltonSimulation(Board(), -1)


def test_reset_clears_state():
    sim = GaltonSimulation(Board(), 10, random.Random(2))
    sim.run()
    sim.reset()
    assert sim.ball_count == 0
    assert sim.bins == [0] * NUM_BINS
    assert not sim.finished


def test_step_reports_running_until_done():
    sim = GaltonSimulation(Board(), 1, random.Random(5))
    sim.release()
    results = []
    while True:
        running = sim.step()
        results.append(running)
        if not running:
            break
    assert all(results[:-1])
    assert results[-1] is False
    assert sum(sim.bins) == 1


def test_render_draws_count_and_pins():
    board = Board()
    sim = GaltonSimulation(board, 5, random.Random(4))
    sim.release()
    fb = Framebuffer()
    sim.render(fb)
    assert fb.buffer[16:24] == glyph("1")
    for row in board.pins[2:]:
        for x, y in row:
            assert pixel_on(fb, x, y)


def test_render_draws_bins():
    board = Board()
    sim = GaltonSimulation(board, 30, random.Random(11))
    bins = sim.run()
    fb = Framebuffer()
    sim.render(fb)
    for column, count in zip(board.bin_x, bins):
        assert pixel_on(fb, column, board.height - 1) == (count > 0)
        height = min(count, board.height // 2)
        if 0 < height < board.height // 2:
            assert not pixel_on(fb, column, board.height - 1 - height)


def test_main_prints_histogram(capsys):
    assert main(["--balls", "20", "--seed", "9"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == NUM_BINS
    counts = [int(line.split()[1]) for line in lines]
    assert sum(counts) == 20
    for line, count in zip(lines, counts):
        assert line.count("#") == count


def test_main_rejects_negative_balls():
    with pytest.raises(SystemExit):
        main(["--balls", "-3"])