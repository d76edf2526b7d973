"""Galton board: pins in a triangle, balls bouncing left or right into bins."""

from __future__ import annotations

import argparse
import math
import random
from dataclasses import dataclass

from .ssd1306 import HEIGHT, PAGE_HEIGHT, WIDTH, Framebuffer

BASE_PINS = 15
ROWS = BASE_PINS
TOTAL_BALLS = 100
NUM_BINS = 7
FALL_STEP = 1.5


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class Ball:
    """One ball: its position and where it is in its fall."""

    x: float = 0.0
    y: float = 0.0
    active: bool = False
    counted: bool = False
    last_row: int = -1


class Board:
    """Geometry of the board: pin triangle in the upper half, bins along the base."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height < 2 * PAGE_HEIGHT or height % PAGE_HEIGHT:
            raise ValueError(
                f"invalid board size {width}x{height}; height must be a multiple "
                f"of {PAGE_HEIGHT} and at least {2 * PAGE_HEIGHT}"
            )
        self.width = width
        self.height = height
        half_height = height // 2
        self.step_x = (width * 0.5) / (BASE_PINS - 1)
        self.step_y = (half_height - 1) / (ROWS - 1)

        self.pins: list[list[tuple[int, int]]] = []
        for row in range(ROWS):
            count = row + 1
            shift_x = ((width - 1) - (count - 1) * self.step_x) * 0.5
            y = int(row * self.step_y + 0.5)
            self.pins.append(
                [(int(shift_x + column * self.step_x + 0.5), y) for column in range(count)]
            )

        start = self.pins[-1][0][0]
        end = self.pins[-1][-1][0]
        bin_step = (end - start) / (NUM_BINS - 1)
        self.bin_x: list[int] = [int(start + i * bin_step + 0.5) for i in range(NUM_BINS)]

    def new_ball(self) -> Ball:
        """Return a ball placed at the top of the triangle."""
        return Ball(x=float(self.pins[0][0][0]), y=0.0, active=True, counted=False, last_row=-1)

    def update_ball(self, ball: Ball, rng: random.Random) -> None:
        """Move a ball down one step, deflecting it when it reaches a new pin row."""
        if not ball.active:
            return
        ball.y += FALL_STEP
        row = math.floor((ball.y + self.step_y * 0.5) / self.step_y)
        if row != ball.last_row and 0 <= row < ROWS:
            ball.x += self.step_x if rng.getrandbits(1) else -self.step_x
            ball.last_row = row
        if ball.y >= self.height:
            ball.active = False

    def nearest_bin(self, x: float) -> int:
        """Return the index of the bin closest to horizontal position x."""
        column = int(x)
        best_index, best_distance = 0, 10000
        for index, bin_column in enumerate(self.bin_x):
            distance = abs(column - bin_column)
            if distance < best_distance:
                best_index, best_distance = index, distance
        return best_index


class GaltonSimulation:
    """Releases balls one at a time and tallies where they land."""

    def __init__(
        self,
        board: Board | None = None,
        total_balls: int = TOTAL_BALLS,
        rng: random.Random | None = None,
    ) -> None:
        if total_balls < 0:
            raise ValueError(f"total_balls must not be negative, got {total_balls}")
        self.board = board if board is not None else Board()
        self.total_balls = total_balls
        self.rng = rng if rng is not None else random.Random()
        self.balls: list[Ball] = []
        self.bins: list[int] = [0] * NUM_BINS
        self._moved: list[tuple[float, float]] = []

    @property
    def ball_count(self) -> int:
        """Number of balls released so far."""
        return len(self.balls)

    @property
    def finished(self) -> bool:
        """True once every ball has been released and has come to rest."""
        return self.ball_count >= self.total_balls and not any(b.active for b in self.balls)

    def reset(self) -> None:
        """Forget every ball and empty the bins."""
        self.balls.clear()
        self.bins = [0] * NUM_BINS
        self._moved.clear()

    def release(self) -> bool:
        """Drop a new ball from the top; return False once all have been released."""
        if self.ball_count >= self.total_balls:
            return False
        self.balls.append(self.board.new_ball())
        return True

    def step(self) -> bool:
        """Advance every falling ball and bin those that landed; return True while running."""
        self._moved = []
        for ball in self.balls:
            if ball.active:
                self.board.update_ball(ball, self.rng)
                self._moved.append((ball.x, ball.y))
            if not ball.active and not ball.counted:
                self.bins[self.board.nearest_bin(ball.x)] += 1
                ball.counted = True
        return not self.finished

    def render(self, framebuffer: Framebuffer) -> None:
        """Draw the ball count, pins, moving balls and bin columns."""
        framebuffer.clear()
        framebuffer.draw_string(0, 0, f"{self.ball_count:3d}")

        def plot(x: int, y: int) -> None:
            if 0 <= x < framebuffer.width and 0 <= y < framebuffer.height:
                framebuffer.set_pixel(x, y, True)

        for row in self.board.pins:
            for x, y in row:
                plot(x, y)
        for x, y in self._moved:
            plot(_round_half_away(x), _round_half_away(y))
        limit = self.board.height // 2
        for bin_column, count in zip(self.board.bin_x, self.bins):
            for h in range(min(count, limit)):
                plot(bin_column, self.board.height - 1 - h)

    def run(self) -> list[int]:
        """Run a full experiment, one release per step, and return the bin counts."""
        self.reset()
        while True:
            self.release()
            self.step()
            if self.finished:
                return list(self.bins)


def main(argv: list[str] | None = None) -> int:
    """Run a Galton board experiment and print the bin histogram."""
    parser = argparse.ArgumentParser(prog="galtonboard", description=main.__doc__)
    parser.add_argument("--balls", type=int, default=TOTAL_BALLS, help="number of balls")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    if args.balls < 0:
        parser.error("--balls must not be negative")

    simulation = GaltonSimulation(Board(), args.balls, random.Random(args.seed))
    for index, count in enumerate(simulation.run()):
        print(f"{index}: {count:3d} {'#' * count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())