"""Simulated aircraft tracks for the radar display.

An :class:`Aircraft` holds its current state (heading, altitude, speed and
screen position) and the clearance it has been given. Each update moves the
current state towards the clearance at the aircraft's turn, climb and
acceleration rates, advances the position along the current heading and
pushes the previous position onto a short trail.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass

from radarmap.geodesy import deg2rad

TRAIL_LENGTH = 4
SPEED_TO_PIXELS = 0.1
SYMBOL_SIZE = 10
_ADJUST = 0.5

# Time between automatic updates, in milliseconds.
UPDATE_INTERVAL_MS = 3000


def now_seconds() -> int:
    """The current time in whole seconds since the epoch."""
    return int(time.time())


@dataclass
class TrailPoint:
    """A past position of an aircraft, drawn as a faded square."""

    x: int
    y: int


class Aircraft:
    """A simulated aircraft flying towards its clearance."""

    def __init__(
        self,
        callsign: str,
        climb_rate: int,
        turn_rate: int,
        heading: int,
        alt: int,
        direct: str,
        speed: int,
        x: int,
        y: int,
        accel_rate: int,
        timestamp: int | None = None,
    ) -> None:
        self.callsign = callsign
        self.climb_rate = climb_rate  # feet per second
        self.turn_rate = turn_rate  # degrees per second
        self.accel_rate = accel_rate  # knots per second

        self.heading = heading
        self.clear_heading = heading
        self.alt = alt
        self.clear_alt = alt
        self.speed = speed
        self.clear_speed = speed
        self.clear_direct = direct
        self.speed_pixels = speed * SPEED_TO_PIXELS

        self.x = x
        self.y = y
        self.trail = [TrailPoint(x, y) for _ in range(TRAIL_LENGTH)]
        self.timestamp = now_seconds() if timestamp is None else timestamp

    def _update_heading(self, elapsed: int) -> None:
        if self.clear_heading > 360:
            self.clear_heading -= 360
        if self.clear_heading < 0:
            self.clear_heading += 360

        cu, cl = self.heading, self.clear_heading
        if cl == cu:
            return

        delta = elapsed * self.turn_rate
        if cu > cl:
            delta = min(delta, cu - cl)
            cu = cu - delta if cu - cl <= 180 else cu + delta
        else:
            delta = min(delta, cl - cu)
            cu = cu + delta if cl - cu <= 180 else cu - delta

        if cu > 720:
            cu %= 360
        if cu > 360:
            cu -= 360
        if cu < 0:
            cu += 360
        self.heading = cu

    @staticmethod
    def _approach(current: int, target: int, amount: int) -> int:
        if target > current:
            return min(current + amount, target)
        return max(current - amount, target)

    def _update_alt_and_speed(self, elapsed: int) -> None:
        if self.clear_alt != self.alt:
            self.alt = self._approach(self.alt, self.clear_alt, elapsed * self.climb_rate)
        if self.clear_speed != self.speed:
            self.speed = self._approach(
                self.speed, self.clear_speed, elapsed * self.accel_rate
            )
            self.speed_pixels = self.speed * SPEED_TO_PIXELS

    def _push_trail(self) -> None:
        self.trail = [TrailPoint(self.x, self.y)] + self.trail[: TRAIL_LENGTH - 1]

    def _move(self) -> None:
        cu = self.heading
        pix = self.speed_pixels
        if cu - 270 >= 0:
            rad = deg2rad(cu - 270)
            self.x = int(self.x - pix * math.cos(rad))
            self.y = int(self.y - pix * math.sin(rad))
        elif cu - 180 >= 0:
            rad = deg2rad(270 - cu)
            self.x = int(self.x - pix * math.cos(rad))
            self.y = int(self.y + pix * math.sin(rad))
        elif cu - 90 >= 0:
            rad = deg2rad(cu - 90)
            self.x = int(self.x + math.cos(rad) * pix)
            self.y = int(self.y + math.sin(rad) * pix)
        else:
            rad = deg2rad(90 - cu)
            self.x = int(self.x + pix * math.cos(rad))
            self.y = int(self.y - pix * math.sin(rad))

    def step(self, elapsed: int) -> None:
        """Advance the aircraft by ``elapsed`` whole seconds."""
        elapsed = int(elapsed)
        self._update_heading(elapsed)
        self._update_alt_and_speed(elapsed)
        self._push_trail()
        self._move()

    def process(self, now: int | None = None) -> None:
        """Advance by the time since the last update and record ``now``."""
        if now is None:
            now = now_seconds()
        self.step(now - self.timestamp)
        self.timestamp = now

    def bounding_rect(self) -> tuple[float, float, float, float]:
        """The ``(x, y, width, height)`` area covered by the aircraft symbol."""
        return (
            self.x - _ADJUST,
            self.y - _ADJUST,
            SYMBOL_SIZE + _ADJUST,
            SYMBOL_SIZE + _ADJUST,
        )