"""Geometry and state of the radar display.

Covers the radar background (range rings, axes and bearing marks), the
rotating sweep line, the data label attached to each aircraft with its
connector line, the form used to enter a new aircraft and the scene that
holds the aircraft and their labels.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from radarmap.aircraft import Aircraft

IntPoint = tuple[int, int]
FloatPoint = tuple[float, float]
Rect = tuple[float, float, float, float]
Line = tuple[FloatPoint, FloatPoint]

BEARING_TEXTS = ("0", "90", "180", "270")
BEARING_ADJUST = 20

SWEEP_STEP = 5

CONNECTOR_MIN_LENGTH = 20.0
CONNECTOR_INSET = 10.0

LABEL_WIDTH = 60
LABEL_HEIGHT = 40
LABEL_MAX_GAP_X = 60
LABEL_MAX_GAP_Y = 60
SYMBOL_CENTER_OFFSET = 5

DEFAULT_SCENE_RECT: Rect = (0.0, 0.0, 400.0, 400.0)
DEFAULT_DIRECTION = 80
DEFAULT_CLEAR_ALT = 1000


def _round(value: float) -> int:
    return int(math.floor(value + 0.5))


def radar_axes(width: int, height: int) -> list[tuple[IntPoint, IntPoint]]:
    """The vertical and horizontal lines through the centre of the display."""
    cx = int(width / 2)
    cy = int(height / 2)
    return [((cx, 0), (cx, height)), ((0, cy), (width, cy))]


def radar_circles(width: int, height: int, gap: int) -> list[tuple[int, int, int, int]]:
    """Bounding rectangles ``(x, y, w, h)`` of the range rings, outermost first.

    One ring fewer than the width counts hundreds is drawn, each ``gap``
    inside the previous one.
    """
    count = int(width / 100) - 1
    rings = []
    for i in range(max(count, 0)):
        inset = gap + gap * i
        rings.append(
            (inset, inset, width - gap * (i + 1) * 2, height - gap * (i + 1) * 2)
        )
    return rings


def bearing_labels(width: int, height: int) -> list[tuple[str, IntPoint]]:
    """The bearing marks for north, east, south and west with their positions."""
    positions = [
        (int(width / 2), 0),
        (width - BEARING_ADJUST, int(height / 2)),
        (int(width / 2), height - BEARING_ADJUST),
        (BEARING_ADJUST, int(height / 2)),
    ]
    return list(zip(BEARING_TEXTS, positions))


def rotate_point(point: FloatPoint, angle: int, origin: FloatPoint) -> IntPoint:
    """Rotate ``point`` about ``origin`` by ``angle`` degrees, rounded to pixels."""
    u, v = origin
    x, y = point
    rad = math.pi / 180 * angle
    nx = (x - u) * math.cos(rad) + (y - v) * math.sin(rad) + u
    ny = (x - u) * -math.sin(rad) + (y - v) * math.cos(rad) + v
    return _round(nx), _round(ny)


def connector(source: FloatPoint, dest: FloatPoint) -> Line:
    """End points of the line joining an aircraft to its label.

    Both ends are pulled in by a fixed inset; when the two points are too
    close the line collapses onto ``source``.
    """
    dx = dest[0] - source[0]
    dy = dest[1] - source[1]
    length = math.hypot(dx, dy)
    if length > CONNECTOR_MIN_LENGTH:
        ox = dx * CONNECTOR_INSET / length
        oy = dy * CONNECTOR_INSET / length
        return (source[0] + ox, source[1] + oy), (dest[0] - ox, dest[1] - oy)
    start = (float(source[0]), float(source[1]))
    return start, start


class SweepLine:
    """The radar sweep, turning a few degrees on every tick."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.first = True
        self.angle = 0

    def advance(self) -> tuple[IntPoint, IntPoint]:
        """The line to draw on this tick; afterwards the sweep turns on."""
        cx = int(self.width / 2)
        cy = int(self.height / 2)
        start = (cx, self.height)
        if self.first:
            self.first = False
            return (cx, 0), start
        center = (cx, cy)
        moving = rotate_point(start, self.angle, center)
        self.angle += SWEEP_STEP
        return center, moving


class Alignment(Enum):
    """Where labels are placed relative to their aircraft."""

    LEFT = (-120, -20)
    RIGHT = (60, -20)
    CENTER = (0, -20)


class Label:
    """The data block shown next to an aircraft.

    ``gap_x``/``gap_y`` hold how far the user has moved the label away from
    the aircraft; ``line`` is the connector from the aircraft to the label.
    """

    def __init__(self, aircraft: Aircraft) -> None:
        self.aircraft = aircraft
        self.gap_x = 0
        self.gap_y = 0
        self.pos: FloatPoint = (0.0, 0.0)
        self.brect: Rect = (0.0, 0.0, 0.0, 0.0)
        self.real_label_pos: IntPoint = (0, 0)
        self.item_moved = False
        self.line: Line = ((0.0, 0.0), (0.0, 0.0))

    def airplane_pos(self) -> IntPoint:
        """Centre of the aircraft symbol."""
        return (
            self.aircraft.x + SYMBOL_CENTER_OFFSET,
            self.aircraft.y + SYMBOL_CENTER_OFFSET,
        )

    def label_pos(self) -> IntPoint:
        """Centre of the label as it is currently placed."""
        x, y, w, h = self.brect
        return _round(x + w / 2), _round(y + h / 2)

    def text(self) -> str:
        """The label text: callsign and heading, then speed."""
        a = self.aircraft
        return f"{a.callsign} {a.heading}\n{a.speed}"

    def _update_line(self) -> None:
        self.line = connector(self.airplane_pos(), self.label_pos())

    def refresh(self) -> Rect:
        """Recompute the label after its aircraft moved; returns the label box.

        Gaps beyond the allowed distance are pulled back, and the connector
        follows unless the user is dragging the label.
        """
        x, y = self.aircraft.x, self.aircraft.y
        clamped = False
        if abs(self.gap_x) > LABEL_MAX_GAP_X:
            self.gap_x = LABEL_MAX_GAP_X if self.gap_x > 0 else -LABEL_MAX_GAP_X
            clamped = True
        if self.gap_y > LABEL_MAX_GAP_Y:
            self.gap_y = LABEL_MAX_GAP_Y
            clamped = True
        elif self.gap_y < -LABEL_MAX_GAP_Y:
            self.gap_y = -LABEL_MAX_GAP_Y
            clamped = True
        if clamped:
            self.pos = (float(self.gap_x), float(self.gap_y))

        self.brect = (x + self.gap_x, y + self.gap_y, LABEL_WIDTH, LABEL_HEIGHT)
        self.real_label_pos = (x, y)
        if not self.item_moved:
            self._update_line()
        return (x, y, LABEL_WIDTH, LABEL_HEIGHT)

    def move_to(self, x: float, y: float, scene_rect: Rect) -> FloatPoint:
        """Record that the user dragged the label to offset ``(x, y)``.

        Returns the position limited to ``scene_rect`` (``x, y, w, h``).
        """
        self.item_moved = True
        self.pos = (x, y)
        self.gap_x = int(x)
        self.gap_y = int(y)
        self.brect = (
            self.aircraft.x + self.gap_x,
            self.aircraft.y + self.gap_y,
            LABEL_WIDTH,
            LABEL_HEIGHT,
        )
        self._update_line()

        left, top, w, h = scene_rect
        right, bottom = left + w, top + h
        if left <= x <= right and top <= y <= bottom:
            return x, y
        return min(right, max(x, left)), min(bottom, max(y, top))

    def set_alignment(self, alignment: Alignment) -> None:
        """Place the label left, right or centred above its aircraft."""
        self.gap_x, self.gap_y = alignment.value
        self.pos = (float(self.gap_x), float(self.gap_y))
        rx, ry = self.real_label_pos
        self.brect = (rx + self.gap_x, ry + self.gap_y, LABEL_WIDTH, LABEL_HEIGHT)
        self._update_line()


def _to_int(text: str) -> int:
    try:
        return int(text.strip())
    except (ValueError, AttributeError):
        return 0


@dataclass
class ItemForm:
    """The values entered in the aircraft form."""

    acid: str = ""
    origin: str = ""
    destination: str = ""
    cu_alt: str = ""
    cl_alt: str = ""
    cu_spd: int = 0
    cl_spd: int = 0
    cl_heading: int = 0

    @classmethod
    def from_fields(cls, fields: Mapping[str, str]) -> "ItemForm":
        """Build a form from its text fields; numbers that do not parse are 0."""
        return cls(
            acid=fields.get("acid", ""),
            origin=fields.get("origin", ""),
            destination=fields.get("destination", ""),
            cu_alt=fields.get("cu_alt", ""),
            cl_alt=fields.get("cl_alt", ""),
            cu_spd=_to_int(fields.get("cu_spd", "")),
            cl_spd=_to_int(fields.get("cl_spd", "")),
            cl_heading=_to_int(fields.get("cl_heading", "")),
        )

    def to_aircraft(self) -> Aircraft:
        """A new aircraft at the default position carrying the form's clearance."""
        aircraft = Aircraft(
            self.acid, 50, 5, 100, _to_int(self.cu_alt), self.destination,
            self.cl_spd, 200, 200, 10,
        )
        aircraft.clear_alt = _to_int(self.cl_alt)
        aircraft.clear_heading = self.cl_heading
        return aircraft


class RadarScene:
    """The aircraft on the radar together with their labels."""

    def __init__(self, scene_rect: Rect = DEFAULT_SCENE_RECT) -> None:
        self.scene_rect = scene_rect
        self.aircraft: list[Aircraft] = []
        self.labels: list[Label] = []

    def _register(self, aircraft: Aircraft) -> Label:
        label = Label(aircraft)
        self.aircraft.append(aircraft)
        self.labels.append(label)
        return label

    def add(self, aircraft: Aircraft, direction: int) -> Label:
        """Add an aircraft cleared to the default altitude and ``direction``."""
        aircraft.clear_alt = DEFAULT_CLEAR_ALT
        aircraft.clear_heading = direction
        return self._register(aircraft)

    def add_from_form(self, form: ItemForm) -> Label:
        """Add the aircraft described by an entry form."""
        return self._register(form.to_aircraft())

    def populate_demo(self) -> None:
        """Add ten test aircraft on a diagonal."""
        for i in range(10):
            aircraft = Aircraft(
                f"TEST_{i}", 50, 5, 100, 30000, f"BOGUS_{i}", 100,
                100 + i * 30, 100 + i * 30, 10,
            )
            self.add(aircraft, DEFAULT_DIRECTION)

    def align_labels(self, alignment: Alignment) -> None:
        """Place every label with the same alignment."""
        for label in self.labels:
            label.set_alignment(alignment)