"""Reading of layered ``.map`` files and placement of their shapes on the grid.

A ``.map`` file is a sequence of colon separated records:

``LAYER:name:line type:line width:line colour:fill pattern:fill colour:font name:font size:font colour:symbol``
    starts a layer. Its settings carry over to every following shape, and
    fields left empty keep the value of the previous layer.
``ID:name:count:type``
    starts a shape of the current layer. The type is one of ``G`` (polygon),
    ``P`` (polyline), ``C`` (circle), ``E`` (ellipse), ``L`` (line) and
    ``S`` (symbol).
``G:N372959000E1270000000`` or ``S:...``
    a point of the current shape in ``DD.MMSS`` / ``DDD.MMSS`` form.
``ENDLAYER``
    closes the current layer.

Colours are written as ``r,g,b``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Iterable, Sequence

from radarmap.geodesy import SCREEN_OFFSET, Point, Projection

Color = tuple[int, int, int]

END_LAYER = "ENDLAYER"
LAYER_FIELDS = 11


class LineType(Enum):
    """Line style of a layer as written in the map file."""

    BLANK = 0
    SOLID = 1
    DASHED = 2
    DOTTED = 3


class FillPattern(Enum):
    """Fill pattern of a layer as written in the map file."""

    SOLID = 1
    DOTTED = 2
    HORIZONTAL_LINE = 3
    VERTICAL_LINE = 4
    CROSS_LINE = 5
    SLASHED = 6
    REVERSE_SLASHED = 7
    CROSS_SLASHED = 8


class MapShape(Enum):
    """Kind of shape an ``ID`` record describes."""

    POLYGON = "G"
    POLYLINE = "P"
    CIRCLE = "C"
    ELLIPSE = "E"
    LINE = "L"
    SYMBOL = "S"


class PenStyle(Enum):
    """Pen used to draw a layer's outlines."""

    NO_PEN = "none"
    SOLID_LINE = "solid"
    DASH_LINE = "dash"
    DOT_LINE = "dot"


class BrushStyle(Enum):
    """Brush used to fill a layer's shapes."""

    NO_BRUSH = "none"
    SOLID = "solid"
    DENSE1 = "dense1"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    CROSS = "cross"
    BACKWARD_DIAGONAL = "bdiag"
    FORWARD_DIAGONAL = "fdiag"
    DIAGONAL_CROSS = "diagcross"


_PEN_STYLES = {
    LineType.BLANK: PenStyle.NO_PEN,
    LineType.SOLID: PenStyle.SOLID_LINE,
    LineType.DASHED: PenStyle.DASH_LINE,
    LineType.DOTTED: PenStyle.DOT_LINE,
}

_BRUSH_STYLES = {
    FillPattern.SOLID: BrushStyle.SOLID,
    FillPattern.DOTTED: BrushStyle.DENSE1,
    FillPattern.HORIZONTAL_LINE: BrushStyle.HORIZONTAL,
    FillPattern.VERTICAL_LINE: BrushStyle.VERTICAL,
    FillPattern.CROSS_LINE: BrushStyle.CROSS,
    FillPattern.SLASHED: BrushStyle.BACKWARD_DIAGONAL,
    FillPattern.REVERSE_SLASHED: BrushStyle.FORWARD_DIAGONAL,
    FillPattern.CROSS_SLASHED: BrushStyle.DIAGONAL_CROSS,
}

# Fill pattern codes accepted in a LAYER record; 8 is not recognised.
_FILL_CODES = {
    1: FillPattern.SOLID,
    2: FillPattern.DOTTED,
    3: FillPattern.HORIZONTAL_LINE,
    4: FillPattern.VERTICAL_LINE,
    5: FillPattern.CROSS_LINE,
    6: FillPattern.SLASHED,
    7: FillPattern.REVERSE_SLASHED,
}


@dataclass
class LatLon:
    """A coordinate pair; either ``DD.MMSS`` values or projected grid units."""

    lat: float
    lon: float


@dataclass
class LayerInfo:
    """Drawing settings of a layer."""

    name: str = ""
    line_type: LineType | None = None
    line_width: int = 0
    line_color: Color = (0, 0, 0)
    fill_pattern: FillPattern | None = None
    fill_color: Color = (0, 0, 0)
    font_name: str = ""
    font_size: int = 0
    font_color: Color = (0, 0, 0)
    symbol: str = ""

    def pen_style(self) -> PenStyle:
        """The pen for the layer's line type; no pen when it is unset."""
        return _PEN_STYLES.get(self.line_type, PenStyle.NO_PEN)

    def brush_style(self) -> BrushStyle:
        """The brush for the layer's fill pattern; no brush when it is unset."""
        return _BRUSH_STYLES.get(self.fill_pattern, BrushStyle.NO_BRUSH)


def _rotate(x: float, y: float, angle: int, offset: float) -> Point:
    rad = math.pi / 180 * angle
    nx = x * math.cos(rad) + y * math.sin(rad) + offset
    ny = x * -math.sin(rad) + y * math.cos(rad) + offset
    return nx, ny


def rotate_points(points: Iterable[Point], angle: int) -> list[Point]:
    """Rotate grid points about the origin and shift them onto the screen."""
    return [_rotate(x, y, angle, SCREEN_OFFSET) for x, y in points]


@dataclass
class MapEntry:
    """One shape of a map file together with the layer it belongs to."""

    layer: LayerInfo = field(default_factory=LayerInfo)
    id_name: str = ""
    map_type: MapShape | None = None
    index: int = 0
    count: int = 0
    points: list[LatLon] = field(default_factory=list)
    enabled: bool = True
    angle: int = 0

    def rotated(self, angle: int) -> list[LatLon]:
        """The shape's points rotated about the origin by ``angle`` degrees."""
        result = []
        for point in self.points:
            lon, lat = _rotate(point.lon, point.lat, angle, 0.0)
            result.append(LatLon(lat=lat, lon=lon))
        return result

    def center(self, points: Sequence[Point]) -> Point:
        """Where to draw the shape's name, given its points on the screen.

        The centre of the extent of the points; the right and bottom edges
        are measured from no less than zero.
        """
        left = min((p for p in points), key=lambda p: p[0], default=(0.0, 0.0))
        upper = min((p for p in points), key=lambda p: p[1], default=(0.0, 0.0))
        right = (0.0, 0.0)
        bottom = (0.0, 0.0)
        for p in points:
            if right[0] < p[0]:
                right = p
            if bottom[1] < p[1]:
                bottom = p
        return (
            (right[0] - left[0]) / 2 + left[0],
            (bottom[1] - upper[1]) / 2 + upper[1],
        )


def parse_color(text: str) -> Color:
    """Parse an ``r,g,b`` colour."""
    parts = text.split(",")
    if len(parts) < 3:
        raise ValueError(f"expected 'r,g,b', got {text!r}")
    try:
        r, g, b = (int(part.strip()) for part in parts[:3])
    except ValueError as exc:
        raise ValueError(f"invalid colour {text!r}") from exc
    return r, g, b


def _int(text: str, what: str) -> int:
    try:
        return int(text)
    except ValueError as exc:
        raise ValueError(f"invalid {what}: {text!r}") from exc


def _parse_layer(fields: list[str], previous: LayerInfo) -> LayerInfo:
    if len(fields) < LAYER_FIELDS:
        raise ValueError(f"LAYER record needs {LAYER_FIELDS} fields, got {len(fields)}")
    layer = replace(previous, name=fields[1])
    if fields[2] == "1":
        layer.line_type = LineType.SOLID
    elif fields[2] == "2":
        layer.line_type = LineType.DASHED
    else:
        layer.line_type = LineType.DOTTED
    if fields[3]:
        layer.line_width = _int(fields[3], "line width")
    if fields[4]:
        layer.line_color = parse_color(fields[4])
    if fields[5]:
        code = _int(fields[5], "fill pattern")
        if code in _FILL_CODES:
            layer.fill_pattern = _FILL_CODES[code]
    if fields[6]:
        layer.fill_color = parse_color(fields[6])
    if fields[7]:
        layer.font_name = fields[7]
    if fields[8]:
        layer.font_size = _int(fields[8], "font size")
    if fields[9]:
        layer.font_color = parse_color(fields[9])
    if fields[10]:
        layer.symbol = fields[10]
    return layer


def _parse_id(fields: list[str], layer: LayerInfo, index: int) -> MapEntry:
    if len(fields) < 4:
        raise ValueError(f"ID record needs 4 fields, got {len(fields)}")
    entry = MapEntry(layer=replace(layer), index=index)
    if fields[1]:
        entry.id_name = fields[1]
    if fields[2]:
        entry.count = _int(fields[2], "coordinate count")
    if fields[3]:
        try:
            entry.map_type = MapShape(fields[3])
        except ValueError:
            entry.map_type = None
    return entry


def _parse_point(text: str) -> LatLon:
    lat_part, sep, lon_part = text.partition("E")
    if not sep or len(lat_part) < 3 or len(lon_part) < 3:
        raise ValueError(f"invalid coordinate {text!r}")
    lat_text = lat_part[1:]
    lat_text = lat_text[:2] + "." + lat_text[2:]
    lon_text = lon_part[:3] + "." + lon_part[3:]
    try:
        return LatLon(lat=float(lat_text), lon=float(lon_text))
    except ValueError as exc:
        raise ValueError(f"invalid coordinate {text!r}") from exc


def parse_map(lines: Iterable[str]) -> list[MapEntry]:
    """Read the shapes of a map file from its lines."""
    entries: list[MapEntry] = []
    layer = LayerInfo()
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line == END_LAYER:
            continue
        fields = line.split(":")
        kind = fields[0]
        if kind == "LAYER":
            layer = _parse_layer(fields, layer)
        elif kind == "ID":
            entries.append(_parse_id(fields, layer, len(entries)))
        elif kind in ("G", "S"):
            if not entries:
                raise ValueError(f"coordinate before the first ID record: {line!r}")
            if len(fields) < 2:
                raise ValueError(f"coordinate record without a value: {line!r}")
            entries[-1].points.append(_parse_point(fields[1]))
    return entries


def read_map(path: str | Path) -> list[MapEntry]:
    """Read the shapes of the map file at ``path``."""
    with open(path, encoding="utf-8") as handle:
        return parse_map(handle)


def to_pixel(entries: Iterable[MapEntry], projection: Projection) -> list[LatLon]:
    """Project every point of every shape onto the grid, in file order.

    Each result holds the grid ``x`` as ``lon`` and the grid ``y`` as ``lat``.
    """
    result = []
    for entry in entries:
        for point in entry.points:
            x, y = projection.latlon_to_xy(point.lon, point.lat)
            result.append(LatLon(lat=y, lon=x))
    return result


def long_to_tile_x(lon: float, z: int) -> int:
    """Column of the slippy-map tile holding longitude ``lon`` at zoom ``z``."""
    return int(math.floor((lon + 180.0) / 360.0 * 2.0 ** z))