"""Conversion of ``.dat`` coastline files into the layered ``.map`` format.

A ``.dat`` file lists polylines: a line holding only ``>`` starts a new
polyline, and every other line holds ``longitude<TAB>latitude`` in decimal
degrees. The ``.map`` output writes each polyline as an ``ID`` record
followed by one ``G`` record per point, with the coordinates in the
``A DD MM SSSS`` form used by the map files.
"""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, TextIO

MAP_START = ">"
DEFAULT_OUTPUT = "new_korea.map"


def _split_decimal(value: float) -> tuple[int, int, int]:
    d = abs(value)
    deg = math.floor(d)
    minutes = math.floor((d - deg) * 60)
    seconds = math.floor((((d - deg) * 60 - minutes) * 100 / 60) * 3600)
    return int(deg), int(minutes), int(seconds)


def lat_decimal_to_dms(value: float) -> str:
    """Format a decimal latitude as ``N|S`` + 2-digit degrees + minutes + seconds."""
    deg, minutes, seconds = _split_decimal(value)
    sign = "S" if value < 0 else "N"
    return f"{sign}{deg:02d}{minutes:02d}{seconds:04d}"


def lon_decimal_to_dms(value: float) -> str:
    """Format a decimal longitude as ``E|W`` + 3-digit degrees + minutes + seconds."""
    deg, minutes, seconds = _split_decimal(value)
    sign = "W" if value < 0 else "E"
    return f"{sign}{deg:03d}{minutes:02d}{seconds:04d}"


@dataclass
class DatLatLon:
    """One point read from a ``.dat`` file, with its converted form."""

    lat: str
    lon: str
    dms_lat: str = ""
    dms_lon: str = ""

    def process(self) -> None:
        """Convert the decimal coordinates into the map file form."""
        self.dms_lat = lat_decimal_to_dms(float(self.lat))
        self.dms_lon = lon_decimal_to_dms(float(self.lon))


@dataclass
class DatMapInfo:
    """One polyline of a ``.dat`` file."""

    points: list[DatLatLon] = field(default_factory=list)

    def add(self, point: DatLatLon) -> None:
        """Append a point to the polyline."""
        self.points.append(point)

    def process(self) -> None:
        """Convert every point of the polyline."""
        for point in self.points:
            point.process()

    def __len__(self) -> int:
        return len(self.points)


def parse_lat_lon(line: str) -> tuple[str, str]:
    """Split a ``longitude<TAB>latitude`` line; returns ``(lat, lon)``."""
    parts = line.split("\t")
    if len(parts) < 2:
        raise ValueError(f"expected 'lon<TAB>lat', got {line!r}")
    return parts[1], parts[0]


def parse_dat(lines: Iterable[str]) -> list[DatMapInfo]:
    """Read the polylines of a ``.dat`` file from its lines."""
    maps: list[DatMapInfo] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            continue
        if line == MAP_START:
            maps.append(DatMapInfo())
            continue
        if not maps:
            raise ValueError(f"point before the first '{MAP_START}' marker: {line!r}")
        lat, lon = parse_lat_lon(line)
        maps[-1].add(DatLatLon(lat, lon))
    return maps


def write_map(maps: Iterable[DatMapInfo], stream: TextIO) -> None:
    """Write processed polylines in the ``.map`` record format."""
    for index, info in enumerate(maps):
        stream.write(f"ID:{index}:{len(info)}:P\n")
        for point in info.points:
            stream.write(f"G:{point.dms_lat}{point.dms_lon}\n")


def convert_file(src: str | Path, dst: str | Path) -> list[DatMapInfo]:
    """Convert the ``.dat`` file ``src`` into the ``.map`` file ``dst``."""
    with open(src, encoding="utf-8") as handle:
        maps = parse_dat(handle)
    for info in maps:
        info.process()
    with open(dst, "w", encoding="utf-8") as out:
        write_map(maps, out)
    return maps


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point: convert a ``.dat`` file to a ``.map`` file."""
    parser = argparse.ArgumentParser(description="Convert a .dat file to a .map file.")
    parser.add_argument("src", help="input .dat file")
    parser.add_argument("dst", nargs="?", default=DEFAULT_OUTPUT, help="output .map file")
    args = parser.parse_args(argv)
    try:
        convert_file(args.src, args.dst)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0