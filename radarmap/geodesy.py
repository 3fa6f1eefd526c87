"""Geodetic conversions between Bessel 1841 coordinates and a local TM grid.

Coordinates in the map files are written as "degree-minute-second decimals"
(``DDD.MMSS``). The grid is a Transverse Mercator projection centred on the
central origin at 127°E, 38°N. Points are plain ``(x, y)`` tuples.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

Point = tuple[float, float]

# Bessel 1841 ellipsoid.
SEMI_MAJOR_AXIS = 6377397.155
E_SQUARED = 0.006674372227347433
E_PRIME_SQUARED = 0.006719218794659982

TM_SCALE_FACTOR = 1.0
KATEC_SCALE_FACTOR = 0.9999

# Meridian arc series coefficients.
_A = 1.005037306048555
_B = 0.005047849240300
_C = 0.000010563786831
_D = 0.000000020633322
_E = 0.000000000038865
_F = 0.000000000000075

# The screen-geometry helpers work with this truncated value of pi.
GEO_PI = 3.14159265
FOURTH_PI = GEO_PI / 4
EARTH_RADIUS = 6371000.0
EARTH_RADIUS_DIV_90 = EARTH_RADIUS / 90

# Central origin of the grid.
ORIGIN_LON = 127.0
ORIGIN_LAT = 38.0

# Grid coordinates on screen are offset by this many units.
SCREEN_OFFSET = 2500.0

_ARC_TOLERANCE = 0.00000001
_MAX_ITERATIONS = 100


def deg2rad(degree: float) -> float:
    """Convert degrees to radians."""
    return degree * math.pi / 180.0


def rad2deg(radian: float) -> float:
    """Convert radians to degrees."""
    return radian * 180.0 / math.pi


def _meridian_arc(phi: float, phi0: float) -> float:
    return SEMI_MAJOR_AXIS * (1 - E_SQUARED) * (
        _A * (phi - phi0)
        - 1.0 / 2.0 * _B * (math.sin(2.0 * phi) - math.sin(2.0 * phi0))
        + 1.0 / 4.0 * _C * (math.sin(4.0 * phi) - math.sin(4.0 * phi0))
        - 1.0 / 6.0 * _D * (math.sin(6.0 * phi) - math.sin(6.0 * phi0))
        + 1.0 / 8.0 * _E * (math.sin(8.0 * phi) - math.sin(8.0 * phi0))
        - 1.0 / 10.0 * _F * (math.sin(10.0 * phi) - math.sin(10.0 * phi0))
    )


def bessel_to_tm(lon: float, lat: float, lon_org: float, lat_org: float) -> Point:
    """Project decimal-degree Bessel coordinates onto the TM grid.

    Returns ``(tm_x, tm_y)`` in metres, ``tm_x`` along the meridian and
    ``tm_y`` along the parallel.
    """
    phi = deg2rad(lat)
    lam = deg2rad(lon)
    phi0 = deg2rad(lat_org)

    arc = _meridian_arc(phi, phi0)

    t = math.tan(phi)
    t2 = t * t
    eta = math.sqrt(E_PRIME_SQUARED) * math.cos(phi)
    eta2 = eta * eta
    n = SEMI_MAJOR_AXIS / math.sqrt(1 - E_SQUARED * math.sin(phi) ** 2)
    s = math.sin(phi)
    c = math.cos(phi)

    dl = lam - deg2rad(lon_org)

    x = (
        arc
        + dl ** 2 / 2.0 * n * s * c
        + dl ** 4 / 24.0 * n * s * c ** 3 * (5.0 - t2 + 9.0 * eta2 + 4.0 * eta ** 4)
        + dl ** 6 / 720.0 * n * s * c ** 5
        * (61.0 - 58.0 * t2 + t2 + 270.0 * eta2 - 330.0 * t2 * eta2)
        + dl ** 8 / 40320.0 * n * s * c ** 7
        * (1385.0 - 3111.0 * t2 + 543.0 * t ** 4 - t ** 6)
    )

    y = (
        dl * n * c
        + dl ** 3 / 6.0 * n * c ** 3 * (1 - t2 + eta2)
        + dl ** 5 / 120.0 * n * c ** 5
        * (5.0 - 18.0 * t2 + t ** 4 + 14.0 * eta2 - 58.0 * t2 * eta2)
        + dl ** 7 / 5040.0 * n * c ** 7 * (61.0 - 479.0 * t2 + 179.0 * t ** 4 - t ** 6)
    )

    return TM_SCALE_FACTOR * x, TM_SCALE_FACTOR * y


def tm_to_bessel(tm_x: float, tm_y: float, lon_org: float, lat_org: float) -> Point:
    """Invert :func:`bessel_to_tm`; returns ``(lon, lat)`` in decimal degrees.

    Raises ``ArithmeticError`` if the footpoint latitude does not converge.
    """
    x = tm_x
    y = tm_y
    step = SEMI_MAJOR_AXIS * (1.0 - E_SQUARED) * _A
    phi0 = deg2rad(lat_org)
    phi1 = phi0 + x / step

    for _ in range(_MAX_ITERATIONS):
        arc = _meridian_arc(phi1, phi0)
        if abs(x - arc) < _ARC_TOLERANCE:
            break
        phi1 = phi1 + (x - arc) / step
    else:
        raise ArithmeticError("footpoint latitude did not converge")

    w1 = math.sqrt(1.0 - E_SQUARED * math.sin(phi1) ** 2)
    n1 = SEMI_MAJOR_AXIS / w1
    eta1 = E_PRIME_SQUARED * math.cos(phi1) ** 2
    t1 = math.tan(phi1)
    t1s = t1 * t1
    cos1 = math.cos(phi1)

    phi_b1 = t1 / (2.0 * n1 ** 2) * (1.0 + eta1)
    phi_b2 = t1 / (24.0 * n1 ** 4) * (
        5.0 + 3.0 * t1s + 6.0 * eta1 - 6 * t1s * eta1 - 3.0 * eta1 ** 2
        - 9.0 * t1s * eta1 ** 2
    )
    phi_b3 = t1 / (720.0 * n1 ** 6) * (
        61.0 + 90.0 * t1s + 45.0 * eta1 ** 2 + 107.0 * eta1
        - 162.0 * t1s * eta1 - 45.0 * t1s ** 2 * eta1
    )
    phi_b4 = t1 / (40320.0 * n1 ** 8) * (
        1385.0 + 3633.0 * t1s + 4095.0 * eta1 ** 2 + 1575 * eta1 ** 3
    )

    lam_b1 = 1.0 / (n1 * cos1)
    lam_b2 = 1.0 / 6.0 * 1.0 / (n1 ** 3 * cos1) * (1.0 + 2.0 * t1 ** 2 + eta1)
    lam_b3 = 1.0 / 120 * 1.0 / (n1 ** 5 * cos1) * (
        5.0 + 28.0 * t1s + 24.0 * t1s ** 2 + 6.0 * eta1 + 8.0 * t1s * eta1
    )
    lam_b4 = 1.0 / 5040.0 * 1.0 / (n1 ** 7 * cos1) * (
        61.0 + 662.0 * t1s + 1320.0 * t1s ** 2 + 720.0 * t1s ** 3
    )

    phi = phi1 - phi_b1 * y ** 2 + phi_b2 * y ** 4 - phi_b3 * y ** 6 + phi_b4 * y ** 8
    lam = lam_b1 * y - lam_b2 * y ** 3 + lam_b3 * y ** 5 - lam_b4 * y ** 7

    return rad2deg(lam) + lon_org, rad2deg(phi)


_WGS84_R0 = 6378137.0
_WGS84_ECCENTRICITY = 0.081819191


def _radii(phi: float) -> tuple[float, float]:
    e2 = _WGS84_ECCENTRICITY * _WGS84_ECCENTRICITY
    den = math.sqrt(1 - e2 * math.sin(phi) * math.sin(phi))
    rn = _WGS84_R0 * (1 - e2) / (den * den * den)
    re = _WGS84_R0 / den
    return rn, re


def simple_bessel_to_tm(
    alt: float, lon: float, lat: float, lon_org: float, lat_org: float
) -> Point:
    """Flat-earth approximation of the grid offset; returns ``(tm_x, tm_y)``.

    The radii of curvature are taken at the angle given by ``lon``.
    """
    phi = deg2rad(lon)
    rn, re = _radii(phi)
    tm_x = (rn + alt) * deg2rad(lon - lon_org)
    tm_y = (re + alt) * deg2rad(lat - lat_org) * math.cos(phi)
    return tm_x, tm_y


def simple_tm_to_bessel(
    alt: float, lon: float, lon_org: float, lat_org: float, tm_x: float, tm_y: float
) -> Point:
    """Invert :func:`simple_bessel_to_tm`; ``lon`` is the starting estimate.

    Returns ``(lon, lat)``.
    """
    rn, _ = _radii(deg2rad(lon))
    new_lon = (tm_x / (rn + alt)) * 180 / math.pi + lon_org

    phi = deg2rad(new_lon)
    _, re = _radii(phi)
    new_lat = ((tm_y / (re + alt)) * 180 / math.pi) / math.cos(phi) + lat_org
    return new_lon, new_lat


def min_second_to_degree(num: float) -> float:
    """Convert a ``DDD.MMSS`` value into decimal degrees."""
    whole = int(num)
    minutes = int((num - whole) * 100)
    seconds = ((num * 100) - (whole * 100 + minutes)) * 100
    return whole + minutes / 60 + seconds / 3600


def degree_to_dms(num: float) -> float:
    """Convert decimal degrees into a ``DDD.MMSS`` value."""
    degree = float(int(num))
    minutes = float(int((num - degree) * 60))
    seconds = ((num - degree) - minutes / 60) * 3600
    return degree + minutes / 100 + seconds / 10000


def rotate(point: Point, angle: int) -> Point:
    """Rotate a point about the origin by ``angle`` degrees.

    A half turn is followed by a reflection through the origin, so an angle
    of 180 leaves the point where it was.
    """
    x, y = point
    rad = math.pi / 180 * angle
    nx = x * math.cos(rad) + y * math.sin(rad)
    ny = x * -math.sin(rad) + y * math.cos(rad)
    if angle == 180:
        nx, ny = -nx, -ny
    return nx, ny


def rotate_about(origin: Point, point: Point, angle: int) -> Point:
    """Rotate ``point`` about ``origin`` by ``angle`` degrees.

    For an angle of 180 the result is reflected through (0, 0).
    """
    u, v = origin
    x, y = point
    rad = GEO_PI / 180 * angle
    nx = (x - u) * math.cos(rad) + (y - v) * math.sin(rad) + u
    ny = (x - u) * -math.sin(rad) + (y - v) * math.cos(rad) + v
    if angle == 180:
        nx, ny = -nx, -ny
    return nx, ny


def angle_between(p1: Point, p2: Point) -> float:
    """Direction from ``p1`` to ``p2`` in degrees, counter-clockwise from east.

    Screen coordinates are assumed, so y grows downwards.
    """
    x1, y1 = p1
    x2, y2 = p2
    dx = x2 - x1
    dy = -(y2 - y1)

    if x1 <= x2 and y1 >= y2:
        mode = 1
    elif x1 > x2 and y1 >= y2:
        mode = 2
    elif x1 > x2 and y1 < y2:
        mode = 3
    else:
        mode = 4
    return angle_from_deltas(dx, dy, mode)


def angle_from_deltas(dx: float, dy: float, mode: int) -> float:
    """Angle in degrees of the vector ``(dx, dy)`` lying in quadrant ``mode``."""
    if dx == 0:
        dx = 0.00000001
    angle = math.atan(dy / dx) * (180.0 / GEO_PI)
    if mode in (2, 3):
        angle = 180 + angle
    elif mode == 4:
        angle = 360 + angle
    return angle


def points_at_distance(origin: Point, slope: float, dist: float) -> list[Point]:
    """The two points at ``dist`` from ``origin`` on the line of ``slope``."""
    ox, oy = origin
    root = math.sqrt(1 + slope * slope)
    nx = dist / root
    ny = dist * slope / root
    return [(ox + nx, oy + ny), (ox - nx, oy - ny)]


@dataclass
class Projection:
    """Converts between ``DDD.MMSS`` coordinates and kilometre grid units."""

    scale: int = 1

    def latlon_to_xy(self, lon: float, lat: float) -> Point:
        """Project a ``DDD.MMSS`` position onto the grid, in scaled km."""
        lon_deg = min_second_to_degree(lon)
        lat_deg = min_second_to_degree(lat)
        x, y = bessel_to_tm(lon_deg, lat_deg, ORIGIN_LON, ORIGIN_LAT)
        return (x / 1000) * self.scale, (y / 1000) * self.scale

    def xy_to_latlon(self, x: float, y: float, angle: int = 0) -> Point:
        """Convert screen grid coordinates back to ``(lon, lat)`` in ``DDD.MMSS``."""
        tm_x = (x - SCREEN_OFFSET) / self.scale
        tm_y = (y - SCREEN_OFFSET) / self.scale

        if angle != 0:
            tm_x, tm_y = rotate((tm_x, tm_y), angle)
            tm_x = tm_x * 1000 * -1
            tm_y = tm_y * 1000 * -1
        else:
            tm_x *= 1000 * self.scale
            tm_y *= 1000 * self.scale

        lon, lat = tm_to_bessel(tm_x, tm_y, ORIGIN_LON, ORIGIN_LAT)
        return degree_to_dms(lon), degree_to_dms(lat)

    def distance(self, x1: float, y1: float, x2: float, y2: float) -> float:
        """Great-circle distance in metres between two screen grid points."""
        lon1, lat1 = self.xy_to_latlon(x1, y1)
        lon2, lat2 = self.xy_to_latlon(x2, y2)

        dlon = abs((lon2 - lon1) * math.pi / 180)
        dlat = abs((lat2 - lat1) * math.pi / 180)

        s = abs(
            math.sin(dlat / 2) ** 2
            + math.cos(lat1 * math.pi / 180)
            * math.cos(lat2 * math.pi / 180)
            * math.sin(dlon / 2) ** 2
        )
        return 2 * SEMI_MAJOR_AXIS * math.asin(math.sqrt(s))

    def distance_from_one_degree(self) -> Point:
        """Grid offset in km of the reference point 37°59'N on 127°E."""
        lon = min_second_to_degree(127.0000)
        lat = min_second_to_degree(37.5900)
        x, y = bessel_to_tm(lat, lon, ORIGIN_LAT, ORIGIN_LON)
        return x / 1000, y / 1000