import math

import pytest

from radarmap.geodesy import (
    ORIGIN_LAT,
    ORIGIN_LON,
    Projection,
    angle_between,
    angle_from_deltas,
    bessel_to_tm,
    deg2rad,
    degree_to_dms,
    min_second_to_degree,
    points_at_distance,
    rad2deg,
    rotate,
    rotate_about,
    simple_bessel_to_tm,
    simple_tm_to_bessel,
    tm_to_bessel,
)


def test_deg2rad_half_turn():
    assert deg2rad(180) == pytest.approx(math.pi)


def test_rad2deg_inverts_deg2rad():
    assert rad2deg(deg2rad(38.25)) == pytest.approx(38.25)


def test_bessel_to_tm_origin_is_zero():
    assert bessel_to_tm(ORIGIN_LON, ORIGIN_LAT, ORIGIN_LON, ORIGIN_LAT) == (0.0, 0.0)


def test_tm_to_bessel_origin():
    lon, lat = tm_to_bessel(0.0, 0.0, ORIGIN_LON, ORIGIN_LAT)
    assert lon == pytest.approx(ORIGIN_LON, abs=1e-9)
    assert lat == pytest.approx(ORIGIN_LAT, abs=1e-9)


@pytest.mark.parametrize("lon,lat", [(127.1, 38.1), (126.9, 37.6), (127.4, 37.2)])
def test_tm_round_trip(lon, lat):
    x, y = bessel_to_tm(lon, lat, ORIGIN_LON, ORIGIN_LAT)
    back_lon, back_lat = tm_to_bessel(x, y, ORIGIN_LON, ORIGIN_LAT)
    assert back_lon == pytest.approx(lon, abs=1e-5)
    assert back_lat == pytest.approx(lat, abs=1e-5)


def test_bessel_to_tm_signs_follow_direction():
    x, y = bessel_to_tm(127.2, 38.3, ORIGIN_LON, ORIGIN_LAT)
    assert x > 0
    assert y > 0
    x, y = bessel_to_tm(126.8, 37.7, ORIGIN_LON, ORIGIN_LAT)
    assert x < 0
    assert y < 0


def test_simple_bessel_to_tm_origin_is_zero():
    assert simple_bessel_to_tm(1, 127.0, 38.0, 127.0, 38.0) == (0.0, 0.0)


def test_simple_round_trip():
    alt, lon, lat = 1.0, 127.3, 37.8
    tm_x, tm_y = simple_bessel_to_tm(alt, lon, lat, ORIGIN_LON, ORIGIN_LAT)
    back_lon, back_lat = simple_tm_to_bessel(alt, lon, ORIGIN_LON, ORIGIN_LAT, tm_x, tm_y)
    assert back_lon == pytest.approx(lon, abs=1e-9)
    assert back_lat == pytest.approx(lat, abs=1e-9)


def test_min_second_to_degree_minutes_and_seconds():
    assert min_second_to_degree(10.125) == pytest.approx(10 + 12 / 60 + 50 / 3600)


def test_min_second_to_degree_whole_minutes():
    assert min_second_to_degree(37.5) == pytest.approx(37 + 50 / 60)


def test_min_second_to_degree_is_odd():
    assert min_second_to_degree(-10.125) == pytest.approx(-min_second_to_degree(10.125))


@pytest.mark.parametrize("dms", [10.125, 127.2530, 37.3045])
def test_degree_to_dms_round_trip(dms):
    assert degree_to_dms(min_second_to_degree(dms)) == pytest.approx(dms, abs=1e-6)


def test_rotate_preserves_length():
    x, y = rotate((3.0, 4.0), 37)
    assert math.hypot(x, y) == pytest.approx(5.0)


def test_rotate_inverse():
    x, y = rotate(rotate((3.0, 4.0), 30), -30)
    assert (x, y) == pytest.approx((3.0, 4.0))


def test_rotate_half_turn_returns_point():
    assert rotate((3.0, 4.0), 180) == pytest.approx((3.0, 4.0))


def test_rotate_zero_is_identity():
    assert rotate((3.0, -2.0), 0) == pytest.approx((3.0, -2.0))


def test_rotate_about_zero_is_identity():
    assert rotate_about((10.0, 20.0), (13.0, 24.0), 0) == pytest.approx((13.0, 24.0))


def test_rotate_about_keeps_distance_to_origin():
    origin = (10.0, 20.0)
    x, y = rotate_about(origin, (13.0, 24.0), 45)
    assert math.hypot(x - origin[0], y - origin[1]) == pytest.approx(5.0)


def test_rotate_about_half_turn_reflects_through_zero():
    origin = (10.0, 20.0)
    point = (13.0, 24.0)
    x, y = rotate_about(origin, point, 180)
    assert x == pytest.approx(-(2 * origin[0] - point[0]), abs=1e-6)
    assert y == pytest.approx(-(2 * origin[1] - point[1]), abs=1e-6)


@pytest.mark.parametrize(
    "p2",
    [(1, -1), (-1, -1), (-1, 1), (1, 1), (1, 0), (-1, 0), (0, -1), (0, 1), (3, -2)],
)
def test_angle_between_points_along_vector(p2):
    p1 = (5.0, 5.0)
    target = (p1[0] + p2[0], p1[1] + p2[1])
    angle = angle_between(p1, target)
    length = math.hypot(p2[0], p2[1])
    assert 0 <= angle < 360
    assert math.cos(math.radians(angle)) == pytest.approx(p2[0] / length, abs=1e-6)
    assert math.sin(math.radians(angle)) == pytest.approx(-p2[1] / length, abs=1e-6)


def test_angle_from_deltas_vertical():
    assert angle_from_deltas(0, 1, 1) == pytest.approx(90, abs=1e-5)


def test_angle_from_deltas_mode_offsets():
    base = angle_from_deltas(2.0, 1.0, 1)
    assert angle_from_deltas(2.0, 1.0, 2) == pytest.approx(base + 180)
    assert angle_from_deltas(2.0, 1.0, 3) == pytest.approx(base + 180)
    assert angle_from_deltas(2.0, 1.0, 4) == pytest.approx(base + 360)


def test_points_at_distance():
    origin = (1.0, 2.0)
    slope = 0.5
    points = points_at_distance(origin, slope, 3.0)
    assert len(points) == 2
    for px, py in points:
        assert math.hypot(px - origin[0], py - origin[1]) == pytest.approx(3.0)
        assert (py - origin[1]) / (px - origin[0]) == pytest.approx(slope)
    (ax, ay), (bx, by) = points
    assert ((ax + bx) / 2, (ay + by) / 2) == pytest.approx(origin)


def test_projection_origin_maps_to_zero():
    assert Projection().latlon_to_xy(127.0, 38.0) == pytest.approx((0.0, 0.0))


def test_projection_scale_multiplies_grid():
    plain = Projection().latlon_to_xy(127.153, 37.3045)
    scaled = Projection(scale=3).latlon_to_xy(127.153, 37.3045)
    assert scaled == pytest.approx((plain[0] * 3, plain[1] * 3))


def test_projection_round_trip():
    projection = Projection()
    lon, lat = 127.1530, 37.3045
    x, y = projection.latlon_to_xy(lon, lat)
    back_lon, back_lat = projection.xy_to_latlon(x + 2500, y + 2500)
    assert back_lon == pytest.approx(lon, abs=1e-5)
    assert back_lat == pytest.approx(lat, abs=1e-5)


def test_projection_rotation_leaves_screen_origin():
    projection = Projection()
    assert projection.xy_to_latlon(2500, 2500, 90) == projection.xy_to_latlon(2500, 2500)


def test_distance_to_self_is_zero():
    assert Projection().distance(2510.0, 2490.0, 2510.0, 2490.0) == 0.0


def test_distance_is_symmetric_and_positive():
    projection = Projection()
    forward = projection.distance(2500.0, 2500.0, 2520.0, 2510.0)
    backward = projection.distance(2520.0, 2510.0, 2500.0, 2500.0)
    assert forward > 0
    assert forward == pytest.approx(backward)


def test_distance_grows_with_separation():
    projection = Projection()
    near = projection.distance(2500.0, 2500.0, 2505.0, 2500.0)
    far = projection.distance(2500.0, 2500.0, 2550.0, 2500.0)
    assert far > near