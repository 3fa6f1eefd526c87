import pytest

from radarmap.aircraft import TRAIL_LENGTH, Aircraft, TrailPoint, now_seconds


def make(heading=100, alt=30000, speed=100, x=200, y=200, timestamp=100):
    return Aircraft("TEST_0", 50, 5, heading, alt, "BOGUS_0", speed, x, y, 10,
                    timestamp=timestamp)


def test_initial_trail_at_start_position():
    a = make()
    assert a.trail == [TrailPoint(200, 200)] * TRAIL_LENGTH
    assert a.clear_heading == a.heading == 100


def test_turn_left_by_rate():
    a = make(heading=100)
    a.clear_heading = 80
    a.step(1)
    assert a.heading == 100 - a.turn_rate


def test_turn_does_not_overshoot():
    a = make(heading=100)
    a.clear_heading = 80
    a.step(10)
    assert a.heading == 80


def test_turn_through_north_wraps():
    a = make(heading=10)
    a.clear_heading = 350
    a.step(4)
    assert a.heading == 350


def test_clearance_heading_normalised():
    a = make(heading=10)
    a.clear_heading = 370
    a.step(0)
    assert a.clear_heading == 10
    assert a.heading == 10


def test_descent_clipped_to_clearance():
    a = make(alt=30000)
    a.clear_alt = 1000
    a.step(1)
    assert 1000 < a.alt < 30000
    a.step(10000)
    assert a.alt == 1000


def test_acceleration_updates_pixel_speed():
    a = make(speed=100)
    a.clear_speed = 200
    a.step(2)
    assert 100 < a.speed < 200
    assert a.speed_pixels == pytest.approx(a.speed * 0.1)
    a.step(100)
    assert a.speed == 200


@pytest.mark.parametrize(
    "heading, dx_sign, dy_sign",
    [(0, 0, -1), (90, 1, 0), (180, 0, 1), (270, -1, 0)],
)
def test_movement_direction(heading, dx_sign, dy_sign):
    a = make(heading=heading)
    a.step(0)
    dx, dy = a.x - 200, a.y - 200
    assert (dx > 0) - (dx < 0) == dx_sign
    assert (dy > 0) - (dy < 0) == dy_sign
    assert abs(dx) + abs(dy) == 10


def test_trail_shifts_previous_positions():
    a = make(heading=90)
    first = (a.x, a.y)
    a.step(0)
    second = (a.x, a.y)
    a.step(0)
    assert (a.trail[0].x, a.trail[0].y) == second
    assert (a.trail[1].x, a.trail[1].y) == first
    assert len(a.trail) == TRAIL_LENGTH


def test_process_uses_elapsed_and_records_time():
    a = make(heading=100, timestamp=100)
    a.clear_heading = 80
    a.process(102)
    assert a.timestamp == 102
    assert a.heading == 100 - 2 * a.turn_rate


def test_bounding_rect_around_position():
    a = make(x=40, y=60)
    x, y, w, h = a.bounding_rect()
    assert (x, y) == (39.5, 59.5)
    assert w == h == 10.5


def test_now_seconds_close_to_default_timestamp():
    a = Aircraft("A1", 50, 5, 100, 30000, "X", 200, 0, 0, 10)
    assert abs(a.timestamp - now_seconds()) <= 1