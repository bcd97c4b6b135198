"""
Tests for zone radius and distance geometry.
"""

import math

import pytest

from services.zone import zone_radius, room_zone_radius, distance_meters, EARTH_RADIUS_M


STARTED = 1_700_000_000_000


class TestZoneRadius:

    def test_unstarted_room_keeps_start_radius(self):
        for now in (0, STARTED, STARTED + 10**9):
            assert zone_radius(800, 20, 50, None, now) == 800

    def test_shrinks_by_whole_steps(self):
        # 45s into a 20s step: two full steps
        assert zone_radius(800, 20, 50, STARTED, STARTED + 45_000) == 700

    def test_partial_step_does_not_shrink(self):
        assert zone_radius(800, 20, 50, STARTED, STARTED + 19_999) == 800
        assert zone_radius(800, 20, 50, STARTED, STARTED + 20_000) == 750

    def test_floor_at_twenty_meters(self):
        assert zone_radius(800, 1, 100_000, STARTED, STARTED + 1_000) == 20
        assert zone_radius(800, 20, 50, STARTED, STARTED + 10**10) == 20

    def test_monotonically_non_increasing(self):
        radii = [zone_radius(500, 7, 13, STARTED, STARTED + t * 1_000) for t in range(0, 400, 3)]
        assert all(a >= b for a, b in zip(radii, radii[1:]))
        assert radii[-1] == 20

    def test_clock_skew_before_start_is_not_negative_elapsed(self):
        assert zone_radius(800, 20, 50, STARTED, STARTED - 60_000) == 800

    def test_room_dict_helper(self):
        room = {"startRadius": 800, "shrinkStepSec": 20, "shrinkAmount": 50, "startedAt": STARTED}
        assert room_zone_radius(room, STARTED + 45_000) == 700


class TestDistance:

    def test_one_degree_longitude_at_equator(self):
        assert distance_meters(0, 0, 0, 1) == pytest.approx(111_195, abs=1)

    def test_same_point_is_zero(self):
        assert distance_meters(10.0, 10.0, 10.0, 10.0) == 0

    @pytest.mark.parametrize("a,b", [
        ((48.8566, 2.3522), (51.5074, -0.1278)),
        ((-33.8688, 151.2093), (35.6762, 139.6503)),
        ((0.0, 179.9), (0.0, -179.9)),
    ])
    def test_symmetric(self, a, b):
        assert distance_meters(*a, *b) == pytest.approx(distance_meters(*b, *a))

    @pytest.mark.parametrize("coords", [
        (None, 0, 0, 0),
        (0, None, 0, 0),
        (0, 0, None, 0),
        (0, 0, 0, None),
    ])
    def test_missing_component_is_infinite(self, coords):
        assert math.isinf(distance_meters(*coords))

    @pytest.mark.parametrize("a,b", [
        ((-12.0, 0.0), (12.0, 180.0)),
        ((0.0, 0.0), (0.0, 180.0)),
        ((45.0, 90.0), (-45.0, -90.0)),
        ((90.0, 0.0), (-90.0, 0.0)),
    ])
    def test_antipodal_points_are_half_the_circumference(self, a, b):
        assert distance_meters(*a, *b) == pytest.approx(math.pi * EARTH_RADIUS_M, rel=1e-9)

    @pytest.mark.parametrize("a,b", [
        ((90.0, 0.0), (90.0, 123.0)),
        ((-90.0, -45.0), (-90.0, 170.0)),
        ((0.0, 180.0), (0.0, -180.0)),
    ])
    def test_same_place_written_differently_is_zero(self, a, b):
        assert distance_meters(*a, *b) == pytest.approx(0, abs=1e-6)

    def test_crossing_the_antimeridian_takes_the_short_way(self):
        assert distance_meters(0.0, 179.9, 0.0, -179.9) == pytest.approx(22_239, abs=1)
