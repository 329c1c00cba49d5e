"""Tests for haversine distance accumulation."""

import math

import pytest

from stride_track.core.distance import (
    EARTH_RADIUS_M,
    DistanceAccumulator,
    haversine_distance,
)
from stride_track.domain.sample import GeoPosition


def _pos(lat: float, lon: float) -> GeoPosition:
    return GeoPosition(latitude=lat, longitude=lon)


class TestHaversine:
    def test_one_degree_longitude_at_equator(self) -> None:
        assert haversine_distance(0, 0, 0, 1) == pytest.approx(111_195, rel=0.01)
        assert haversine_distance(0, 0, 0, 1) == pytest.approx(EARTH_RADIUS_M * math.pi / 180)

    def test_one_degree_latitude(self) -> None:
        assert haversine_distance(10, 20, 11, 20) == pytest.approx(EARTH_RADIUS_M * math.pi / 180)

    def test_symmetric(self) -> None:
        a = haversine_distance(52.3702, 4.8952, 48.8566, 2.3522)
        b = haversine_distance(48.8566, 2.3522, 52.3702, 4.8952)
        assert a == pytest.approx(b)

    def test_amsterdam_to_paris(self) -> None:
        # ~430 km great-circle
        assert haversine_distance(52.3702, 4.8952, 48.8566, 2.3522) == pytest.approx(430_000, rel=0.02)

    def test_antipodal_sweep_never_raises(self) -> None:
        for i in range(1, 9000):
            lat = i / 100
            assert haversine_distance(lat, 0, -lat, 180) == pytest.approx(math.pi * EARTH_RADIUS_M)

    def test_out_of_range_latitude_does_not_raise(self) -> None:
        assert haversine_distance(123.0, 0, -123.0, 90) >= 0.0

    @pytest.mark.parametrize("bad", [math.inf, -math.inf, math.nan])
    def test_non_finite_input_is_nan(self, bad: float) -> None:
        assert math.isnan(haversine_distance(0, 0, bad, 0))
        assert math.isnan(haversine_distance(0, bad, 0, 0))

    def test_custom_radius(self) -> None:
        assert haversine_distance(0, 0, 0, 1, radius=1.0) == pytest.approx(math.pi / 180)


class TestDistanceAccumulator:
    def test_first_update_returns_zero_and_sets_reference(self) -> None:
        acc = DistanceAccumulator()
        pos = _pos(40.0, -73.0)
        assert acc.update(pos) == 0.0
        assert acc.reference == pos

    def test_reference_starts_empty(self) -> None:
        assert DistanceAccumulator().reference is None

    def test_equator_degree(self) -> None:
        acc = DistanceAccumulator()
        acc.update(_pos(0, 0))
        assert acc.update(_pos(0, 1)) == pytest.approx(111_195, rel=0.01)

    def test_same_position_twice_is_zero(self) -> None:
        acc = DistanceAccumulator()
        acc.update(_pos(51.5, -0.12))
        assert acc.update(_pos(51.5, -0.12)) == 0.0

    def test_reference_moves_with_each_fix(self) -> None:
        acc = DistanceAccumulator()
        acc.update(_pos(0, 0))
        acc.update(_pos(0, 1))
        # Measured from (0, 1), not from the first fix
        assert acc.update(_pos(0, 2)) == pytest.approx(EARTH_RADIUS_M * math.pi / 180)
        assert acc.reference == _pos(0, 2)

    def test_large_jump_is_not_filtered(self) -> None:
        acc = DistanceAccumulator()
        acc.update(_pos(0, 0))
        assert acc.update(_pos(0, 90)) == pytest.approx(EARTH_RADIUS_M * math.pi / 2)

    def test_deltas_are_never_negative(self) -> None:
        acc = DistanceAccumulator()
        track = [(0, 0), (0.001, -0.001), (-0.5, 0.3), (10, -170), (-10, 170), (89.9, 0)]
        for lat, lon in track:
            assert acc.update(_pos(lat, lon)) >= 0.0

    def test_out_of_range_coordinates_accepted(self) -> None:
        acc = DistanceAccumulator()
        acc.update(_pos(0, 0))
        assert acc.update(_pos(0, 361)) >= 0.0

    def test_nan_propagates(self) -> None:
        acc = DistanceAccumulator()
        acc.update(_pos(0, 0))
        assert math.isnan(acc.update(_pos(math.nan, 0)))

    def test_infinite_coordinate_propagates_nan(self) -> None:
        acc = DistanceAccumulator()
        acc.update(_pos(1, 1))
        assert math.isnan(acc.update(_pos(math.inf, 0)))
        assert acc.reference == _pos(math.inf, 0)

    @pytest.mark.parametrize("lat", [0.08, 0.5, 12.34, 45.0, 89.99])
    def test_near_antipodal_fixes_give_half_circumference(self, lat: float) -> None:
        acc = DistanceAccumulator()
        acc.update(_pos(lat, 0))
        assert acc.update(_pos(-lat, 180)) == pytest.approx(math.pi * EARTH_RADIUS_M)

    def test_reset_makes_next_update_first(self) -> None:
        acc = DistanceAccumulator()
        acc.update(_pos(0, 0))
        acc.reset()
        assert acc.reference is None
        assert acc.update(_pos(0, 1)) == 0.0

    def test_custom_radius(self) -> None:
        acc = DistanceAccumulator(radius=1000.0)
        acc.update(_pos(0, 0))
        assert acc.update(_pos(0, 1)) == pytest.approx(1000.0 * math.pi / 180)
