import pytest

from gpx_slope.distance import EARTH_RADIUS_M, haversine_distance, point_distance
from gpx_slope.models import RawPoint


class TestHaversineDistance:
    def test_same_point_is_zero(self):
        assert haversine_distance(37.7749, -122.4194, 37.7749, -122.4194) == 0.0

    def test_symmetric(self):
        d1 = haversine_distance(40.4168, -3.7038, 41.3874, 2.1686)
        d2 = haversine_distance(41.3874, 2.1686, 40.4168, -3.7038)
        assert d1 == pytest.approx(d2)

    def test_one_millidegree_on_equator(self):
        assert haversine_distance(0, 0, 0, 0.001) == pytest.approx(111.19, abs=0.01)

    def test_one_degree_latitude(self):
        # One degree of arc on a sphere of radius R
        expected = EARTH_RADIUS_M * 3.141592653589793 / 180
        assert haversine_distance(10, 20, 11, 20) == pytest.approx(expected)

    def test_madrid_to_barcelona(self):
        d = haversine_distance(40.4168, -3.7038, 41.3874, 2.1686)
        assert d == pytest.approx(505_000, rel=0.01)

    def test_antipodal_points(self):
        d = haversine_distance(0, 0, 0, 180)
        assert d == pytest.approx(EARTH_RADIUS_M * 3.141592653589793)

    def test_non_negative(self):
        assert haversine_distance(-33.9, 151.2, 51.5, -0.1) > 0


class TestPointDistance:
    def test_uses_lat_lon_attributes(self):
        a = RawPoint(lat=0.0, lon=0.0, elevation=None)
        b = RawPoint(lat=0.0, lon=0.001, elevation=5.0)
        assert point_distance(a, b) == pytest.approx(haversine_distance(0, 0, 0, 0.001))
