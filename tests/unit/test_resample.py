import pytest

from gpx_slope.distance import point_distance
from gpx_slope.models import RawPoint
from gpx_slope.resample import resample_points


def _line(n, spacing_deg=0.0001):
    """n points along a meridian, ~11.1 m apart."""
    return [RawPoint(lat=45.0 + i * spacing_deg, lon=6.0, elevation=float(i)) for i in range(n)]


class TestResamplePoints:
    def test_empty(self):
        assert resample_points([], 5.0) == []

    def test_single_point(self):
        pts = _line(1)
        assert resample_points(pts, 5.0) == pts

    def test_zero_min_step_keeps_everything(self):
        pts = _line(10)
        assert resample_points(pts, 0.0) == pts

    def test_zero_min_step_keeps_duplicates(self):
        pt = RawPoint(lat=1.0, lon=1.0, elevation=1.0)
        assert resample_points([pt, pt, pt], 0.0) == [pt, pt, pt]

    def test_first_point_always_kept(self):
        pts = _line(5)
        result = resample_points(pts, 10_000.0)
        assert result == [pts[0]]

    def test_greedy_from_last_kept_point(self):
        # ~11.1 m spacing with a 20 m threshold keeps every other point
        pts = _line(7)
        result = resample_points(pts, 20.0)
        assert result == [pts[0], pts[2], pts[4], pts[6]]

    def test_consecutive_kept_points_meet_threshold(self):
        pts = _line(50, spacing_deg=0.00003)
        min_step = 12.0
        result = resample_points(pts, min_step)
        for a, b in zip(result, result[1:]):
            assert point_distance(a, b) >= min_step

    def test_drops_jitter_at_the_same_spot(self):
        a = RawPoint(lat=45.0, lon=6.0, elevation=100.0)
        jitter = RawPoint(lat=45.000001, lon=6.0, elevation=101.0)
        b = RawPoint(lat=45.001, lon=6.0, elevation=110.0)
        assert resample_points([a, jitter, b], 2.0) == [a, b]

    def test_distance_underestimates_with_min_step(self):
        # A zig-zag: measuring from the last kept point shortens the path
        pts = [
            RawPoint(lat=45.0, lon=6.0, elevation=0.0),
            RawPoint(lat=45.0, lon=6.0001, elevation=0.0),
            RawPoint(lat=45.0, lon=6.0, elevation=0.0),
            RawPoint(lat=45.001, lon=6.0, elevation=0.0),
        ]
        full = sum(point_distance(a, b) for a, b in zip(pts, pts[1:]))
        kept = resample_points(pts, 10.0)
        filtered = sum(point_distance(a, b) for a, b in zip(kept, kept[1:]))
        assert len(kept) == 2
        assert filtered < full
        assert filtered == pytest.approx(point_distance(pts[0], pts[3]))

    def test_does_not_modify_input(self):
        pts = _line(6)
        original = list(pts)
        resample_points(pts, 20.0)
        assert pts == original
