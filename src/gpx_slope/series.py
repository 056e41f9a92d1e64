"""Per-step distance, elevation delta and slope for a point sequence."""

import math

from gpx_slope.distance import point_distance
from gpx_slope.models import RawPoint, Row, TrackStats
from gpx_slope.resample import resample_points


def _update_range(current_min: float | None, current_max: float | None, value: float) -> tuple[float, float]:
    if current_min is None or value < current_min:
        current_min = value
    if current_max is None or value > current_max:
        current_max = value
    return current_min, current_max


def _finite_or_none(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return value


def build_rows(points: list[RawPoint]) -> tuple[list[Row], TrackStats]:
    """Walk already-filtered points, accumulating distance and slope.

    Slope is None for the first row, when either endpoint lacks elevation,
    and when two consecutive points are at the same location (zero step).
    """
    rows: list[Row] = []
    stats = TrackStats()

    cum_dist = 0.0
    prev_ele = None
    for i, pt in enumerate(points):
        ele = _finite_or_none(pt.elevation)
        if ele is not None:
            stats.min_elevation, stats.max_elevation = _update_range(
                stats.min_elevation, stats.max_elevation, ele
            )

        if i == 0:
            rows.append(Row(
                index=1,
                lat=pt.lat,
                lon=pt.lon,
                elevation=ele,
                step_distance=0.0,
                cumulative_distance=0.0,
            ))
            prev_ele = ele
            continue

        step = point_distance(points[i - 1], pt)
        cum_dist += step

        delta = None
        if prev_ele is not None and ele is not None:
            delta = ele - prev_ele
        prev_ele = ele

        slope = None
        if step > 0 and delta is not None:
            slope = (delta / step) * 100
            stats.min_slope_percent, stats.max_slope_percent = _update_range(
                stats.min_slope_percent, stats.max_slope_percent, slope
            )

        rows.append(Row(
            index=i + 1,
            lat=pt.lat,
            lon=pt.lon,
            elevation=ele,
            step_distance=step,
            cumulative_distance=cum_dist,
            elevation_delta=delta,
            slope_percent=slope,
        ))

    stats.total_distance = cum_dist
    return rows, stats


def build_series(points: list[RawPoint], min_step: float) -> tuple[list[Row], TrackStats]:
    """Resample points to min_step meters and build rows and stats."""
    return build_rows(resample_points(points, min_step))
