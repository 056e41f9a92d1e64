from gpx_slope.distance import point_distance
from gpx_slope.models import RawPoint


def resample_points(points: list[RawPoint], min_step: float) -> list[RawPoint]:
    """Drop points closer than min_step meters to the last kept point.

    The first point is always kept. This is a greedy forward filter, not a
    uniform resample: kept points are at least min_step apart but the gap
    between them is unbounded. Because distance is measured from the last
    kept point rather than the last seen one, the summed distance of the
    result underestimates the true path length when min_step > 0.
    """
    if not points:
        return []

    kept = [points[0]]
    for pt in points[1:]:
        if point_distance(kept[-1], pt) >= min_step:
            kept.append(pt)
    return kept
