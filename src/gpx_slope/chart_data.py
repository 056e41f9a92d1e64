"""Turn processed rows into chart-ready series and axis domains.

Nothing here draws; the output is plain numbers so any renderer can use it.
"""

import math

from gpx_slope.models import AxisDomain, ChartKind, ChartSeries, Row

SLOPE_STEP = 5  # percent
ELEVATION_STEP = 50  # meters

# (upper bound of total km, tick step in km); last bucket is open-ended
DISTANCE_TICK_BUCKETS = [
    (3, 0.25),
    (8, 0.5),
    (20, 1),
    (50, 2),
]
DISTANCE_TICK_LARGEST_KM = 5


def _ticks(start_multiple: int, end_multiple: int, step: float) -> tuple[float, ...]:
    return tuple(float(k * step) for k in range(start_multiple, end_multiple + 1))


def slope_domain(values: list[float]) -> AxisDomain:
    """Y-domain symmetric around zero, rounded up to a multiple of SLOPE_STEP.

    Args:
        values: Defined slope values; must not be empty
    """
    max_abs = max(abs(min(values)), abs(max(values)))
    multiples = math.ceil(max_abs / SLOPE_STEP)
    max_y = float(multiples * SLOPE_STEP)
    return AxisDomain(min=-max_y, max=max_y, ticks=_ticks(-multiples, multiples, SLOPE_STEP))


def elevation_domain(values: list[float]) -> AxisDomain:
    """Y-domain of the data snapped outward to multiples of ELEVATION_STEP.

    Args:
        values: Defined elevations; must not be empty
    """
    lo = math.floor(min(values) / ELEVATION_STEP)
    hi = math.ceil(max(values) / ELEVATION_STEP)
    return AxisDomain(
        min=float(lo * ELEVATION_STEP),
        max=float(hi * ELEVATION_STEP),
        ticks=_ticks(lo, hi, ELEVATION_STEP),
    )


def distance_tick_step(max_distance: float) -> float:
    """Tick spacing in meters, chosen from the total distance."""
    total_km = max_distance / 1000
    for limit_km, step_km in DISTANCE_TICK_BUCKETS:
        if total_km < limit_km:
            return step_km * 1000
    return DISTANCE_TICK_LARGEST_KM * 1000


def distance_ticks(max_distance: float) -> tuple[float, ...]:
    """Ticks from 0 up to and including max_distance."""
    step = distance_tick_step(max_distance)
    return _ticks(0, int(max_distance // step), step)


def distance_domain(rows: list[Row]) -> AxisDomain:
    max_x = max((r.cumulative_distance for r in rows), default=0.0)
    return AxisDomain(min=0.0, max=max_x, ticks=distance_ticks(max_x))


def _y_value(row: Row, kind: ChartKind) -> float | None:
    if kind is ChartKind.ELEVATION:
        return row.elevation
    # Unsmoothed rows have no smoothed value; the raw slope is the plot value.
    # Smoothing only yields None where the raw slope is None too.
    if row.smoothed_slope_percent is not None:
        return row.smoothed_slope_percent
    return row.slope_percent


def adapt_for_chart(rows: list[Row], kind: ChartKind) -> ChartSeries | None:
    """Build the chart input for one kind of chart.

    Returns:
        The series with its axis domains, or None when there is no defined
        (x, y) pair to draw.
    """
    points = tuple((r.cumulative_distance, _y_value(r, kind)) for r in rows)
    defined = [
        y for x, y in points
        if y is not None and math.isfinite(y) and math.isfinite(x)
    ]
    if not defined:
        return None

    if kind is ChartKind.SLOPE:
        y_domain = slope_domain(defined)
    else:
        y_domain = elevation_domain(defined)

    return ChartSeries(
        kind=kind,
        points=points,
        x_domain=distance_domain(rows),
        y_domain=y_domain,
    )
