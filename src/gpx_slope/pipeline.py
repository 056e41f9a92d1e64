"""End-to-end computation from GPX text to chart series.

A run either returns a complete TrackProfile or raises ParseError; no state
is kept between runs, so callers hold on to the last result themselves.
"""

import logging
import math

from gpx_slope.chart_data import adapt_for_chart
from gpx_slope.models import ChartKind, ProcessingOptions, TrackProfile
from gpx_slope.parser import ParseError, extract_route_name, parse_track
from gpx_slope.series import build_series
from gpx_slope.smoothing import normalize_window, smooth_slopes

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Route name"
DEFAULT_MIN_STEP = 2.0  # meters
MAX_MIN_STEP = 50.0  # meters


def normalize_min_step(value) -> float:
    """Clamp the minimum step to [0, 50] meters.

    Missing, non-numeric and zero values fall back to the 2 m default.
    """
    try:
        step = float(value)
    except (TypeError, ValueError):
        return DEFAULT_MIN_STEP
    if math.isnan(step):
        return DEFAULT_MIN_STEP
    step = min(max(step, 0.0), MAX_MIN_STEP)
    return step or DEFAULT_MIN_STEP


def resolve_title(name: str | None, requested: str | None) -> str:
    if name:
        return name
    if requested and requested.strip():
        return requested.strip()
    return DEFAULT_TITLE


def compute(text: str, options: ProcessingOptions | None = None) -> TrackProfile:
    """Parse GPX text and build rows, stats and both chart series.

    Args:
        text: Raw GPX document
        options: Step, smoothing and title settings; defaults if omitted

    Raises:
        ParseError: if the document cannot produce a track.
    """
    if options is None:
        options = ProcessingOptions()

    text = text.strip() if text else ""
    if not text:
        raise ParseError("Load a valid GPX file.")

    name = extract_route_name(text)
    points = parse_track(text)

    min_step = normalize_min_step(options.min_step)
    window = normalize_window(options.smooth_window)

    rows, stats = build_series(points, min_step)
    rows = smooth_slopes(rows, options.smooth, window)

    profile = TrackProfile(
        name=name,
        title=resolve_title(name, options.title),
        rows=rows,
        stats=stats,
        slope_chart=adapt_for_chart(rows, ChartKind.SLOPE),
        elevation_chart=adapt_for_chart(rows, ChartKind.ELEVATION),
        options=options,
    )
    logger.info(
        "Processed %d of %d points, %.0f m (min step %.1f m, window %d)",
        len(rows), len(points), stats.total_distance, min_step, window,
    )
    return profile
