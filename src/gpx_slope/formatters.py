"""Formatting utilities for display."""

import math

from gpx_slope.models import TrackProfile, TrackStats

MISSING = "—"


def _is_number(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def format_meters(m: float | None) -> str:
    """Format a distance as whole meters below 1 km, else km with 2 decimals."""
    if not _is_number(m):
        return MISSING
    if m >= 1000:
        return f"{m / 1000:.2f} km"
    return f"{round(m)} m"


def format_distance_tick(m: float) -> str:
    """Axis label for a distance tick: whole km without decimals."""
    km = m / 1000
    if km % 1 == 0:
        return f"{km:.0f} km"
    return f"{km:.1f} km"


def format_slope_tick(value: float) -> str:
    return f"{value:.0f}%"


def format_elevation_tick(value: float) -> str:
    return f"{value:.0f}"


def format_elevation_range(stats: TrackStats) -> str:
    """Format min / max elevation as 'X / Y m'."""
    if not stats.has_elevation:
        return MISSING
    return f"{stats.min_elevation:.0f} / {stats.max_elevation:.0f} m"


def format_slope_range(stats: TrackStats) -> str:
    if not stats.has_slope:
        return MISSING
    return f"{stats.min_slope_percent:.1f}% / {stats.max_slope_percent:.1f}%"


def format_summary(profile: TrackProfile) -> list[str]:
    """KPI lines for a computed profile."""
    stats = profile.stats
    return [
        f"Points:         {profile.point_count}",
        f"Distance:       {format_meters(stats.total_distance)}",
        f"Elevation:      {format_elevation_range(stats)}",
        f"Slope:          {format_slope_range(stats)}",
    ]
