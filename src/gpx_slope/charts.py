"""Slope and elevation chart rendering."""

import io
import math

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for server
import matplotlib.pyplot as plt

from gpx_slope.formatters import format_distance_tick, format_elevation_tick, format_slope_tick
from gpx_slope.models import ChartKind, ChartSeries, TrackProfile

SUPPORTED_FORMATS = ("png", "svg")

# Tick labels drawn per axis; denser domains are thinned
MAX_TICK_LABELS = 25

DEFAULT_SLOPE_LINE_COLOR = '#4cc9f0'
DEFAULT_ELEVATION_LINE_COLOR = '#f4a261'

MIME_TYPES = {
    "png": "image/png",
    "svg": "image/svg+xml",
}


def _check_format(fmt: str) -> str:
    fmt = fmt.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported image format: {fmt}. Use 'png' or 'svg'.")
    return fmt


def thin_ticks(ticks: tuple[float, ...], limit: int = MAX_TICK_LABELS) -> tuple[float, ...]:
    """Keep every k-th tick so at most limit remain.

    The kept ticks stay aligned on zero when zero is one of them.
    """
    if len(ticks) <= limit:
        return tuple(ticks)
    k = math.ceil(len(ticks) / limit)
    anchor = ticks.index(0.0) if 0.0 in ticks else 0
    return tuple(ticks[anchor % k::k])


def draw_series(ax, series: ChartSeries, line_color: str, area_color: str | None = None) -> None:
    """Draw a chart series onto a matplotlib axis.

    Only points with a defined y are joined; undefined values are skipped,
    not interpolated or drawn as zero.

    Args:
        ax: Matplotlib axis to draw on
        series: Series and axis domains from adapt_for_chart
        line_color: Line color
        area_color: Optional fill color between the line and the bottom of
            the y-domain
    """
    points = series.defined_points()
    xs = [x for x, _ in points]
    ys = [y for _, y in points]

    x_domain = series.x_domain
    y_domain = series.y_domain

    if area_color and points:
        ax.fill_between(xs, ys, y_domain.min, color=area_color, alpha=0.3, linewidth=0)
    ax.plot(xs, ys, color=line_color, linewidth=2)

    # Dashed zero line when the y-domain crosses zero
    if y_domain.min < 0 < y_domain.max:
        ax.axhline(y=0, color='#666666', linewidth=1.0, alpha=0.6, linestyle='--')

    # A degenerate domain would make matplotlib warn about identical limits
    ax.set_xlim(x_domain.min, x_domain.max if x_domain.max > x_domain.min else x_domain.min + 1)
    if y_domain.max > y_domain.min:
        ax.set_ylim(y_domain.min, y_domain.max)

    if series.kind is ChartKind.SLOPE:
        y_format = format_slope_tick
        ax.set_ylabel('Slope (%)', fontsize=10)
    else:
        y_format = format_elevation_tick
        ax.set_ylabel('Elevation (m)', fontsize=10)

    x_ticks = thin_ticks(x_domain.ticks)
    y_ticks = thin_ticks(y_domain.ticks)
    ax.set_xticks(list(x_ticks))
    ax.set_xticklabels([format_distance_tick(t) for t in x_ticks])
    ax.set_yticks(list(y_ticks))
    ax.set_yticklabels([y_format(t) for t in y_ticks])
    ax.set_xlabel('Distance', fontsize=10)

    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)
    ax.grid(alpha=0.3, linestyle='-', linewidth=0.5)


def _figure_bytes(fig, fmt: str) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format=fmt, dpi=100, facecolor='white', edgecolor='none')
    plt.close(fig)
    buf.seek(0)
    return buf.getvalue()


def render_chart(
    series: ChartSeries,
    fmt: str = "png",
    line_color: str | None = None,
    area_color: str | None = None,
    aspect_ratio: float = 16 / 7,
) -> bytes:
    """Render a single chart series to PNG or SVG bytes.

    Args:
        series: Series from adapt_for_chart
        fmt: "png" or "svg"
        line_color: Line color; defaults by chart kind
        area_color: Optional fill color under the line
        aspect_ratio: Width/height ratio

    Returns image bytes in the requested format.
    """
    fmt = _check_format(fmt)
    if line_color is None:
        line_color = DEFAULT_SLOPE_LINE_COLOR if series.kind is ChartKind.SLOPE else DEFAULT_ELEVATION_LINE_COLOR

    fig_height = 4
    fig_width = fig_height * aspect_ratio
    fig, ax = plt.subplots(figsize=(fig_width, fig_height), facecolor='white')
    draw_series(ax, series, line_color, area_color)
    fig.tight_layout()
    return _figure_bytes(fig, fmt)


def render_profile(
    profile: TrackProfile,
    fmt: str = "png",
    slope_line_color: str = DEFAULT_SLOPE_LINE_COLOR,
    elevation_line_color: str = DEFAULT_ELEVATION_LINE_COLOR,
    elevation_area_color: str | None = DEFAULT_ELEVATION_LINE_COLOR,
) -> bytes:
    """Render the slope and elevation charts stacked under the route title.

    A chart with nothing to render is replaced by a short notice.

    Returns image bytes in the requested format.
    """
    fmt = _check_format(fmt)

    fig, (slope_ax, elevation_ax) = plt.subplots(2, 1, figsize=(14, 10), facecolor='white')
    fig.suptitle(profile.title, fontsize=14)

    charts = [
        (slope_ax, profile.slope_chart, slope_line_color, None),
        (elevation_ax, profile.elevation_chart, elevation_line_color, elevation_area_color),
    ]
    for ax, series, line_color, area_color in charts:
        if series is None:
            ax.text(0.5, 0.5, 'No data to plot', ha='center', va='center', fontsize=14, color='#999')
            ax.axis('off')
            continue
        draw_series(ax, series, line_color, area_color)

    fig.tight_layout()
    return _figure_bytes(fig, fmt)
