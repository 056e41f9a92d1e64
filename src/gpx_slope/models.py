import math
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class RawPoint:
    lat: float
    lon: float
    elevation: float | None  # meters


@dataclass
class Row:
    index: int  # 1-based
    lat: float
    lon: float
    elevation: float | None  # meters
    step_distance: float  # meters from previous row, 0 for the first row
    cumulative_distance: float  # meters
    elevation_delta: float | None = None  # meters
    slope_percent: float | None = None
    smoothed_slope_percent: float | None = None  # filled by smooth_slopes


@dataclass
class TrackStats:
    """Running totals over a series. Extrema are None when no sample was defined."""

    total_distance: float = 0.0  # meters
    min_slope_percent: float | None = None
    max_slope_percent: float | None = None
    min_elevation: float | None = None  # meters
    max_elevation: float | None = None  # meters

    @property
    def has_slope(self) -> bool:
        return self.min_slope_percent is not None

    @property
    def has_elevation(self) -> bool:
        return self.min_elevation is not None


class ChartKind(Enum):
    SLOPE = "slope"
    ELEVATION = "elevation"


@dataclass(frozen=True)
class AxisDomain:
    min: float
    max: float
    ticks: tuple[float, ...] = ()


@dataclass(frozen=True)
class ChartSeries:
    kind: ChartKind
    points: tuple[tuple[float, float | None], ...]  # (distance m, y)
    x_domain: AxisDomain
    y_domain: AxisDomain

    def defined_points(self) -> list[tuple[float, float]]:
        """Points with a finite y value, in order. Undefined values are gaps."""
        return [
            (x, y) for x, y in self.points
            if y is not None and math.isfinite(y)
        ]


@dataclass
class ProcessingOptions:
    min_step: float | None = 2.0  # meters
    smooth: bool = True
    smooth_window: int | str | None = 5
    title: str | None = None


@dataclass
class TrackProfile:
    name: str | None  # route name found in the document, if any
    title: str
    rows: list[Row]
    stats: TrackStats
    slope_chart: ChartSeries | None = None
    elevation_chart: ChartSeries | None = None
    options: ProcessingOptions = field(default_factory=ProcessingOptions)

    @property
    def point_count(self) -> int:
        return len(self.rows)
