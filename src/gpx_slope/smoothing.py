import math
from dataclasses import replace

from gpx_slope.models import Row

MIN_WINDOW = 1
MAX_WINDOW = 101


def moving_average(values: list[float | None], window: int) -> list[float | None]:
    """Centered moving average that tolerates missing values.

    Each output is the mean of the defined, finite inputs within window // 2
    positions on either side. The window is truncated at both ends of the
    sequence rather than padded, so edge values average over fewer samples.
    An output with no defined input in its window is None.

    Args:
        values: Input sequence; None and non-finite entries are ignored
        window: Window width (odd; an even width behaves like width + 1)

    Returns:
        A new list the same length as values.
    """
    if window < 1:
        raise ValueError(f"Window must be at least 1, got {window}")

    n = len(values)
    half = window // 2
    out: list[float | None] = []
    for i in range(n):
        total = 0.0
        count = 0
        for j in range(max(0, i - half), min(n, i + half + 1)):
            v = values[j]
            if v is not None and math.isfinite(v):
                total += v
                count += 1
        out.append(total / count if count else None)
    return out


def normalize_window(value) -> int:
    """Coerce a user-supplied window to an odd integer in [1, 101].

    Even widths are bumped to the next odd width. Anything that is not a
    number disables smoothing (width 1).
    """
    try:
        window = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return MIN_WINDOW
    if window % 2 == 0:
        window += 1
    return min(max(window, MIN_WINDOW), MAX_WINDOW)


def smooth_slopes(rows: list[Row], enabled: bool, window: int) -> list[Row]:
    """Return copies of rows with smoothed_slope_percent filled in.

    When smoothing is disabled, or the window is 1, the raw slope passes
    through unchanged.
    """
    slopes = [r.slope_percent for r in rows]
    if enabled and window > 1:
        smoothed = moving_average(slopes, window)
    else:
        smoothed = list(slopes)
    return [replace(r, smoothed_slope_percent=s) for r, s in zip(rows, smoothed)]
