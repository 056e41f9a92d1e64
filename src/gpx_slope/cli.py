import argparse
import logging
import sys

from gpx_slope.config import DEFAULTS, get_defaults
from gpx_slope.formatters import format_summary
from gpx_slope.models import ProcessingOptions
from gpx_slope.parser import ParseError, read_gpx_file
from gpx_slope.pipeline import compute

logger = logging.getLogger(__name__)


def build_parser(config: dict | None = None) -> argparse.ArgumentParser:
    """Build argument parser with defaults from config file."""
    if config is None:
        config = {}

    def get_default(key: str):
        return config.get(key, DEFAULTS[key])

    parser = argparse.ArgumentParser(
        description="Plot slope and elevation against distance for a GPX track."
    )
    parser.add_argument("gpx_file", help="Path to GPX file")
    parser.add_argument(
        "--min-step",
        type=float,
        default=get_default("min_step"),
        help=f"Minimum distance between kept points in meters, 0-50 (default: {DEFAULTS['min_step']})",
    )
    parser.add_argument(
        "--smooth-window",
        type=int,
        default=get_default("smooth_window"),
        help=f"Slope moving-average window in points, odd, 1-101 (default: {DEFAULTS['smooth_window']})",
    )
    parser.add_argument(
        "--no-smoothing",
        action="store_true",
        default=not get_default("smooth"),
        help="Disable slope smoothing",
    )
    parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="Chart title when the GPX has no route name",
    )
    parser.add_argument("--png", type=str, default=None, help="Write the charts to this PNG file")
    parser.add_argument("--svg", type=str, default=None, help="Write the charts to this SVG file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def export_charts(profile, path: str, fmt: str, config: dict) -> None:
    # Imported here so the summary path doesn't pay for matplotlib
    from gpx_slope.charts import render_profile

    data = render_profile(
        profile,
        fmt=fmt,
        slope_line_color=config["slope_line_color"],
        elevation_line_color=config["elevation_line_color"],
        elevation_area_color=config["elevation_area_color"],
    )
    with open(path, "wb") as f:
        f.write(data)
    print(f"Saved {fmt.upper()}: {path}")


def main(argv: list[str] | None = None) -> None:
    config = get_defaults()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = read_gpx_file(args.gpx_file)
    except FileNotFoundError:
        print(f"Error: File not found: {args.gpx_file}", file=sys.stderr)
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading GPX file: {e}", file=sys.stderr)
        sys.exit(1)

    options = ProcessingOptions(
        min_step=args.min_step,
        smooth=not args.no_smoothing,
        smooth_window=args.smooth_window,
        title=args.title,
    )
    try:
        profile = compute(text, options)
    except ParseError as e:
        print(f"Error processing GPX: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"=== {profile.title} ===")
    for line in format_summary(profile):
        print(line)

    if profile.slope_chart is None:
        logger.warning("No slope values to plot")
    if profile.elevation_chart is None:
        logger.warning("No elevation values to plot")

    for path, fmt in [(args.png, "png"), (args.svg, "svg")]:
        if path:
            try:
                export_charts(profile, path, fmt, config)
            except OSError as e:
                print(f"Error writing {path}: {e}", file=sys.stderr)
                sys.exit(1)
