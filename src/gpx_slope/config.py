import json
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "gpx-slope"
CONFIG_PATH = CONFIG_DIR / "gpx-slope.json"
LOCAL_CONFIG_PATH = Path("gpx-slope.json")

# Default processing and chart settings
DEFAULTS = {
    "min_step": 2.0,  # meters
    "smooth": True,
    "smooth_window": 5,  # points
    "slope_line_color": "#4cc9f0",
    "elevation_line_color": "#f4a261",
    "elevation_area_color": "#f4a261",
}


def load_config() -> dict:
    """Load configuration from config files.

    Merges config from global and local files:
    1. ~/.config/gpx-slope/gpx-slope.json (global, loaded first)
    2. ./gpx-slope.json (local, overrides global)

    Returns:
        Dict with merged config values, empty dict if no files exist.
    """
    config = {}
    for config_path in [CONFIG_PATH, LOCAL_CONFIG_PATH]:
        if config_path.exists():
            try:
                with config_path.open() as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError):
                continue
            # Only a top-level object can hold settings
            if isinstance(data, dict):
                config.update(data)
    return config


def get_defaults() -> dict:
    """DEFAULTS overridden by any known keys from the config files."""
    config = load_config()
    return {key: config.get(key, value) for key, value in DEFAULTS.items()}
