"""User configuration for candlestick.

Settings live in ``~/.config/candlestick/config.toml``. The chart engine
never reads them; only the CLI and data client do.
"""

import os
from pathlib import Path
from typing import Optional

import toml

CONFIG_DIR = Path.home() / ".config" / "candlestick"
CONFIG_PATH = CONFIG_DIR / "config.toml"

API_KEY_ENV = "CRYPTOCOMPARE_API_KEY"

# Keys under [chart] that map onto chart options
CHART_KEYS = ("width", "height", "disable_legend", "timezone", "min_range")


def load_config(path: Optional[Path] = None) -> Optional[dict]:
    """Load the TOML config file.

    Returns:
        Config dict, or None if the file is missing or unreadable.
    """
    config_path = path or CONFIG_PATH

    if not config_path.exists():
        return None

    try:
        return toml.load(config_path)
    except (toml.TomlDecodeError, OSError):
        return None


def chart_defaults(config: Optional[dict]) -> dict:
    """Chart option defaults from the [chart] section."""
    section = (config or {}).get("chart", {})
    return {key: section[key] for key in CHART_KEYS if key in section}


def get_api_key(config: Optional[dict]) -> str:
    """API key from the environment, falling back to the config file."""
    api_key = os.environ.get(API_KEY_ENV)
    if not api_key:
        api_key = (config or {}).get("cryptocompare", {}).get("api_key", "")
    return api_key or ""
