"""Settings file handling for TradeLens.

Settings live in ``~/.config/tradelens/config.toml``:

    [analytics]
    recent_days = 30

    [data]
    trades_file = "trades.json"
    strategies_file = ""

    [display]
    currency = "$"
"""

import logging
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "tradelens"
CONFIG_PATH = CONFIG_DIR / "config.toml"


class AnalyticsSettings(BaseModel):
    """Engine tuning."""

    recent_days: int = Field(default=30, gt=0, description="Insight recency window in days")

    model_config = {"frozen": True}


class DataSettings(BaseModel):
    """Default journal files."""

    trades_file: Optional[str] = Field(default=None, description="Trade journal (JSON or CSV)")
    strategies_file: Optional[str] = Field(default=None, description="Playbook strategies (JSON)")

    model_config = {"frozen": True}


class DisplaySettings(BaseModel):
    """Terminal output."""

    currency: str = Field(default="$", description="Currency symbol for CLI output")

    model_config = {"frozen": True}


class Settings(BaseModel):
    """Complete TradeLens configuration."""

    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    data: DataSettings = Field(default_factory=DataSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    model_config = {"frozen": True}


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Config file, defaults to ``~/.config/tradelens/config.toml``.

    Returns:
        Parsed settings. Defaults when the file is missing or malformed.
    """
    config_path = Path(path) if path else CONFIG_PATH

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return Settings()

    try:
        raw = toml.load(config_path)
        settings = Settings.model_validate(raw)
    except (toml.TomlDecodeError, ValidationError) as e:
        logger.warning("Ignoring malformed config %s: %s", config_path, e)
        return Settings()

    # Empty strings in the template mean "not set".
    data = settings.data
    if data.trades_file == "" or data.strategies_file == "":
        settings = settings.model_copy(
            update={
                "data": DataSettings(
                    trades_file=data.trades_file or None,
                    strategies_file=data.strategies_file or None,
                )
            }
        )
    return settings


def create_template_config(path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Returns:
        Path of the written file.
    """
    config_path = Path(path) if path else CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)

    template = {
        "analytics": {
            "recent_days": 30,
        },
        "data": {
            "trades_file": "",  # JSON or CSV trade journal
            "strategies_file": "",
        },
        "display": {
            "currency": "$",
        },
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path
