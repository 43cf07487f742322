"""Configuration loading with YAML security."""
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from .models import SuiteSettings

DEFAULT_BASE_URL = "https://shuxincolorado.github.io/song-list2/dist/song-list2/"

DEFAULT_SETTINGS: dict[str, Any] = {
    "base_url": DEFAULT_BASE_URL,
    "headless": True,
    "action_timeout_ms": 10000,
    "navigation_timeout_ms": 30000,
    "viewport": {"width": 1280, "height": 720},
    "screenshot_dir": "test-results/screenshots",
    "log_dir": "test-logs",
    "output_dir": "test-results/reports",
    "expected_song_count": 5,
}


def load_config_secure(config_path: Path) -> dict[str, Any]:
    """Load YAML configuration with security hardening.

    CRITICAL: Uses safe_load() to prevent code execution attacks.
    Never use yaml.load() without a SafeLoader.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Dictionary containing the configuration.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is not a valid dictionary.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError("Configuration must be a dictionary")

    return config


def load_settings(config_path: Optional[Path] = None) -> dict[str, Any]:
    """Load settings from YAML with defaults applied.

    A missing ``config_path`` (None) yields the defaults. The ``BASE_URL``
    environment variable wins over both the file and the default.

    Args:
        config_path: Path to the settings YAML file.

    Returns:
        Dictionary containing settings with defaults applied.
    """
    config = load_config_secure(config_path) if config_path is not None else {}

    for key, value in DEFAULT_SETTINGS.items():
        config.setdefault(key, value)

    viewport = config["viewport"]
    if not isinstance(viewport, dict) or not {"width", "height"} <= viewport.keys():
        raise ValueError("viewport must define width and height")

    if int(config["expected_song_count"]) < 0:
        raise ValueError("expected_song_count cannot be negative")

    env_url = os.environ.get("BASE_URL")
    if env_url:
        config["base_url"] = env_url

    return config


def build_suite_settings(
    config: dict[str, Any],
    base_url: Optional[str] = None,
    output_dir: Optional[Path] = None,
    headless: Optional[bool] = None,
) -> SuiteSettings:
    """Turn a settings dictionary plus CLI overrides into SuiteSettings.

    Args:
        config: Result of :func:`load_settings`.
        base_url: Overrides ``config["base_url"]`` when given.
        output_dir: Overrides ``config["output_dir"]`` when given.
        headless: Overrides ``config["headless"]`` when given.

    Returns:
        Frozen settings for the smoke runner.
    """
    return SuiteSettings(
        base_url=base_url or config["base_url"],
        output_dir=Path(output_dir or config["output_dir"]),
        screenshot_dir=Path(config["screenshot_dir"]),
        log_dir=Path(config["log_dir"]),
        headless=config["headless"] if headless is None else headless,
        action_timeout_ms=int(config["action_timeout_ms"]),
        navigation_timeout_ms=int(config["navigation_timeout_ms"]),
        viewport_width=int(config["viewport"]["width"]),
        viewport_height=int(config["viewport"]["height"]),
        expected_song_count=int(config["expected_song_count"]),
    )
