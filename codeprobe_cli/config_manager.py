"""Configuration manager for CodeProbe using TOML files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import toml

BASE_DIR = Path(os.environ.get("CODEPROBE_HOME", str(Path.home() / ".codeprobe"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"


# Defaults for the ``[scan]`` section
DEFAULT_SCAN_CONFIG: Dict[str, Any] = {
    "default_window": 500,
    "max_listed_imports": 20,
    "max_model_imports": 15,
    "max_dependency_outlines": 12,
    "snippet_before": 10,
    "snippet_after": 60,
    "max_workers": 4,
    "extra_ignore_dirs": [],
}


def load_full_config() -> Dict[str, Any]:
    """Load the entire TOML config (all sections)."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError):
        return {}


def _save_full_config(config: Dict[str, Any]) -> bool:
    """Write entire config dict to TOML file, preserving all sections."""
    try:
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            toml.dump(config, f)
        return True
    except OSError:
        return False


def load_scan_config() -> Dict[str, Any]:
    """Load scanner settings from the ``[scan]`` section.

    Returns:
        The defaults overlaid with whatever valid keys the file sets.
        Unknown keys and values of the wrong type are ignored.
    """
    settings = DEFAULT_SCAN_CONFIG.copy()
    section = load_full_config().get("scan", {})
    if isinstance(section, dict):
        for key, value in section.items():
            if key in settings and isinstance(value, type(settings[key])):
                settings[key] = value
    return settings


def coerce_scan_value(key: str, raw: str) -> Any:
    """Convert a command line string into the type of the setting *key*.

    Raises:
        KeyError: if *key* is not a known setting
        ValueError: if *raw* does not fit the setting's type
    """
    if key not in DEFAULT_SCAN_CONFIG:
        raise KeyError(key)
    default = DEFAULT_SCAN_CONFIG[key]
    if isinstance(default, list):
        return [part.strip() for part in raw.split(",") if part.strip()]
    value = int(raw)
    if value < 0:
        raise ValueError(f"{key} must not be negative")
    return value


def save_scan_setting(key: str, value: Any) -> bool:
    """Save one ``[scan]`` setting, preserving other sections.

    Raises:
        KeyError: if *key* is not a known setting
    """
    if key not in DEFAULT_SCAN_CONFIG:
        raise KeyError(key)
    config = load_full_config()
    section = config.get("scan", {})
    section[key] = value
    config["scan"] = section
    return _save_full_config(config)


def clear_scan_config() -> bool:
    """Remove ``[scan]`` section from config, resetting to defaults."""
    config = load_full_config()
    config.pop("scan", None)
    return _save_full_config(config)
