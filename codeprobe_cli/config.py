"""Scanner limits and ignore rules, loaded once from ``config.toml``."""

from __future__ import annotations

from .config_manager import BASE_DIR, CONFIG_FILE, load_scan_config

_scan_config = load_scan_config()

# Directory names never descended into during project walks
DEFAULT_IGNORE_DIRS = frozenset({
    ".git", ".idea", ".vscode", "node_modules", "dist", "build", "out",
    "target", ".gradle", ".mvn", "logs", "log", "tmp", "temp",
})
IGNORE_DIRS = DEFAULT_IGNORE_DIRS | frozenset(_scan_config["extra_ignore_dirs"])

# Source window of the full-context view when no end line is given
DEFAULT_WINDOW = int(_scan_config["default_window"])

# Output size caps of the full-context view
MAX_LISTED_IMPORTS = int(_scan_config["max_listed_imports"])
MAX_MODEL_IMPORTS = int(_scan_config["max_model_imports"])
MAX_DEPENDENCY_OUTLINES = int(_scan_config["max_dependency_outlines"])

# Window used when a code item's block cannot be closed
SNIPPET_BEFORE = int(_scan_config["snippet_before"])
SNIPPET_AFTER = int(_scan_config["snippet_after"])

MAX_WORKERS = max(1, int(_scan_config["max_workers"]))

__all__ = [
    "BASE_DIR",
    "CONFIG_FILE",
    "DEFAULT_IGNORE_DIRS",
    "IGNORE_DIRS",
    "DEFAULT_WINDOW",
    "MAX_LISTED_IMPORTS",
    "MAX_MODEL_IMPORTS",
    "MAX_DEPENDENCY_OUTLINES",
    "SNIPPET_BEFORE",
    "SNIPPET_AFTER",
    "MAX_WORKERS",
]
