"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import TodolistConfig

logger = logging.getLogger(__name__)

DB_PATH_ENV = "TODO_DB_PATH"
BACKUP_PATH_ENV = "TODO_BACKUP_PATH"

# Global cache to avoid reloading config multiple times per session
_config_cache: TodolistConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/todolist/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "todolist" / "config.json"


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        TODO_DB_PATH - overrides db_path
        TODO_BACKUP_PATH - overrides backup_path

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if db_path := os.environ.get(DB_PATH_ENV):
        result["db_path"] = db_path

    if backup_path := os.environ.get(BACKUP_PATH_ENV):
        result["backup_path"] = backup_path

    return result


def load_config(use_cache: bool = True) -> TodolistConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (TODO_DB_PATH, TODO_BACKUP_PATH)
        2. User config (~/.config/todolist/config.json)
        3. Hardcoded defaults

    Args:
        use_cache: If True, return cached config from previous load

    Returns:
        Validated TodolistConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged: dict[str, Any] = {}

    if user_config := load_json_file(get_user_config_path()):
        merged.update(user_config)

    merged = apply_env_overrides(merged)

    config = TodolistConfig(**merged)
    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
