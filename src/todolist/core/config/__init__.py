"""
Configuration models and loading.

This module provides the Pydantic model for todolist configuration
with multi-layer merging: defaults < user config < env vars.
"""

from .env import get_user_env_path, load_env_files
from .loader import (
    BACKUP_PATH_ENV,
    DB_PATH_ENV,
    clear_cache,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import TodolistConfig

__all__ = [
    "TodolistConfig",
    "BACKUP_PATH_ENV",
    "DB_PATH_ENV",
    "clear_cache",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    "get_user_env_path",
    "load_env_files",
]
