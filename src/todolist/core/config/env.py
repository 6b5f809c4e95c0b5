"""
Load TODO_* settings from .env files.

The tool server finds its database through TODO_DB_PATH, which operators
usually keep in a .env file next to the server. The CLI reads the same
file from the working directory, then a user-wide file under the XDG
config directory for machine defaults.

A variable already exported in the shell is never replaced.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

from .loader import get_xdg_config_home

logger = logging.getLogger(__name__)

ENV_FILE_NAME = ".env"


def get_user_env_path() -> Path:
    """Return the user-wide env file (~/.config/todolist/.env or XDG equivalent)."""
    return get_xdg_config_home() / "todolist" / ENV_FILE_NAME


def load_env_files(project_dir: Path | None = None) -> list[Path]:
    """
    Load the working-directory .env, then the user .env.

    Neither file overrides a variable that is already set, so the shell
    wins over the project file and the project file wins over the user file.

    Args:
        project_dir: Directory holding the project .env (defaults to cwd)

    Returns:
        The files that existed and were loaded, in load order
    """
    if project_dir is None:
        project_dir = Path.cwd()

    loaded: list[Path] = []
    for path in (project_dir / ENV_FILE_NAME, get_user_env_path()):
        if path.is_file():
            load_dotenv(path, override=False)
            logger.debug("Loaded environment from %s", path)
            loaded.append(path)
    return loaded
