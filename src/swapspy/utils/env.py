"""Environment variable loading utilities."""

import logging
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


def load_env(env_file: str | Path | None = None) -> Path | None:
    """Load environment variables from a .env file.

    Variables already present in the environment win over the file. When no
    path is given the nearest .env above the working directory is used.

    Args:
        env_file: Explicit .env path, or None to search for one

    Returns:
        The file that was loaded, or None if none was found
    """
    if env_file is None:
        found = find_dotenv(usecwd=True)
        if not found:
            logger.debug("No .env file found")
            return None
        env_path = Path(found)
    else:
        env_path = Path(env_file)
        if not env_path.exists():
            logger.debug(f"No .env file at {env_path}")
            return None

    load_dotenv(env_path, override=False)
    logger.debug(f"Loaded environment from: {env_path}")
    return env_path
