import os
import sys
from pathlib import Path

from loguru import logger


PROJECT_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"


def _load_env_file(env_file: Path = PROJECT_ENV_FILE) -> None:
    """Load environment variables from .env file if it exists."""
    if env_file.exists():
        with open(env_file) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    # Remove quotes if present
                    value = value.strip("\"'")
                    # Only set if not already in environment
                    if key not in os.environ:
                        os.environ[key] = value


def _configure_logger() -> None:
    """Configure loguru logger with settings from environment or defaults."""
    _load_env_file()

    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Remove default handler and add a new one with the desired format and level
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        # Tracebacks must not print local values (resume content)
        diagnose=False,
    )


# Configure logger on import
_configure_logger()
