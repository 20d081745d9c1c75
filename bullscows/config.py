"""
Single place to:
- Load env vars from .env if present
- Read the game settings (secret length, solver mode, random.org switch)
- Set up logging for the CLI and the API

Every setting has a default, so nothing has to be configured to play.
"""

import logging
import os

from dotenv import load_dotenv

from .types import DEFAULT_LENGTH, MAX_LENGTH, MIN_LENGTH

# dev convenience; in prod the platform injects env vars
load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {value!r}.")


def read_secret_length() -> int:
    length = _env_int("BULLSCOWS_SECRET_LENGTH", DEFAULT_LENGTH)
    if length < MIN_LENGTH or length > MAX_LENGTH:
        raise RuntimeError(
            f"BULLSCOWS_SECRET_LENGTH must be between {MIN_LENGTH} and {MAX_LENGTH}, got {length}."
        )
    return length


# Secret length for new games when the caller does not pick one
SECRET_LENGTH = read_secret_length()

# Ask random.org for secrets; off by default so offline runs never wait on the network
USE_RANDOM_ORG = _env_flag("BULLSCOWS_USE_RANDOM_ORG")

# Exact-score elimination instead of the default lower-bound filters
STRICT_SOLVER = _env_flag("BULLSCOWS_STRICT_SOLVER")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_LEVEL = os.getenv("BULLSCOWS_LOG_LEVEL", "WARNING").upper()
if LOG_LEVEL not in LOG_LEVELS:
    raise RuntimeError(f"BULLSCOWS_LOG_LEVEL must be one of {LOG_LEVELS}, got {LOG_LEVEL!r}.")


def configure_logging(level=None) -> None:
    """Stream handler on the package logger. Safe to call more than once."""
    level = level or LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger("bullscows")
    logger.setLevel(level)

    if not any(getattr(h, "_bullscows", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handler._bullscows = True
        logger.addHandler(handler)
