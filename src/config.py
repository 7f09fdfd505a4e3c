"""
Runtime configuration for the assessment service.

Values come from environment variables, optionally seeded from a ``.env``
file at the project root.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    # utf-8-sig tolerates a BOM written by some editors
    load_dotenv(_env_path, encoding="utf-8-sig")
else:
    load_dotenv()


def env_int(name: str, default: int, minimum: int = 1, maximum: int | None = None) -> int:
    """Read a bounded integer from the environment, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except (ValueError, TypeError) as e:
        logger.warning(f"Invalid {name} value: {raw}. Error: {e}. Using default: {default}")
        return default
    if value < minimum:
        logger.warning(
            f"Invalid {name} value: {raw}. Must be at least {minimum}. Using default: {default}"
        )
        return default
    if maximum is not None and value > maximum:
        logger.warning(
            f"{name} value {value} exceeds maximum ({maximum}). Using default: {default}"
        )
        return default
    return value


def env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("true", "1", "yes")


PISTON_BASE_URL = os.getenv("PISTON_BASE_URL", "https://emkc.org/api/v2/piston").rstrip("/")
PISTON_RUST_VERSION = os.getenv("PISTON_RUST_VERSION", "1.68.2")
PISTON_TYPESCRIPT_VERSION = os.getenv("PISTON_TYPESCRIPT_VERSION", "5.0.3")
PISTON_HTTP_SLACK_SECONDS = env_int("PISTON_HTTP_SLACK_SECONDS", 5, maximum=120)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = env_int("PORT", 8080, maximum=65535)
