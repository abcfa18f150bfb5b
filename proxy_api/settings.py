import logging
import os
from typing import NamedTuple

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_UPSTREAM_BASE_URL = "https://jsonplaceholder.typicode.com"
DEFAULT_UPSTREAM_TIMEOUT = 10.0
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]  # React dev servers


class Settings(NamedTuple):
    host: str
    port: int
    upstream_base_url: str
    upstream_timeout: float
    cors_origins: list[str]
    log_level: str


def _int_from_env(name: str, default: int, low: int, high: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        value = None
    if value is None or not low <= value <= high:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    return value


def _positive_float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = None
    # also rejects nan and inf
    if value is None or not 0 < value < float("inf"):
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    return value


def _log_level_from_env() -> str:
    raw = (os.getenv("LOG_LEVEL") or "INFO").upper()
    if raw not in logging.getLevelNamesMapping():
        logger.warning("Ignoring unknown LOG_LEVEL=%r, using INFO", raw)
        return "INFO"
    return raw


def load_settings() -> Settings:
    """
    Reads the service configuration from environment variables.

    PORT=8080
    HOST=0.0.0.0
    UPSTREAM_BASE_URL=https://jsonplaceholder.typicode.com
    UPSTREAM_TIMEOUT=10
    CORS_ORIGINS=http://localhost:3000,http://localhost:5173
    LOG_LEVEL=INFO

    Unset, empty or out-of-range values fall back to the defaults above.
    """
    origins = os.getenv("CORS_ORIGINS")
    if origins:
        cors_origins = [o.strip() for o in origins.split(",") if o.strip()]
    else:
        cors_origins = list(DEFAULT_CORS_ORIGINS)

    return Settings(
        host=os.getenv("HOST") or "0.0.0.0",
        port=_int_from_env("PORT", DEFAULT_PORT, 1, 65535),
        upstream_base_url=(os.getenv("UPSTREAM_BASE_URL") or DEFAULT_UPSTREAM_BASE_URL).rstrip("/"),
        upstream_timeout=_positive_float_from_env("UPSTREAM_TIMEOUT", DEFAULT_UPSTREAM_TIMEOUT),
        cors_origins=cors_origins,
        log_level=_log_level_from_env(),
    )
