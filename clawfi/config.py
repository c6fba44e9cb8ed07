"""
Client configuration for the ClawFi SDK.

- CLAWFI_API_KEY: bearer token sent as Authorization header (optional)
- CLAWFI_BASE_URL: API root (default: https://api.clawfi.ai)
- CLAWFI_TIMEOUT: request timeout in seconds (default: 30)
- Loads .env from the working directory when available.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from clawfi.clawfi_logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.clawfi.ai"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass
class ClawFiConfig:
    """Connection settings for a ClawFi client."""

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        self.base_url = (self.base_url or DEFAULT_BASE_URL).rstrip("/")


def load_clawfi_env() -> None:
    """Load .env into the process environment. Safe to call multiple times."""
    load_dotenv(find_dotenv(usecwd=True))


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        logger.warning("clawfi_config_invalid_timeout", value=raw, default=DEFAULT_TIMEOUT_SECONDS)
        return DEFAULT_TIMEOUT_SECONDS
    if value <= 0:
        logger.warning("clawfi_config_invalid_timeout", value=raw, default=DEFAULT_TIMEOUT_SECONDS)
        return DEFAULT_TIMEOUT_SECONDS
    return value


def load_config(
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
) -> ClawFiConfig:
    """
    Resolve client settings.

    Order: explicit argument > CLAWFI_* environment variable > default.
    An unparsable CLAWFI_TIMEOUT falls back to the default with a warning.
    """
    load_clawfi_env()
    if api_key is None:
        api_key = (os.getenv("CLAWFI_API_KEY") or "").strip()
    if base_url is None:
        base_url = (os.getenv("CLAWFI_BASE_URL") or "").strip() or DEFAULT_BASE_URL
    if timeout is None:
        raw = (os.getenv("CLAWFI_TIMEOUT") or "").strip()
        timeout = _parse_timeout(raw) if raw else DEFAULT_TIMEOUT_SECONDS
    return ClawFiConfig(api_key=api_key, base_url=base_url, timeout=timeout)
