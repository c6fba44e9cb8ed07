"""
Structured logging for the ClawFi SDK.

structlog with ISO timestamps, log level and an event_type key, so SDK events
sit next to the host application's logs in aggregators. The SDK is quiet by
default (WARNING). CLAWFI_LOG_LEVEL (or LOG_LEVEL) and LOG_FORMAT=json|console
set the initial configuration; configure_logging() changes it at runtime.

Uses only Python stdlib logging and structlog; no clawfi imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "json"


def _env_level() -> str:
    raw = os.getenv("CLAWFI_LOG_LEVEL") or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL
    return raw.strip().upper()


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog's positional 'event' becomes event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """
    (Re)configure SDK logging.

    Args:
        level: stdlib level name, e.g. "DEBUG". Defaults to CLAWFI_LOG_LEVEL / LOG_LEVEL / WARNING.
        fmt: "json" for one JSON object per line, anything else for the console renderer.
    """
    level_name = (level or _env_level()).upper()
    level_value = getattr(logging, level_name, logging.WARNING)
    fmt = (fmt or os.getenv("LOG_FORMAT") or DEFAULT_LOG_FORMAT).strip().lower()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _add_timestamp,
    ]
    if fmt == "json":
        processors.extend([_event_type, structlog.processors.JSONRenderer()])
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> Any:
    """
    Structured logger for a module. First argument is the event type:
        logger = get_logger(__name__)
        logger.debug("clawfi_request", method="GET", endpoint="/signals/ethereum/0x...")
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_token(chain: str, address: str) -> Any:
    """Logger with chain and token address bound to every event."""
    return get_logger("clawfi").bind(chain=chain, token=address)
