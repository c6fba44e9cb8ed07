"""
Structured logging for the ClawFi SDK.

JSON logs with timestamp, event_type and request context.
"""

from clawfi.clawfi_logging.logger import bind_token, configure_logging, get_logger

__all__ = ["get_logger", "bind_token", "configure_logging"]
