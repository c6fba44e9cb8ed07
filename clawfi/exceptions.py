"""
SDK exceptions.

Transport methods report remote failures through ApiResponse(success=False);
these exceptions are raised only when a caller asks for it via ApiResponse.unwrap().
"""

from __future__ import annotations

from typing import Any


class ClawFiError(Exception):
    """Base class for ClawFi SDK errors."""


class ClawFiAPIError(ClawFiError):
    """Raised when an API call did not succeed and the caller unwrapped the response."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
