"""
Pytest fixtures for ClawFi SDK tests. HTTP is mocked at the requests.Session level.
"""

from __future__ import annotations

import itertools
from unittest.mock import MagicMock

import pytest

from clawfi.types import Signal, SignalSeverity, SignalType

_ids = itertools.count(1)


@pytest.fixture
def make_signal():
    """Factory for Signal records with sensible defaults."""

    def _make(
        type=SignalType.WHALE_MOVEMENT,
        severity=SignalSeverity.LOW,
        title="Signal",
        summary="Something happened",
        **kwargs,
    ) -> Signal:
        return Signal(
            id=kwargs.pop("id", f"sig-{next(_ids)}"),
            type=type,
            severity=severity,
            title=title,
            summary=summary,
            timestamp=kwargs.pop("timestamp", 1_700_000_000_000),
            **kwargs,
        )

    return _make


@pytest.fixture
def mock_session():
    """requests.Session stand-in; set mock_session.request.return_value per test."""
    return MagicMock()


@pytest.fixture
def clawfi_client(mock_session):
    from clawfi.client import ClawFi
    from clawfi.config import ClawFiConfig

    return ClawFi(
        ClawFiConfig(api_key="test-key", base_url="https://api.test.local", timeout=5.0),
        session=mock_session,
    )
