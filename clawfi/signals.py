"""
Risk scoring over token signals.

Each signal scores severity weight × type factor. The collection score blends
the mean and the worst signal (0.6 / 0.4) so one extreme signal is not
diluted by many mild ones, then scales to 0-100. Honeypot, rugpull and
critical signals mark a collection high risk regardless of its score.

Every function is pure: inputs are only read, results are new collections.
Unrecognized severity or type values score with DEFAULT_SEVERITY_WEIGHT /
DEFAULT_TYPE_FACTOR instead of failing.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from types import MappingProxyType
from typing import Any

from clawfi.clawfi_logging import get_logger
from clawfi.types import (
    RiskLevel,
    Signal,
    SignalSeverity,
    SignalSeverityValue,
    SignalType,
    SignalTypeValue,
    coerce_enum,
    enum_value,
)

logger = get_logger(__name__)

SEVERITY_WEIGHTS: MappingProxyType[str, int] = MappingProxyType({
    SignalSeverity.INFO.value: 0,
    SignalSeverity.LOW.value: 1,
    SignalSeverity.MEDIUM.value: 2,
    SignalSeverity.HIGH.value: 3,
    SignalSeverity.CRITICAL.value: 5,
})

TYPE_RISK_FACTORS: MappingProxyType[str, float] = MappingProxyType({
    SignalType.WHALE_MOVEMENT.value: 1.2,
    SignalType.LIQUIDITY_CHANGE.value: 1.5,
    SignalType.HOLDER_CONCENTRATION.value: 1.3,
    SignalType.CONTRACT_RISK.value: 2.0,
    SignalType.PRICE_MANIPULATION.value: 1.8,
    SignalType.RUGPULL_RISK.value: 3.0,
    SignalType.HONEYPOT.value: 3.0,
    SignalType.MINT_AUTHORITY.value: 2.5,
    SignalType.SOCIAL_SENTIMENT.value: 0.8,
})

DEFAULT_SEVERITY_WEIGHT = 1
DEFAULT_TYPE_FACTOR = 1.0

AVG_WEIGHT = 0.6
MAX_WEIGHT = 0.4
SCORE_SCALE = 10
MAX_SCORE = 100

HIGH_RISK_THRESHOLD = 70

# Ascending upper bounds (exclusive); anything at or above the last is critical.
RISK_LEVEL_THRESHOLDS: tuple[tuple[int, RiskLevel], ...] = (
    (20, RiskLevel.SAFE),
    (40, RiskLevel.LOW),
    (60, RiskLevel.MEDIUM),
    (80, RiskLevel.HIGH),
)

# Any one of these marks a collection high risk.
DISQUALIFYING_TYPES = frozenset({SignalType.HONEYPOT.value, SignalType.RUGPULL_RISK.value})
DISQUALIFYING_SEVERITIES = frozenset({SignalSeverity.CRITICAL.value})

# Severities kept by get_critical_signals: high is included on purpose.
CRITICAL_SIGNAL_SEVERITIES = frozenset({SignalSeverity.HIGH.value, SignalSeverity.CRITICAL.value})

SEVERITY_INDICATORS: MappingProxyType[str, str] = MappingProxyType({
    SignalSeverity.INFO.value: "ℹ️",
    SignalSeverity.LOW.value: "\U0001f7e2",
    SignalSeverity.MEDIUM.value: "\U0001f7e1",
    SignalSeverity.HIGH.value: "\U0001f7e0",
    SignalSeverity.CRITICAL.value: "\U0001f534",
})
DEFAULT_SEVERITY_INDICATOR = "⚪"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def severity_weight(severity: SignalSeverityValue) -> int:
    """Weight for a severity; DEFAULT_SEVERITY_WEIGHT when unrecognized."""
    key = enum_value(severity)
    weight = SEVERITY_WEIGHTS.get(key)
    if weight is None:
        logger.debug("signal_unknown_severity", severity=key, fallback=DEFAULT_SEVERITY_WEIGHT)
        return DEFAULT_SEVERITY_WEIGHT
    return weight


def type_factor(signal_type: SignalTypeValue) -> float:
    """Risk factor for a signal type; DEFAULT_TYPE_FACTOR when unrecognized."""
    key = enum_value(signal_type)
    factor = TYPE_RISK_FACTORS.get(key)
    if factor is None:
        logger.debug("signal_unknown_type", type=key, fallback=DEFAULT_TYPE_FACTOR)
        return DEFAULT_TYPE_FACTOR
    return factor


def signal_score(signal: Signal) -> float:
    """Unscaled score of a single signal."""
    return severity_weight(signal.severity) * type_factor(signal.type)


def calculate_risk_score(signals: Iterable[Signal]) -> int:
    """
    Aggregate a signal collection into a 0-100 risk score.

    Empty input scores 0. Otherwise:
        combined = 0.6 * mean(signal_score) + 0.4 * max(signal_score)
        score = min(100, round(combined * 10))
    Rounding is half-up. Any iterable is accepted, including generators.
    """
    signals = list(signals)
    if not signals:
        return 0

    scores = [signal_score(s) for s in signals]
    avg_score = sum(scores) / len(scores)
    max_score = max(scores)
    combined = avg_score * AVG_WEIGHT + max_score * MAX_WEIGHT

    return min(MAX_SCORE, _round_half_up(combined * SCORE_SCALE))


def get_risk_level(score: float) -> RiskLevel:
    """
    Bucket a risk score: <20 safe, <40 low, <60 medium, <80 high, else critical.

    Lower bounds are inclusive (20 is low). Out-of-range scores land in the
    nearest end bucket.
    """
    for upper, level in RISK_LEVEL_THRESHOLDS:
        if score < upper:
            return level
    return RiskLevel.CRITICAL


def is_high_risk(signals: Iterable[Signal]) -> bool:
    """
    True when the score reaches HIGH_RISK_THRESHOLD, or when any signal is a
    honeypot, a rugpull risk, or of critical severity.
    """
    signals = list(signals)
    if calculate_risk_score(signals) >= HIGH_RISK_THRESHOLD:
        return True
    return any(
        enum_value(s.type) in DISQUALIFYING_TYPES
        or enum_value(s.severity) in DISQUALIFYING_SEVERITIES
        for s in signals
    )


def filter_by_severity(signals: Iterable[Signal], min_severity: SignalSeverityValue) -> list[Signal]:
    """Signals whose severity weight is at least that of min_severity, in input order."""
    min_weight = severity_weight(min_severity)
    return [s for s in signals if severity_weight(s.severity) >= min_weight]


def filter_by_type(signals: Iterable[Signal], types: Iterable[SignalTypeValue]) -> list[Signal]:
    """Signals whose type is one of types, in input order."""
    wanted = {enum_value(t) for t in types}
    return [s for s in signals if enum_value(s.type) in wanted]


def get_critical_signals(signals: Iterable[Signal]) -> list[Signal]:
    """Signals of high or critical severity."""
    return [s for s in signals if enum_value(s.severity) in CRITICAL_SIGNAL_SEVERITIES]


def sort_by_severity(signals: Iterable[Signal]) -> list[Signal]:
    """New list ordered by severity weight, highest first; ties keep input order."""
    return sorted(signals, key=lambda s: severity_weight(s.severity), reverse=True)


def group_by_type(signals: Iterable[Signal]) -> dict[Any, list[Signal]]:
    """Partition signals by type. Keys appear in first-seen order."""
    groups: dict[Any, list[Signal]] = {}
    for signal in signals:
        groups.setdefault(coerce_enum(SignalType, signal.type), []).append(signal)
    return groups


def format_signal(signal: Signal) -> str:
    """One-line display form: '<indicator> [SEVERITY] title: summary'."""
    severity = enum_value(signal.severity)
    indicator = SEVERITY_INDICATORS.get(severity, DEFAULT_SEVERITY_INDICATOR)
    return f"{indicator} [{severity.upper()}] {signal.title}: {signal.summary}"
