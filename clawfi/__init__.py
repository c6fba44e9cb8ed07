"""
ClawFi SDK: client for the ClawFi crypto intelligence API.

Token analysis, signal feeds, market data, contract security checks, holder
analysis and watchlist management, plus local helpers to score signal
collections and format market metrics.
"""

from clawfi.client import ClawFi
from clawfi.config import ClawFiConfig, load_config
from clawfi.exceptions import ClawFiAPIError, ClawFiError
from clawfi.market import (
    compare_tokens,
    detect_dump_pattern,
    detect_pump_pattern,
    format_change,
    format_market_cap,
    format_price,
    format_volume,
    get_buy_sell_ratio,
    get_liquidity_ratio,
    get_market_summary,
    get_momentum,
    has_sufficient_liquidity,
)
from clawfi.signals import (
    SEVERITY_WEIGHTS,
    TYPE_RISK_FACTORS,
    calculate_risk_score,
    filter_by_severity,
    filter_by_type,
    format_signal,
    get_critical_signals,
    get_risk_level,
    group_by_type,
    is_high_risk,
    sort_by_severity,
)
from clawfi.types import (
    ApiResponse,
    ChainId,
    ContractAnalysis,
    HolderAnalysis,
    HoneypotCheck,
    MarketData,
    RiskLevel,
    Signal,
    SignalSeverity,
    SignalType,
    TimeframeValues,
    TokenAnalysis,
    TokenData,
    TopHolder,
    TransactionCounts,
)

__version__ = "0.1.0"

__all__ = [
    "ClawFi",
    "ClawFiConfig",
    "load_config",
    "ClawFiError",
    "ClawFiAPIError",
    "ApiResponse",
    "ChainId",
    "ContractAnalysis",
    "HolderAnalysis",
    "HoneypotCheck",
    "MarketData",
    "RiskLevel",
    "Signal",
    "SignalSeverity",
    "SignalType",
    "TimeframeValues",
    "TokenAnalysis",
    "TokenData",
    "TopHolder",
    "TransactionCounts",
    "SEVERITY_WEIGHTS",
    "TYPE_RISK_FACTORS",
    "calculate_risk_score",
    "filter_by_severity",
    "filter_by_type",
    "format_signal",
    "get_critical_signals",
    "get_risk_level",
    "group_by_type",
    "is_high_risk",
    "sort_by_severity",
    "compare_tokens",
    "detect_dump_pattern",
    "detect_pump_pattern",
    "format_change",
    "format_market_cap",
    "format_price",
    "format_volume",
    "get_buy_sell_ratio",
    "get_liquidity_ratio",
    "get_market_summary",
    "get_momentum",
    "has_sufficient_liquidity",
]
