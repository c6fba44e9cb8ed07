"""
Market data helpers: display formatting and simple momentum / pump / dump heuristics.
"""

from __future__ import annotations

import math

from clawfi.types import MarketData, TokenData

DEFAULT_MIN_LIQUIDITY_USD = 10_000.0

MOMENTUM_BULLISH = "bullish"
MOMENTUM_BEARISH = "bearish"
MOMENTUM_NEUTRAL = "neutral"
# Mean price change (%) across 5m/1h/6h/24h beyond which momentum is directional.
MOMENTUM_THRESHOLD_PCT = 5.0

# Pump: fast price rise on thin liquidity relative to market cap.
PUMP_H1_CHANGE_PCT = 50.0
PUMP_M5_CHANGE_PCT = 20.0
PUMP_MAX_LIQUIDITY_RATIO = 0.05

# Dump: fast price drop with sells dominating.
DUMP_H1_CHANGE_PCT = -30.0
DUMP_M5_CHANGE_PCT = -15.0
DUMP_MAX_BUY_RATIO = 0.3

_CAP_UNITS = (
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)


def format_price(price: float) -> str:
    """Decimals scale with magnitude; sub-0.0001 prices use scientific notation."""
    if price >= 1:
        return f"{price:.2f}"
    if price >= 0.01:
        return f"{price:.4f}"
    if price >= 0.0001:
        return f"{price:.6f}"
    return f"{price:.2e}"


def format_market_cap(value: float) -> str:
    """Dollar amount with T/B/M/K suffix, e.g. $1.50M."""
    for threshold, suffix in _CAP_UNITS:
        if value >= threshold:
            return f"${value / threshold:.2f}{suffix}"
    return f"${value:.2f}"


def format_volume(value: float) -> str:
    return format_market_cap(value)


def format_change(change: float) -> str:
    """Signed percentage, e.g. +12.50% or -3.20%."""
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.2f}%"


def get_buy_sell_ratio(market: MarketData) -> float:
    """Share of buys among all transactions; 0.5 when there were none."""
    total = market.transactions.buys + market.transactions.sells
    if total == 0:
        return 0.5
    return market.transactions.buys / total


def get_momentum(market: MarketData) -> str:
    changes = (
        market.price_change.m5,
        market.price_change.h1,
        market.price_change.h6,
        market.price_change.h24,
    )
    avg_change = sum(changes) / len(changes)
    if avg_change > MOMENTUM_THRESHOLD_PCT:
        return MOMENTUM_BULLISH
    if avg_change < -MOMENTUM_THRESHOLD_PCT:
        return MOMENTUM_BEARISH
    return MOMENTUM_NEUTRAL


def has_sufficient_liquidity(market: MarketData, min_usd: float = DEFAULT_MIN_LIQUIDITY_USD) -> bool:
    return market.liquidity >= min_usd


def get_liquidity_ratio(market: MarketData) -> float | None:
    """Liquidity / market cap; None when market cap is missing or zero."""
    if not market.market_cap:
        return None
    return market.liquidity / market.market_cap


def detect_pump_pattern(market: MarketData) -> bool:
    big_price_move = (
        market.price_change.h1 > PUMP_H1_CHANGE_PCT
        or market.price_change.m5 > PUMP_M5_CHANGE_PCT
    )
    ratio = get_liquidity_ratio(market)
    return big_price_move and ratio is not None and ratio < PUMP_MAX_LIQUIDITY_RATIO


def detect_dump_pattern(market: MarketData) -> bool:
    big_price_drop = (
        market.price_change.h1 < DUMP_H1_CHANGE_PCT
        or market.price_change.m5 < DUMP_M5_CHANGE_PCT
    )
    return big_price_drop and get_buy_sell_ratio(market) < DUMP_MAX_BUY_RATIO


def get_market_summary(market: MarketData) -> dict[str, str]:
    """Display-ready strings for the main market metrics."""
    buy_pct = int(math.floor(get_buy_sell_ratio(market) * 100 + 0.5))
    return {
        "price_formatted": f"${format_price(market.price)}",
        "change_24h": format_change(market.price_change.h24),
        "volume_24h": format_volume(market.volume.h24),
        "liquidity": format_market_cap(market.liquidity),
        "momentum": get_momentum(market),
        "buy_sell_ratio": f"{buy_pct}% buys",
    }


def compare_tokens(a: TokenData, b: TokenData) -> dict[str, str]:
    """
    Label of the token leading on market cap, 24h volume and liquidity.

    Labels are the token symbols, or "A" / "B" when a symbol is missing.
    Ties go to b; missing metrics count as 0.
    """
    label_a = a.symbol or "A"
    label_b = b.symbol or "B"

    def _higher(value_a: float | None, value_b: float | None) -> str:
        return label_a if (value_a or 0) > (value_b or 0) else label_b

    return {
        "higher_mcap": _higher(a.market_cap, b.market_cap),
        "higher_volume": _higher(a.volume_24h, b.volume_24h),
        "higher_liquidity": _higher(a.liquidity, b.liquidity),
    }
