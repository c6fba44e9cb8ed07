"""
Typed wrappers for ClawFi API payloads.

Signals, token/market/holder/contract records and the response envelope.
Payloads arrive in camelCase; every record exposes snake_case fields and a
from_dict() that tolerates missing optional keys.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from clawfi.exceptions import ClawFiAPIError

T = TypeVar("T")

# Well-known chains; any other chain identifier string is also accepted by the API.
CHAIN_ETHEREUM = "ethereum"
CHAIN_BSC = "bsc"
CHAIN_POLYGON = "polygon"
CHAIN_ARBITRUM = "arbitrum"
CHAIN_OPTIMISM = "optimism"
CHAIN_AVALANCHE = "avalanche"
CHAIN_BASE = "base"
CHAIN_SOLANA = "solana"
KNOWN_CHAINS = (
    CHAIN_ETHEREUM,
    CHAIN_BSC,
    CHAIN_POLYGON,
    CHAIN_ARBITRUM,
    CHAIN_OPTIMISM,
    CHAIN_AVALANCHE,
    CHAIN_BASE,
    CHAIN_SOLANA,
)
ChainId = str


class SignalType(str, Enum):
    WHALE_MOVEMENT = "whale_movement"
    LIQUIDITY_CHANGE = "liquidity_change"
    HOLDER_CONCENTRATION = "holder_concentration"
    CONTRACT_RISK = "contract_risk"
    PRICE_MANIPULATION = "price_manipulation"
    RUGPULL_RISK = "rugpull_risk"
    HONEYPOT = "honeypot"
    MINT_AUTHORITY = "mint_authority"
    SOCIAL_SENTIMENT = "social_sentiment"


class SignalSeverity(str, Enum):
    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskLevel(str, Enum):
    SAFE = "safe"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# Values the API sent that are outside the enums stay as plain strings.
SignalTypeValue = Union[SignalType, str]
SignalSeverityValue = Union[SignalSeverity, str]


def enum_value(value: Any) -> str:
    """Plain string form of an enum member or raw value."""
    if isinstance(value, Enum):
        return value.value
    return "" if value is None else str(value)


def coerce_enum(enum_cls: type[Enum], value: Any) -> Any:
    """Enum member for known values, raw string otherwise."""
    raw = enum_value(value)
    try:
        return enum_cls(raw)
    except ValueError:
        return raw


def _opt_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def _opt_int(value: Any) -> int | None:
    if value is None:
        return None
    return int(value)


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Signal:
    """
    One detected risk or market event for a token.

    Signals are built from API payloads only; scoring helpers read them and
    never modify them.
    """

    id: str
    type: SignalTypeValue
    severity: SignalSeverityValue
    title: str
    summary: str
    timestamp: int
    details: str | None = None
    metadata: dict[str, Any] | None = field(default=None, hash=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Signal:
        return cls(
            id=str(data.get("id", "")),
            type=coerce_enum(SignalType, data.get("type")),
            severity=coerce_enum(SignalSeverity, data.get("severity")),
            title=str(data.get("title", "")),
            summary=str(data.get("summary", "")),
            timestamp=int(data.get("timestamp") or 0),
            details=data.get("details"),
            metadata=data.get("metadata"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "type": enum_value(self.type),
            "severity": enum_value(self.severity),
            "title": self.title,
            "summary": self.summary,
            "timestamp": self.timestamp,
        }
        if self.details is not None:
            out["details"] = self.details
        if self.metadata is not None:
            out["metadata"] = self.metadata
        return out


@dataclass
class TokenData:
    address: str
    chain: ChainId
    name: str | None = None
    symbol: str | None = None
    decimals: int | None = None
    price: float | None = None
    price_change_24h: float | None = None
    market_cap: float | None = None
    fdv: float | None = None
    volume_24h: float | None = None
    liquidity: float | None = None
    holders: int | None = None
    created_at: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenData:
        return cls(
            address=str(data.get("address", "")),
            chain=str(data.get("chain", "")),
            name=data.get("name"),
            symbol=data.get("symbol"),
            decimals=_opt_int(data.get("decimals")),
            price=_opt_float(data.get("price")),
            price_change_24h=_opt_float(data.get("priceChange24h")),
            market_cap=_opt_float(data.get("marketCap")),
            fdv=_opt_float(data.get("fdv")),
            volume_24h=_opt_float(data.get("volume24h")),
            liquidity=_opt_float(data.get("liquidity")),
            holders=_opt_int(data.get("holders")),
            created_at=_opt_int(data.get("createdAt")),
        )


@dataclass
class TimeframeValues:
    """Values over the 5m / 1h / 6h / 24h windows."""

    m5: float = 0.0
    h1: float = 0.0
    h6: float = 0.0
    h24: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TimeframeValues:
        data = data or {}
        return cls(
            m5=float(data.get("m5") or 0),
            h1=float(data.get("h1") or 0),
            h6=float(data.get("h6") or 0),
            h24=float(data.get("h24") or 0),
        )


@dataclass
class TransactionCounts:
    buys: int = 0
    sells: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TransactionCounts:
        data = data or {}
        return cls(buys=int(data.get("buys") or 0), sells=int(data.get("sells") or 0))


@dataclass
class MarketData:
    price: float
    price_change: TimeframeValues = field(default_factory=TimeframeValues)
    volume: TimeframeValues = field(default_factory=TimeframeValues)
    transactions: TransactionCounts = field(default_factory=TransactionCounts)
    liquidity: float = 0.0
    market_cap: float | None = None
    fdv: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MarketData:
        return cls(
            price=float(data.get("price") or 0),
            price_change=TimeframeValues.from_dict(data.get("priceChange")),
            volume=TimeframeValues.from_dict(data.get("volume")),
            transactions=TransactionCounts.from_dict(data.get("transactions")),
            liquidity=float(data.get("liquidity") or 0),
            market_cap=_opt_float(data.get("marketCap")),
            fdv=_opt_float(data.get("fdv")),
        )


@dataclass
class HolderAnalysis:
    total_holders: int
    top10_percentage: float
    top50_percentage: float
    top100_percentage: float
    whale_count: int
    avg_holding_time: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HolderAnalysis:
        return cls(
            total_holders=int(data.get("totalHolders") or 0),
            top10_percentage=float(data.get("top10Percentage") or 0),
            top50_percentage=float(data.get("top50Percentage") or 0),
            top100_percentage=float(data.get("top100Percentage") or 0),
            whale_count=int(data.get("whaleCount") or 0),
            avg_holding_time=_opt_float(data.get("avgHoldingTime")),
        )


@dataclass
class TopHolder:
    address: str
    balance: str
    """Raw token amount; kept as a string to avoid precision loss."""
    percentage: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TopHolder:
        return cls(
            address=str(data.get("address", "")),
            balance=str(data.get("balance", "0")),
            percentage=float(data.get("percentage") or 0),
        )


@dataclass
class ContractAnalysis:
    verified: bool = False
    renounced: bool = False
    honeypot: bool = False
    mintable: bool = False
    pausable: bool = False
    blacklist: bool = False
    tax_buy: float | None = None
    tax_sell: float | None = None
    max_transaction: float | None = None
    max_wallet: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContractAnalysis:
        return cls(
            verified=bool(data.get("verified", False)),
            renounced=bool(data.get("renounced", False)),
            honeypot=bool(data.get("honeypot", False)),
            mintable=bool(data.get("mintable", False)),
            pausable=bool(data.get("pausable", False)),
            blacklist=bool(data.get("blacklist", False)),
            tax_buy=_opt_float(data.get("taxBuy")),
            tax_sell=_opt_float(data.get("taxSell")),
            max_transaction=_opt_float(data.get("maxTransaction")),
            max_wallet=_opt_float(data.get("maxWallet")),
        )


@dataclass
class HoneypotCheck:
    is_honeypot: bool
    reason: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HoneypotCheck:
        return cls(is_honeypot=bool(data.get("isHoneypot", False)), reason=data.get("reason"))


@dataclass
class TokenAnalysis:
    """Full analysis bundle returned by /analyze."""

    token: TokenData
    market: MarketData
    signals: list[Signal]
    risk_score: float
    timestamp: int
    holders: HolderAnalysis | None = None
    contract: ContractAnalysis | None = None

    @property
    def risk_level(self) -> RiskLevel:
        from clawfi.signals import get_risk_level

        return get_risk_level(self.risk_score)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenAnalysis:
        holders = data.get("holders")
        contract = data.get("contract")
        return cls(
            token=TokenData.from_dict(data.get("token") or {}),
            market=MarketData.from_dict(data.get("market") or {}),
            signals=[Signal.from_dict(s) for s in data.get("signals") or []],
            risk_score=float(data.get("riskScore") or 0),
            timestamp=int(data.get("timestamp") or 0),
            holders=HolderAnalysis.from_dict(holders) if holders else None,
            contract=ContractAnalysis.from_dict(contract) if contract else None,
        )


@dataclass
class ApiResponse(Generic[T]):
    """
    Envelope for every client call.

    Remote failures never raise from the client; they come back with
    success=False and an error message. Use unwrap() to raise instead.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    timestamp: int = field(default_factory=now_ms)
    status_code: int | None = None

    def unwrap(self) -> T | None:
        """Return data, or raise ClawFiAPIError when the call failed."""
        if not self.success:
            raise ClawFiAPIError(self.error or "Unknown error", status_code=self.status_code, response=self)
        return self.data
