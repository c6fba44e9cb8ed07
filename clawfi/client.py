"""
ClawFi API client.

Uses a requests.Session. Every call returns an ApiResponse; network errors,
timeouts, bad JSON and non-2xx statuses come back as success=False instead of
raising. Call .unwrap() on the response to raise ClawFiAPIError.

Usage:
    from clawfi import ClawFi, calculate_risk_score
    with ClawFi(api_key="your-api-key") as clawfi:
        signals = clawfi.get_signals("ethereum", "0x...").unwrap()
        score = calculate_risk_score(signals)
"""

from __future__ import annotations

from typing import Any, Callable, Sequence
from urllib.parse import quote

import requests

from clawfi.clawfi_logging import bind_token, get_logger
from clawfi.config import ClawFiConfig, load_config
from clawfi.types import (
    ApiResponse,
    ChainId,
    ContractAnalysis,
    HolderAnalysis,
    HoneypotCheck,
    MarketData,
    Signal,
    SignalSeverityValue,
    TokenAnalysis,
    TokenData,
    TopHolder,
    enum_value,
)

logger = get_logger(__name__)

DEFAULT_RECENT_SIGNALS_LIMIT = 50
DEFAULT_TOP_HOLDERS_LIMIT = 100

Parser = Callable[[Any], Any]


def _list_of(parse_item: Callable[[dict[str, Any]], Any]) -> Parser:
    def parse(body: Any) -> list[Any]:
        return [parse_item(item) for item in body or []]

    return parse


def _segment(value: str, name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{name} is required")
    return quote(value, safe="")


def _positive_limit(limit: int) -> int:
    if limit < 1:
        raise ValueError("limit must be >= 1")
    return limit


class ClawFi:
    """Client for the ClawFi crypto intelligence API."""

    def __init__(
        self,
        config: ClawFiConfig | None = None,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.config = config or load_config(api_key=api_key, base_url=base_url, timeout=timeout)
        self._session = session or requests.Session()

    def __enter__(self) -> ClawFi:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        parse: Parser | None = None,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> ApiResponse[Any]:
        url = f"{self.config.base_url}{endpoint}"
        logger.debug("clawfi_request", method=method, endpoint=endpoint, params=params)
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.warning("clawfi_request_failed", method=method, endpoint=endpoint, error=str(e))
            return ApiResponse(success=False, error=str(e) or type(e).__name__)

        try:
            body = resp.json() if resp.content else None
        except ValueError as e:
            if resp.ok:
                logger.warning("clawfi_response_invalid", method=method, endpoint=endpoint, error=str(e))
                return ApiResponse(
                    success=False,
                    error=f"Invalid JSON response: {e}",
                    status_code=resp.status_code,
                )
            # Error pages are often HTML; fall back to the status code.
            body = None

        if not resp.ok:
            error = body.get("error") if isinstance(body, dict) else None
            error = error or f"HTTP {resp.status_code}"
            logger.info(
                "clawfi_http_error",
                method=method,
                endpoint=endpoint,
                status_code=resp.status_code,
                error=error,
            )
            return ApiResponse(success=False, error=error, status_code=resp.status_code)

        try:
            data = parse(body) if parse is not None else body
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("clawfi_response_invalid", method=method, endpoint=endpoint, error=str(e))
            return ApiResponse(
                success=False,
                error=f"Invalid response payload: {e}",
                status_code=resp.status_code,
            )
        return ApiResponse(success=True, data=data, status_code=resp.status_code)

    # --- Token analysis ---

    def analyze_token(self, chain: ChainId, address: str) -> ApiResponse[TokenAnalysis]:
        """Full analysis: token, market, holders, contract, signals and risk score."""
        path = f"/analyze/{_segment(chain, 'chain')}/{_segment(address, 'address')}"
        result = self._request("GET", path, parse=TokenAnalysis.from_dict)
        if result.success and result.data is not None:
            bind_token(chain, address).debug(
                "token_analysis_received",
                risk_score=result.data.risk_score,
                signal_count=len(result.data.signals),
            )
        return result

    def get_token(self, chain: ChainId, address: str) -> ApiResponse[TokenData]:
        path = f"/token/{_segment(chain, 'chain')}/{_segment(address, 'address')}"
        return self._request("GET", path, parse=TokenData.from_dict)

    # --- Signals ---

    def get_signals(self, chain: ChainId, address: str) -> ApiResponse[list[Signal]]:
        path = f"/signals/{_segment(chain, 'chain')}/{_segment(address, 'address')}"
        return self._request("GET", path, parse=_list_of(Signal.from_dict))

    def get_recent_signals(self, limit: int = DEFAULT_RECENT_SIGNALS_LIMIT) -> ApiResponse[list[Signal]]:
        return self._request(
            "GET",
            "/signals/recent",
            parse=_list_of(Signal.from_dict),
            params={"limit": _positive_limit(limit)},
        )

    def subscribe_signals(
        self,
        webhook_url: str,
        chains: Sequence[ChainId] | None = None,
        severity: Sequence[SignalSeverityValue] | None = None,
    ) -> ApiResponse[str]:
        """
        Register a webhook for signal delivery.

        Optional filters restrict delivery to the given chains and severities.
        Returns the subscription id.
        """
        if not (webhook_url or "").strip():
            raise ValueError("webhook_url is required")
        filters: dict[str, Any] | None = None
        if chains is not None or severity is not None:
            filters = {}
            if chains is not None:
                filters["chains"] = list(chains)
            if severity is not None:
                filters["severity"] = [enum_value(s) for s in severity]
        return self._request(
            "POST",
            "/signals/subscribe",
            parse=lambda body: body["subscriptionId"],
            json={"webhookUrl": webhook_url, "filters": filters},
        )

    # --- Market data ---

    def get_market_data(self, chain: ChainId, address: str) -> ApiResponse[MarketData]:
        path = f"/market/{_segment(chain, 'chain')}/{_segment(address, 'address')}"
        return self._request("GET", path, parse=MarketData.from_dict)

    def get_trending(self, chain: ChainId | None = None) -> ApiResponse[list[TokenData]]:
        """Trending tokens, across all chains or for one chain."""
        path = f"/trending/{_segment(chain, 'chain')}" if chain else "/trending"
        return self._request("GET", path, parse=_list_of(TokenData.from_dict))

    # --- Security ---

    def get_contract_analysis(self, chain: ChainId, address: str) -> ApiResponse[ContractAnalysis]:
        path = f"/security/{_segment(chain, 'chain')}/{_segment(address, 'address')}"
        return self._request("GET", path, parse=ContractAnalysis.from_dict)

    def check_honeypot(self, chain: ChainId, address: str) -> ApiResponse[HoneypotCheck]:
        path = f"/security/honeypot/{_segment(chain, 'chain')}/{_segment(address, 'address')}"
        return self._request("GET", path, parse=HoneypotCheck.from_dict)

    # --- Holders ---

    def get_holders(self, chain: ChainId, address: str) -> ApiResponse[HolderAnalysis]:
        path = f"/holders/{_segment(chain, 'chain')}/{_segment(address, 'address')}"
        return self._request("GET", path, parse=HolderAnalysis.from_dict)

    def get_top_holders(
        self,
        chain: ChainId,
        address: str,
        limit: int = DEFAULT_TOP_HOLDERS_LIMIT,
    ) -> ApiResponse[list[TopHolder]]:
        path = f"/holders/{_segment(chain, 'chain')}/{_segment(address, 'address')}/top"
        return self._request(
            "GET",
            path,
            parse=_list_of(TopHolder.from_dict),
            params={"limit": _positive_limit(limit)},
        )

    # --- Watchlist ---

    def add_to_watchlist(self, chain: ChainId, address: str) -> ApiResponse[str]:
        """Add a token to the watchlist. Returns the watchlist entry id."""
        _segment(chain, "chain")
        _segment(address, "address")
        chain, address = chain.strip(), address.strip()
        return self._request(
            "POST",
            "/watchlist",
            parse=lambda body: body["id"],
            json={"chain": chain, "address": address},
        )

    def get_watchlist(self) -> ApiResponse[list[TokenData]]:
        return self._request("GET", "/watchlist", parse=_list_of(TokenData.from_dict))

    def remove_from_watchlist(self, entry_id: str) -> ApiResponse[None]:
        path = f"/watchlist/{_segment(entry_id, 'entry_id')}"
        return self._request("DELETE", path, parse=lambda body: None)
