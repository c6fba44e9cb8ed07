"""
Tests for the ClawFi API client (clawfi.client.ClawFi).

Uses a mocked requests.Session: request() returns MagicMock responses with
status_code / ok / content / json(). No network.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import requests

from clawfi.client import ClawFi
from clawfi.config import ClawFiConfig
from clawfi.exceptions import ClawFiAPIError
from clawfi.types import (
    ContractAnalysis,
    HolderAnalysis,
    HoneypotCheck,
    MarketData,
    RiskLevel,
    Signal,
    SignalSeverity,
    SignalType,
    TokenAnalysis,
    TokenData,
    TopHolder,
)

TOKEN = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
BASE = "https://api.test.local"

SIGNAL_PAYLOAD = {
    "id": "sig-1",
    "type": "honeypot",
    "severity": "critical",
    "title": "Honeypot detected",
    "summary": "Sell transactions revert",
    "timestamp": 1_700_000_000_000,
    "metadata": {"simulatedSellTax": 100},
}

MARKET_PAYLOAD = {
    "price": 0.0021,
    "priceChange": {"m5": 1.2, "h1": -3.4, "h6": 10.0, "h24": 25.5},
    "volume": {"m5": 100, "h1": 2_000, "h6": 15_000, "h24": 80_000},
    "transactions": {"buys": 120, "sells": 80},
    "liquidity": 45_000,
    "marketCap": 900_000,
}


def _response(status: int = 200, body=None, raw: bytes | None = None) -> MagicMock:
    """Build a requests.Response-like mock."""
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 400
    if raw is not None:
        resp.content = raw
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    elif body is None:
        resp.content = b""
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        resp.content = json.dumps(body).encode()
        resp.json.return_value = body
    return resp


def _call(mock_session):
    """(method, url, kwargs) of the single request made."""
    assert mock_session.request.call_count == 1
    args, kwargs = mock_session.request.call_args
    return args[0], args[1], kwargs


# --- Transport ---


def test_request_headers_and_timeout(clawfi_client, mock_session):
    mock_session.request.return_value = _response(body=[])
    clawfi_client.get_signals("ethereum", TOKEN)
    method, url, kwargs = _call(mock_session)
    assert method == "GET"
    assert url == f"{BASE}/signals/ethereum/{TOKEN}"
    assert kwargs["headers"]["Authorization"] == "Bearer test-key"
    assert kwargs["headers"]["Accept"] == "application/json"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"] == 5.0


def test_no_authorization_without_api_key(mock_session):
    client = ClawFi(ClawFiConfig(api_key="", base_url=BASE), session=mock_session)
    mock_session.request.return_value = _response(body=[])
    client.get_watchlist()
    _, _, kwargs = _call(mock_session)
    assert "Authorization" not in kwargs["headers"]


def test_http_error_uses_body_error(clawfi_client, mock_session):
    mock_session.request.return_value = _response(status=404, body={"error": "Token not found"})
    result = clawfi_client.get_token("ethereum", TOKEN)
    assert result.success is False
    assert result.error == "Token not found"
    assert result.status_code == 404
    assert result.data is None
    assert result.timestamp > 0


def test_http_error_without_json_body(clawfi_client, mock_session):
    mock_session.request.return_value = _response(status=502, raw=b"<html>Bad Gateway</html>")
    result = clawfi_client.get_token("ethereum", TOKEN)
    assert result.success is False
    assert result.error == "HTTP 502"


def test_http_error_json_without_error_key(clawfi_client, mock_session):
    mock_session.request.return_value = _response(status=500, body={"detail": "boom"})
    result = clawfi_client.get_token("ethereum", TOKEN)
    assert result.error == "HTTP 500"


def test_timeout_returns_failed_response(clawfi_client, mock_session):
    mock_session.request.side_effect = requests.Timeout("Read timed out")
    result = clawfi_client.get_signals("ethereum", TOKEN)
    assert result.success is False
    assert result.error == "Read timed out"
    assert result.status_code is None


def test_connection_error_returns_failed_response(clawfi_client, mock_session):
    mock_session.request.side_effect = requests.ConnectionError()
    result = clawfi_client.get_trending()
    assert result.success is False
    assert result.error == "ConnectionError"


def test_invalid_json_on_success(clawfi_client, mock_session):
    mock_session.request.return_value = _response(status=200, raw=b"not json")
    result = clawfi_client.get_market_data("ethereum", TOKEN)
    assert result.success is False
    assert result.error.startswith("Invalid JSON response")


def test_malformed_payload_returns_failed_response(clawfi_client, mock_session):
    mock_session.request.return_value = _response(body={"price": "not-a-number"})
    result = clawfi_client.get_market_data("ethereum", TOKEN)
    assert result.success is False
    assert result.error.startswith("Invalid response payload")


def test_unwrap(clawfi_client, mock_session):
    mock_session.request.return_value = _response(status=401, body={"error": "Invalid API key"})
    result = clawfi_client.get_watchlist()
    with pytest.raises(ClawFiAPIError) as exc_info:
        result.unwrap()
    assert exc_info.value.status_code == 401
    assert "Invalid API key" in str(exc_info.value)

    mock_session.request.reset_mock()
    mock_session.request.return_value = _response(body=[])
    assert clawfi_client.get_watchlist().unwrap() == []


def test_missing_path_arguments_raise(clawfi_client, mock_session):
    with pytest.raises(ValueError):
        clawfi_client.get_signals("", TOKEN)
    with pytest.raises(ValueError):
        clawfi_client.get_holders("ethereum", "  ")
    with pytest.raises(ValueError):
        clawfi_client.get_recent_signals(limit=0)
    mock_session.request.assert_not_called()


def test_context_manager_closes_session(mock_session):
    with ClawFi(ClawFiConfig(base_url=BASE), session=mock_session) as client:
        assert client.config.base_url == BASE
    mock_session.close.assert_called_once()


# --- Endpoints ---


def test_analyze_token(clawfi_client, mock_session):
    payload = {
        "token": {"address": TOKEN, "chain": "ethereum", "symbol": "USDT", "marketCap": 1e9},
        "market": MARKET_PAYLOAD,
        "holders": {
            "totalHolders": 5000,
            "top10Percentage": 42.5,
            "top50Percentage": 70.0,
            "top100Percentage": 81.2,
            "whaleCount": 12,
        },
        "contract": {"verified": True, "honeypot": False, "taxBuy": 1.5},
        "signals": [SIGNAL_PAYLOAD],
        "riskScore": 85,
        "timestamp": 1_700_000_000_500,
    }
    mock_session.request.return_value = _response(body=payload)
    result = clawfi_client.analyze_token("ethereum", TOKEN)
    _, url, _ = _call(mock_session)
    assert url == f"{BASE}/analyze/ethereum/{TOKEN}"
    assert result.success is True
    analysis = result.data
    assert isinstance(analysis, TokenAnalysis)
    assert analysis.token.symbol == "USDT"
    assert analysis.token.market_cap == 1e9
    assert analysis.market.transactions.buys == 120
    assert analysis.holders.whale_count == 12
    assert analysis.contract.verified is True
    assert analysis.contract.tax_buy == 1.5
    assert analysis.contract.renounced is False
    assert analysis.signals[0].type is SignalType.HONEYPOT
    assert analysis.risk_level is RiskLevel.CRITICAL


def test_analyze_token_without_optional_sections(clawfi_client, mock_session):
    payload = {"token": {"address": TOKEN, "chain": "base"}, "market": {"price": 1}, "signals": [], "riskScore": 0}
    mock_session.request.return_value = _response(body=payload)
    analysis = clawfi_client.analyze_token("base", TOKEN).unwrap()
    assert analysis.holders is None
    assert analysis.contract is None
    assert analysis.risk_level is RiskLevel.SAFE


def test_get_token(clawfi_client, mock_session):
    mock_session.request.return_value = _response(
        body={"address": TOKEN, "chain": "ethereum", "name": "Tether", "decimals": 6, "priceChange24h": -0.1}
    )
    token = clawfi_client.get_token("ethereum", TOKEN).unwrap()
    _, url, _ = _call(mock_session)
    assert url == f"{BASE}/token/ethereum/{TOKEN}"
    assert isinstance(token, TokenData)
    assert token.decimals == 6
    assert token.price_change_24h == -0.1
    assert token.price is None


def test_get_signals(clawfi_client, mock_session):
    unknown = dict(SIGNAL_PAYLOAD, id="sig-2", type="flash_loan", severity="severe")
    mock_session.request.return_value = _response(body=[SIGNAL_PAYLOAD, unknown])
    signals = clawfi_client.get_signals("solana", "So11111111111111111111111111111111111111112").unwrap()
    assert [type(s) for s in signals] == [Signal, Signal]
    assert signals[0].severity is SignalSeverity.CRITICAL
    assert signals[0].metadata == {"simulatedSellTax": 100}
    assert signals[1].type == "flash_loan"
    assert signals[1].severity == "severe"


def test_get_recent_signals(clawfi_client, mock_session):
    mock_session.request.return_value = _response(body=[SIGNAL_PAYLOAD])
    clawfi_client.get_recent_signals()
    _, url, kwargs = _call(mock_session)
    assert url == f"{BASE}/signals/recent"
    assert kwargs["params"] == {"limit": 50}

    mock_session.request.reset_mock()
    clawfi_client.get_recent_signals(limit=10)
    _, _, kwargs = _call(mock_session)
    assert kwargs["params"] == {"limit": 10}


def test_subscribe_signals(clawfi_client, mock_session):
    mock_session.request.return_value = _response(body={"subscriptionId": "sub-123"})
    result = clawfi_client.subscribe_signals(
        "https://hooks.example.com/clawfi",
        chains=["ethereum", "base"],
        severity=[SignalSeverity.HIGH, "critical"],
    )
    method, url, kwargs = _call(mock_session)
    assert method == "POST"
    assert url == f"{BASE}/signals/subscribe"
    assert kwargs["json"] == {
        "webhookUrl": "https://hooks.example.com/clawfi",
        "filters": {"chains": ["ethereum", "base"], "severity": ["high", "critical"]},
    }
    assert result.data == "sub-123"


def test_subscribe_signals_without_filters(clawfi_client, mock_session):
    mock_session.request.return_value = _response(body={"subscriptionId": "sub-1"})
    clawfi_client.subscribe_signals("https://hooks.example.com/clawfi")
    _, _, kwargs = _call(mock_session)
    assert kwargs["json"] == {"webhookUrl": "https://hooks.example.com/clawfi", "filters": None}


def test_subscribe_signals_missing_subscription_id(clawfi_client, mock_session):
    mock_session.request.return_value = _response(body={})
    result = clawfi_client.subscribe_signals("https://hooks.example.com/clawfi")
    assert result.success is False


def test_get_market_data(clawfi_client, mock_session):
    mock_session.request.return_value = _response(body=MARKET_PAYLOAD)
    market = clawfi_client.get_market_data("ethereum", TOKEN).unwrap()
    _, url, _ = _call(mock_session)
    assert url == f"{BASE}/market/ethereum/{TOKEN}"
    assert isinstance(market, MarketData)
    assert market.price_change.h24 == 25.5
    assert market.volume.h1 == 2_000
    assert market.market_cap == 900_000
    assert market.fdv is None


def test_get_trending(clawfi_client, mock_session):
    mock_session.request.return_value = _response(body=[{"address": TOKEN, "chain": "bsc"}])
    tokens = clawfi_client.get_trending("bsc").unwrap()
    _, url, _ = _call(mock_session)
    assert url == f"{BASE}/trending/bsc"
    assert tokens[0].chain == "bsc"

    mock_session.request.reset_mock()
    clawfi_client.get_trending()
    _, url, _ = _call(mock_session)
    assert url == f"{BASE}/trending"


def test_get_contract_analysis(clawfi_client, mock_session):
    mock_session.request.return_value = _response(
        body={"verified": False, "mintable": True, "blacklist": True, "taxSell": 25}
    )
    contract = clawfi_client.get_contract_analysis("ethereum", TOKEN).unwrap()
    _, url, _ = _call(mock_session)
    assert url == f"{BASE}/security/ethereum/{TOKEN}"
    assert isinstance(contract, ContractAnalysis)
    assert contract.mintable is True
    assert contract.tax_sell == 25


def test_check_honeypot(clawfi_client, mock_session):
    mock_session.request.return_value = _response(body={"isHoneypot": True, "reason": "transfer blocked"})
    check = clawfi_client.check_honeypot("ethereum", TOKEN).unwrap()
    _, url, _ = _call(mock_session)
    assert url == f"{BASE}/security/honeypot/ethereum/{TOKEN}"
    assert check == HoneypotCheck(is_honeypot=True, reason="transfer blocked")


def test_get_holders(clawfi_client, mock_session):
    mock_session.request.return_value = _response(
        body={
            "totalHolders": 10,
            "top10Percentage": 100,
            "top50Percentage": 100,
            "top100Percentage": 100,
            "whaleCount": 3,
            "avgHoldingTime": 3600,
        }
    )
    holders = clawfi_client.get_holders("ethereum", TOKEN).unwrap()
    _, url, _ = _call(mock_session)
    assert url == f"{BASE}/holders/ethereum/{TOKEN}"
    assert isinstance(holders, HolderAnalysis)
    assert holders.avg_holding_time == 3600


def test_get_top_holders(clawfi_client, mock_session):
    mock_session.request.return_value = _response(
        body=[{"address": "0xabc", "balance": "123456789012345678901234", "percentage": 12.5}]
    )
    holders = clawfi_client.get_top_holders("ethereum", TOKEN, limit=5).unwrap()
    _, url, kwargs = _call(mock_session)
    assert url == f"{BASE}/holders/ethereum/{TOKEN}/top"
    assert kwargs["params"] == {"limit": 5}
    assert holders == [TopHolder(address="0xabc", balance="123456789012345678901234", percentage=12.5)]


def test_watchlist_crud(clawfi_client, mock_session):
    mock_session.request.return_value = _response(status=201, body={"id": "w-1"})
    assert clawfi_client.add_to_watchlist("ethereum", TOKEN).unwrap() == "w-1"
    method, url, kwargs = _call(mock_session)
    assert (method, url) == ("POST", f"{BASE}/watchlist")
    assert kwargs["json"] == {"chain": "ethereum", "address": TOKEN}

    mock_session.request.reset_mock()
    mock_session.request.return_value = _response(body=[{"address": TOKEN, "chain": "ethereum"}])
    watchlist = clawfi_client.get_watchlist().unwrap()
    method, url, _ = _call(mock_session)
    assert (method, url) == ("GET", f"{BASE}/watchlist")
    assert watchlist[0].address == TOKEN

    mock_session.request.reset_mock()
    mock_session.request.return_value = _response(status=204)
    result = clawfi_client.remove_from_watchlist("w-1")
    method, url, _ = _call(mock_session)
    assert (method, url) == ("DELETE", f"{BASE}/watchlist/w-1")
    assert result.success is True
    assert result.data is None


def test_empty_body_on_list_endpoints(clawfi_client, mock_session):
    """A 2xx with no body on a list endpoint yields an empty list."""
    mock_session.request.return_value = _response(status=200)
    assert clawfi_client.get_signals("ethereum", TOKEN).unwrap() == []
    assert clawfi_client.get_watchlist().unwrap() == []
    assert clawfi_client.get_trending().unwrap() == []


def test_empty_body_on_record_endpoint_fails(clawfi_client, mock_session):
    mock_session.request.return_value = _response(status=200)
    result = clawfi_client.get_token("ethereum", TOKEN)
    assert result.success is False
    assert result.error.startswith("Invalid response payload")


def test_add_to_watchlist_sends_stripped_values(clawfi_client, mock_session):
    mock_session.request.return_value = _response(status=201, body={"id": "w-2"})
    clawfi_client.add_to_watchlist(" ethereum ", f"  {TOKEN}\n")
    _, _, kwargs = _call(mock_session)
    assert kwargs["json"] == {"chain": "ethereum", "address": TOKEN}
