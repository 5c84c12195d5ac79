"""Alternate signal source: an external signal provider instead of Gemini.

These records carry no grounding citations and are only guaranteed to have
the TradingSignal shape.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

import requests

from ..signals.errors import BackendError, ConfigurationError, MalformedResponseError
from ..signals.parser import signals_from_payload
from ..signals.types import TradingSignal

logger = logging.getLogger(__name__)

MIN_SIGNALS = 1
MAX_SIGNALS = 10
PROVIDER_FORMAT_MESSAGE = "The signal provider returned data in an unexpected format."


def clamp_signal_count(value: Any) -> int:
    """Number of signals to request: integer in 1..10, anything unparsable becomes 1."""

    try:
        num = int(value)
    except (TypeError, ValueError):
        return MIN_SIGNALS
    return max(MIN_SIGNALS, min(MAX_SIGNALS, num))


def _mock_delay_from_env() -> float:
    raw = os.getenv("THIRD_PARTY_MOCK_DELAY_SECONDS", "1.5")
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"THIRD_PARTY_MOCK_DELAY_SECONDS must be a number of seconds, got {raw!r}") from e


def split_query(query: str) -> List[str]:
    return [c.strip() for c in (query or "").upper().split(",") if c.strip()]


class SignalProvider(Protocol):

    def fetch_signals(self, query: str, num_signals: int) -> List[TradingSignal]:
        raise NotImplementedError


def _mock_records() -> List[Dict[str, Any]]:
    return [
        {
            "assetName": "Chainlink (LINK)",
            "assetType": "crypto",
            "signal": "Strong Buy",
            "analysis": "Data from external API shows a strong accumulation pattern for LINK, with on-chain metrics pointing to an imminent breakout above the $20 resistance level.",
            "currentPrice": "$18.85",
            "entryPrice": "$18.50 - $19.00",
            "exitPrice": "$25.00",
            "stopLoss": "$17.00",
            "timeline": "2-3 weeks",
        },
        {
            "assetName": "Avalanche (AVAX)",
            "assetType": "crypto",
            "signal": "Hold",
            "analysis": "AVAX is currently consolidating. The API data suggests waiting for a clear break of the current range before entering a new position.",
            "currentPrice": "$36.50",
            "entryPrice": "N/A",
            "exitPrice": "N/A",
            "stopLoss": "N/A",
            "timeline": "1 week",
        },
        {
            "assetName": "Cardano (ADA)",
            "assetType": "crypto",
            "signal": "Sell",
            "analysis": "According to the signal provider, Cardano has hit a major resistance point and is expected to pull back in the short term.",
            "currentPrice": "$0.47",
            "entryPrice": "$0.48 - $0.49",
            "exitPrice": "$0.42",
            "stopLoss": "$0.51",
            "timeline": "4-6 days",
        },
        {
            "assetName": "Bitcoin (BTC)",
            "assetType": "crypto",
            "signal": "Buy",
            "analysis": "Mock API data suggests Bitcoin is holding a key support level and is poised for a move higher. Institutional interest remains strong.",
            "currentPrice": "$67,300",
            "entryPrice": "$67,000 - $67,500",
            "exitPrice": "$71,000",
            "stopLoss": "$65,000",
            "timeline": "1-2 weeks",
        },
        {
            "assetName": "Ethereum (ETH)",
            "assetType": "crypto",
            "signal": "Hold",
            "analysis": "Mock API suggests ETH is in a consolidation phase before its next major move. Watch for a breakout above $3,800.",
            "currentPrice": "$3,550",
            "entryPrice": "N/A",
            "exitPrice": "N/A",
            "stopLoss": "N/A",
            "timeline": "2 weeks",
        },
        {
            "assetName": "Solana (SOL)",
            "assetType": "crypto",
            "signal": "Buy",
            "analysis": "Solana is showing strong support at the $150 level, with potential for a bounce towards the next resistance. Trading volume has increased, suggesting accumulation.",
            "currentPrice": "$152.70",
            "entryPrice": "$150 - $155",
            "exitPrice": "$175",
            "stopLoss": "$142",
            "timeline": "5-7 days",
        },
    ]


@dataclass
class MockSignalProvider:
    """Canned provider standing in for a real REST signal service.

    Records whose asset name contains "(<TICKER>)" for a requested ticker are
    returned; with no match (or no tickers) the first `num_signals` records are.
    """

    delay_seconds: float = field(default_factory=_mock_delay_from_env)
    records: List[Dict[str, Any]] = field(default_factory=_mock_records)

    def fetch_signals(self, query: str, num_signals: int) -> List[TradingSignal]:
        logger.info(
            f"[MockSignalProvider] Fetching signals for query: {query!r} with a limit of {num_signals} signals."
        )
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)

        # Fresh records per call; callers attach news to them in place.
        signals = signals_from_payload(self.records, PROVIDER_FORMAT_MESSAGE)
        coins = split_query(query)
        if coins:
            matched = [s for s in signals if any(f"({c})" in s.asset_name.upper() for c in coins)]
            if matched:
                return matched
        return signals[: clamp_signal_count(num_signals)]


@dataclass
class RestSignalProvider:
    """Minimal REST client for an external signal provider.

    Expects GET <base_url>?coins=BTC,ETH&limit=N to answer with either
    {"signals": [...]} or a bare list of TradingSignal-shaped objects.
    """

    base_url: Optional[str] = None
    api_key: Optional[str] = None
    timeout_seconds: float = 15.0
    session: Optional[requests.Session] = None

    def __post_init__(self) -> None:
        if self.base_url is None:
            self.base_url = os.getenv("THIRD_PARTY_SIGNALS_URL")
        if self.api_key is None:
            self.api_key = os.getenv("THIRD_PARTY_SIGNALS_API_KEY")
        if self.session is None:
            self.session = requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": "Jigoor/1.0",
        }
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    def fetch_signals(self, query: str, num_signals: int) -> List[TradingSignal]:
        if not self.base_url:
            raise BackendError("THIRD_PARTY_SIGNALS_URL is not configured")

        params = {
            "coins": ",".join(split_query(query)),
            "limit": clamp_signal_count(num_signals),
        }

        assert self.session is not None
        try:
            resp = self.session.get(
                self.base_url, params=params, headers=self._headers(), timeout=float(self.timeout_seconds)
            )
        except requests.RequestException as e:
            raise BackendError(f"Signal provider request failed: {e.__class__.__name__}") from e

        if resp.status_code != 200:
            # Never echo the api key.
            raise BackendError(f"Signal provider HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as e:
            logger.warning(f"[RestSignalProvider] Non-JSON response: {resp.text[:500]!r}")
            raise MalformedResponseError(PROVIDER_FORMAT_MESSAGE) from e

        return signals_from_payload(payload, PROVIDER_FORMAT_MESSAGE)


def create_default_signal_provider() -> SignalProvider:
    """REST provider when THIRD_PARTY_SIGNALS_URL is set, otherwise the mock."""

    if os.getenv("THIRD_PARTY_SIGNALS_URL"):
        return RestSignalProvider()
    return MockSignalProvider()
