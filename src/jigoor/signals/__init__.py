"""Gemini-backed signal and news requests (contract, parsing, ranking)."""

from .errors import BackendError, ConfigurationError, MalformedResponseError, SignalDeskError
from .gemini_client import GeminiClient, GroundedModel, GroundedResponse, StaticGroundedModel
from .parser import parse_news, parse_signals, signals_from_payload, strip_code_fences
from .ranking import SIGNAL_PRIORITY, signal_priority, sort_signals
from .service import NewsRequestService, SignalRequestService
from .sources import dedupe_sources, sources_from_response
from .types import (
    AssetType,
    FibonacciLevels,
    NewsAnalysis,
    NewsResult,
    SignalResult,
    Source,
    TradingSignal,
)

__all__ = [
    "BackendError",
    "ConfigurationError",
    "MalformedResponseError",
    "SignalDeskError",
    "GeminiClient",
    "GroundedModel",
    "GroundedResponse",
    "StaticGroundedModel",
    "parse_news",
    "parse_signals",
    "signals_from_payload",
    "strip_code_fences",
    "SIGNAL_PRIORITY",
    "signal_priority",
    "sort_signals",
    "NewsRequestService",
    "SignalRequestService",
    "dedupe_sources",
    "sources_from_response",
    "AssetType",
    "FibonacciLevels",
    "NewsAnalysis",
    "NewsResult",
    "SignalResult",
    "Source",
    "TradingSignal",
]
