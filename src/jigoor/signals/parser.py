"""Strict parsing of the JSON contract returned by the model.

The model is asked for clean JSON but is not bound to produce it, so every
payload is treated as untrusted: fences are stripped, the text is parsed, and
the result is checked against the expected shape. Nothing is repaired or
coerced; a payload either matches or is rejected with MalformedResponseError.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

from .errors import MalformedResponseError
from .types import (
    ASSET_TYPES,
    FIBONACCI_KEYS,
    FibonacciLevels,
    NewsAnalysis,
    TradingSignal,
)

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*")

SIGNALS_FORMAT_MESSAGE = "The AI returned a response in an unexpected format. Please try again."
NEWS_FORMAT_MESSAGE = "The AI returned a news analysis in an unexpected format. Please try again."

_REQUIRED_SIGNAL_KEYS = {
    "assetName": "asset_name",
    "signal": "signal",
    "analysis": "analysis",
    "entryPrice": "entry_price",
    "exitPrice": "exit_price",
    "timeline": "timeline",
}
_OPTIONAL_SIGNAL_KEYS = {
    "currentPrice": "current_price",
    "stopLoss": "stop_loss",
}


def strip_code_fences(text: str) -> str:
    """Remove ``` / ```json markers wherever they appear and trim whitespace."""

    return _FENCE_RE.sub("", text or "").strip()


def _load_json(text: str, message: str) -> Any:
    clean = strip_code_fences(text)
    try:
        return json.loads(clean)
    except json.JSONDecodeError as e:
        logger.warning(f"[ResponseParser] JSON parse error: {e}. Raw response: {text!r}")
        raise MalformedResponseError(message) from e


def _fibonacci_from_json(obj: Any) -> Optional[FibonacciLevels]:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise ValueError("fibonacciLevels is not an object")
    missing = [k for k in FIBONACCI_KEYS if not isinstance(obj.get(k), str)]
    if missing:
        raise ValueError(f"fibonacciLevels missing string keys: {', '.join(missing)}")
    return FibonacciLevels(**{k: obj[k] for k in FIBONACCI_KEYS})


def signal_from_json(obj: Any) -> TradingSignal:
    """Build one TradingSignal from a decoded JSON object.

    Raises ValueError describing the first violation. Unknown `signal` labels
    are accepted; they only affect ranking.
    """

    if not isinstance(obj, dict):
        raise ValueError(f"signal entry is {type(obj).__name__}, expected object")

    kwargs: Dict[str, Any] = {}
    for wire_key, attr in _REQUIRED_SIGNAL_KEYS.items():
        value = obj.get(wire_key)
        if not isinstance(value, str):
            raise ValueError(f"'{wire_key}' must be a string")
        kwargs[attr] = value

    asset_type = obj.get("assetType")
    if asset_type not in ASSET_TYPES:
        raise ValueError(f"'assetType' must be one of {ASSET_TYPES}, got {asset_type!r}")
    kwargs["asset_type"] = asset_type

    for wire_key, attr in _OPTIONAL_SIGNAL_KEYS.items():
        value = obj.get(wire_key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"'{wire_key}' must be a string when present")
        kwargs[attr] = value

    kwargs["fibonacci_levels"] = _fibonacci_from_json(obj.get("fibonacciLevels"))
    return TradingSignal(**kwargs)


def signals_from_payload(data: Any, message: str = SIGNALS_FORMAT_MESSAGE) -> List[TradingSignal]:
    """Validate an already-decoded payload: {"signals": [...]} or a bare list."""

    if isinstance(data, dict) and isinstance(data.get("signals"), list):
        entries = data["signals"]
    elif isinstance(data, list):
        entries = data
    else:
        logger.warning(f"[ResponseParser] Payload has no 'signals' array: {str(data)[:500]!r}")
        raise MalformedResponseError(message)

    signals: List[TradingSignal] = []
    for idx, entry in enumerate(entries):
        try:
            signals.append(signal_from_json(entry))
        except ValueError as e:
            logger.warning(f"[ResponseParser] Rejected signal #{idx}: {e}. Entry: {entry!r}")
            raise MalformedResponseError(message) from e
    return signals


def parse_signals(text: str) -> List[TradingSignal]:
    """Parse the model's signal response text into validated records."""

    data = _load_json(text, SIGNALS_FORMAT_MESSAGE)
    try:
        return signals_from_payload(data)
    except MalformedResponseError:
        logger.warning(f"[ResponseParser] Raw signal response: {text!r}")
        raise


def parse_news(text: str) -> NewsAnalysis:
    """Parse the model's news response; both `summary` and `outlook` must be strings."""

    data = _load_json(text, NEWS_FORMAT_MESSAGE)
    if (
        isinstance(data, dict)
        and isinstance(data.get("summary"), str)
        and isinstance(data.get("outlook"), str)
    ):
        return NewsAnalysis(summary=data["summary"], outlook=data["outlook"])

    logger.warning(f"[ResponseParser] News payload missing 'summary'/'outlook'. Raw response: {text!r}")
    raise MalformedResponseError(NEWS_FORMAT_MESSAGE)
