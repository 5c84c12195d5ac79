from __future__ import annotations

from typing import Dict, Iterable, List

from .types import TradingSignal

# Lower number = shown first.
SIGNAL_PRIORITY: Dict[str, int] = {
    "Strong Buy": 1,
    "Buy": 2,
    "Accumulate": 3,
    "Hold": 4,
    "Sell": 5,
    "Strong Sell": 6,
}
UNKNOWN_PRIORITY = 99


def signal_priority(signal: TradingSignal) -> int:
    return SIGNAL_PRIORITY.get(signal.signal, UNKNOWN_PRIORITY)


def sort_signals(signals: Iterable[TradingSignal]) -> List[TradingSignal]:
    # sorted() is stable: ties and unknown labels keep their input order.
    return sorted(signals, key=signal_priority)
