"""Plain-text rendering of signal cards, news and citation lists."""

from __future__ import annotations

from typing import Iterable, List, Literal, Optional
from urllib.parse import urlparse

from ..signals.types import FibonacciLevels, Source, TradingSignal
from .currency import convert_price_to_cad

Tone = Literal["bullish", "bearish", "neutral"]

_BULLISH_SIGNALS = {"Strong Buy", "Buy", "Accumulate"}
_BEARISH_SIGNALS = {"Sell", "Strong Sell"}
_TONE_MARKS = {"bullish": "▲", "bearish": "▼", "neutral": "●"}


def signal_tone(signal: str) -> Tone:
    if signal in _BULLISH_SIGNALS:
        return "bullish"
    if signal in _BEARISH_SIGNALS:
        return "bearish"
    return "neutral"


def outlook_tone(outlook: str) -> Tone:
    lower = (outlook or "").lower()
    if "bullish" in lower:
        return "bullish"
    if "bearish" in lower:
        return "bearish"
    return "neutral"


def fibonacci_percentage(level_key: str) -> float:
    """level_23_6 -> 23.6, level_0 -> 0.0"""

    return float(level_key[len("level_"):].replace("_", "."))


def fibonacci_zone(percentage: float) -> str:
    if percentage <= 38.2:
        return "resistance"
    if percentage >= 61.8:
        return "support"
    return "pivot"


def render_fibonacci(levels: FibonacciLevels) -> List[str]:
    lines = ["  Key Fibonacci Levels:"]
    for key, price in levels.items():
        if not price:
            continue
        pct = fibonacci_percentage(key)
        marker = " (High)" if key == "level_0" else " (Low)" if key == "level_100" else ""
        lines.append(f"    {pct:5.1f}%{marker:<7} {price:>14}  [{fibonacci_zone(pct)}]")
    return lines


def _price_line(label: str, price: Optional[str], rate: Optional[float], required: bool = False) -> Optional[str]:
    if not price:
        if not required:
            return None
        price = "N/A"
    cad = convert_price_to_cad(price, rate)
    suffix = f" ({cad})" if cad else ""
    return f"  {label:<14} {price}{suffix}"


def source_host(uri: str) -> str:
    return urlparse(uri).hostname or uri


def render_sources(sources: Iterable[Source], heading: str = "Analysis Sources") -> List[str]:
    sources = list(sources)
    if not sources:
        return []
    lines = [f"{heading}:"]
    for idx, src in enumerate(sources, 1):
        lines.append(f"  [{idx}] {src.title} ({source_host(src.uri)})")
        lines.append(f"      {src.uri}")
    return lines


def render_signal(
    signal: TradingSignal,
    usd_to_cad_rate: Optional[float] = None,
    index: Optional[int] = None,
    show_fibonacci: bool = True,
) -> str:
    head = f"#{index} " if index is not None else ""
    mark = _TONE_MARKS[signal_tone(signal.signal)]
    lines = [
        f"{head}{signal.asset_name} [{signal.asset_type}]  {mark} {signal.signal}",
        f"  Analysis: {signal.analysis}",
    ]

    # Forex quotes are exchange rates, not USD prices.
    rate = usd_to_cad_rate if signal.asset_type == "crypto" else None
    for label, price, required in (
        ("Current Price:", signal.current_price, False),
        ("Entry:", signal.entry_price, True),
        ("Exit:", signal.exit_price, True),
        ("Stop Loss:", signal.stop_loss, False),
    ):
        line = _price_line(label, price, rate, required=required)
        if line:
            lines.append(line)
    lines.append(f"  {'Timeline:':<14} {signal.timeline}")

    if show_fibonacci and signal.fibonacci_levels is not None:
        lines.extend(render_fibonacci(signal.fibonacci_levels))

    if signal.news_analysis is not None:
        news = signal.news_analysis
        lines.append(f"  Live News Outlook: {_TONE_MARKS[outlook_tone(news.outlook)]} {news.outlook}")
        lines.append(f"  {news.summary}")
        lines.extend("  " + line for line in render_sources(signal.news_sources or [], heading="News Sources"))

    return "\n".join(lines)
