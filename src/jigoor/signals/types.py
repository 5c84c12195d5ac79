from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

AssetType = Literal["crypto", "forex"]
SignalLabel = Literal["Strong Buy", "Buy", "Accumulate", "Hold", "Sell", "Strong Sell"]
Outlook = Literal["Bullish", "Slightly Bullish", "Neutral", "Slightly Bearish", "Bearish"]

ASSET_TYPES = ("crypto", "forex")
SIGNAL_LABELS = ("Strong Buy", "Buy", "Accumulate", "Hold", "Sell", "Strong Sell")
OUTLOOKS = ("Bullish", "Slightly Bullish", "Neutral", "Slightly Bearish", "Bearish")

# Swing high first, swing low last.
FIBONACCI_KEYS = (
    "level_0",
    "level_23_6",
    "level_38_2",
    "level_50",
    "level_61_8",
    "level_78_6",
    "level_100",
)


@dataclass(frozen=True)
class Source:
    """A web page the model attributed its answer to."""

    uri: str
    title: str = "Untitled Source"

    def to_dict(self) -> Dict[str, str]:
        return {"uri": self.uri, "title": self.title}


@dataclass(frozen=True)
class FibonacciLevels:
    level_0: str
    level_23_6: str
    level_38_2: str
    level_50: str
    level_61_8: str
    level_78_6: str
    level_100: str

    def items(self) -> List[tuple[str, str]]:
        return [(key, getattr(self, key)) for key in FIBONACCI_KEYS]

    def to_dict(self) -> Dict[str, str]:
        return dict(self.items())


@dataclass(frozen=True)
class NewsAnalysis:
    summary: str
    outlook: str

    def to_dict(self) -> Dict[str, str]:
        return {"summary": self.summary, "outlook": self.outlook}


@dataclass
class TradingSignal:
    """One trading recommendation for one asset.

    Price fields are kept as the model formatted them (e.g. "$68,500 - $69,200");
    only the presentation layer parses them back into numbers.

    `signal_id` is assigned locally when the record is created and is the key
    used to attach a later news analysis to this exact card.
    """

    asset_name: str
    asset_type: AssetType
    signal: str
    analysis: str
    entry_price: str
    exit_price: str
    timeline: str
    current_price: Optional[str] = None
    stop_loss: Optional[str] = None
    fibonacci_levels: Optional[FibonacciLevels] = None
    news_analysis: Optional[NewsAnalysis] = None
    news_sources: Optional[List[Source]] = None
    signal_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "assetName": self.asset_name,
            "assetType": self.asset_type,
            "signal": self.signal,
            "analysis": self.analysis,
            "currentPrice": self.current_price,
            "entryPrice": self.entry_price,
            "exitPrice": self.exit_price,
            "stopLoss": self.stop_loss,
            "timeline": self.timeline,
        }
        if self.fibonacci_levels is not None:
            out["fibonacciLevels"] = self.fibonacci_levels.to_dict()
        if self.news_analysis is not None:
            out["newsAnalysis"] = self.news_analysis.to_dict()
        if self.news_sources is not None:
            out["newsSources"] = [s.to_dict() for s in self.news_sources]
        return out


@dataclass(frozen=True)
class SignalResult:
    signals: List[TradingSignal]
    sources: List[Source]


@dataclass(frozen=True)
class NewsResult:
    analysis: NewsAnalysis
    sources: List[Source]
