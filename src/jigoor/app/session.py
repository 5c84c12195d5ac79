from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..providers.third_party import SignalProvider
from ..signals.errors import SignalDeskError
from ..signals.ranking import sort_signals
from ..signals.service import NewsRequestService, SignalRequestService
from ..signals.types import SignalResult, Source, TradingSignal
from ..ui.tag_input import TagInput
from .config import DataSource

EMPTY_QUERY_MESSAGE = "Please enter at least one ticker or pair."


@dataclass(frozen=True)
class SearchTicket:
    generation: int
    symbols: List[str]


@dataclass
class SignalDeskSession:
    """All presentation state of one signal-desk session, in memory only.

    Actions (`search`, `analyze_news`) are the only places errors are caught:
    they are logged in full and reduced to a one-line `error` banner.

    Each search is stamped with an increasing generation; a completion is only
    applied if its ticket is still the latest, so a slow earlier search can
    never overwrite a newer one. At most one news fetch runs at a time.
    """

    logger: logging.Logger
    signal_service: Optional[SignalRequestService] = None
    news_service: Optional[NewsRequestService] = None
    provider: Optional[SignalProvider] = None

    data_source: DataSource = "gemini"
    signal_count: int = 3
    usd_to_cad_rate: Optional[float] = None

    tag_input: TagInput = field(default_factory=TagInput)
    signals: List[TradingSignal] = field(default_factory=list)
    sources: List[Source] = field(default_factory=list)
    error: Optional[str] = None
    is_loading: bool = False
    analyzing_news_for: Optional[str] = None

    _generation: int = field(default=0, init=False, repr=False)

    # --- search -----------------------------------------------------------

    def begin_search(self) -> Optional[SearchTicket]:
        symbols = self.tag_input.commit_pending()
        if not symbols:
            self.error = EMPTY_QUERY_MESSAGE
            return None

        self._generation += 1
        self.is_loading = True
        self.error = None
        self.signals = []
        self.sources = []
        return SearchTicket(generation=self._generation, symbols=symbols)

    def is_current(self, ticket: SearchTicket) -> bool:
        return ticket.generation == self._generation

    def complete_search(self, ticket: SearchTicket, result: SignalResult) -> bool:
        if not self.is_current(ticket):
            self.logger.info(f"[Session] Dropping stale search #{ticket.generation} (latest #{self._generation})")
            return False
        self.signals = sort_signals(result.signals)
        self.sources = list(result.sources)
        self.is_loading = False
        return True

    def fail_search(self, ticket: SearchTicket, error: Exception) -> bool:
        if not self.is_current(ticket):
            self.logger.info(f"[Session] Ignoring failure of stale search #{ticket.generation}: {error}")
            return False
        origin = "Gemini AI" if self.data_source == "gemini" else "the signal provider"
        self.error = f"Failed to fetch signals from {origin}. {error}"
        self.signals = []
        self.sources = []
        self.is_loading = False
        return True

    def _fetch(self, ticket: SearchTicket) -> SignalResult:
        if self.data_source == "api":
            if self.provider is None:
                raise SignalDeskError("No third-party signal provider is configured.")
            signals = self.provider.fetch_signals(",".join(ticket.symbols), self.signal_count)
            return SignalResult(signals=signals, sources=[])
        if self.signal_service is None:
            raise SignalDeskError("Gemini signal service is not configured.")
        return self.signal_service.request_signals(ticket.symbols)

    def search(self) -> bool:
        """Run one search end to end. Returns True when results were applied."""

        ticket = self.begin_search()
        if ticket is None:
            return False
        try:
            result = self._fetch(ticket)
        except SignalDeskError as e:
            self.logger.warning(f"[Session] Signal search for {ticket.symbols} failed: {e!r}")
            self.fail_search(ticket, e)
            return False
        return self.complete_search(ticket, result)

    # --- news -------------------------------------------------------------

    def find_signal(self, signal_id: str) -> Optional[TradingSignal]:
        for signal in self.signals:
            if signal.signal_id == signal_id:
                return signal
        return None

    def can_analyze_news(self) -> bool:
        return self.analyzing_news_for is None and self.news_service is not None

    def analyze_news(self, signal_id: str) -> bool:
        """Fetch live news for one card and attach it. Returns True on success."""

        if self.analyzing_news_for is not None:
            self.logger.info(f"[Session] News analysis already running for {self.analyzing_news_for}")
            return False
        signal = self.find_signal(signal_id)
        if signal is None:
            self.error = "That signal is no longer on screen."
            return False
        if self.news_service is None:
            self.error = "Failed to fetch news analysis. Gemini news service is not configured."
            return False

        self.analyzing_news_for = signal_id
        self.error = None
        try:
            result = self.news_service.request_news_analysis(signal.asset_name, signal.asset_type)
        except SignalDeskError as e:
            self.logger.warning(f"[Session] News analysis for {signal.asset_name} failed: {e!r}")
            self.error = f"Failed to fetch news analysis. {e}"
            return False
        finally:
            self.analyzing_news_for = None

        # A new search may have replaced the cards meanwhile.
        target = self.find_signal(signal_id)
        if target is None:
            return False
        target.news_analysis = result.analysis
        target.news_sources = result.sources
        return True
