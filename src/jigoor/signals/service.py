"""Request services: prompt -> grounded model call -> strict parse -> result."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..util.ai_log import AiExchangeEvent, AiExchangeStore
from ..util.jsonlog import event_payload, log_json
from .errors import BackendError, MalformedResponseError
from .gemini_client import GroundedModel, GroundedResponse
from .parser import parse_news, parse_signals
from .prompts import build_news_prompt, build_signals_prompt
from .sources import dedupe_sources
from .types import AssetType, NewsResult, SignalResult


@dataclass
class _ModelCaller:
    logger: logging.Logger
    model: GroundedModel
    exchange_log: Optional[AiExchangeStore] = None

    def _record(self, action: str, prompt: str, raw: Optional[str], outcome: str, detail: str = "", **meta) -> None:
        if self.exchange_log is None:
            return
        self.exchange_log.append(
            AiExchangeEvent(
                action=action,
                model=self.model.model_name,
                prompt=prompt,
                raw_response=raw,
                outcome=outcome,
                detail=detail,
                meta=meta,
            )
        )

    def _call(self, action: str, prompt: str) -> GroundedResponse:
        try:
            return self.model.generate_grounded(prompt)
        except BackendError as e:
            self._record(action, prompt, None, "backend_error", str(e))
            raise


@dataclass
class SignalRequestService(_ModelCaller):
    """Fetches one signal per requested symbol plus the citations behind them.

    The caller uppercases, trims and de-duplicates symbols. The prompt asks for
    exactly len(symbols) signals; a different count is logged and tolerated.
    """

    def request_signals(self, symbols: Sequence[str]) -> SignalResult:
        symbols = list(symbols)
        if not symbols:
            raise ValueError("request_signals needs at least one symbol")

        prompt = build_signals_prompt(symbols)
        response = self._call("signals", prompt)

        try:
            signals = parse_signals(response.text)
        except MalformedResponseError as e:
            self._record("signals", prompt, response.text, "malformed_response", str(e))
            raise

        sources = dedupe_sources(response.sources)
        if len(signals) != len(symbols):
            self.logger.warning(
                f"[SignalRequestService] Requested {len(symbols)} signals, model returned {len(signals)}"
            )

        self._record("signals", prompt, response.text, "ok", symbols=symbols)
        log_json(
            self.logger,
            event_payload(
                "SignalRequestService",
                "SIGNALS_RECEIVED",
                model=self.model.model_name,
                requested=symbols,
                signal_count=len(signals),
                source_count=len(sources),
                signals={s.asset_name: s.signal for s in signals},
            ),
        )
        return SignalResult(signals=signals, sources=sources)


@dataclass
class NewsRequestService(_ModelCaller):
    """Fetches a short news-sentiment summary and outlook for a single asset."""

    def request_news_analysis(self, asset_name: str, asset_type: AssetType) -> NewsResult:
        prompt = build_news_prompt(asset_name, asset_type)
        response = self._call("news", prompt)

        try:
            analysis = parse_news(response.text)
        except MalformedResponseError as e:
            self._record("news", prompt, response.text, "malformed_response", str(e), asset=asset_name)
            raise

        sources = dedupe_sources(response.sources)
        self._record("news", prompt, response.text, "ok", asset=asset_name)
        log_json(
            self.logger,
            event_payload(
                "NewsRequestService",
                "NEWS_RECEIVED",
                model=self.model.model_name,
                asset=asset_name,
                asset_type=asset_type,
                outlook=analysis.outlook,
                source_count=len(sources),
            ),
        )
        return NewsResult(analysis=analysis, sources=sources)
