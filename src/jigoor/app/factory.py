from __future__ import annotations

import logging
from typing import Optional

from ..providers.third_party import SignalProvider, create_default_signal_provider
from ..signals.gemini_client import GeminiClient, GroundedModel
from ..signals.service import NewsRequestService, SignalRequestService
from ..util.ai_log import AiExchangeStore
from .config import AppConfig
from .session import SignalDeskSession


def create_session(
    config: AppConfig,
    logger: logging.Logger,
    model: Optional[GroundedModel] = None,
    provider: Optional[SignalProvider] = None,
) -> SignalDeskSession:
    """Wire one session.

    Live news always needs Gemini, so a GeminiClient is built for every data
    source; a missing API key raises ConfigurationError here, at startup.
    """

    if model is None:
        model = GeminiClient(api_key=config.api_key, model_name=config.model_name)
    if provider is None and config.data_source == "api":
        provider = create_default_signal_provider()

    exchange_log = AiExchangeStore(config.ai_log_path) if config.ai_log_path else None

    session = SignalDeskSession(
        logger=logger,
        signal_service=SignalRequestService(logger=logger, model=model, exchange_log=exchange_log),
        news_service=NewsRequestService(logger=logger, model=model, exchange_log=exchange_log),
        provider=provider,
        data_source=config.data_source,
        signal_count=config.signal_count,
        usd_to_cad_rate=config.usd_to_cad_rate,
    )
    session.tag_input.add_tags(" ".join(config.default_tags))
    return session
