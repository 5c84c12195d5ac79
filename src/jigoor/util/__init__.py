from .ai_log import AiExchangeEvent, AiExchangeStore
from .jsonlog import event_payload, log_json, utc_iso

__all__ = ["AiExchangeEvent", "AiExchangeStore", "event_payload", "log_json", "utc_iso"]
