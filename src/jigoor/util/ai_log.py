from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .jsonlog import utc_iso

MAX_RAW_CHARS = 20000


@dataclass(frozen=True)
class AiExchangeEvent:
    """One prompt/response exchange with the model, kept for diagnostics.

    `outcome` is "ok", "backend_error" or "malformed_response".
    """

    action: str
    model: str
    prompt: str
    raw_response: Optional[str]
    outcome: str
    detail: str = ""
    meta: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_record(self) -> Dict[str, Any]:
        raw = self.raw_response
        if raw is not None and len(raw) > MAX_RAW_CHARS:
            raw = raw[:MAX_RAW_CHARS]
        return {
            "timestamp": utc_iso(self.timestamp),
            "action": self.action,
            "model": self.model,
            "outcome": self.outcome,
            "detail": self.detail,
            "meta": self.meta,
            "prompt": self.prompt,
            "raw_response": raw,
        }


class AiExchangeStore:
    """Append-only NDJSON log of model exchanges. Written, never read back.

    File example: ai_logs/exchanges.ndjson
    """

    def __init__(self, path: str | Path = "ai_logs/exchanges.ndjson"):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, event: AiExchangeEvent) -> None:
        line = json.dumps(event.to_record(), ensure_ascii=False, separators=(",", ":"))
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")

