from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict


def utc_iso(ts: datetime | None = None) -> str:
    ts = (ts or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return ts.replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")


def event_payload(module: str, event: str, **fields: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"module": module, "timestamp": utc_iso(), "event": event}
    payload.update(fields)
    return payload


def log_json(logger: logging.Logger, payload: Dict[str, Any], level: int = logging.INFO) -> None:
    """Emit one structured event as a single compact JSON line."""

    logger.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str))
