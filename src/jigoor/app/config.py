from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal, Optional

from ..providers.third_party import clamp_signal_count
from ..signals.errors import ConfigurationError
from ..signals.gemini_client import DEFAULT_MODEL, api_key_from_env
from ..ui.currency import DEFAULT_USD_TO_CAD_RATE

DataSource = Literal["gemini", "api"]
DATA_SOURCES = ("gemini", "api")


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass
class AppConfig:
    """Settings for one signal-desk session. `from_env` reads the process environment."""

    api_key: Optional[str] = None
    model_name: str = DEFAULT_MODEL
    data_source: DataSource = "gemini"
    usd_to_cad_rate: float = DEFAULT_USD_TO_CAD_RATE
    signal_count: int = 3
    default_tags: list[str] = field(default_factory=lambda: ["BTC", "ETH", "EURUSD"])
    ai_log_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.data_source not in DATA_SOURCES:
            raise ConfigurationError(
                f"JIGOOR_DATA_SOURCE / data_source must be one of {DATA_SOURCES}, got {self.data_source!r}"
            )
        self.signal_count = clamp_signal_count(self.signal_count)

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            api_key=api_key_from_env(),
            model_name=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            data_source=os.getenv("JIGOOR_DATA_SOURCE", "gemini").strip().lower(),  # type: ignore[arg-type]
            usd_to_cad_rate=_float_env("JIGOOR_USD_TO_CAD_RATE", DEFAULT_USD_TO_CAD_RATE),
            signal_count=clamp_signal_count(os.getenv("JIGOOR_SIGNAL_COUNT", "3")),
            ai_log_path=os.getenv("JIGOOR_AI_LOG_PATH") or None,
        )
