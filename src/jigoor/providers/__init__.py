"""External (non-Gemini) signal providers."""

from .third_party import (
    MockSignalProvider,
    RestSignalProvider,
    SignalProvider,
    clamp_signal_count,
    create_default_signal_provider,
)

__all__ = [
    "MockSignalProvider",
    "RestSignalProvider",
    "SignalProvider",
    "clamp_signal_count",
    "create_default_signal_provider",
]
