from __future__ import annotations


class SignalDeskError(Exception):
    """Base class for every error the signal desk surfaces to the user."""


class ConfigurationError(SignalDeskError):
    """Required configuration (e.g. the Gemini API key) is missing."""


class BackendError(SignalDeskError):
    """The model endpoint or signal provider could not be reached or refused the call."""


class MalformedResponseError(SignalDeskError):
    """The response did not match the expected JSON contract."""
