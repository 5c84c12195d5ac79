"""Gemini endpoint with Google Search grounding."""

from __future__ import annotations

import logging
import os
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, List, Optional, Protocol, Union

from google import genai
from google.genai import types

from .errors import BackendError, ConfigurationError
from .sources import sources_from_response
from .types import Source

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


def api_key_from_env() -> Optional[str]:
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    return None


def _temperature_from_env() -> Optional[float]:
    raw = os.getenv("GEMINI_TEMPERATURE")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"[GeminiClient] Ignoring invalid GEMINI_TEMPERATURE={raw!r}")
        return None


@dataclass(frozen=True)
class GroundedResponse:
    """Raw text body plus the grounding citations attached to it (not yet deduplicated)."""

    text: str
    sources: List[Source] = field(default_factory=list)


class GroundedModel(Protocol):
    model_name: str

    def generate_grounded(self, prompt: str) -> GroundedResponse:
        raise NotImplementedError


@dataclass
class GeminiClient:
    """Owned handle on the Gemini API.

    Construct one per application and pass it to the request services. The
    underlying `genai.Client` is created on the first call and reused for the
    lifetime of this object.
    """

    api_key: Optional[str] = None
    model_name: str = field(default_factory=lambda: os.getenv("GEMINI_MODEL", DEFAULT_MODEL))
    temperature: Optional[float] = field(default_factory=_temperature_from_env)
    client: Optional[Any] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.api_key is None:
            self.api_key = api_key_from_env()
        if not self.api_key and self.client is None:
            raise ConfigurationError(
                "The Gemini API key is missing. Set GEMINI_API_KEY (or GOOGLE_API_KEY / API_KEY) "
                "in the environment or .env file."
            )

    def _get_client(self) -> Any:
        if self.client is None:
            self.client = genai.Client(api_key=self.api_key)
            logger.info(f"[GeminiClient] Initialized with model: {self.model_name}")
        return self.client

    def _config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
            temperature=self.temperature,
        )

    def generate_grounded(self, prompt: str) -> GroundedResponse:
        """Send one prompt with web search enabled.

        Any failure of the call itself (network, auth, quota) is raised as
        BackendError; the body is returned unparsed.
        """

        try:
            response = self._get_client().models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=self._config(),
            )
        except Exception as e:
            logger.warning(f"[GeminiClient] API error: {e}")
            raise BackendError(f"Gemini API Error: {e}") from e

        text = getattr(response, "text", None) or ""
        return GroundedResponse(text=text, sources=sources_from_response(response))


Reply = Union[GroundedResponse, Exception, Callable[[str], GroundedResponse]]


@dataclass
class StaticGroundedModel:
    """Deterministic stand-in for demos/tests (no network, no API keys).

    Replies are consumed in order. A reply may be a GroundedResponse, an
    exception to raise, or a callable taking the prompt. Every prompt is
    recorded in `prompts`.
    """

    replies: List[Reply]
    model_name: str = "static"
    prompts: List[str] = field(default_factory=list)
    _queue: Deque[Reply] = field(default_factory=deque, init=False, repr=False)

    def __post_init__(self) -> None:
        self._queue = deque(self.replies)

    def generate_grounded(self, prompt: str) -> GroundedResponse:
        self.prompts.append(prompt)
        if not self._queue:
            raise BackendError("Gemini API Error: no canned reply left")
        reply = self._queue.popleft()
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply
