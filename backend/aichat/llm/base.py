"""Base interface for LLM providers: given a prompt, return text or raise."""
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

import httpx

from aichat.errors import UnsupportedProviderError

logger = logging.getLogger(__name__)


class ProviderId(str, Enum):
    """Closed set of supported providers. Adding one is a code change, not configuration."""

    OPENAI = "openai"
    OLLAMA = "ollama"
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"

    @classmethod
    def parse(cls, value: "str | ProviderId") -> "ProviderId":
        """Case-insensitive lookup; raises UnsupportedProviderError naming the offending value."""
        if isinstance(value, ProviderId):
            return value
        key = (value or "").lower()
        for member in cls:
            if member.value == key:
                return member
        raise UnsupportedProviderError(value)


class LLMResponseError(Exception):
    """Provider answered 2xx but the payload had no usable text."""


class LLMProvider(ABC):
    """Abstract LLM provider. Concrete clients are wired in aichat.llm.registry.build_registry."""

    provider_id: ProviderId
    display_name: str = ""

    @abstractmethod
    async def send(self, text: str) -> str:
        """Send a single user prompt and return the response text."""
        ...

    def is_available(self) -> bool:
        """Whether this provider is configured (e.g. API key set)."""
        return True

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.provider_id.value}>"


class HttpLLMProvider(LLMProvider):
    """Shared plumbing for providers reached over plain HTTP JSON APIs."""

    def __init__(
        self,
        base_url: str,
        model: str,
        *,
        api_key: Optional[str] = None,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @property
    def model(self) -> str:
        return self._model

    def is_available(self) -> bool:
        return bool(self._api_key)

    async def _post_json(self, url: str, body: dict[str, Any], headers: Optional[dict[str, str]] = None) -> Any:
        # One client per call: no pooling across requests.
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            r = await client.post(url, headers=headers or {}, json=body)
            if r.status_code >= 400:
                err_body = r.text
                if len(err_body) > 500:
                    err_body = err_body[:500] + "..."
                logger.warning("%s API error %s: %s", self.display_name, r.status_code, err_body)
            r.raise_for_status()
            return r.json()
