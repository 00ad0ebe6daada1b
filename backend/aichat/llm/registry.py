"""Registry of provider clients, keyed by ProviderId. Filled once at startup, read-only afterwards."""
import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from aichat.config import Settings
from aichat.errors import UnsupportedProviderError
from aichat.llm.anthropic import AnthropicProvider
from aichat.llm.base import LLMProvider, ProviderId
from aichat.llm.gemini import GeminiProvider
from aichat.llm.ollama import OllamaProvider
from aichat.llm.openai import OpenAIProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """At most one client per ProviderId. Safe to share across concurrent requests without locking."""

    def __init__(self, providers: Iterable[LLMProvider] = ()) -> None:
        staging: dict[ProviderId, LLMProvider] = {}
        for provider in providers:
            existing = staging.get(provider.provider_id)
            if existing is provider:
                continue
            if existing is not None:
                raise ValueError(f"Provider {provider.provider_id.value} is already registered")
            staging[provider.provider_id] = provider
        # Keep declaration order of ProviderId regardless of registration order
        self._providers: Mapping[ProviderId, LLMProvider] = MappingProxyType(
            {pid: staging[pid] for pid in ProviderId if pid in staging}
        )

    def get(self, provider_id: "ProviderId | str") -> LLMProvider:
        pid = ProviderId.parse(provider_id)
        provider = self._providers.get(pid)
        if provider is None:
            raise UnsupportedProviderError(pid.value)
        return provider

    def ids(self) -> list[ProviderId]:
        return list(self._providers)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    def __iter__(self) -> Iterator[ProviderId]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProviderRegistry):
            return NotImplemented
        return dict(self._providers) == dict(other._providers)

    def __repr__(self) -> str:
        return f"ProviderRegistry({[pid.value for pid in self._providers]})"


def create_providers(settings: Settings) -> list[LLMProvider]:
    timeout = settings.llm_timeout_seconds
    return [
        OpenAIProvider(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            model=settings.openai_model,
            timeout=timeout,
        ),
        OllamaProvider(
            base_url=settings.ollama_base_url,
            model=settings.ollama_model,
            timeout=timeout,
        ),
        GeminiProvider(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            model=settings.gemini_model,
            timeout=timeout,
        ),
        AnthropicProvider(
            api_key=settings.anthropic_api_key,
            base_url=settings.anthropic_base_url,
            model=settings.anthropic_model,
            max_tokens=settings.anthropic_max_tokens,
            timeout=timeout,
        ),
    ]


def build_registry(settings: Settings, providers: Optional[Iterable[LLMProvider]] = None) -> ProviderRegistry:
    """Register every configured provider; unconfigured ones (no API key) are left out."""
    candidates = list(providers) if providers is not None else create_providers(settings)
    available = []
    for provider in candidates:
        if provider.is_available():
            available.append(provider)
            logger.info("Registered LLM provider: %s", provider.provider_id.value)
        else:
            logger.warning("LLM provider %s is not configured; skipping", provider.provider_id.value)
    return ProviderRegistry(available)
