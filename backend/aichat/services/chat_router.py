"""Chat routing: resolve provider (hint or default), call it, normalize the outcome."""
import logging
import time
from typing import Optional

from aichat.config import Settings
from aichat.errors import (
    InvalidInputError,
    ProviderConfigurationError,
    UnsupportedProviderError,
    UpstreamUnavailableError,
)
from aichat.llm.base import LLMProvider, LLMResponseError, ProviderId
from aichat.llm.registry import ProviderRegistry, build_registry
from aichat.schemas.chat import ChatExchange

logger = logging.getLogger(__name__)


class ChatRouter:
    """Validate -> Resolve -> Lookup -> Invoke -> Normalize. No retries, no fallback."""

    def __init__(self, registry: ProviderRegistry, default_provider: "ProviderId | str") -> None:
        try:
            default = ProviderId.parse(default_provider)
        except UnsupportedProviderError as exc:
            raise ProviderConfigurationError(f"Unknown default provider: {default_provider!r}") from exc
        if default not in registry:
            raise ProviderConfigurationError(
                f"Default provider {default.value} is not configured "
                f"(registered: {', '.join(p.value for p in registry.ids()) or 'none'})"
            )
        self._registry = registry
        self._default = default
        logger.info("Chat router ready; default provider: %s", default.name)

    @property
    def default_provider(self) -> ProviderId:
        return self._default

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    def resolve(self, provider_hint: Optional[str]) -> ProviderId:
        """Blank hint means the configured default; anything else must name a known provider."""
        if provider_hint is None or not provider_hint.strip():
            logger.info("No provider specified. Using default: %s", self._default.name)
            return self._default
        try:
            return ProviderId.parse(provider_hint)
        except UnsupportedProviderError:
            logger.warning("Rejected unknown provider hint: %r", provider_hint)
            raise

    def _lookup(self, provider_id: ProviderId, from_hint: bool) -> LLMProvider:
        try:
            return self._registry.get(provider_id)
        except UnsupportedProviderError:
            if from_hint:
                logger.warning("Requested provider %s is not configured in this deployment", provider_id.name)
            else:
                logger.error("Default provider %s is not registered; check configuration", provider_id.name)
            raise

    async def route(self, message: Optional[str], provider_hint: Optional[str] = None) -> ChatExchange:
        if message is None or not message.strip():
            raise InvalidInputError()

        provider_id = self.resolve(provider_hint)
        client = self._lookup(provider_id, from_hint=bool(provider_hint and provider_hint.strip()))

        logger.info("Routing request to LLM: %s", provider_id.name)
        logger.debug("Processing message: %s", message)
        try:
            response = await client.send(message)
            if not isinstance(response, str):
                raise LLMResponseError(f"{provider_id.name} returned {type(response).__name__}, expected text")
        except Exception as exc:
            logger.error("Error calling LLM %s", provider_id.name, exc_info=exc)
            raise UpstreamUnavailableError(cause=exc, provider=provider_id.name) from exc

        return ChatExchange(
            response=response,
            provider=provider_id.name,
            message=message,
            timestamp=int(time.time() * 1000),
        )


def build_chat_router(settings: Settings, registry: Optional[ProviderRegistry] = None) -> ChatRouter:
    return ChatRouter(registry if registry is not None else build_registry(settings), settings.default_provider)
