"""LLM abstraction and registry: one client per supported provider, looked up by ProviderId."""
from aichat.llm.base import LLMProvider, LLMResponseError, ProviderId
from aichat.llm.registry import ProviderRegistry, build_registry

__all__ = [
    "LLMProvider",
    "LLMResponseError",
    "ProviderId",
    "ProviderRegistry",
    "build_registry",
]
