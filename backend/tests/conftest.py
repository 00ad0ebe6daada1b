"""Shared fixtures: in-memory providers that record calls instead of hitting the network."""
from typing import Optional

import pytest

from aichat.config import Settings
from aichat.llm.base import LLMProvider, ProviderId
from aichat.llm.registry import ProviderRegistry


class FakeProvider(LLMProvider):
    def __init__(
        self,
        provider_id: ProviderId,
        reply: Optional[str] = None,
        error: Optional[Exception] = None,
        available: bool = True,
    ):
        self.provider_id = provider_id
        self.display_name = provider_id.name.title()
        self.reply = reply if reply is not None else f"{provider_id.value} says hi"
        self.error = error
        self.available = available
        self.calls: list[str] = []

    def is_available(self) -> bool:
        return self.available

    async def send(self, text: str) -> str:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture()
def fake_providers() -> dict[ProviderId, FakeProvider]:
    return {pid: FakeProvider(pid) for pid in ProviderId}


@pytest.fixture()
def registry(fake_providers) -> ProviderRegistry:
    return ProviderRegistry(fake_providers.values())


@pytest.fixture()
def settings() -> Settings:
    # _env_file=None keeps a developer's local .env out of the tests
    return Settings(_env_file=None, default_provider="ollama", cors_origins="http://testserver")
