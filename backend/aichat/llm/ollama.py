"""Ollama LLM provider (local server, no API key)."""
from typing import Optional

import httpx

from aichat.llm.base import HttpLLMProvider, LLMResponseError, ProviderId


class OllamaProvider(HttpLLMProvider):
    provider_id = ProviderId.OLLAMA
    display_name = "Ollama"

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.2",
        *,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url, model, timeout=timeout, transport=transport)

    def is_available(self) -> bool:
        return bool(self._base_url)

    async def send(self, text: str) -> str:
        body = {
            "model": self._model,
            "messages": [{"role": "user", "content": text}],
            "stream": False,
        }
        data = await self._post_json(f"{self._base_url}/api/chat", body)
        message = data.get("message") or {}
        if "content" not in message:
            raise LLMResponseError("Ollama response has no message content")
        return message["content"] or ""
