"""Anthropic Claude LLM provider (Messages API)."""
from typing import Optional

import httpx

from aichat.llm.base import HttpLLMProvider, LLMResponseError, ProviderId

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(HttpLLMProvider):
    provider_id = ProviderId.ANTHROPIC
    display_name = "Anthropic"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = "https://api.anthropic.com",
        model: str = "claude-3-5-haiku-latest",
        *,
        max_tokens: int = 1024,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url, model, api_key=api_key, timeout=timeout, transport=transport)
        self._max_tokens = max_tokens

    async def send(self, text: str) -> str:
        body = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "messages": [{"role": "user", "content": text}],
        }
        data = await self._post_json(
            f"{self._base_url}/v1/messages",
            body,
            headers={
                "x-api-key": self._api_key or "",
                "anthropic-version": ANTHROPIC_VERSION,
                "Content-Type": "application/json",
            },
        )
        blocks = [b for b in (data.get("content") or []) if b.get("type") == "text"]
        if not blocks:
            raise LLMResponseError(f"Anthropic returned no text blocks (stop_reason={data.get('stop_reason')})")
        return "".join(b.get("text", "") for b in blocks)
