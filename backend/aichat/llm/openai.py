"""OpenAI LLM provider (Chat Completions API)."""
import logging
from typing import Optional

import httpx

from aichat.llm.base import HttpLLMProvider, LLMResponseError, ProviderId

logger = logging.getLogger(__name__)


class OpenAIProvider(HttpLLMProvider):
    provider_id = ProviderId.OPENAI
    display_name = "OpenAI"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        *,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url, model, api_key=api_key, timeout=timeout, transport=transport)

    async def send(self, text: str) -> str:
        body = {
            "model": self._model,
            "messages": [{"role": "user", "content": text}],
        }
        data = await self._post_json(
            f"{self._base_url}/chat/completions",
            body,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
        )
        choices = data.get("choices") or []
        if not choices:
            raise LLMResponseError("OpenAI returned no choices")
        content = (choices[0].get("message") or {}).get("content")
        if content is None:
            logger.warning("OpenAI finish_reason=%s with empty content", choices[0].get("finish_reason"))
            raise LLMResponseError("OpenAI returned empty content")
        return content
