"""Google Gemini LLM provider (generateContent REST API)."""
from typing import Optional

import httpx

from aichat.llm.base import HttpLLMProvider, LLMResponseError, ProviderId


class GeminiProvider(HttpLLMProvider):
    provider_id = ProviderId.GEMINI
    display_name = "Gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        model: str = "gemini-2.0-flash",
        *,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url, model, api_key=api_key, timeout=timeout, transport=transport)

    async def send(self, text: str) -> str:
        body = {"contents": [{"role": "user", "parts": [{"text": text}]}]}
        data = await self._post_json(
            f"{self._base_url}/models/{self._model}:generateContent",
            body,
            headers={"x-goog-api-key": self._api_key or "", "Content-Type": "application/json"},
        )
        candidates = data.get("candidates") or []
        if not candidates:
            # Blocked prompts come back with promptFeedback and no candidates
            raise LLMResponseError(f"Gemini returned no candidates: {data.get('promptFeedback')}")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(p.get("text", "") for p in parts)
