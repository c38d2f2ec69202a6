from __future__ import annotations

from typing import Any, Optional, Sequence

import httpx

from app.ai.config import AIConfig
from app.ai.prompt import build_prompt
from app.ai.types import ChatMessage, MissingAPIKeyError, UpstreamStatusError


def extract_candidate_text(data: Any) -> str | None:
    """Return candidates[0].content.parts[0].text, or None when any step is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text else None


class GeminiProvider:
    """Prompt-concatenation provider for the generateContent endpoint."""

    provider = "gemini"

    def __init__(
        self,
        config: AIConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config = config
        self._url = f"{config.base_url}/models/{config.model}:generateContent"
        self._client = httpx.AsyncClient(timeout=config.timeout_s, transport=transport)

    def build_payload(self, messages: Sequence[ChatMessage]) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": build_prompt(messages)}]}],
            "generationConfig": {
                "temperature": self._config.temperature,
                "maxOutputTokens": self._config.max_output_tokens,
            },
        }

    async def complete(self, messages: Sequence[ChatMessage]) -> str | None:
        if not self._config.api_key:
            raise MissingAPIKeyError("GEMINI_API_KEY is missing")

        response = await self._client.post(
            self._url,
            # header rather than ?key= so the secret stays out of logged URLs
            headers={"x-goog-api-key": self._config.api_key},
            json=self.build_payload(messages),
        )
        if not response.is_success:
            raise UpstreamStatusError(
                response.status_code,
                response.text,
                response.headers.get("content-type", "text/plain"),
            )
        return extract_candidate_text(response.json())

    async def aclose(self) -> None:
        await self._client.aclose()
