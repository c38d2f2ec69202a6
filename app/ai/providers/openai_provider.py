from __future__ import annotations

from typing import Optional, Sequence

import httpx
from openai import APIStatusError, AsyncOpenAI

from app.ai.config import AIConfig
from app.ai.prompt import build_chat_messages
from app.ai.types import ChatMessage, MissingAPIKeyError, UpstreamStatusError


class OpenAIProvider:
    """Structured-message provider for the chat completions API."""

    provider = "openai"

    def __init__(
        self,
        config: AIConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config = config
        self._client: AsyncOpenAI | None = None
        if not config.api_key:
            return

        http_client = None
        if transport is not None:
            http_client = httpx.AsyncClient(transport=transport, timeout=config.timeout_s)
        self._client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url or None,
            timeout=config.timeout_s,
            max_retries=0,
            http_client=http_client,
        )

    async def complete(self, messages: Sequence[ChatMessage]) -> str | None:
        if self._client is None:
            raise MissingAPIKeyError("OPENAI_API_KEY is missing")

        try:
            response = await self._client.chat.completions.create(
                model=self._config.model,
                messages=build_chat_messages(messages),
                temperature=self._config.temperature,
                max_tokens=self._config.max_output_tokens,
            )
        except APIStatusError as exc:
            raise UpstreamStatusError(
                exc.status_code,
                exc.response.text,
                exc.response.headers.get("content-type", "text/plain"),
            ) from exc

        if not response.choices:
            return None
        return response.choices[0].message.content or None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
