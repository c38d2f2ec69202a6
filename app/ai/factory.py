from typing import Optional

import httpx

from app.ai.config import AIConfig
from app.ai.types import AIClient

from app.ai.providers.openai_provider import OpenAIProvider
from app.ai.providers.gemini_provider import GeminiProvider

SUPPORTED_PROVIDERS = ("gemini", "openai")


def get_ai_client(
    cfg: AIConfig, transport: Optional[httpx.AsyncBaseTransport] = None
) -> AIClient:
    if cfg.provider == "gemini":
        return GeminiProvider(cfg, transport=transport)

    if cfg.provider == "openai":
        return OpenAIProvider(cfg, transport=transport)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
