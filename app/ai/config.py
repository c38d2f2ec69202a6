from dataclasses import dataclass

from app.core.config import Settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str | None
    base_url: str | None
    temperature: float
    max_output_tokens: int
    timeout_s: float


def load_ai_config(cfg: Settings) -> AIConfig:
    if cfg.ai_provider == "openai":
        api_key, base_url = cfg.openai_api_key, cfg.openai_base_url
    else:
        api_key, base_url = cfg.gemini_api_key, cfg.gemini_base_url
    return AIConfig(
        provider=cfg.ai_provider,
        model=cfg.ai_model,
        api_key=(api_key or "").strip() or None,
        base_url=base_url,
        temperature=cfg.ai_temperature,
        max_output_tokens=cfg.ai_max_output_tokens,
        timeout_s=cfg.ai_timeout_s,
    )
