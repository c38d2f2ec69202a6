from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


_DEFAULT_MODELS = {
    "gemini": "gemini-pro",
    "openai": "gpt-4o-mini",
}


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    ai_provider: str
    ai_model: str
    gemini_api_key: str | None
    gemini_base_url: str
    openai_api_key: str | None
    openai_base_url: str | None
    ai_temperature: float
    ai_max_output_tokens: int
    ai_timeout_s: float
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    log_message_max_chars: int
    cors_allowed_origins: tuple[str, ...]


def load_settings() -> Settings:
    provider = (_get_env("AI_PROVIDER", "gemini") or "gemini").strip().lower()
    model = (_get_env("AI_MODEL") or _DEFAULT_MODELS.get(provider, "")).strip()
    return Settings(
        host=_get_env("HOST", "0.0.0.0") or "0.0.0.0",
        port=_get_env_int("PORT", 3000),
        ai_provider=provider,
        ai_model=model,
        gemini_api_key=_get_env("GEMINI_API_KEY"),
        gemini_base_url=(
            _get_env("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
            or "https://generativelanguage.googleapis.com/v1beta"
        ).rstrip("/"),
        openai_api_key=_get_env("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        ai_temperature=_get_env_float("AI_TEMPERATURE", 0.7),
        ai_max_output_tokens=_get_env_int("AI_MAX_OUTPUT_TOKENS", 700),
        ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 60.0),
        rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", False),
        log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        sentry_dsn=_get_env("SENTRY_DSN"),
        log_message_max_chars=_get_env_int("LOG_MESSAGE_MAX_CHARS", 200),
        cors_allowed_origins=_get_env_list("CORS_ALLOWED_ORIGINS", ["*"]),
    )


settings = load_settings()
