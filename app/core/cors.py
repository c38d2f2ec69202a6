from __future__ import annotations

from app.core.config import Settings


def cors_allowed_origins(cfg: Settings) -> list[str]:
    return list(cfg.cors_allowed_origins)


def cors_allow_credentials(cfg: Settings) -> bool:
    # Browsers reject credentialed responses for a wildcard origin.
    return "*" not in cfg.cors_allowed_origins
