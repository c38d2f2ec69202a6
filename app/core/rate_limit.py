from __future__ import annotations

from typing import Callable, Iterable

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import Settings


def build_limiter(cfg: Settings, exempt: Iterable[Callable] = ()) -> Limiter:
    """Per-app limiter; the middleware applies `cfg.rate_limit` to every non-exempt route."""
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[cfg.rate_limit],
        enabled=cfg.rate_limit_enabled,
    )
    for func in exempt:
        limiter.exempt(func)
    return limiter
