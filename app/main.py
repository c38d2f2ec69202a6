import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import httpx
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk
import uvicorn

from app.api.health import health_check, router as health_router
from app.api.chat import router as chat_router
from app.ai.factory import SUPPORTED_PROVIDERS
from app.core.cors import cors_allow_credentials, cors_allowed_origins
from app.core.rate_limit import build_limiter
from app.core.config import Settings, settings
from app.core.lifespan import lifespan

logging.basicConfig(level=settings.log_level, format="%(message)s")


def create_app(
    cfg: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    cfg = cfg or settings
    if cfg.ai_provider not in SUPPORTED_PROVIDERS:
        raise ValueError(f"Unsupported AI_PROVIDER='{cfg.ai_provider}'")
    if cfg.sentry_dsn:
        sentry_sdk.init(dsn=cfg.sentry_dsn)

    app = FastAPI(title="HealthGuard Chat Relay", version="0.1.0", lifespan=lifespan)
    app.state.settings = cfg
    app.state.transport = transport

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allowed_origins(cfg),
        allow_credentials=cors_allow_credentials(cfg),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.limiter = build_limiter(cfg, exempt=[health_check])
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.include_router(health_router, prefix="/api", tags=["Health"])
    app.include_router(chat_router, prefix="/api", tags=["Chat"])
    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
