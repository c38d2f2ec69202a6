from contextlib import asynccontextmanager
import logging

from app.ai.config import load_ai_config
from app.ai.factory import get_ai_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    ai_config = load_ai_config(app.state.settings)
    if not ai_config.api_key:
        logger.warning(
            "Warning: API key for provider '%s' not set. Requests to /api/chat will fail until you set it.",
            ai_config.provider,
        )

    client = get_ai_client(ai_config, transport=app.state.transport)
    app.state.ai_client = client
    logger.info("chat_relay_ready provider=%s model=%s", ai_config.provider, ai_config.model)
    try:
        yield
    finally:
        await client.aclose()
        app.state.ai_client = None
