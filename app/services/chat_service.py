from typing import Sequence
import hashlib
import json
import logging
import time

from app.ai.prompt import FALLBACK_REPLY, build_conversation
from app.ai.types import (
    AIClient,
    InternalError,
    RelayOk,
    RelayResult,
    UpstreamError,
    UpstreamStatusError,
)
from app.schemas.chat import ChatMessage

logger = logging.getLogger("app.chat")


def _short_hash(value: str | None) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return ""
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:12]


def _transcript_hash(messages: Sequence[ChatMessage]) -> str:
    return _short_hash("\n".join(f"{m.role}:{m.content}" for m in messages))


def _elapsed_ms(started_at: float) -> int:
    return int((time.perf_counter() - started_at) * 1000)


async def relay_chat(
    messages: Sequence[ChatMessage],
    client: AIClient,
    *,
    log_message_max_chars: int = 200,
) -> RelayResult:
    """Forward one transcript to the provider and fold the outcome into a result.

    Exactly one upstream call is attempted. Nothing is retried.
    """
    started_at = time.perf_counter()
    try:
        conversation = build_conversation(messages)
        logger.info(
            json.dumps(
                {
                    "event": "chat_request",
                    "provider": client.provider,
                    "message_count": len(conversation),
                    "transcript_hash": _transcript_hash(messages),
                }
            )
        )

        text = await client.complete(conversation)

    except UpstreamStatusError as ex:
        logger.error(
            json.dumps(
                {
                    "event": "chat_upstream_error",
                    "provider": client.provider,
                    "status": ex.status_code,
                    "body": ex.body[:log_message_max_chars],
                    "duration_ms": _elapsed_ms(started_at),
                }
            )
        )
        return UpstreamError(ex.status_code, ex.body, ex.media_type)

    except Exception as ex:
        logger.exception(
            json.dumps(
                {
                    "event": "chat_error",
                    "provider": client.provider,
                    "error": type(ex).__name__,
                    "duration_ms": _elapsed_ms(started_at),
                }
            )
        )
        return InternalError(str(ex))

    logger.info(
        json.dumps(
            {
                "event": "chat_complete",
                "provider": client.provider,
                "fallback": not text,
                "duration_ms": _elapsed_ms(started_at),
            }
        )
    )
    return RelayOk(text or FALLBACK_REPLY)
