import json

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from app.ai.types import RelayOk, UpstreamError
from app.schemas.chat import ChatMessage, ChatReply, ChatRequest, ErrorResponse
from app.services.chat_service import relay_chat

router = APIRouter()

# The body is parsed by hand so malformed input is defaulted instead of rejected.
_REQUEST_BODY_SCHEMA = {
    "title": "ChatRequest",
    "type": "object",
    "properties": {
        "messages": {"type": "array", "items": ChatMessage.model_json_schema()},
    },
}


async def _read_payload(request: Request) -> ChatRequest:
    raw = await request.body()
    try:
        body = json.loads(raw) if raw else {}
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    return ChatRequest.model_validate(body)


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={500: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {"application/json": {"schema": _REQUEST_BODY_SCHEMA}},
        }
    },
)
async def chat(request: Request):
    payload = await _read_payload(request)
    result = await relay_chat(
        payload.messages,
        request.app.state.ai_client,
        log_message_max_chars=request.app.state.settings.log_message_max_chars,
    )

    if isinstance(result, RelayOk):
        return ChatReply(reply=result.reply)
    if isinstance(result, UpstreamError):
        return Response(
            content=result.body,
            status_code=result.status_code,
            media_type=result.media_type,
        )
    # InternalError: details stay in the server log.
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
