from typing import List, Sequence

from app.ai.types import ChatMessage
from app.schemas import chat as schemas

SYSTEM_INSTRUCTION = (
    "You are HealthGuard assistant. "
    "Provide friendly, concise, non-diagnostic health guidance and recommend "
    "seeing a professional when appropriate. "
    "Keep responses helpful and safe."
)

FALLBACK_REPLY = "Sorry, I could not generate a response."


def build_conversation(history: Sequence[schemas.ChatMessage]) -> list[ChatMessage]:
    """Map client transcript entries (role "user" or "bot") to provider roles."""
    messages: List[ChatMessage] = []
    for msg in history:
        role = "assistant" if msg.role == "bot" else "user"
        messages.append(ChatMessage(role=role, content=msg.content))
    return messages


def build_prompt(messages: Sequence[ChatMessage]) -> str:
    lines = []
    for m in messages:
        label = "model" if m.role in ("assistant", "model") else "user"
        lines.append(f"{label}: {m.content}")
    conversation = "\n".join(lines)
    return f"{SYSTEM_INSTRUCTION}\n\n{conversation}\nmodel:"


def build_chat_messages(messages: Sequence[ChatMessage]) -> list[dict[str, str]]:
    payload = [{"role": "system", "content": SYSTEM_INSTRUCTION}]
    for m in messages:
        role = "assistant" if m.role in ("assistant", "model") else "user"
        payload.append({"role": role, "content": m.content})
    return payload
