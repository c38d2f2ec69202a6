from dataclasses import dataclass
from typing import Literal, Protocol, Sequence, Union


Role = Literal["system", "user", "assistant", "model"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class RelayOk:
    reply: str


@dataclass(frozen=True)
class UpstreamError:
    """Non-2xx answer from the provider, forwarded to the caller as-is."""

    status_code: int
    body: str
    media_type: str = "text/plain"


@dataclass(frozen=True)
class InternalError:
    reason: str


RelayResult = Union[RelayOk, UpstreamError, InternalError]


class ProviderError(RuntimeError):
    pass


class MissingAPIKeyError(ProviderError):
    pass


class UpstreamStatusError(ProviderError):
    def __init__(self, status_code: int, body: str, media_type: str = "text/plain"):
        super().__init__(f"upstream returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body
        self.media_type = media_type


class AIClient(Protocol):
    provider: str

    async def complete(self, messages: Sequence[ChatMessage]) -> str | None: ...

    async def aclose(self) -> None: ...
