import asyncio
import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import httpx

from app.ai.config import AIConfig
from app.ai.prompt import FALLBACK_REPLY
from app.ai.providers.gemini_provider import GeminiProvider
from app.ai.types import (
    InternalError,
    MissingAPIKeyError,
    RelayOk,
    UpstreamError,
    UpstreamStatusError,
)
from app.schemas.chat import ChatMessage
from app.services.chat_service import relay_chat


class FakeClient:
    provider = "fake"

    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = []

    async def complete(self, messages):
        self.calls.append(list(messages))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    async def aclose(self):
        return None


def _gemini_config():
    return AIConfig(
        provider="gemini",
        model="gemini-pro",
        api_key="test-key",
        base_url="https://gemini.test/v1beta",
        temperature=0.7,
        max_output_tokens=700,
        timeout_s=5.0,
    )


class RelayChatTests(unittest.IsolatedAsyncioTestCase):
    async def test_ok_result(self):
        client = FakeClient("Drink water and rest.")
        result = await relay_chat([ChatMessage(role="user", content="hi")], client)

        self.assertEqual(result, RelayOk("Drink water and rest."))
        self.assertEqual(len(client.calls), 1)

    async def test_empty_transcript_still_calls_upstream_once(self):
        client = FakeClient("T")
        result = await relay_chat([], client)

        self.assertIsInstance(result, RelayOk)
        self.assertEqual(client.calls, [[]])

    async def test_bot_role_is_mapped_before_reaching_provider(self):
        client = FakeClient("T")
        await relay_chat([ChatMessage(role="bot", content="hi")], client)

        self.assertEqual(client.calls[0][0].role, "assistant")
        self.assertEqual(client.calls[0][0].content, "hi")

    async def test_empty_text_uses_fallback(self):
        for outcome in (None, ""):
            result = await relay_chat([], FakeClient(outcome))
            self.assertEqual(result, RelayOk(FALLBACK_REPLY))

    async def test_upstream_status_becomes_upstream_error(self):
        client = FakeClient(UpstreamStatusError(429, "rate limited"))
        with self.assertLogs("app.chat", level="ERROR") as logs:
            result = await relay_chat([], client)

        self.assertEqual(result, UpstreamError(429, "rate limited", "text/plain"))
        event = json.loads(logs.records[-1].getMessage())
        self.assertEqual(event["event"], "chat_upstream_error")
        self.assertEqual(event["status"], 429)

    async def test_upstream_body_is_truncated_in_logs_only(self):
        body = "x" * 500
        client = FakeClient(UpstreamStatusError(400, body))
        with self.assertLogs("app.chat", level="ERROR") as logs:
            result = await relay_chat([], client, log_message_max_chars=50)

        self.assertEqual(result.body, body)
        self.assertEqual(len(json.loads(logs.records[-1].getMessage())["body"]), 50)

    async def test_any_other_failure_is_internal_error(self):
        for exc in (
            httpx.ConnectError("boom"),
            ValueError("bad json"),
            MissingAPIKeyError("GEMINI_API_KEY is missing"),
        ):
            with self.assertLogs("app.chat", level="ERROR"):
                result = await relay_chat([], FakeClient(exc))
            self.assertIsInstance(result, InternalError)

    async def test_message_content_is_not_logged(self):
        client = FakeClient("T")
        with self.assertLogs("app.chat", level="INFO") as logs:
            await relay_chat([ChatMessage(role="user", content="my blood pressure is 150/95")], client)

        for record in logs.records:
            self.assertNotIn("150/95", record.getMessage())

    async def test_concurrent_requests_get_their_own_reply(self):
        async def handler(request):
            prompt = json.loads(request.content)["contents"][0]["parts"][0]["text"]
            last_line = prompt.splitlines()[-2]
            # the first caller waits longer so the replies interleave
            await asyncio.sleep(0.05 if "first" in last_line else 0.0)
            text = f"reply to {last_line.split(': ', 1)[1]}"
            return httpx.Response(
                200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]}
            )

        provider = GeminiProvider(_gemini_config(), transport=httpx.MockTransport(handler))
        try:
            first, second = await asyncio.gather(
                relay_chat([ChatMessage(role="user", content="first")], provider),
                relay_chat(
                    [
                        ChatMessage(role="user", content="hello"),
                        ChatMessage(role="bot", content="hi"),
                        ChatMessage(role="user", content="second"),
                    ],
                    provider,
                ),
            )
        finally:
            await provider.aclose()

        self.assertEqual(first, RelayOk("reply to first"))
        self.assertEqual(second, RelayOk("reply to second"))


if __name__ == "__main__":
    unittest.main()
