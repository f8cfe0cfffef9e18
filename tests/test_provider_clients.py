import json
import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai

from internship_sniper.cv_pipeline.document_rasterizer import RasterPage
from internship_sniper.errors import RateLimitedError, TransportError
from internship_sniper.services.gemini_service import GeminiVisionClient, is_rate_limit_error
from internship_sniper.services.http_chat_service import HttpChatClient
from internship_sniper.services.openai_chat_service import OpenAIChatClient

CHAT_URL = "https://integrate.example.test/v1/chat/completions"
MESSAGES = [{"role": "user", "content": "Parse this"}]


class RateLimitDetectionTests(unittest.TestCase):
    def test_markers(self):
        self.assertTrue(is_rate_limit_error(Exception("429 Too Many Requests")))
        self.assertTrue(is_rate_limit_error(Exception("Exceeded quota for project")))
        self.assertTrue(is_rate_limit_error(Exception("RESOURCE_EXHAUSTED")))
        self.assertFalse(is_rate_limit_error(Exception("500 internal")))

    def test_code_attribute(self):
        error = Exception("too many")
        error.code = 429
        self.assertTrue(is_rate_limit_error(error))


class GeminiVisionClientTests(unittest.IsolatedAsyncioTestCase):
    def _client(self, generate):
        with patch("internship_sniper.services.gemini_service.genai") as genai:
            sdk = MagicMock()
            sdk.aio.models.generate_content = generate
            genai.Client.return_value = sdk
            return GeminiVisionClient("key")

    async def test_sends_prompt_then_pages_in_order(self):
        generate = AsyncMock(return_value=SimpleNamespace(text='{"name": "A"}'))
        client = self._client(generate)
        pages = [RasterPage("image/jpeg", b"one"), RasterPage("image/jpeg", b"two")]

        text = await client.generate("gemini-2.0-flash-lite", "PROMPT", pages)

        self.assertEqual(text, '{"name": "A"}')
        kwargs = generate.await_args.kwargs
        self.assertEqual(kwargs["model"], "gemini-2.0-flash-lite")
        self.assertEqual(kwargs["contents"][0], "PROMPT")
        self.assertEqual(len(kwargs["contents"]), 3)

    async def test_quota_error_maps_to_rate_limited(self):
        client = self._client(AsyncMock(side_effect=Exception("429 RESOURCE_EXHAUSTED")))
        with self.assertRaises(RateLimitedError):
            await client.generate("m", "p", [])

    async def test_other_error_maps_to_transport(self):
        client = self._client(AsyncMock(side_effect=Exception("connection reset")))
        with self.assertRaises(TransportError) as ctx:
            await client.generate("m", "p", [])
        self.assertNotIsInstance(ctx.exception, RateLimitedError)

    async def test_aclose_releases_sdk_session(self):
        sdk_close = AsyncMock()
        with patch("internship_sniper.services.gemini_service.genai") as genai:
            genai.Client.return_value.aio.aclose = sdk_close
            client = GeminiVisionClient("key")
        await client.aclose()
        sdk_close.assert_awaited_once()

    async def test_empty_text_is_empty_string(self):
        client = self._client(AsyncMock(return_value=SimpleNamespace(text=None)))
        self.assertEqual(await client.generate("m", "p", []), "")


class OpenAIChatClientTests(unittest.IsolatedAsyncioTestCase):
    def _client(self, create):
        with patch("internship_sniper.services.openai_chat_service.AsyncOpenAI") as sdk_class:
            sdk_class.return_value.chat.completions.create = create
            client = OpenAIChatClient("key", "https://inference.example.test/v1", 45.0)
        sdk_class.assert_called_once_with(
            api_key="key", base_url="https://inference.example.test/v1", timeout=45.0, max_retries=0
        )
        return client

    async def test_returns_message_content(self):
        response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content='{"name": "A"}'))])
        create = AsyncMock(return_value=response)
        client = self._client(create)

        content = await client.complete("qwen", MESSAGES, max_tokens=3000, temperature=0.1)

        self.assertEqual(content, '{"name": "A"}')
        self.assertNotIn("top_p", create.await_args.kwargs)
        self.assertEqual(create.await_args.kwargs["max_tokens"], 3000)

    async def test_rate_limit_maps_to_rate_limited(self):
        request = httpx.Request("POST", "https://inference.example.test/v1/chat/completions")
        error = openai.RateLimitError("slow down", response=httpx.Response(429, request=request), body=None)
        client = self._client(AsyncMock(side_effect=error))
        with self.assertRaises(RateLimitedError):
            await client.complete("qwen", MESSAGES, max_tokens=10, temperature=0.1)

    async def test_connection_error_maps_to_transport(self):
        request = httpx.Request("POST", "https://inference.example.test/v1/chat/completions")
        client = self._client(AsyncMock(side_effect=openai.APIConnectionError(request=request)))
        with self.assertRaises(TransportError):
            await client.complete("qwen", MESSAGES, max_tokens=10, temperature=0.1)

    async def test_aclose_closes_sdk_client(self):
        with patch("internship_sniper.services.openai_chat_service.AsyncOpenAI") as sdk_class:
            sdk_class.return_value.close = AsyncMock()
            client = OpenAIChatClient("key", "https://inference.example.test/v1", 45.0)
        await client.aclose()
        sdk_class.return_value.close.assert_awaited_once()

    async def test_missing_choices_is_empty_string(self):
        client = self._client(AsyncMock(return_value=SimpleNamespace(choices=[])))
        self.assertEqual(await client.complete("qwen", MESSAGES, max_tokens=10, temperature=0.1), "")


class HttpChatClientTests(unittest.IsolatedAsyncioTestCase):
    def _client(self, handler):
        return HttpChatClient("nv-key", CHAT_URL, 90.0, transport=httpx.MockTransport(handler))

    async def test_posts_payload_with_bearer_auth(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [{"message": {"content": '{"name": "B"}'}}]})

        content = await self._client(handler).complete(
            "moonshotai/kimi-k2.5", MESSAGES, max_tokens=4000, temperature=0.1, top_p=1.0
        )

        self.assertEqual(content, '{"name": "B"}')
        self.assertEqual(seen["auth"], "Bearer nv-key")
        self.assertEqual(
            seen["body"],
            {
                "model": "moonshotai/kimi-k2.5",
                "messages": MESSAGES,
                "max_tokens": 4000,
                "temperature": 0.1,
                "top_p": 1.0,
            },
        )

    async def test_http_429_maps_to_rate_limited(self):
        client = self._client(lambda request: httpx.Response(429, text="busy"))
        with self.assertRaises(RateLimitedError):
            await client.complete("m", MESSAGES, max_tokens=10, temperature=0.1)

    async def test_server_error_maps_to_transport(self):
        client = self._client(lambda request: httpx.Response(503, text="unavailable"))
        with self.assertRaises(TransportError) as ctx:
            await client.complete("m", MESSAGES, max_tokens=10, temperature=0.1)
        self.assertNotIsInstance(ctx.exception, RateLimitedError)

    async def test_connect_error_maps_to_transport(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with self.assertRaises(TransportError):
            await self._client(handler).complete("m", MESSAGES, max_tokens=10, temperature=0.1)

    async def test_non_json_body_maps_to_transport(self):
        client = self._client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with self.assertRaises(TransportError):
            await client.complete("m", MESSAGES, max_tokens=10, temperature=0.1)

    async def test_response_without_choices_is_empty_string(self):
        client = self._client(lambda request: httpx.Response(200, json={"choices": []}))
        self.assertEqual(await client.complete("m", MESSAGES, max_tokens=10, temperature=0.1), "")


if __name__ == "__main__":
    unittest.main()
