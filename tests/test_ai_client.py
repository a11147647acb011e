import unittest
from types import SimpleNamespace

from openai import OpenAIError

from config import Settings
from services.ai_client import AIClient
from tests.fakes import mock_openai_client


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestAIClient(unittest.IsolatedAsyncioTestCase):
    async def test_returns_raw_text(self):
        client = mock_openai_client(_completion('{"aiSummaryVerdict": "ok"}'))
        ai = AIClient(Settings(gemini_model="gemini-test"), client=client)

        self.assertEqual(await ai.generate("prompt"), '{"aiSummaryVerdict": "ok"}')

        kwargs = client.chat.completions.create.await_args.kwargs
        self.assertEqual(kwargs["model"], "gemini-test")
        self.assertEqual(kwargs["messages"], [{"role": "user", "content": "prompt"}])
        self.assertEqual(kwargs["response_format"], {"type": "json_object"})

    async def test_json_mode_off(self):
        client = mock_openai_client(_completion("text"))
        ai = AIClient(Settings(ai_json_mode=False), client=client)
        await ai.generate("prompt")
        self.assertNotIn("response_format", client.chat.completions.create.await_args.kwargs)

    async def test_provider_error_gives_none(self):
        ai = AIClient(Settings(), client=mock_openai_client(exc=OpenAIError("503 upstream")))
        self.assertIsNone(await ai.generate("prompt"))

    async def test_missing_content_gives_none(self):
        ai = AIClient(Settings(), client=mock_openai_client(SimpleNamespace(choices=[])))
        self.assertIsNone(await ai.generate("prompt"))

        ai = AIClient(Settings(), client=mock_openai_client(_completion(None)))
        self.assertIsNone(await ai.generate("prompt"))

    async def test_without_api_key(self):
        ai = AIClient(Settings(gemini_api_key=None))
        self.assertIsNone(ai.client)
        self.assertIsNone(await ai.generate("prompt"))

    def test_real_client_built_from_settings(self):
        ai = AIClient(Settings(gemini_api_key="key", ai_base_url="https://example.test/v1/", ai_timeout=12))
        self.assertEqual(str(ai.client.base_url), "https://example.test/v1/")
        self.assertEqual(ai.client.max_retries, 0)


if __name__ == "__main__":
    unittest.main()
