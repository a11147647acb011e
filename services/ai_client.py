# services/ai_client.py
from typing import Optional

from loguru import logger
from openai import AsyncOpenAI, OpenAIError

from config import Settings


class AIClient:
    """Gemini through its OpenAI-compatible endpoint. `generate` never raises: any failure is logged and gives None."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.model = settings.gemini_model
        self.json_mode = settings.ai_json_mode
        if client is not None:
            self.client = client
        elif settings.gemini_api_key:
            self.client = AsyncOpenAI(
                api_key=settings.gemini_api_key,
                base_url=settings.ai_base_url,
                timeout=settings.ai_timeout,
                max_retries=0,
            )
        else:
            self.client = None

    async def generate(self, prompt: str) -> Optional[str]:
        if self.client is None:
            logger.warning("GEMINI_API_KEY not configured; skipping AI analysis")
            return None

        kwargs = {}
        if self.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                **kwargs,
            )
        except OpenAIError as e:
            logger.error(f"Gemini API error: {e}")
            return None

        choices = getattr(response, "choices", None) or []
        if not choices or not getattr(choices[0].message, "content", None):
            logger.warning("Gemini API returned no content")
            return None

        return choices[0].message.content
