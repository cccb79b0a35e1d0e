"""Google Gemini LLM client."""

import logging
from typing import Optional

import httpx
from google import genai
from google.genai import errors

from todo_relay.llm.base import LLMConfigurationError, LLMProviderError
from todo_relay.llm.models import decode_gemini_text

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class GeminiClient:
    """Client for Google Gemini LLM. One request per call, no retries."""

    def __init__(
        self,
        api_key: str = "",
        model: Optional[str] = None,
        client: Optional[genai.Client] = None,
    ):
        self.api_key = api_key
        self.model = model or DEFAULT_GEMINI_MODEL
        self._client = client

    @property
    def client(self) -> genai.Client:
        """Lazy initialization of the Gemini client."""
        if self._client is None:
            if not self.api_key:
                raise LLMConfigurationError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate_content(self, prompt: str) -> str:
        """
        Generate content using Gemini.

        Args:
            prompt: User prompt

        Returns:
            Text of the first candidate

        Raises:
            LLMConfigurationError: If no API key is configured
            LLMProviderError: If the API call fails
            LLMResponseShapeError: If the response carries no candidate text
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
            )
        except errors.APIError as e:
            logger.error(f"Gemini API error ({e.code}): {e.message}")
            raise LLMProviderError(e.message or str(e), provider_status=e.code) from e
        except httpx.HTTPError as e:
            logger.error(f"Gemini transport error: {e}")
            raise LLMProviderError(str(e) or type(e).__name__) from e

        text = decode_gemini_text(response)
        logger.debug(f"Generated content with {len(text)} characters")
        return text
