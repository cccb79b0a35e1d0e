"""OpenAI LLM client."""

import logging
from typing import Optional

import openai
from openai import AsyncOpenAI

from todo_relay.llm.base import LLMConfigurationError, LLMProviderError
from todo_relay.llm.models import decode_openai_text

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class OpenAIClient:
    """Client for OpenAI LLM."""

    def __init__(
        self,
        api_key: str = "",
        model: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.api_key = api_key
        self.model = model or DEFAULT_OPENAI_MODEL
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise LLMConfigurationError("OPENAI_API_KEY is not configured")
            # The SDK retries by default; this relay makes exactly one call
            self._client = AsyncOpenAI(api_key=self.api_key, max_retries=0)
        return self._client

    async def generate_content(self, prompt: str) -> str:
        """
        Generate content using OpenAI.

        Args:
            prompt: User prompt

        Returns:
            Generated text content
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.APIStatusError as e:
            logger.error(f"OpenAI API error ({e.status_code}): {e.message}")
            raise LLMProviderError(e.message, provider_status=e.status_code) from e
        except openai.APIError as e:
            logger.error(f"OpenAI transport error: {e}")
            raise LLMProviderError(e.message) from e

        content = decode_openai_text(response)
        logger.debug(f"Generated content with {len(content)} characters")
        return content
