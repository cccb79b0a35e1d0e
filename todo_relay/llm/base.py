"""Unified LLM interface for provider switching."""

import logging
from typing import Optional, Protocol

from todo_relay.core.config import Settings
from todo_relay.core.errors import UpstreamProviderError

logger = logging.getLogger(__name__)


class LLMError(UpstreamProviderError):
    """Base class for LLM failures."""

    pass


class LLMConfigurationError(LLMError):
    """Raised when the selected provider has no API key."""

    pass


class LLMProviderError(LLMError):
    """Raised when the provider rejects the call or the transport fails."""

    def __init__(self, message: str, provider_status: Optional[int] = None):
        super().__init__(message)
        self.provider_status = provider_status


class LLMResponseShapeError(LLMError):
    """Raised when the provider response lacks the generated text."""

    pass


class LLMClient(Protocol):
    """Protocol for LLM clients."""

    async def generate_content(self, prompt: str) -> str:
        """Generate content from the LLM."""
        ...


def get_llm_client(settings: Settings) -> LLMClient:
    """
    Build the LLM client selected by LLM_PROVIDER.

    API keys are checked on first use, so a missing key surfaces as a
    per-request error rather than a startup failure.

    Raises:
        ValueError: If provider is not supported
    """
    provider = settings.llm_provider.lower()

    if provider == "gemini":
        from todo_relay.llm.gemini import GeminiClient

        logger.info(f"Using Gemini LLM provider (model: {settings.gemini_model})")
        return GeminiClient(api_key=settings.gemini_api_key, model=settings.gemini_model)

    elif provider == "openai":
        from todo_relay.llm.openai import OpenAIClient

        logger.info(f"Using OpenAI LLM provider (model: {settings.openai_model})")
        return OpenAIClient(api_key=settings.openai_api_key, model=settings.openai_model)

    else:
        raise ValueError(
            f"Unsupported LLM_PROVIDER: {provider}. Supported: gemini, openai"
        )
