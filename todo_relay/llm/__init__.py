"""LLM integrations for todo-relay."""

from todo_relay.llm.base import (
    LLMClient,
    LLMConfigurationError,
    LLMError,
    LLMProviderError,
    LLMResponseShapeError,
    get_llm_client,
)
from todo_relay.llm.gemini import GeminiClient
from todo_relay.llm.openai import OpenAIClient

__all__ = [
    "get_llm_client",
    "LLMClient",
    "LLMError",
    "LLMConfigurationError",
    "LLMProviderError",
    "LLMResponseShapeError",
    "GeminiClient",
    "OpenAIClient",
]
