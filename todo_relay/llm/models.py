"""Typed views of the provider response envelopes.

Only the fields needed to reach the generated text are modelled; everything
else in the payload is ignored.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from todo_relay.llm.base import LLMResponseShapeError


class _Envelope(BaseModel):
    model_config = ConfigDict(extra="ignore")


class GeminiPart(_Envelope):
    text: Optional[str] = None


class GeminiContent(_Envelope):
    parts: Optional[list[GeminiPart]] = None


class GeminiCandidate(_Envelope):
    content: Optional[GeminiContent] = None


class GeminiResponse(_Envelope):
    candidates: Optional[list[GeminiCandidate]] = None

    def first_text(self) -> str:
        """Concatenated text parts of the first candidate."""
        if not self.candidates:
            raise LLMResponseShapeError("Gemini response has no candidates")

        content = self.candidates[0].content
        if content is None or not content.parts:
            raise LLMResponseShapeError("Gemini candidate has no content parts")

        text = "".join(part.text for part in content.parts if part.text)
        if not text.strip():
            raise LLMResponseShapeError("Gemini candidate has no text")
        return text


class OpenAIMessage(_Envelope):
    content: Optional[str] = None


class OpenAIChoice(_Envelope):
    message: Optional[OpenAIMessage] = None


class OpenAIResponse(_Envelope):
    choices: Optional[list[OpenAIChoice]] = None

    def first_text(self) -> str:
        """Message content of the first choice."""
        if not self.choices:
            raise LLMResponseShapeError("OpenAI response has no choices")

        message = self.choices[0].message
        if message is None or not message.content or not message.content.strip():
            raise LLMResponseShapeError("OpenAI choice has no message content")
        return message.content


def _as_mapping(response: Any) -> dict:
    if isinstance(response, BaseModel):
        return response.model_dump(exclude_none=True)
    if isinstance(response, dict):
        return response
    raise LLMResponseShapeError(f"Unexpected response type: {type(response).__name__}")


def decode_gemini_text(response: Any) -> str:
    """Extract the generated text from a Gemini generate_content response."""
    try:
        envelope = GeminiResponse.model_validate(_as_mapping(response))
    except ValidationError as e:
        raise LLMResponseShapeError(f"Malformed Gemini response: {e}") from e
    return envelope.first_text()


def decode_openai_text(response: Any) -> str:
    """Extract the generated text from an OpenAI chat completion."""
    try:
        envelope = OpenAIResponse.model_validate(_as_mapping(response))
    except ValidationError as e:
        raise LLMResponseShapeError(f"Malformed OpenAI response: {e}") from e
    return envelope.first_text()
