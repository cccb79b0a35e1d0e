"""Pydantic models for Slack incoming-webhook payloads (Block Kit subset)."""

from typing import Literal, Optional, Union

from pydantic import BaseModel


class MarkdownText(BaseModel):
    """mrkdwn text object."""

    type: Literal["mrkdwn"] = "mrkdwn"
    text: str


class SectionBlock(BaseModel):
    """Section block with either a text or up to ten fields."""

    type: Literal["section"] = "section"
    text: Optional[MarkdownText] = None
    fields: Optional[list[MarkdownText]] = None


class ContextBlock(BaseModel):
    """Context block rendered as small grey text."""

    type: Literal["context"] = "context"
    elements: list[MarkdownText]


class SlackMessage(BaseModel):
    """Webhook message. ``text`` is the notification fallback when blocks are set."""

    text: str
    blocks: Optional[list[Union[SectionBlock, ContextBlock]]] = None

    def to_payload(self) -> dict:
        """Serialize to the JSON body expected by the webhook."""
        return self.model_dump(exclude_none=True)
