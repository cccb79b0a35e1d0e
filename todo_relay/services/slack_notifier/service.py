"""Slack notification service for single todo items."""

import logging
from typing import Optional

from todo_relay.core.errors import ClientInputError
from todo_relay.core.slack import SlackMessage, SlackWebhookClient
from todo_relay.core.slack.models import ContextBlock, MarkdownText, SectionBlock
from todo_relay.services.todo_summarizer.models import TodoInput
from todo_relay.services.todo_summarizer.service import TodoSummarizerService

logger = logging.getLogger(__name__)

UNKNOWN_USER_AGENT = "Unknown User-Agent"
MESSAGE_FORMATS = ("blocks", "text")


def build_text_message(todo: TodoInput, summary: str) -> SlackMessage:
    """Flat message listing the todo fields and summary."""
    lines = [
        f"*New Todo from {todo.user_id}:*",
        f"*Task:* {todo.text}",
        f"*Due Date:* {todo.due_date or 'N/A'}",
        f"*Due Time:* {todo.due_time or 'N/A'}",
        f"*Summary:*\n{summary}",
    ]
    return SlackMessage(text="\n".join(lines))


def build_block_message(todo: TodoInput, summary: str, user_agent: str) -> SlackMessage:
    """Block Kit message: header, todo/summary fields, due and sender context."""
    return SlackMessage(
        text=f"*New Todo Update from {todo.user_id} ({user_agent}):*\n{summary}",
        blocks=[
            SectionBlock(text=MarkdownText(text=f"*New Todo Update from `{todo.user_id}`*:")),
            SectionBlock(
                fields=[
                    MarkdownText(text=f"*Todo:*\n{todo.text}"),
                    MarkdownText(text=f"*Summary:*\n{summary}"),
                ]
            ),
            ContextBlock(
                elements=[
                    MarkdownText(
                        text=(
                            f"*Due:* {todo.due_date or 'N/A'} {todo.due_time or 'N/A'}"
                            f" | *Sent by:* {user_agent}"
                        )
                    )
                ]
            ),
        ],
    )


class SlackNotifierService:
    """Service that posts a todo item, with a summary, to a Slack webhook."""

    def __init__(
        self,
        summarizer: TodoSummarizerService,
        slack_client: SlackWebhookClient,
        message_format: str = "blocks",
    ):
        if message_format not in MESSAGE_FORMATS:
            raise ValueError(
                f"Unsupported SLACK_MESSAGE_FORMAT: {message_format}. "
                f"Supported: {', '.join(MESSAGE_FORMATS)}"
            )
        self.summarizer = summarizer
        self.slack_client = slack_client
        self.message_format = message_format

    def build_message(
        self, todo: TodoInput, summary: str, user_agent: str
    ) -> SlackMessage:
        if self.message_format == "text":
            return build_text_message(todo, summary)
        return build_block_message(todo, summary, user_agent)

    async def notify(
        self,
        todo: TodoInput,
        summary: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> str:
        """
        Post a todo to Slack, generating a summary first if none was given.

        Args:
            todo: The todo item; ``text`` must be non-empty
            summary: Pre-generated summary from the client
            user_agent: Caller's User-Agent header

        Returns:
            The summary that was sent

        Raises:
            ClientInputError: If the todo has no text
            ConfigurationError: If the webhook URL is not configured
            UpstreamProviderError: If the webhook call fails
        """
        if not todo.text:
            raise ClientInputError("Todo text is required.")

        # Checked before the summary call so nothing leaves the process
        self.slack_client.ensure_configured()

        final_summary = summary or await self.summarizer.summarize_for_slack(todo)
        message = self.build_message(todo, final_summary, user_agent or UNKNOWN_USER_AGENT)

        await self.slack_client.send_message(message)
        logger.info(f"Todo from {todo.user_id} sent to Slack")
        return final_summary
