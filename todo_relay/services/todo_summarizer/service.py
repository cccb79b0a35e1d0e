"""Todo summarization service."""

import logging

from todo_relay.llm import LLMClient, LLMError, LLMResponseShapeError
from todo_relay.services.todo_summarizer.models import TodoInput

logger = logging.getLogger(__name__)

SUMMARY_FALLBACK = "Could not generate a meaningful summary for this todo item."


def build_summary_prompt(todo: TodoInput) -> str:
    """Prompt for the standalone summary endpoint."""
    prompt = f'Description Answer and Summarize the following todo item: "{todo.text}"'

    if todo.due_date:
        prompt += f" due on {todo.due_date}"
    if todo.due_time:
        prompt += f" at {todo.due_time}"

    prompt += (
        ". Provide a concise answer and summary of approximately 2 to 3 lines, "
        "between 100 and 299 words. Format the summary as a bulleted list, "
        "ensuring each point is action-oriented."
    )
    return prompt


def build_slack_summary_prompt(todo: TodoInput) -> str:
    """Prompt used when a Slack notification arrives without a summary."""
    return f"""Summarize the following single to-do item for a Slack message. Keep it concise and action-oriented. Include the due date/time if provided.
To-do: "{todo.text}"
Due Date: {todo.due_date or "Not specified"}
Due Time: {todo.due_time or "Not specified"}"""


def slack_summary_fallback(todo: TodoInput) -> str:
    return f'Could not generate summary for: "{todo.text}".'


class TodoSummarizerService:
    """Service for summarizing single todo items with the configured LLM."""

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client

    async def summarize(self, todo: TodoInput) -> str:
        """
        Generate a bulleted summary for a todo item.

        A response without candidate text is not an error: the caller gets
        SUMMARY_FALLBACK instead.

        Args:
            todo: The todo item

        Returns:
            Summary text

        Raises:
            LLMError: If the provider call fails or the provider is not configured
        """
        try:
            summary = await self.llm_client.generate_content(build_summary_prompt(todo))
        except LLMResponseShapeError as e:
            logger.warning(f"Unexpected LLM response for todo from {todo.user_id}: {e}")
            return SUMMARY_FALLBACK

        summary = summary.strip()
        logger.info(f"Generated summary for single todo from {todo.user_id}: {summary}")
        return summary

    async def summarize_for_slack(self, todo: TodoInput) -> str:
        """
        Generate a short summary for a Slack message. Never raises.

        Returns:
            Summary text, or a fallback naming the todo if generation failed
        """
        try:
            summary = await self.llm_client.generate_content(
                build_slack_summary_prompt(todo)
            )
        except LLMError as e:
            logger.error(f"Error generating summary for single todo: {e}")
            return slack_summary_fallback(todo)
        except Exception as e:
            logger.exception(f"Unexpected error generating summary for single todo: {e}")
            return slack_summary_fallback(todo)

        summary = summary.strip()
        logger.info(f"Generated Slack summary for todo from {todo.user_id}: {summary}")
        return summary
