"""Pydantic models for the Slack notifier service."""

from typing import Optional

from pydantic import BaseModel

from todo_relay.services.todo_summarizer.models import TodoRequest


class SendTodoToSlackRequest(TodoRequest):
    """Request model for posting a todo to Slack. ``summary`` is generated when absent."""

    summary: Optional[str] = None


class MessageResponse(BaseModel):
    """Success envelope without a summary."""

    message: str
