"""Todo summarizer service module."""

from todo_relay.services.todo_summarizer.router import router
from todo_relay.services.todo_summarizer.service import TodoSummarizerService

__all__ = ["router", "TodoSummarizerService"]
