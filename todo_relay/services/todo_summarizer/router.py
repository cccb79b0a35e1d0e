"""FastAPI router for todo summarization."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from todo_relay.core.errors import ErrorResponse, UpstreamProviderError
from todo_relay.core.ingress import resolve_user_id
from todo_relay.llm import LLMError
from todo_relay.services.todo_summarizer.models import (
    SummarizeTodoRequest,
    SummarizeTodoResponse,
)
from todo_relay.services.todo_summarizer.service import TodoSummarizerService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["todo-summarizer"])


def get_todo_summarizer(request: Request) -> TodoSummarizerService:
    return request.app.state.todo_summarizer


@router.post(
    "/summarize-single-todo",
    response_model=SummarizeTodoResponse,
    responses={500: {"model": ErrorResponse}},
)
async def summarize_single_todo(
    request: Request,
    body: Optional[SummarizeTodoRequest] = None,
    summarizer: TodoSummarizerService = Depends(get_todo_summarizer),
) -> SummarizeTodoResponse:
    """Summarize a single todo item with the LLM."""
    body = body or SummarizeTodoRequest()
    todo = body.to_todo(resolve_user_id(request, body.user_id))

    try:
        summary = await summarizer.summarize(todo)
    except LLMError as e:
        logger.error(f"Error calling LLM for single todo: {e}")
        raise UpstreamProviderError(
            f"Error generating summary for single todo: {e.message}"
        ) from e

    return SummarizeTodoResponse(
        message="Single todo summary generated successfully.",
        summary=summary,
    )
