"""FastAPI router for the Slack notifier service."""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from todo_relay.core.errors import ErrorResponse
from todo_relay.core.ingress import resolve_user_id
from todo_relay.services.slack_notifier.models import (
    MessageResponse,
    SendTodoToSlackRequest,
)
from todo_relay.services.slack_notifier.service import SlackNotifierService

router = APIRouter(tags=["slack-notifier"])


def get_slack_notifier(request: Request) -> SlackNotifierService:
    return request.app.state.slack_notifier


@router.post(
    "/send-single-todo-to-slack",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def send_single_todo_to_slack(
    request: Request,
    body: Optional[SendTodoToSlackRequest] = None,
    notifier: SlackNotifierService = Depends(get_slack_notifier),
) -> MessageResponse:
    """
    Send a single todo, and its summary, to Slack.

    - If ``summary`` is omitted, one is generated with the LLM first.
    - A failed summary does not block the message; a fallback is sent instead.
    - Slack rejections are returned with Slack's own status code.
    """
    body = body or SendTodoToSlackRequest()
    todo = body.to_todo(resolve_user_id(request, body.user_id))
    await notifier.notify(
        todo,
        summary=body.summary,
        user_agent=request.headers.get("user-agent"),
    )
    return MessageResponse(message="Todo summary sent to Slack successfully!")
