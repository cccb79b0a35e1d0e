"""Pydantic models for todo summarization."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from todo_relay.core.ingress import ANONYMOUS_USER


class TodoInput(BaseModel):
    """A single todo item as received from the client."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    text: str = ""
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    due_time: Optional[str] = Field(default=None, alias="dueTime")
    user_id: str = Field(default=ANONYMOUS_USER, alias="userId")


class TodoRequest(BaseModel):
    """Fields shared by both todo endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    due_time: Optional[str] = Field(default=None, alias="dueTime")
    user_id: Optional[str] = Field(default=None, alias="userId")

    def to_todo(self, user_id: str) -> TodoInput:
        return TodoInput(
            text=self.text or "",
            due_date=self.due_date or None,
            due_time=self.due_time or None,
            user_id=user_id,
        )


class SummarizeTodoRequest(TodoRequest):
    """Request model for single todo summarization."""

    pass


class SummarizeTodoResponse(BaseModel):
    """Response model for single todo summarization."""

    message: str
    summary: str
