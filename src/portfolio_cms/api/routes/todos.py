"""To-do routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, status
from fastapi import Path as PathParam

from portfolio_cms.api.schemas.common import MessageResponse
from portfolio_cms.api.schemas.todos import TodoCreateRequest, TodoResponse
from portfolio_cms.data.crud.repository import MAX_RECORD_ID
from portfolio_cms.services.todos import create_todo, delete_todo, list_todos, toggle_todo

router = APIRouter(prefix="/todos", tags=["todos"])


@router.get("", response_model=list[TodoResponse])
def list_todos_endpoint() -> list[TodoResponse]:
    """List all to-do items in creation order."""
    return [TodoResponse(**todo) for todo in list_todos()]


@router.post(
    "",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Task text is required"}},
)
def create_todo_endpoint(data: TodoCreateRequest) -> TodoResponse:
    """Create an open to-do item."""
    return TodoResponse(**create_todo(data.text))


@router.delete(
    "/{todo_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Todo not found"}},
)
def delete_todo_endpoint(
    todo_id: Annotated[int, PathParam(description="Todo ID", ge=1, le=MAX_RECORD_ID)],
) -> MessageResponse:
    """Delete a to-do item."""
    delete_todo(todo_id)
    return MessageResponse(message="Todo deleted")


@router.put(
    "/{todo_id}",
    response_model=TodoResponse,
    responses={404: {"description": "Todo not found"}},
)
def toggle_todo_endpoint(
    todo_id: Annotated[int, PathParam(description="Todo ID", ge=1, le=MAX_RECORD_ID)],
) -> TodoResponse:
    """Toggle the completed flag of a to-do item."""
    return TodoResponse(**toggle_todo(todo_id))
