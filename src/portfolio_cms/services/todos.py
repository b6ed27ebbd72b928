"""To-do list service."""

from __future__ import annotations

from portfolio_cms.data.crud.repository import Repository
from portfolio_cms.data.models import Todo
from portfolio_cms.errors import NotFoundError
from portfolio_cms.services.lifecycle import require_fields

todos = Repository(Todo, "Todo")


def _todo_to_dict(todo: Todo) -> dict:
    return {"id": todo.id, "text": todo.text, "completed": todo.completed}


def list_todos() -> list[dict]:
    """List all to-do items in creation order."""
    return [_todo_to_dict(todo) for todo in todos.find(order_by=["id"])]


def create_todo(text: str | None) -> dict:
    """Create an open to-do item."""
    values = require_fields({"text": text}, "Task text is required")
    return _todo_to_dict(todos.insert(Todo(text=values["text"], completed=False)))


def delete_todo(todo_id: int) -> None:
    """Delete a to-do item.

    Raises:
        NotFoundError: If no item has this id.
    """
    if not todos.delete_by_id(todo_id):
        raise NotFoundError("Todo not found")


def _flip(todo: Todo) -> None:
    todo.completed = not todo.completed


def toggle_todo(todo_id: int) -> dict:
    """Flip the ``completed`` flag of a to-do item and return the item.

    Raises:
        NotFoundError: If no item has this id.
    """
    return _todo_to_dict(todos.update_by_id(todo_id, _flip))
