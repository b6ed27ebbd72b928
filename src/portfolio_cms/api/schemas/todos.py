"""Pydantic schemas for to-do endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TodoCreateRequest(BaseModel):
    """Request body for creating a to-do item."""

    text: str | None = Field(None, description="Task description")


class TodoResponse(BaseModel):
    """A to-do item."""

    id: int
    text: str
    completed: bool = False
