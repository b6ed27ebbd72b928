"""ORM model for to-do items."""

from __future__ import annotations

from sqlalchemy import Boolean, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_cms.data.db import Base


class Todo(Base):
    """A to-do item.

    Attributes:
        id: Auto-incrementing primary key.
        text: Task description.
        completed: Completion flag; only ever toggled after creation.
    """

    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
