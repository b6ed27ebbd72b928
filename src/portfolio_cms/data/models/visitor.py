"""ORM model for the append-only visitor log used by site analytics."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_cms.data.db import Base, UTCDateTime


class Visitor(Base):
    """One recorded site visit.

    Attributes:
        id: Auto-incrementing primary key.
        ip: Client address as seen by the API.
        country: Resolved country name; None or empty when unknown.
        visited_at: UTC timestamp of the visit.
    """

    __tablename__ = "visitors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ip: Mapped[str] = mapped_column(String(64), nullable=False)
    country: Mapped[str | None] = mapped_column(String(128), nullable=True)
    visited_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, index=True, default=lambda: datetime.now(UTC)
    )
