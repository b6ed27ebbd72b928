"""ORM model for linked YouTube videos."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_cms.data.db import Base, UTCDateTime


class Video(Base):
    """A titled link to a YouTube video. Videos carry no attachment."""

    __tablename__ = "videos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    youtube_link: Mapped[str] = mapped_column(String(2048), nullable=False)
    added_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=lambda: datetime.now(UTC)
    )
