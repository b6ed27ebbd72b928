"""Pydantic schemas for article API endpoints."""

from __future__ import annotations

from datetime import datetime

from portfolio_cms.api.schemas.common import CamelModel


class ArticleResponse(CamelModel):
    """An article with the size of its image gallery."""

    id: int
    title: str
    thumbnail: str
    date: datetime
    image_count: int = 0
