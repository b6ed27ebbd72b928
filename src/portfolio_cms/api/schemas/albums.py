"""Pydantic schemas for album API endpoints."""

from __future__ import annotations

from datetime import datetime

from portfolio_cms.api.schemas.common import CamelModel


class AlbumResponse(CamelModel):
    """An album with the number of images it holds."""

    id: int
    name: str
    thumbnail: str
    date: datetime
    image_count: int = 0


class AlbumImageResponse(CamelModel):
    """An image inside an album."""

    id: int
    filename: str
    album: str
    date: datetime
