"""Pydantic schemas for video endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from portfolio_cms.api.schemas.common import CamelModel


class VideoCreateRequest(CamelModel):
    """Request body for adding a video.

    Fields are optional here so that a missing value is reported with the
    service's own 400 message rather than a schema error.
    """

    title: str | None = Field(None, description="Video title")
    youtube_link: str | None = Field(None, description="YouTube URL")


class VideoResponse(CamelModel):
    """A stored YouTube video link."""

    id: int
    title: str
    youtube_link: str
    added_at: datetime
