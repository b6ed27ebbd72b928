"""Video link service. Videos are plain records with no attachment."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from portfolio_cms.data.crud.repository import Repository
from portfolio_cms.data.models import Video
from portfolio_cms.errors import NotFoundError
from portfolio_cms.services.lifecycle import require_fields

logger = logging.getLogger(__name__)

videos = Repository(Video, "Video")


def _video_to_dict(video: Video) -> dict:
    return {
        "id": video.id,
        "title": video.title,
        "youtube_link": video.youtube_link,
        "added_at": video.added_at,
    }


def create_video(title: str | None, youtube_link: str | None) -> dict:
    """Add a video link. Both the title and the link are required."""
    values = require_fields(
        {"title": title, "youtube_link": youtube_link},
        "Title and YouTube link are required",
    )
    video = videos.insert(Video(**values, added_at=datetime.now(UTC)))
    logger.info("Added video %d", video.id)
    return _video_to_dict(video)


def list_videos() -> list[dict]:
    """List videos, most recently added first."""
    return [_video_to_dict(video) for video in videos.find(order_by=["-added_at", "-id"])]


def delete_video(video_id: int) -> None:
    """Delete a video.

    Raises:
        NotFoundError: If no video has this id.
    """
    if not videos.delete_by_id(video_id):
        raise NotFoundError("Video not found")
