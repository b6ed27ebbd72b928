"""Video routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Request, status
from fastapi import Path as PathParam
from fastapi.concurrency import run_in_threadpool

from portfolio_cms.api.dependencies import json_or_form_body, read_json_or_form
from portfolio_cms.api.schemas.common import MessageResponse
from portfolio_cms.api.schemas.videos import VideoCreateRequest, VideoResponse
from portfolio_cms.data.crud.repository import MAX_RECORD_ID
from portfolio_cms.services.videos import create_video, delete_video, list_videos

router = APIRouter(prefix="/videos", tags=["videos"])


@router.post(
    "",
    response_model=VideoResponse,
    status_code=status.HTTP_201_CREATED,
    description="Accepts a JSON body or form fields (`title`, `youtubeLink`).",
    responses={400: {"description": "Title and YouTube link are required"}},
    openapi_extra=json_or_form_body(VideoCreateRequest),
)
async def create_video_endpoint(request: Request) -> VideoResponse:
    """Add a YouTube video link."""
    data = await read_json_or_form(request, VideoCreateRequest)
    created = await run_in_threadpool(create_video, data.title, data.youtube_link)
    return VideoResponse(**created)


@router.get("", response_model=list[VideoResponse])
def list_videos_endpoint() -> list[VideoResponse]:
    """List videos, most recently added first."""
    return [VideoResponse(**video) for video in list_videos()]


@router.delete(
    "/{video_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Video not found"}},
)
def delete_video_endpoint(
    video_id: Annotated[int, PathParam(description="Video ID", ge=1, le=MAX_RECORD_ID)],
) -> MessageResponse:
    """Delete a video link."""
    delete_video(video_id)
    return MessageResponse(message="Video deleted successfully")
