"""Read-only retrieval of stored attachment files."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, status
from fastapi import Path as PathParam
from fastapi.responses import FileResponse

from portfolio_cms.storage.attachments import get_attachment_store, get_media_type

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.get(
    "/{category}/{filename}",
    summary="Download a stored file",
    responses={200: {"description": "File contents"}, 404: {"description": "File not found"}},
)
def get_upload(
    category: Annotated[str, PathParam(description="Attachment category, e.g. blogs")],
    filename: Annotated[str, PathParam(description="Stored filename")],
) -> FileResponse:
    path = get_attachment_store().path_for(category, filename)
    if path is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found.")
    return FileResponse(path, media_type=get_media_type(path))
