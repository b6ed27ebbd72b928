"""Album routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status
from fastapi import Path as PathParam
from fastapi.concurrency import run_in_threadpool

from portfolio_cms.api.dependencies import read_upload, read_uploads
from portfolio_cms.api.schemas.albums import AlbumImageResponse, AlbumResponse
from portfolio_cms.api.schemas.common import CascadeDeleteResponse, MessageResponse
from portfolio_cms.data.crud.repository import MAX_RECORD_ID
from portfolio_cms.services.albums import (
    add_album_images,
    create_album,
    delete_album,
    delete_album_image,
    list_album_images,
    list_albums,
)

router = APIRouter(prefix="/albums", tags=["albums"])
images_router = APIRouter(prefix="/images", tags=["albums"])


@router.post(
    "",
    response_model=AlbumResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an album",
    responses={400: {"description": "Missing data"}, 409: {"description": "Name taken"}},
)
async def create_album_endpoint(
    name: Annotated[str | None, Form(description="Unique album name")] = None,
    thumbnail: Annotated[UploadFile | None, File(description="Thumbnail image")] = None,
) -> AlbumResponse:
    incoming = await read_upload(thumbnail)
    result = await run_in_threadpool(create_album, name, incoming)
    return AlbumResponse(**result)


@router.get(
    "",
    response_model=list[AlbumResponse],
    summary="List albums",
    description="Return all albums, newest first, with their image counts.",
)
def list_albums_endpoint() -> list[AlbumResponse]:
    return [AlbumResponse(**album) for album in list_albums()]


@router.delete(
    "/{name}",
    response_model=CascadeDeleteResponse,
    summary="Delete an album",
    description="Delete an album together with all of its images and their files.",
    responses={404: {"description": "Album not found"}},
)
def delete_album_endpoint(
    name: Annotated[str, PathParam(description="Album name")],
) -> CascadeDeleteResponse:
    removed = delete_album(name)
    return CascadeDeleteResponse(message="Album and images deleted", deleted_images=removed)


@router.post(
    "/{name}/images",
    response_model=list[AlbumImageResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Upload images to an album",
    responses={400: {"description": "Missing data"}, 404: {"description": "Album not found"}},
)
async def upload_album_images_endpoint(
    name: Annotated[str, PathParam(description="Album name")],
    images: Annotated[list[UploadFile] | None, File(description="Up to 10 images")] = None,
) -> list[AlbumImageResponse]:
    files = await read_uploads(images)
    created = await run_in_threadpool(add_album_images, name, files)
    return [AlbumImageResponse(**image) for image in created]


@router.get(
    "/{name}/images",
    response_model=list[AlbumImageResponse],
    summary="List album images",
    responses={404: {"description": "Album not found"}},
)
def list_album_images_endpoint(
    name: Annotated[str, PathParam(description="Album name")],
) -> list[AlbumImageResponse]:
    return [AlbumImageResponse(**image) for image in list_album_images(name)]


@images_router.delete(
    "/{image_id}",
    response_model=MessageResponse,
    summary="Delete an album image",
    responses={404: {"description": "Image not found"}},
)
def delete_album_image_endpoint(
    image_id: Annotated[int, PathParam(description="Image ID", ge=1, le=MAX_RECORD_ID)],
) -> MessageResponse:
    delete_album_image(image_id)
    return MessageResponse(message="Image deleted")
