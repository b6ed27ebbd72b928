"""Article routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status
from fastapi import Path as PathParam
from fastapi.concurrency import run_in_threadpool

from portfolio_cms.api.dependencies import read_upload, read_uploads
from portfolio_cms.api.schemas.articles import ArticleResponse
from portfolio_cms.api.schemas.common import CascadeDeleteResponse, MessageResponse
from portfolio_cms.services.articles import (
    add_article_images,
    create_article,
    delete_article,
    delete_article_image,
    list_article_image_filenames,
    list_articles,
)

router = APIRouter(prefix="/articles", tags=["articles"])


@router.post(
    "",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an article",
    responses={
        400: {"description": "Missing title or thumbnail"},
        409: {"description": "Title taken"},
    },
)
async def create_article_endpoint(
    title: Annotated[str | None, Form(description="Unique article title")] = None,
    thumbnail: Annotated[UploadFile | None, File(description="Thumbnail image")] = None,
) -> ArticleResponse:
    incoming = await read_upload(thumbnail)
    result = await run_in_threadpool(create_article, title, incoming)
    return ArticleResponse(**result)


@router.get("", response_model=list[ArticleResponse], summary="List articles")
def list_articles_endpoint() -> list[ArticleResponse]:
    """Return all articles, newest first, with their gallery sizes."""
    return [ArticleResponse(**article) for article in list_articles()]


@router.delete(
    "/{title}",
    response_model=CascadeDeleteResponse,
    summary="Delete an article",
    responses={404: {"description": "Article not found"}},
)
def delete_article_endpoint(
    title: Annotated[str, PathParam(description="Article title")],
) -> CascadeDeleteResponse:
    removed = delete_article(title)
    return CascadeDeleteResponse(
        message="Article and all related images deleted", deleted_images=removed
    )


@router.post(
    "/{title}/images",
    response_model=list[str],
    status_code=status.HTTP_201_CREATED,
    summary="Upload gallery images",
    responses={
        400: {"description": "No images uploaded"},
        404: {"description": "Article not found"},
    },
)
async def upload_article_images_endpoint(
    title: Annotated[str, PathParam(description="Article title")],
    images: Annotated[list[UploadFile] | None, File(description="Up to 20 images")] = None,
) -> list[str]:
    files = await read_uploads(images)
    return await run_in_threadpool(add_article_images, title, files)


@router.get(
    "/{title}/images",
    response_model=list[str],
    summary="List gallery image filenames",
    responses={404: {"description": "Article not found"}},
)
def list_article_images_endpoint(
    title: Annotated[str, PathParam(description="Article title")],
) -> list[str]:
    return list_article_image_filenames(title)


@router.delete(
    "/{title}/images/{filename}",
    response_model=MessageResponse,
    summary="Delete a gallery image",
    responses={404: {"description": "Article or image not found"}},
)
def delete_article_image_endpoint(
    title: Annotated[str, PathParam(description="Article title")],
    filename: Annotated[str, PathParam(description="Stored image filename")],
) -> MessageResponse:
    delete_article_image(title, filename)
    return MessageResponse(message="Image deleted")
