"""Article service: articles with a thumbnail and an image gallery.

Articles are addressed by their unique title. Thumbnails live in the
``articles`` category and gallery images in ``articleimages``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from portfolio_cms.data.crud.repository import Repository
from portfolio_cms.data.models import Article, ArticleImage
from portfolio_cms.errors import ConflictError, NotFoundError, ValidationError
from portfolio_cms.services.lifecycle import (
    clean_text,
    create_many_with_attachments,
    create_with_attachment,
    discard_attachment,
    has_payload,
)
from portfolio_cms.storage.attachments import IncomingFile

logger = logging.getLogger(__name__)

__all__ = [
    "ARTICLE_CATEGORY",
    "ARTICLE_IMAGE_CATEGORY",
    "MAX_IMAGES_PER_UPLOAD",
    "add_article_images",
    "create_article",
    "delete_article",
    "delete_article_image",
    "list_article_image_filenames",
    "list_articles",
]

ARTICLE_CATEGORY = "articles"
ARTICLE_IMAGE_CATEGORY = "articleimages"
MAX_IMAGES_PER_UPLOAD = 20

articles = Repository(Article, "Article")
images = Repository(ArticleImage, "Image")


def _article_to_dict(article: Article, image_count: int) -> dict:
    return {
        "id": article.id,
        "title": article.title,
        "thumbnail": article.thumbnail,
        "date": article.date,
        "image_count": image_count,
    }


def _get_article(title: str | None) -> Article:
    cleaned = clean_text(title)
    article = articles.find_one({"title": cleaned}) if cleaned else None
    if article is None:
        raise NotFoundError("Article not found")
    return article


def create_article(title: str | None, thumbnail: IncomingFile | None) -> dict:
    """Create an article from a title and a thumbnail upload.

    Raises:
        ValidationError: If the title or thumbnail is missing.
        ConflictError: If an article with this title already exists.
    """
    cleaned = clean_text(title)
    if cleaned is None or thumbnail is None or not has_payload(thumbnail):
        raise ValidationError("Missing title or thumbnail")
    if articles.find_one({"title": cleaned}) is not None:
        raise ConflictError(f"Article '{cleaned}' already exists")

    article = create_with_attachment(
        articles,
        ARTICLE_CATEGORY,
        thumbnail,
        lambda filename: Article(title=cleaned, thumbnail=filename, date=datetime.now(UTC)),
    )
    logger.info("Created article %r (id=%d)", article.title, article.id)
    return _article_to_dict(article, 0)


def list_articles() -> list[dict]:
    """List articles newest first, each with its gallery size."""
    counts = images.count_grouped("article_id")
    return [
        _article_to_dict(article, counts.get(article.id, 0))
        for article in articles.find(order_by=["-date", "-id"])
    ]


def delete_article(title: str) -> int:
    """Delete an article, its thumbnail, and its whole gallery.

    Returns:
        Number of gallery images removed.
    """
    article = _get_article(title)
    discard_attachment(ARTICLE_CATEGORY, article.thumbnail)
    for image in images.find({"article_id": article.id}):
        discard_attachment(ARTICLE_IMAGE_CATEGORY, image.filename)
    removed = images.delete_many({"article_id": article.id})
    articles.delete_by_id(article.id)
    logger.info("Deleted article %r with %d images", article.title, removed)
    return removed


def add_article_images(title: str | None, uploads: Sequence[IncomingFile]) -> list[str]:
    """Add up to ``MAX_IMAGES_PER_UPLOAD`` images to an article's gallery.

    Returns:
        Stored filenames of the new images.
    """
    files = [upload for upload in uploads if has_payload(upload)]
    if clean_text(title) is None or not files:
        raise ValidationError("No images uploaded")
    if len(files) > MAX_IMAGES_PER_UPLOAD:
        raise ValidationError(f"At most {MAX_IMAGES_PER_UPLOAD} images can be uploaded at once")

    article = _get_article(title)
    now = datetime.now(UTC)
    created = create_many_with_attachments(
        images,
        ARTICLE_IMAGE_CATEGORY,
        files,
        lambda filename: ArticleImage(article_id=article.id, filename=filename, date=now),
    )
    return [image.filename for image in created]


def list_article_image_filenames(title: str) -> list[str]:
    """Return the stored filenames of an article's gallery, newest first."""
    article = _get_article(title)
    return [
        image.filename
        for image in images.find({"article_id": article.id}, order_by=["-date", "-id"])
    ]


def delete_article_image(title: str, filename: str) -> None:
    """Delete one gallery image identified by article title and filename.

    Raises:
        NotFoundError: If the article or the image does not exist.
    """
    article = _get_article(title)
    image = images.find_one({"article_id": article.id, "filename": filename})
    if image is None:
        raise NotFoundError("Image not found")
    discard_attachment(ARTICLE_IMAGE_CATEGORY, image.filename)
    images.delete_by_id(image.id)
