"""Album service: albums, their images and the files behind them.

Albums are addressed by their unique name. Album thumbnails and album images
share the ``albums`` attachment category.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from portfolio_cms.data.crud.repository import Repository
from portfolio_cms.data.models import Album, AlbumImage
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
    "ALBUM_CATEGORY",
    "MAX_IMAGES_PER_UPLOAD",
    "add_album_images",
    "create_album",
    "delete_album",
    "delete_album_image",
    "list_album_images",
    "list_albums",
]

ALBUM_CATEGORY = "albums"
MAX_IMAGES_PER_UPLOAD = 10

albums = Repository(Album, "Album")
images = Repository(AlbumImage, "Image")


def _album_to_dict(album: Album, image_count: int) -> dict:
    return {
        "id": album.id,
        "name": album.name,
        "thumbnail": album.thumbnail,
        "date": album.date,
        "image_count": image_count,
    }


def _image_to_dict(image: AlbumImage, album_name: str) -> dict:
    return {
        "id": image.id,
        "filename": image.filename,
        "album": album_name,
        "date": image.date,
    }


def _get_album(name: str | None) -> Album:
    cleaned = clean_text(name)
    album = albums.find_one({"name": cleaned}) if cleaned else None
    if album is None:
        raise NotFoundError("Album not found")
    return album


def create_album(name: str | None, thumbnail: IncomingFile | None) -> dict:
    """Create an album from a name and a thumbnail upload.

    Raises:
        ValidationError: If the name or thumbnail is missing.
        ConflictError: If an album with this name already exists.
        StorageError: If the thumbnail cannot be stored.
    """
    cleaned = clean_text(name)
    if cleaned is None or thumbnail is None or not has_payload(thumbnail):
        raise ValidationError("Missing data")
    if albums.find_one({"name": cleaned}) is not None:
        raise ConflictError(f"Album '{cleaned}' already exists")

    album = create_with_attachment(
        albums,
        ALBUM_CATEGORY,
        thumbnail,
        lambda filename: Album(name=cleaned, thumbnail=filename, date=datetime.now(UTC)),
    )
    logger.info("Created album %r (id=%d)", album.name, album.id)
    return _album_to_dict(album, 0)


def list_albums() -> list[dict]:
    """List albums newest first, each with the number of images it holds."""
    counts = images.count_grouped("album_id")
    return [
        _album_to_dict(album, counts.get(album.id, 0))
        for album in albums.find(order_by=["-date", "-id"])
    ]


def delete_album(name: str) -> int:
    """Delete an album, its thumbnail, and every image in it.

    Returns:
        Number of album images removed.

    Raises:
        NotFoundError: If no album has this name.
    """
    album = _get_album(name)
    for image in images.find({"album_id": album.id}):
        discard_attachment(ALBUM_CATEGORY, image.filename)
    removed = images.delete_many({"album_id": album.id})
    discard_attachment(ALBUM_CATEGORY, album.thumbnail)
    albums.delete_by_id(album.id)
    logger.info("Deleted album %r with %d images", album.name, removed)
    return removed


def add_album_images(name: str | None, uploads: Sequence[IncomingFile]) -> list[dict]:
    """Attach up to ``MAX_IMAGES_PER_UPLOAD`` images to an existing album.

    Raises:
        ValidationError: If the album name or the images are missing, or too
            many images are sent at once.
        NotFoundError: If the album does not exist.
    """
    files = [upload for upload in uploads if has_payload(upload)]
    if clean_text(name) is None or not files:
        raise ValidationError("Missing data")
    if len(files) > MAX_IMAGES_PER_UPLOAD:
        raise ValidationError(f"At most {MAX_IMAGES_PER_UPLOAD} images can be uploaded at once")

    album = _get_album(name)
    now = datetime.now(UTC)
    created = create_many_with_attachments(
        images,
        ALBUM_CATEGORY,
        files,
        lambda filename: AlbumImage(album_id=album.id, filename=filename, date=now),
    )
    logger.info("Added %d images to album %r", len(created), album.name)
    return [_image_to_dict(image, album.name) for image in created]


def list_album_images(name: str) -> list[dict]:
    """List the images of an album, newest first."""
    album = _get_album(name)
    return [
        _image_to_dict(image, album.name)
        for image in images.find({"album_id": album.id}, order_by=["-date", "-id"])
    ]


def delete_album_image(image_id: int) -> None:
    """Delete a single album image and its file.

    Raises:
        NotFoundError: If no image has this id.
    """
    image = images.find_by_id(image_id)
    discard_attachment(ALBUM_CATEGORY, image.filename)
    if not images.delete_by_id(image.id):
        raise NotFoundError("Image not found")
