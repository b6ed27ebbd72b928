"""Tests for the album service."""

from __future__ import annotations

from pathlib import Path

import pytest

from portfolio_cms.config import Settings
from portfolio_cms.errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from portfolio_cms.services import albums as album_service
from portfolio_cms.services.albums import (
    add_album_images,
    create_album,
    delete_album,
    delete_album_image,
    list_album_images,
    list_albums,
)
from portfolio_cms.storage.attachments import IncomingFile

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"album"


def _png(name: str = "photo.png") -> IncomingFile:
    return IncomingFile(filename=name, data=PNG_BYTES, content_type="image/png")


def _album_dir(settings: Settings) -> Path:
    return settings.upload_root / "albums"


def test_create_album_stores_thumbnail(cms_env: Settings) -> None:
    album = create_album("  Trips  ", _png("cover.png"))

    assert album["name"] == "Trips"
    assert album["image_count"] == 0
    assert album["thumbnail"].endswith("-cover.png")
    assert (_album_dir(cms_env) / album["thumbnail"]).read_bytes() == PNG_BYTES


@pytest.mark.parametrize(
    ("name", "thumbnail"),
    [(None, _png()), ("   ", _png()), ("Trips", None), ("Trips", IncomingFile("", b""))],
)
def test_create_album_requires_name_and_thumbnail(
    cms_env: Settings, name: str | None, thumbnail: IncomingFile | None
) -> None:
    with pytest.raises(ValidationError, match="Missing data"):
        create_album(name, thumbnail)

    assert not _album_dir(cms_env).exists()


def test_duplicate_album_name_is_a_conflict(cms_env: Settings) -> None:
    create_album("Trips", _png())

    with pytest.raises(ConflictError):
        create_album("Trips", _png())

    assert len(list(_album_dir(cms_env).iterdir())) == 1


def test_failed_insert_removes_stored_thumbnail(
    cms_env: Settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    def fail(record: object) -> object:
        raise PersistenceError("database down")

    monkeypatch.setattr(album_service.albums, "insert", fail)

    with pytest.raises(PersistenceError):
        create_album("Trips", _png())

    assert list(_album_dir(cms_env).iterdir()) == []


def test_list_albums_counts_images(cms_env: Settings) -> None:
    create_album("Empty", _png())
    create_album("Trips", _png())
    add_album_images("Trips", [_png("a.png"), _png("b.png")])

    listed = {album["name"]: album["image_count"] for album in list_albums()}

    assert listed == {"Empty": 0, "Trips": 2}
    assert [album["name"] for album in list_albums()] == ["Trips", "Empty"]


def test_add_images_to_unknown_album(cms_env: Settings) -> None:
    with pytest.raises(NotFoundError, match="Album not found"):
        add_album_images("Nowhere", [_png()])

    assert not _album_dir(cms_env).exists()


def test_add_images_requires_files(cms_env: Settings) -> None:
    create_album("Trips", _png())

    with pytest.raises(ValidationError):
        add_album_images("Trips", [])


def test_add_images_enforces_batch_limit(cms_env: Settings) -> None:
    create_album("Trips", _png())
    batch = [_png(f"{index}.png") for index in range(album_service.MAX_IMAGES_PER_UPLOAD + 1)]

    with pytest.raises(ValidationError, match="At most 10"):
        add_album_images("Trips", batch)


def test_list_album_images(cms_env: Settings) -> None:
    create_album("Trips", _png())
    added = add_album_images("Trips", [_png("a.png")])

    listed = list_album_images("Trips")

    assert [image["filename"] for image in listed] == [added[0]["filename"]]
    assert listed[0]["album"] == "Trips"


def test_delete_album_cascades_to_images_and_files(cms_env: Settings) -> None:
    create_album("Trips", _png())
    add_album_images("Trips", [_png("a.png"), _png("b.png"), _png("c.png")])
    create_album("Pets", _png())
    add_album_images("Pets", [_png("d.png")])

    removed = delete_album("Trips")

    assert removed == 3
    assert [album["name"] for album in list_albums()] == ["Pets"]
    # Pets keeps its thumbnail and its single image
    assert len(list(_album_dir(cms_env).iterdir())) == 2
    with pytest.raises(NotFoundError):
        list_album_images("Trips")


def test_delete_missing_album(cms_env: Settings) -> None:
    with pytest.raises(NotFoundError):
        delete_album("Nowhere")


def test_delete_album_image(cms_env: Settings) -> None:
    create_album("Trips", _png())
    image = add_album_images("Trips", [_png("a.png")])[0]

    delete_album_image(image["id"])

    assert list_album_images("Trips") == []
    assert not (_album_dir(cms_env) / image["filename"]).exists()
    with pytest.raises(NotFoundError, match="Image not found"):
        delete_album_image(image["id"])


def test_delete_tolerates_missing_file(cms_env: Settings) -> None:
    create_album("Trips", _png())
    image = add_album_images("Trips", [_png("a.png")])[0]
    (_album_dir(cms_env) / image["filename"]).unlink()

    delete_album_image(image["id"])

    assert list_album_images("Trips") == []
