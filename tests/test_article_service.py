"""Tests for the article service."""

from __future__ import annotations

import pytest

from portfolio_cms.config import Settings
from portfolio_cms.errors import ConflictError, NotFoundError, ValidationError
from portfolio_cms.services.articles import (
    add_article_images,
    create_article,
    delete_article,
    delete_article_image,
    list_article_image_filenames,
    list_articles,
)
from portfolio_cms.storage.attachments import IncomingFile


def _image(name: str) -> IncomingFile:
    return IncomingFile(filename=name, data=b"img", content_type="image/png")


def test_create_and_list_articles(cms_env: Settings) -> None:
    created = create_article("Hello", _image("thumb.png"))

    assert created["title"] == "Hello"
    assert (cms_env.upload_root / "articles" / created["thumbnail"]).is_file()
    assert [article["title"] for article in list_articles()] == ["Hello"]


def test_create_article_requires_title_and_thumbnail(cms_env: Settings) -> None:
    with pytest.raises(ValidationError, match="Missing title or thumbnail"):
        create_article("", _image("thumb.png"))
    with pytest.raises(ValidationError, match="Missing title or thumbnail"):
        create_article("Hello", None)


def test_duplicate_title_is_a_conflict(cms_env: Settings) -> None:
    create_article("Hello", _image("thumb.png"))

    with pytest.raises(ConflictError):
        create_article("Hello", _image("other.png"))


def test_gallery_images_live_in_their_own_category(cms_env: Settings) -> None:
    create_article("Hello", _image("thumb.png"))

    stored = add_article_images("Hello", [_image("one.png"), _image("two.png")])

    assert len(stored) == 2
    gallery = cms_env.upload_root / "articleimages"
    assert sorted(path.name for path in gallery.iterdir()) == sorted(stored)
    assert sorted(list_article_image_filenames("Hello")) == sorted(stored)
    assert list_articles()[0]["image_count"] == 2


def test_add_images_without_files(cms_env: Settings) -> None:
    create_article("Hello", _image("thumb.png"))

    with pytest.raises(ValidationError, match="No images uploaded"):
        add_article_images("Hello", [IncomingFile("", b"")])


def test_add_images_to_unknown_article(cms_env: Settings) -> None:
    with pytest.raises(NotFoundError, match="Article not found"):
        add_article_images("Missing", [_image("one.png")])


def test_delete_article_image_by_filename(cms_env: Settings) -> None:
    create_article("Hello", _image("thumb.png"))
    first, second = add_article_images("Hello", [_image("one.png"), _image("two.png")])

    delete_article_image("Hello", first)

    assert list_article_image_filenames("Hello") == [second]
    assert not (cms_env.upload_root / "articleimages" / first).exists()
    with pytest.raises(NotFoundError, match="Image not found"):
        delete_article_image("Hello", first)


def test_delete_article_removes_gallery(cms_env: Settings) -> None:
    created = create_article("Hello", _image("thumb.png"))
    add_article_images("Hello", [_image("one.png"), _image("two.png")])

    assert delete_article("Hello") == 2

    assert list_articles() == []
    assert list((cms_env.upload_root / "articleimages").iterdir()) == []
    assert not (cms_env.upload_root / "articles" / created["thumbnail"]).exists()
