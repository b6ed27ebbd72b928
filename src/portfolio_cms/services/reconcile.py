"""Reconciliation sweep for attachment files that no record references.

Creates store the file before inserting the record, so a crash or a failed
compensating delete can leave a file with no owner. The sweep removes such
files once they are older than a minimum age, which keeps it clear of uploads
whose record is still being written.
"""

from __future__ import annotations

import logging
import time

from portfolio_cms.config import get_settings
from portfolio_cms.data.db import get_session
from portfolio_cms.data.models import (
    Album,
    AlbumImage,
    Article,
    ArticleImage,
    Blog,
    Book,
    Certificate,
    Resume,
)
from portfolio_cms.storage.attachments import get_attachment_store

logger = logging.getLogger(__name__)

# category -> columns holding filenames stored in that category
REFERENCES = {
    "albums": (Album.thumbnail, AlbumImage.filename),
    "articles": (Article.thumbnail,),
    "articleimages": (ArticleImage.filename,),
    "blogs": (Blog.image,),
    "resumes": (Resume.image,),
    "books": (Book.image,),
    "certificates": (Certificate.image,),
}


def referenced_filenames(category: str) -> set[str]:
    """Return every filename of ``category`` that some record points at."""
    names: set[str] = set()
    with get_session() as session:
        for column in REFERENCES.get(category, ()):
            names.update(value for (value,) in session.query(column) if value)
    return names


def sweep_orphaned_files(
    min_age: float | None = None, now: float | None = None
) -> dict[str, list[str]]:
    """Delete unreferenced attachment files older than ``min_age`` seconds.

    Args:
        min_age: Minimum file age in seconds (defaults to
            ``Settings.orphan_min_age``).
        now: Reference time as a POSIX timestamp (defaults to now).

    Returns:
        Mapping of category to the filenames removed from it.
    """
    settings = get_settings()
    store = get_attachment_store()
    min_age = settings.orphan_min_age if min_age is None else min_age
    now = time.time() if now is None else now

    removed: dict[str, list[str]] = {}
    for category in settings.categories:
        referenced = referenced_filenames(category)
        for filename, mtime in sorted(store.list_files(category).items()):
            if filename in referenced or now - mtime < min_age:
                continue
            if store.delete(category, filename):
                removed.setdefault(category, []).append(filename)

    total = sum(len(names) for names in removed.values())
    logger.info("Orphan sweep removed %d file(s)", total)
    return removed
