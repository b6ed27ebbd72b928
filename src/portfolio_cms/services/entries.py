"""Service for single-image content entries (blogs, resumes, books, certificates).

The four kinds differ only in their text fields, their attachment category and
their wording, so each is described by an ``EntryKind`` and handled by the
same three operations.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from portfolio_cms.data.crud.repository import Repository
from portfolio_cms.data.models import Blog, Book, Certificate, Resume
from portfolio_cms.errors import NotFoundError, ValidationError
from portfolio_cms.services.lifecycle import (
    create_with_attachment,
    discard_attachment,
    has_payload,
    require_fields,
)
from portfolio_cms.storage.attachments import IncomingFile

logger = logging.getLogger(__name__)

__all__ = [
    "BLOG",
    "BOOK",
    "CERTIFICATE",
    "ENTRY_KINDS",
    "RESUME",
    "EntryKind",
    "create_entry",
    "delete_entry",
    "list_entries",
]


@dataclass(frozen=True)
class EntryKind:
    """Describes one single-image entry type.

    Attributes:
        label: Display name used in messages (``"Blog"``).
        repository: Repository over the entry's model.
        category: Attachment category holding the images.
        fields: Required text fields, in form order.
        missing_message: Validation message when a field or the image is absent.
    """

    label: str
    repository: Repository
    category: str
    fields: tuple[str, ...]
    missing_message: str = "Missing data"


BLOG = EntryKind(
    label="Blog",
    repository=Repository(Blog, "Blog"),
    category="blogs",
    fields=("title", "description"),
    missing_message="Missing fields",
)
RESUME = EntryKind(
    label="Resume",
    repository=Repository(Resume, "Resume"),
    category="resumes",
    fields=("heading",),
)
BOOK = EntryKind(
    label="Book",
    repository=Repository(Book, "Book"),
    category="books",
    fields=("name", "link"),
)
CERTIFICATE = EntryKind(
    label="Certificate",
    repository=Repository(Certificate, "Certificate"),
    category="certificates",
    fields=("title",),
    missing_message="Missing title or image file.",
)

ENTRY_KINDS = {kind.category: kind for kind in (BLOG, RESUME, BOOK, CERTIFICATE)}


def _entry_to_dict(kind: EntryKind, entry: Blog | Resume | Book | Certificate) -> dict:
    data = {"id": entry.id}
    data.update({field: getattr(entry, field) for field in kind.fields})
    data["image"] = entry.image
    data["created_at"] = entry.created_at
    return data


def create_entry(
    kind: EntryKind, fields: Mapping[str, str | None], image: IncomingFile | None
) -> dict:
    """Validate, store the image, and insert a new entry.

    Args:
        kind: Entry type to create.
        fields: Submitted text fields; every name in ``kind.fields`` is required.
        image: The uploaded image.

    Returns:
        Dictionary with the created entry.

    Raises:
        ValidationError: If a field or the image is missing.
        StorageError: If the image is rejected (``rejected=True``) or cannot
            be written.
    """
    values = require_fields({name: fields.get(name) for name in kind.fields}, kind.missing_message)
    if image is None or not has_payload(image):
        raise ValidationError(kind.missing_message)

    model = kind.repository.model
    entry = create_with_attachment(
        kind.repository,
        kind.category,
        image,
        lambda filename: model(**values, image=filename),
    )
    logger.info("Created %s %d", kind.label.lower(), entry.id)
    return _entry_to_dict(kind, entry)


def list_entries(kind: EntryKind) -> list[dict]:
    """List entries of ``kind`` newest first."""
    return [
        _entry_to_dict(kind, entry)
        for entry in kind.repository.find(order_by=["-created_at", "-id"])
    ]


def delete_entry(kind: EntryKind, entry_id: int) -> None:
    """Delete an entry and its image.

    Raises:
        NotFoundError: If no entry of ``kind`` has this id.
    """
    entry = kind.repository.find_by_id(entry_id)
    discard_attachment(kind.category, entry.image)
    if not kind.repository.delete_by_id(entry.id):
        raise NotFoundError(f"{kind.label} not found")
    logger.info("Deleted %s %d", kind.label.lower(), entry_id)
