"""Shared create/delete steps for records that own an attachment file.

Create is "store the file, then insert the record". If the insert fails the
stored file is removed again before the error propagates, so a failed create
leaves nothing behind in the common case. A crash between the two steps can
still orphan a file; ``services.reconcile`` sweeps those.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import TypeVar

from portfolio_cms.data.crud.repository import Repository
from portfolio_cms.data.db import Base
from portfolio_cms.errors import StorageError, ValidationError
from portfolio_cms.storage.attachments import IncomingFile, get_attachment_store

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def clean_text(value: str | None) -> str | None:
    """Strip ``value``; blank strings count as missing."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def require_fields(fields: Mapping[str, str | None], message: str) -> dict[str, str]:
    """Return the cleaned ``fields`` or raise ``ValidationError(message)`` if any is missing."""
    cleaned = {name: clean_text(value) for name, value in fields.items()}
    if any(value is None for value in cleaned.values()):
        raise ValidationError(message)
    return {name: value for name, value in cleaned.items() if value is not None}


def has_payload(upload: IncomingFile | None) -> bool:
    """Return True if an upload was actually provided."""
    return upload is not None and bool(upload.filename)


def discard_attachment(category: str, filename: str) -> bool:
    """Delete a stored file, logging instead of raising on failure."""
    try:
        return get_attachment_store().delete(category, filename)
    except StorageError:
        logger.warning(
            "Could not remove %s/%s; leaving it for the orphan sweep", category, filename
        )
        return False


def create_with_attachment(
    repository: Repository[ModelT],
    category: str,
    upload: IncomingFile,
    build: Callable[[str], ModelT],
) -> ModelT:
    """Store ``upload`` and insert the record ``build(filename)`` returns."""
    filename = get_attachment_store().store(category, upload.data, upload.filename)
    try:
        return repository.insert(build(filename))
    except Exception:
        discard_attachment(category, filename)
        raise


def create_many_with_attachments(
    repository: Repository[ModelT],
    category: str,
    uploads: Sequence[IncomingFile],
    build: Callable[[str], ModelT],
) -> list[ModelT]:
    """Store every upload, then insert all records in one transaction.

    Either every file and record is kept or, on the first failure, every file
    stored so far is removed again.
    """
    store = get_attachment_store()
    for upload in uploads:
        store.check_allowed(category, upload.filename)

    stored: list[str] = []
    try:
        for upload in uploads:
            stored.append(store.store(category, upload.data, upload.filename))
        return repository.insert_many(build(filename) for filename in stored)
    except Exception:
        for filename in stored:
            discard_attachment(category, filename)
        raise
