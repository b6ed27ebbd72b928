"""Error taxonomy shared by the storage, repository and service layers."""

from __future__ import annotations


class CMSError(Exception):
    """Base class for all errors raised by the content services."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CMSError):
    """Raised when a required field or file is missing or invalid."""


class ConflictError(ValidationError):
    """Raised when a record with the same unique name or title already exists."""


class NotFoundError(CMSError):
    """Raised when no record matches the requested id or key."""


class StorageError(CMSError):
    """Raised when an attachment cannot be written, or is rejected by a file filter."""

    def __init__(self, message: str, *, rejected: bool = False) -> None:
        super().__init__(message)
        self.rejected = rejected


class PersistenceError(CMSError):
    """Raised when the record store fails. The message is safe to show callers."""
