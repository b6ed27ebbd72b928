"""Attachment file storage."""

from portfolio_cms.storage.attachments import (
    AttachmentStore,
    IncomingFile,
    get_attachment_store,
    reset_attachment_store,
)

__all__ = ["AttachmentStore", "IncomingFile", "get_attachment_store", "reset_attachment_store"]
