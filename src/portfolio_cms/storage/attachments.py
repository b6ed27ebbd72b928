"""On-disk storage for uploaded attachments.

Files live in one flat directory per category under the upload root
(``<root>/<category>/<filename>``). Directories are created on first write.
Stored names start with a millisecond timestamp that never repeats within a
store instance, and a name that already exists on disk is never reused, so
two uploads never overwrite each other.
"""

from __future__ import annotations

import logging
import secrets
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from portfolio_cms.config import NAMING_RANDOM, CategoryConfig, get_settings
from portfolio_cms.errors import StorageError

logger = logging.getLogger(__name__)

_RANDOM_PREFIX = "image"
_MAX_NAME_ATTEMPTS = 16

EXTENSION_TO_MIME = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    ".pdf": "application/pdf",
}


@dataclass(frozen=True)
class IncomingFile:
    """An uploaded payload as received from the transport layer."""

    filename: str
    data: bytes
    content_type: str | None = None


def get_media_type(path: Path) -> str:
    """Return the MIME type to serve a stored file with."""
    return EXTENSION_TO_MIME.get(path.suffix.lower(), "application/octet-stream")


def _safe_basename(original_name: str) -> str:
    name = PurePosixPath(original_name.replace("\\", "/")).name.strip()
    if name in {"", ".", ".."}:
        return "upload"
    return name


class AttachmentStore:
    """Category-namespaced file store.

    Args:
        root: Upload root directory.
        categories: Category name to storage rules.
    """

    def __init__(self, root: Path, categories: Mapping[str, CategoryConfig]) -> None:
        self.root = root
        self.categories = categories
        self._last_stamp = 0
        self._lock = threading.Lock()

    def _config(self, category: str) -> CategoryConfig:
        config = self.categories.get(category)
        if config is None:
            raise StorageError(f"Unknown attachment category: {category}")
        return config

    def directory(self, category: str) -> Path:
        """Return the directory holding files of ``category``."""
        return self.root / self._config(category).directory

    def check_allowed(self, category: str, original_name: str) -> None:
        """Apply the category's extension allow-list, if it has one.

        Raises:
            StorageError: With ``rejected=True`` when the extension is not allowed.
        """
        allowed = self._config(category).allowed_extensions
        if allowed is None:
            return
        suffix = PurePosixPath(_safe_basename(original_name)).suffix.lower()
        if suffix not in allowed:
            names = ", ".join(ext.lstrip(".") for ext in allowed)
            raise StorageError(f"Only image files ({names}) are allowed!", rejected=True)

    def _next_stamp(self) -> int:
        with self._lock:
            stamp = time.time_ns() // 1_000_000
            if stamp <= self._last_stamp:
                stamp = self._last_stamp + 1
            self._last_stamp = stamp
            return stamp

    def _make_name(self, config: CategoryConfig, original_name: str) -> str:
        basename = _safe_basename(original_name)
        stamp = self._next_stamp()
        if config.naming == NAMING_RANDOM:
            suffix = PurePosixPath(basename).suffix
            return f"{_RANDOM_PREFIX}-{stamp}-{secrets.randbelow(10**9)}{suffix}"
        return f"{stamp}-{basename}"

    def store(self, category: str, data: bytes, original_name: str) -> str:
        """Write ``data`` into ``category`` and return the stored filename.

        Raises:
            StorageError: If the file is rejected by the category's filter
                (``rejected=True``) or cannot be written.
        """
        config = self._config(category)
        self.check_allowed(category, original_name)
        directory = self.root / config.directory
        try:
            directory.mkdir(parents=True, exist_ok=True)
            for _ in range(_MAX_NAME_ATTEMPTS):
                filename = self._make_name(config, original_name)
                try:
                    with (directory / filename).open("xb") as handle:
                        handle.write(data)
                except FileExistsError:
                    continue
                logger.debug("Stored %s/%s (%d bytes)", category, filename, len(data))
                return filename
        except OSError as exc:
            logger.exception("Failed to store attachment in %s", category)
            raise StorageError("Failed to store file") from exc
        raise StorageError("Failed to allocate a unique filename")

    def _resolve(self, category: str, filename: str) -> Path | None:
        if category not in self.categories:
            return None
        if not filename or filename in {".", ".."} or _safe_basename(filename) != filename:
            return None
        return self.directory(category) / filename

    def delete(self, category: str, filename: str) -> bool:
        """Remove a stored file. A missing file is not an error.

        Returns:
            True if a file was removed, False if there was nothing to remove.
        """
        path = self._resolve(category, filename)
        if path is None:
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            logger.info("Attachment already absent: %s/%s", category, filename)
            return False
        except OSError as exc:
            logger.exception("Failed to delete attachment %s/%s", category, filename)
            raise StorageError("Failed to delete file") from exc
        return True

    def path_for(self, category: str, filename: str) -> Path | None:
        """Return the path of a stored file, or None if it does not exist."""
        path = self._resolve(category, filename)
        if path is None or not path.is_file():
            return None
        return path

    def list_files(self, category: str) -> dict[str, float]:
        """Return ``{filename: mtime}`` for every file stored in ``category``."""
        directory = self.directory(category)
        if not directory.is_dir():
            return {}
        return {
            entry.name: entry.stat().st_mtime for entry in directory.iterdir() if entry.is_file()
        }


_store: AttachmentStore | None = None


def get_attachment_store() -> AttachmentStore:
    """Return the process-wide store built from the current settings."""
    global _store
    if _store is None:
        settings = get_settings()
        _store = AttachmentStore(settings.upload_root, settings.categories)
    return _store


def reset_attachment_store() -> None:
    """Forget the cached store so it is rebuilt from fresh settings."""
    global _store
    _store = None
