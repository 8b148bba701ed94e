"""
Attachment naming and filesystem storage.

Generated names splice a millisecond timestamp between the original base
name and its extension: "deck.pdf" -> "deck1700000000000.pdf".
"""

import os
import threading
import time
from typing import Optional

from .base import AttachmentStorage
from ..utils.logger import logger
from ..utils.sanitize import sanitize_file_name


class AttachmentNamer:
    """
    Issues timestamped file names, strictly increasing within the process
    so two saves of the same original name never collide.
    """

    def __init__(self, clock=None):
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._last = 0
        self._lock = threading.Lock()

    def _next_stamp(self) -> int:
        with self._lock:
            stamp = max(self._clock(), self._last + 1)
            self._last = stamp
            return stamp

    def generate(self, original: str) -> str:
        original = sanitize_file_name(original) or "attachment"
        stamp = self._next_stamp()

        base, dot, extension = original.rpartition(".")
        if not dot:
            return f"{original}{stamp}"
        # ".pdf" has an empty base and still keeps its extension
        return f"{base}{stamp}.{extension}"


_default_namer = AttachmentNamer()


def generate_file_name(original: str) -> str:
    """Generate a unique name for `original` using the process-wide namer."""
    return _default_namer.generate(original)


class FileSystemStorage(AttachmentStorage):
    """Writes attachments into a single directory."""

    def __init__(self, directory: Optional[str] = None):
        self.directory = directory or "./attachmentsDownloaded"

    def save(self, data: bytes, file_name: str) -> None:
        if os.path.basename(file_name) != file_name or file_name in ("", ".", ".."):
            raise ValueError(f"Refusing to write outside storage directory: {file_name!r}")

        os.makedirs(self.directory, exist_ok=True)
        path = os.path.join(self.directory, file_name)
        with open(path, "wb") as f:
            f.write(data)
        logger.info(f"Attachment saved to {path}")
