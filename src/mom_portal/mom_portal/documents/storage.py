from __future__ import annotations

import os
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..app_logger import get_logger
from ..core.exceptions import PayloadTooLargeError, ValidationError

log = get_logger("storage")


@dataclass(frozen=True)
class StoredFile:
    path: str
    size: int
    mime_type: str
    original_name: str


class LocalFileStorage:
    """Stores uploads as ``file-<epoch-ms>-<random>.<ext>`` under one directory."""

    def __init__(self, root: str | Path, *, max_bytes: int, allowed_types: Iterable[str]):
        self._root = Path(root).resolve()
        self._max_bytes = int(max_bytes)
        self._allowed = frozenset(allowed_types)

    @property
    def root(self) -> Path:
        return self._root

    def validate(self, file: Optional[FileStorage]) -> int:
        """Reject missing, oversized or disallowed files before anything is written."""
        if file is None or not file.filename:
            raise ValidationError("No file uploaded")
        if file.mimetype not in self._allowed:
            raise ValidationError("Invalid file type. Only documents and images are allowed.")

        stream = file.stream
        stream.seek(0, os.SEEK_END)
        size = stream.tell()
        stream.seek(0)
        if size > self._max_bytes:
            raise PayloadTooLargeError(f"File too large. Maximum size is {self._max_bytes // (1024 * 1024)}MB")
        return size

    def save(self, file: FileStorage) -> StoredFile:
        size = self.validate(file)
        ext = Path(secure_filename(file.filename or "")).suffix.lower()
        name = f"file-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"

        self._root.mkdir(parents=True, exist_ok=True)
        file.save(str(self._root / name))
        log.info("Stored upload %s (%d bytes, %s)", name, size, file.mimetype)
        return StoredFile(path=name, size=size, mime_type=file.mimetype, original_name=file.filename or name)

    def resolve(self, path: Optional[str]) -> Optional[Path]:
        """Absolute path for a stored name, or None when it is outside storage or missing."""
        if not path:
            return None
        candidate = (self._root / path).resolve()
        if candidate.parent != self._root or not candidate.is_file():
            return None
        return candidate

    def delete(self, path: Optional[str]) -> bool:
        target = self.resolve(path)
        if target is None:
            return False
        try:
            target.unlink()
        except OSError:
            log.warning("Could not remove stored file %s", target, exc_info=True)
            return False
        log.info("Removed stored file %s", target.name)
        return True
