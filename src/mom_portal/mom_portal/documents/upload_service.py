from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from werkzeug.datastructures import FileStorage

from ..app_logger import get_logger
from ..core.exceptions import NotFoundError
from .model import MeetingDocument
from .service import DocumentService
from .storage import LocalFileStorage, StoredFile

log = get_logger("uploads")


class UploadService:
    """Couples stored files with document records.

    A record write that fails after the file was stored removes that file again.
    """

    def __init__(self, documents: DocumentService, storage: LocalFileStorage):
        self._documents = documents
        self._storage = storage

    def _discard(self, stored: StoredFile) -> None:
        if self._storage.delete(stored.path):
            log.info("Removed orphaned upload %s", stored.path)

    def upload_new(self, file: Optional[FileStorage], form: Mapping[str, Any]) -> MeetingDocument:
        self._storage.validate(file)
        meeting_id = self._documents.require_meeting(form.get("meetingId"))

        stored = self._storage.save(file)
        try:
            return self._documents.add_document(
                meeting_id,
                {
                    "documentName": form.get("documentName") or stored.original_name,
                    "documentPath": stored.path,
                    "remarks": form.get("remarks"),
                    "fileSize": stored.size,
                    "fileType": stored.mime_type,
                    "uploadedBy": form.get("uploadedBy"),
                },
            )
        except Exception:
            self._discard(stored)
            raise

    def attach(self, document_id: int, file: Optional[FileStorage]) -> MeetingDocument:
        self._storage.validate(file)
        current = self._documents.get_document(document_id)

        stored = self._storage.save(file)
        try:
            updated = self._documents.update_document(
                current.document_id,
                {"documentPath": stored.path, "fileSize": stored.size, "fileType": stored.mime_type},
            )
        except Exception:
            self._discard(stored)
            raise

        if current.document_path and current.document_path != stored.path:
            self._storage.delete(current.document_path)
        return updated

    def download(self, document_id: int) -> tuple[MeetingDocument, Path]:
        doc = self._documents.get_document(document_id)
        path = self._storage.resolve(doc.document_path)
        if path is None:
            raise NotFoundError("File not found on server")
        return doc, path

    def delete(self, document_id: int) -> MeetingDocument:
        doc = self._documents.delete_document(document_id)
        self._storage.delete(doc.document_path)
        return doc
