from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..app_logger import get_logger
from ..common.validators import optional_int, optional_sequence, optional_text, require_int, required_text
from ..core.constants import DOCUMENT_NAME_MAX, DOCUMENT_PATH_MAX, FILE_TYPE_MAX, REMARKS_MAX
from ..core.exceptions import NotFoundError, ValidationError
from ..meetings.repository import MeetingRepository
from ..staff.repository import StaffRepository
from .model import DocumentStats, MeetingDocument
from .repository import DocumentRepository

log = get_logger("documents")


class DocumentService:
    """Use cases: document metadata per meeting, ordered by sequence."""

    def __init__(self, documents: DocumentRepository, meetings: MeetingRepository, staff: StaffRepository):
        self._documents = documents
        self._meetings = meetings
        self._staff = staff

    def require_meeting(self, meeting_id: Any) -> int:
        mid = require_int(meeting_id, "Meeting ID")
        meeting = self._meetings.get_by_id(mid)
        if not meeting:
            raise NotFoundError("Meeting not found")
        return meeting.meeting_id

    def _optional_uploader(self, value: Any) -> Optional[int]:
        staff_id = optional_int(value, "uploadedBy")
        if staff_id is not None and not self._staff.get_by_id(staff_id):
            raise NotFoundError("Staff member not found")
        return staff_id

    @staticmethod
    def _file_size(value: Any) -> int:
        size = optional_int(value, "File size") or 0
        if size < 0:
            raise ValidationError("File size cannot be negative")
        return size

    def list_documents(self, meeting_id: int) -> Sequence[MeetingDocument]:
        return self._documents.list_by_meeting(self.require_meeting(meeting_id))

    def get_document(self, document_id: int) -> MeetingDocument:
        doc = self._documents.get_by_id(int(document_id))
        if not doc:
            raise NotFoundError("Document not found")
        return doc

    def add_document(self, meeting_id: int, data: Mapping[str, Any]) -> MeetingDocument:
        """Create a record; an omitted sequence is assigned as max + 1 for the meeting."""
        mid = self.require_meeting(meeting_id)
        name = required_text(data.get("documentName"), "Document name", DOCUMENT_NAME_MAX)
        sequence = optional_sequence(data.get("sequence"))
        fields = dict(
            meeting_id=mid,
            document_name=name,
            document_path=optional_text(data.get("documentPath"), "Document path", DOCUMENT_PATH_MAX),
            remarks=optional_text(data.get("remarks"), "Remarks", REMARKS_MAX),
            file_size=self._file_size(data.get("fileSize")),
            file_type=optional_text(data.get("fileType"), "File type", FILE_TYPE_MAX),
            uploaded_by=self._optional_uploader(data.get("uploadedBy")),
        )

        if sequence is None:
            document_id = self._documents.append(**fields)
        else:
            document_id = self._documents.insert(sequence=sequence, **fields)
        doc = self.get_document(document_id)
        log.info("Document %s added to meeting %s at sequence %s", document_id, mid, doc.sequence)
        return doc

    def update_document(self, document_id: int, data: Mapping[str, Any]) -> MeetingDocument:
        current = self.get_document(document_id)
        changes: dict[str, Any] = {}
        if "documentName" in data:
            changes["document_name"] = required_text(data["documentName"], "Document name", DOCUMENT_NAME_MAX)
        if "documentPath" in data:
            changes["document_path"] = optional_text(data["documentPath"], "Document path", DOCUMENT_PATH_MAX)
        if "sequence" in data:
            sequence = optional_sequence(data["sequence"])
            if sequence is None:
                raise ValidationError("Sequence must be a number")
            changes["sequence"] = sequence
        if "remarks" in data:
            changes["remarks"] = optional_text(data["remarks"], "Remarks", REMARKS_MAX)
        if "fileSize" in data:
            changes["file_size"] = self._file_size(data["fileSize"])
        if "fileType" in data:
            changes["file_type"] = optional_text(data["fileType"], "File type", FILE_TYPE_MAX)
        if "uploadedBy" in data:
            changes["uploaded_by"] = self._optional_uploader(data["uploadedBy"])
        if changes:
            self._documents.update(replace(current, **changes))
        return self.get_document(current.document_id)

    def reorder(self, meeting_id: int, document_order: Any) -> Sequence[MeetingDocument]:
        if not isinstance(document_order, list) or not document_order:
            raise ValidationError("Please provide document order array")

        order: list[tuple[int, Decimal]] = []
        for entry in document_order:
            if not isinstance(entry, Mapping):
                raise ValidationError("Each entry needs documentId and sequence")
            sequence = optional_sequence(entry.get("sequence"))
            if entry.get("documentId") in (None, "") or sequence is None:
                raise ValidationError("Each entry needs documentId and sequence")
            order.append((require_int(entry["documentId"], "documentId"), sequence))

        mid = self.require_meeting(meeting_id)
        matched = self._documents.reorder(mid, order)
        if matched < len(order):
            log.warning("Reorder for meeting %s ignored %d entr(ies) from other meetings", mid, len(order) - matched)
        return self._documents.list_by_meeting(mid)

    def stats(self, meeting_id: int) -> DocumentStats:
        return self._documents.stats(self.require_meeting(meeting_id))

    def delete_document(self, document_id: int) -> MeetingDocument:
        """Remove the record only; stored files are the caller's concern."""
        doc = self.get_document(document_id)
        if not self._documents.delete_by_id(doc.document_id):
            raise NotFoundError("Document not found")
        log.info("Document %s deleted from meeting %s", doc.document_id, doc.meeting_id)
        return doc
