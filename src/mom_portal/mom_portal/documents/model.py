from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from ..common.datetime_utils import fmt_datetime


def sequence_to_json(value: Decimal) -> Union[int, float]:
    return int(value) if value == value.to_integral_value() else float(value)


@dataclass(frozen=True)
class MeetingDocument:
    """Document metadata attached to a meeting, ordered by ``sequence``."""

    document_id: int
    meeting_id: int
    document_name: str
    document_path: Optional[str] = None
    sequence: Decimal = Decimal("0")
    remarks: Optional[str] = None
    file_size: int = 0
    file_type: Optional[str] = None
    uploaded_by: Optional[int] = None
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    # joined from staff
    uploader_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.document_id,
            "meetingId": self.meeting_id,
            "documentName": self.document_name,
            "documentPath": self.document_path,
            "sequence": sequence_to_json(self.sequence),
            "remarks": self.remarks,
            "fileSize": self.file_size,
            "fileType": self.file_type,
            "uploadedBy": (
                {"id": self.uploaded_by, "staffName": self.uploader_name} if self.uploaded_by is not None else None
            ),
            "created": fmt_datetime(self.created),
            "modified": fmt_datetime(self.modified),
        }


@dataclass(frozen=True)
class DocumentStats:
    total_documents: int = 0
    total_size: int = 0
    file_types: dict[str, int] = field(default_factory=dict)

    @property
    def total_size_mb(self) -> float:
        return round(self.total_size / (1024 * 1024), 2)

    def to_dict(self) -> dict:
        return {
            "totalDocuments": self.total_documents,
            "totalSize": self.total_size,
            "totalSizeMB": self.total_size_mb,
            "fileTypes": dict(self.file_types),
        }
