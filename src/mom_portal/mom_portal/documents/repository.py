from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import DocumentStats, MeetingDocument


class DocumentRepository(Protocol):
    def get_by_id(self, document_id: int) -> Optional[MeetingDocument]:
        raise NotImplementedError

    def list_by_meeting(self, meeting_id: int) -> Sequence[MeetingDocument]:
        """Ascending by sequence."""
        raise NotImplementedError

    def insert(
        self,
        *,
        meeting_id: int,
        document_name: str,
        document_path: Optional[str],
        sequence: Decimal,
        remarks: Optional[str],
        file_size: int,
        file_type: Optional[str],
        uploaded_by: Optional[int],
    ) -> int:
        raise NotImplementedError

    def append(
        self,
        *,
        meeting_id: int,
        document_name: str,
        document_path: Optional[str],
        remarks: Optional[str],
        file_size: int,
        file_type: Optional[str],
        uploaded_by: Optional[int],
    ) -> int:
        """Insert with sequence = max existing sequence for the meeting + 1 (1 when empty).

        The max is read and the row written in one transaction, serialized per meeting.
        """
        raise NotImplementedError

    def update(self, document: MeetingDocument) -> bool:
        raise NotImplementedError

    def reorder(self, meeting_id: int, order: Sequence[tuple[int, Decimal]]) -> int:
        """Apply sequences only to documents of ``meeting_id``; returns matched rows."""
        raise NotImplementedError

    def delete_by_id(self, document_id: int) -> bool:
        raise NotImplementedError

    def stats(self, meeting_id: int) -> DocumentStats:
        raise NotImplementedError
