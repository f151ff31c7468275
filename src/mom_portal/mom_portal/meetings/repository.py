from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..common.pagination import Page, PageRequest
from ..core.enums import MeetingStatus
from .model import Meeting, MeetingFilter, MeetingStats


class MeetingRepository(Protocol):
    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        raise NotImplementedError

    def list_page(self, *, filters: MeetingFilter, page: PageRequest) -> Page[Meeting]:
        raise NotImplementedError

    def create(
        self,
        *,
        meeting_date: date,
        meeting_time: time,
        meeting_type_id: int,
        meeting_title: str,
        meeting_description: Optional[str],
        document_path: Optional[str],
        remarks: Optional[str],
    ) -> int:
        raise NotImplementedError

    def update(self, meeting: Meeting, *, expected_status: MeetingStatus) -> bool:
        """Write all fields only while the stored status still equals ``expected_status``."""
        raise NotImplementedError

    def cancel(self, meeting_id: int, *, at: datetime, reason: Optional[str]) -> bool:
        """Cancel only when currently Scheduled or Ongoing; False otherwise."""
        raise NotImplementedError

    def delete_cascade(self, meeting_id: int) -> bool:
        """Delete members, documents and the meeting in one transaction."""
        raise NotImplementedError

    def stats(self, *, now: datetime) -> MeetingStats:
        raise NotImplementedError

    def list_upcoming(self, *, now: datetime, limit: int) -> Sequence[Meeting]:
        raise NotImplementedError
