from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, Sequence

from ..documents.model import MeetingDocument
from ..meetings.model import Meeting
from ..staff.model import Staff


class DashboardRepository(Protocol):
    """Read-only aggregate queries. Rows are plain dicts with snake_case keys."""

    def totals(self) -> dict:
        """Keys: meetings, staff, meeting_types, documents."""
        raise NotImplementedError

    def count_active_meetings_since(self, start: date) -> int:
        """Non-cancelled meetings dated on or after ``start``."""
        raise NotImplementedError

    def count_upcoming(self, now: datetime) -> int:
        raise NotImplementedError

    def status_counts(self) -> Sequence[dict]:
        """Keys: status, count."""
        raise NotImplementedError

    def member_totals(self) -> dict:
        """Keys: total, present."""
        raise NotImplementedError

    def staff_activity(self, limit: int) -> Sequence[dict]:
        """Keys: staff_id, staff_name, email_address, meeting_count, attendance_count; busiest first."""
        raise NotImplementedError

    def meeting_type_usage(self) -> Sequence[dict]:
        """Keys: meeting_type_id, meeting_type_name, count; most used first."""
        raise NotImplementedError

    def recent_meetings(self, limit: int, *, by_modified: bool = False) -> Sequence[Meeting]:
        """Non-cancelled meetings, newest first by date (or by modification time)."""
        raise NotImplementedError

    def meeting_trends(self, start: date, end: date) -> Sequence[dict]:
        """Keys: day, count, completed, cancelled; ascending by day."""
        raise NotImplementedError

    def attendance_by_meeting(self, start: date, end: date) -> Sequence[dict]:
        """Keys: meeting_id, meeting_title, meeting_date, total_members, present_members; newest first."""
        raise NotImplementedError

    def staff_performance(self, start: date, end: date) -> Sequence[dict]:
        """Keys: staff_id, staff_name, email_address, mobile_no, total, attended."""
        raise NotImplementedError

    def meeting_type_breakdown(self) -> Sequence[dict]:
        """Keys: meeting_type_id, meeting_type_name, total, completed, cancelled, scheduled."""
        raise NotImplementedError

    def recent_staff(self, limit: int) -> Sequence[Staff]:
        raise NotImplementedError

    def recent_documents(self, limit: int) -> Sequence[tuple[MeetingDocument, str]]:
        """(document, meeting title) pairs, newest first."""
        raise NotImplementedError
