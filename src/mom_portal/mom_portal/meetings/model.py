from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import fmt_date, fmt_datetime, fmt_time
from ..core.enums import MeetingStatus


@dataclass(frozen=True)
class Meeting:
    """Aggregate root: one scheduled meeting and its lifecycle state.

    Invariant: ``cancellation_datetime`` is set if and only if the status is Cancelled.
    Members and documents are loaded by explicit queries, never stored here.
    """

    meeting_id: int
    meeting_date: date
    meeting_time: time
    meeting_type_id: int
    meeting_title: str
    meeting_description: Optional[str] = None
    document_path: Optional[str] = None
    remarks: Optional[str] = None
    status: MeetingStatus = MeetingStatus.SCHEDULED
    cancellation_datetime: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    meeting_type_name: Optional[str] = None

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.meeting_date, self.meeting_time)

    def to_dict(self) -> dict:
        return {
            "id": self.meeting_id,
            "meetingDate": fmt_date(self.meeting_date),
            "meetingTime": fmt_time(self.meeting_time),
            "meetingTypeId": self.meeting_type_id,
            "meetingType": {"id": self.meeting_type_id, "meetingTypeName": self.meeting_type_name},
            "meetingTitle": self.meeting_title,
            "meetingDescription": self.meeting_description,
            "documentPath": self.document_path,
            "remarks": self.remarks,
            "status": self.status.value,
            "cancellationDateTime": fmt_datetime(self.cancellation_datetime),
            "cancellationReason": self.cancellation_reason,
            "created": fmt_datetime(self.created),
            "modified": fmt_datetime(self.modified),
        }


@dataclass(frozen=True)
class MeetingFilter:
    search: Optional[str] = None
    status: Optional[MeetingStatus] = None
    meeting_type_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class MeetingStats:
    total: int = 0
    scheduled: int = 0
    ongoing: int = 0
    completed: int = 0
    cancelled: int = 0
    upcoming: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "scheduled": self.scheduled,
            "ongoing": self.ongoing,
            "completed": self.completed,
            "cancelled": self.cancelled,
            "upcoming": self.upcoming,
        }
