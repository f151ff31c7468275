from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import fmt_datetime


@dataclass(frozen=True)
class MeetingMember:
    """Attendance record: one staff member on one meeting."""

    member_id: int
    meeting_id: int
    staff_id: int
    is_present: bool = False
    remarks: Optional[str] = None
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    # joined from staff
    staff_name: Optional[str] = None
    email_address: Optional[str] = None
    mobile_no: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.member_id,
            "meetingId": self.meeting_id,
            "staffId": self.staff_id,
            "staff": {
                "id": self.staff_id,
                "staffName": self.staff_name,
                "emailAddress": self.email_address,
                "mobileNo": self.mobile_no,
            },
            "isPresent": self.is_present,
            "remarks": self.remarks,
            "created": fmt_datetime(self.created),
            "modified": fmt_datetime(self.modified),
        }


@dataclass(frozen=True)
class AttendanceSummary:
    total: int
    present: int

    @property
    def absent(self) -> int:
        return self.total - self.present

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return round(self.present / self.total * 100, 2)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "attendancePercentage": self.percentage,
        }
