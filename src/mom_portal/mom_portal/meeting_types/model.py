from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import fmt_datetime


@dataclass(frozen=True)
class MeetingType:
    meeting_type_id: int
    meeting_type_name: str
    remarks: Optional[str] = None
    created: Optional[datetime] = None
    modified: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.meeting_type_id,
            "meetingTypeName": self.meeting_type_name,
            "remarks": self.remarks,
            "created": fmt_datetime(self.created),
            "modified": fmt_datetime(self.modified),
        }
