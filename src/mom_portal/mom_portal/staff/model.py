from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import fmt_datetime
from ..core.enums import Role


@dataclass(frozen=True)
class Staff:
    """A person who can be invited to meetings and upload documents."""

    staff_id: int
    staff_name: str
    mobile_no: Optional[str] = None
    email_address: Optional[str] = None
    role: Role = Role.STAFF
    department: Optional[str] = None
    remarks: Optional[str] = None
    created: Optional[datetime] = None
    modified: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.staff_id,
            "staffName": self.staff_name,
            "mobileNo": self.mobile_no,
            "emailAddress": self.email_address,
            "role": self.role.value,
            "department": self.department,
            "remarks": self.remarks,
            "created": fmt_datetime(self.created),
            "modified": fmt_datetime(self.modified),
        }

    def summary(self) -> dict:
        return {
            "id": self.staff_id,
            "staffName": self.staff_name,
            "emailAddress": self.email_address,
            "mobileNo": self.mobile_no,
        }
