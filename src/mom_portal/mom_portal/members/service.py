from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Sequence

from ..app_logger import get_logger
from ..common.validators import optional_text, require_bool, require_int
from ..core.constants import REMARKS_MAX
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..meetings.repository import MeetingRepository
from ..staff.repository import StaffRepository
from .model import AttendanceSummary, MeetingMember
from .repository import MemberRepository

log = get_logger("members")


class MemberService:
    """Use cases: meeting membership and attendance."""

    def __init__(self, members: MemberRepository, meetings: MeetingRepository, staff: StaffRepository):
        self._members = members
        self._meetings = meetings
        self._staff = staff

    def _require_meeting(self, meeting_id: int) -> int:
        meeting = self._meetings.get_by_id(int(meeting_id))
        if not meeting:
            raise NotFoundError("Meeting not found")
        return meeting.meeting_id

    def list_members(self, meeting_id: int) -> Sequence[MeetingMember]:
        return self._members.list_by_meeting(self._require_meeting(meeting_id))

    def get_member(self, member_id: int) -> MeetingMember:
        member = self._members.get_by_id(int(member_id))
        if not member:
            raise NotFoundError("Meeting member not found")
        return member

    def add_member(self, meeting_id: int, data: Mapping[str, Any]) -> MeetingMember:
        mid = self._require_meeting(meeting_id)
        if data.get("staffId") in (None, ""):
            raise ValidationError("Staff ID is required")
        staff_id = require_int(data.get("staffId"), "Staff ID")
        if not self._staff.get_by_id(staff_id):
            raise NotFoundError("Staff member not found")
        if self._members.get_by_pair(mid, staff_id):
            raise ConflictError("Staff member is already added to this meeting")

        is_present = require_bool(data["isPresent"], "isPresent") if "isPresent" in data else False
        member_id = self._members.create(
            meeting_id=mid,
            staff_id=staff_id,
            is_present=is_present,
            remarks=optional_text(data.get("remarks"), "Remarks", REMARKS_MAX),
        )
        log.info("Staff %s added to meeting %s", staff_id, mid)
        return self.get_member(member_id)

    def add_members_bulk(self, meeting_id: int, staff_ids: Any) -> tuple[int, Sequence[MeetingMember]]:
        """Add every staff id not yet on the meeting; returns (added count, the inserted members)."""
        if not isinstance(staff_ids, list) or not staff_ids:
            raise ValidationError("Please provide an array of staff IDs")
        requested = list(dict.fromkeys(require_int(s, "Staff ID") for s in staff_ids))
        mid = self._require_meeting(meeting_id)

        already = self._members.staff_ids_for_meeting(mid)
        remaining = [sid for sid in requested if sid not in already]
        if not remaining:
            raise ConflictError("All staff members are already added to this meeting")

        found = self._staff.existing_ids(remaining)
        if len(found) != len(remaining):
            raise NotFoundError("One or more staff members not found")

        added = self._members.create_many(meeting_id=mid, staff_ids=remaining)
        log.info("%d member(s) added to meeting %s", added, mid)
        inserted = set(remaining)
        return added, [m for m in self._members.list_by_meeting(mid) if m.staff_id in inserted]

    def update_member(self, member_id: int, data: Mapping[str, Any]) -> MeetingMember:
        current = self.get_member(member_id)
        changes: dict[str, Any] = {}
        if "isPresent" in data:
            changes["is_present"] = require_bool(data["isPresent"], "isPresent")
        if "remarks" in data:
            changes["remarks"] = optional_text(data["remarks"], "Remarks", REMARKS_MAX)
        if changes:
            self._members.update(replace(current, **changes))
        return self.get_member(current.member_id)

    def mark_attendance(self, member_id: int, is_present: Any) -> MeetingMember:
        if is_present is None:
            raise ValidationError("isPresent is required")
        flag = require_bool(is_present, "isPresent")
        current = self.get_member(member_id)
        if current.is_present != flag:
            self._members.update(replace(current, is_present=flag))
        return self.get_member(current.member_id)

    def remove_member(self, member_id: int) -> None:
        if not self._members.delete_by_id(int(member_id)):
            raise NotFoundError("Meeting member not found")

    def attendance(self, meeting_id: int) -> AttendanceSummary:
        return self._members.attendance(self._require_meeting(meeting_id))
