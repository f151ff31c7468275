from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import AttendanceSummary, MeetingMember


class MemberRepository(Protocol):
    def get_by_id(self, member_id: int) -> Optional[MeetingMember]:
        raise NotImplementedError

    def get_by_pair(self, meeting_id: int, staff_id: int) -> Optional[MeetingMember]:
        raise NotImplementedError

    def list_by_meeting(self, meeting_id: int) -> Sequence[MeetingMember]:
        raise NotImplementedError

    def staff_ids_for_meeting(self, meeting_id: int) -> set[int]:
        raise NotImplementedError

    def create(self, *, meeting_id: int, staff_id: int, is_present: bool, remarks: Optional[str]) -> int:
        raise NotImplementedError

    def create_many(self, *, meeting_id: int, staff_ids: Iterable[int]) -> int:
        """Insert all pairs as absent in one transaction; all or nothing."""
        raise NotImplementedError

    def update(self, member: MeetingMember) -> bool:
        raise NotImplementedError

    def delete_by_id(self, member_id: int) -> bool:
        raise NotImplementedError

    def attendance(self, meeting_id: int) -> AttendanceSummary:
        raise NotImplementedError
