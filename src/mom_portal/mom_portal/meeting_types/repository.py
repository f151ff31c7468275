from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import MeetingType


class MeetingTypeRepository(Protocol):
    def get_by_id(self, meeting_type_id: int) -> Optional[MeetingType]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[MeetingType]:
        raise NotImplementedError

    def list_all(self, *, search: Optional[str] = None) -> Sequence[MeetingType]:
        raise NotImplementedError

    def create(self, *, meeting_type_name: str, remarks: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, meeting_type: MeetingType) -> bool:
        raise NotImplementedError

    def delete_by_id(self, meeting_type_id: int) -> bool:
        raise NotImplementedError

    def count_meetings(self, meeting_type_id: int) -> int:
        raise NotImplementedError
