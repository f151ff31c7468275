from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..app_logger import get_logger
from ..common.validators import optional_text, required_text
from ..core.constants import MEETING_TYPE_NAME_MAX, REMARKS_MAX
from ..core.exceptions import ConflictError, NotFoundError
from .model import MeetingType
from .repository import MeetingTypeRepository

log = get_logger("meeting_types")


class MeetingTypeService:
    def __init__(self, meeting_types: MeetingTypeRepository):
        self._types = meeting_types

    def list_types(self, *, search: Optional[str] = None) -> Sequence[MeetingType]:
        return self._types.list_all(search=(search or "").strip() or None)

    def get_type(self, meeting_type_id: int) -> MeetingType:
        mt = self._types.get_by_id(int(meeting_type_id))
        if not mt:
            raise NotFoundError("Meeting type not found")
        return mt

    def _ensure_name_free(self, name: str, *, exclude_id: Optional[int] = None) -> None:
        existing = self._types.get_by_name(name)
        if existing and existing.meeting_type_id != exclude_id:
            raise ConflictError("Meeting type with this name already exists")

    def create_type(self, data: Mapping[str, Any]) -> MeetingType:
        name = required_text(data.get("meetingTypeName"), "Meeting type name", MEETING_TYPE_NAME_MAX)
        self._ensure_name_free(name)
        type_id = self._types.create(
            meeting_type_name=name,
            remarks=optional_text(data.get("remarks"), "Remarks", REMARKS_MAX),
        )
        log.info("Meeting type %s created: %s", type_id, name)
        return self.get_type(type_id)

    def update_type(self, meeting_type_id: int, data: Mapping[str, Any]) -> MeetingType:
        current = self.get_type(meeting_type_id)
        changes: dict[str, Any] = {}
        if "meetingTypeName" in data:
            name = required_text(data["meetingTypeName"], "Meeting type name", MEETING_TYPE_NAME_MAX)
            self._ensure_name_free(name, exclude_id=current.meeting_type_id)
            changes["meeting_type_name"] = name
        if "remarks" in data:
            changes["remarks"] = optional_text(data["remarks"], "Remarks", REMARKS_MAX)
        if changes:
            self._types.update(replace(current, **changes))
        return self.get_type(current.meeting_type_id)

    def delete_type(self, meeting_type_id: int) -> None:
        current = self.get_type(meeting_type_id)
        in_use = self._types.count_meetings(current.meeting_type_id)
        if in_use:
            raise ConflictError(f"Cannot delete meeting type: {in_use} meeting(s) still use it")
        if not self._types.delete_by_id(current.meeting_type_id):
            raise NotFoundError("Meeting type not found")
        log.info("Meeting type %s deleted", current.meeting_type_id)
