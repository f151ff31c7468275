from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Mapping, Optional, Sequence

from ..app_logger import get_logger
from ..common.datetime_utils import now_local, optional_date, to_date, to_time
from ..common.pagination import Page, PageRequest
from ..common.validators import optional_int, optional_text, require_int, required_text
from ..core.constants import (
    CANCELLATION_REASON_MAX,
    DEFAULT_UPCOMING_LIMIT,
    DOCUMENT_PATH_MAX,
    MAX_PAGE_SIZE,
    MEETING_DESCRIPTION_MAX,
    MEETING_TITLE_MAX,
    REMARKS_MAX,
)
from ..core.enums import MeetingStatus
from ..core.exceptions import InvalidStateError, NotFoundError, ValidationError
from ..documents.repository import DocumentRepository
from ..meeting_types.repository import MeetingTypeRepository
from ..members.repository import MemberRepository
from .model import Meeting, MeetingFilter, MeetingStats
from .repository import MeetingRepository

log = get_logger("meetings")

# Status changes allowed through a generic update; cancelling has its own use case.
ALLOWED_TRANSITIONS: dict[MeetingStatus, frozenset] = {
    MeetingStatus.SCHEDULED: frozenset({MeetingStatus.ONGOING, MeetingStatus.COMPLETED}),
    MeetingStatus.ONGOING: frozenset({MeetingStatus.COMPLETED}),
    MeetingStatus.COMPLETED: frozenset(),
    MeetingStatus.CANCELLED: frozenset(),
}


def parse_status(value: Any) -> MeetingStatus:
    try:
        return MeetingStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in MeetingStatus)
        raise ValidationError(f"Status must be one of {allowed}")


def parse_meeting_filters(args: Mapping[str, Any]) -> MeetingFilter:
    status = args.get("status")
    start = optional_date(args.get("startDate"), "startDate")
    end = optional_date(args.get("endDate"), "endDate")
    if start and end and start > end:
        raise ValidationError("startDate must not be after endDate")
    return MeetingFilter(
        search=(args.get("search") or "").strip() or None,
        status=parse_status(status) if status else None,
        meeting_type_id=optional_int(args.get("meetingTypeId"), "meetingTypeId"),
        start_date=start,
        end_date=end,
    )


def check_transition(current: MeetingStatus, target: MeetingStatus) -> None:
    if current == target:
        return
    if target == MeetingStatus.CANCELLED:
        raise InvalidStateError("Use the cancel operation to cancel a meeting")
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStateError(f"Cannot change status from {current.value} to {target.value}")


class MeetingService:
    """Use cases: meeting lifecycle (create, update, cancel, delete) and queries."""

    def __init__(
        self,
        meetings: MeetingRepository,
        meeting_types: MeetingTypeRepository,
        members: MemberRepository,
        documents: DocumentRepository,
        *,
        clock: Optional[Callable[[], Any]] = None,
    ):
        self._meetings = meetings
        self._types = meeting_types
        self._members = members
        self._documents = documents
        self._clock = clock or now_local

    def _require_type(self, value: Any) -> int:
        type_id = require_int(value, "Meeting type")
        if not self._types.get_by_id(type_id):
            raise NotFoundError("Meeting type not found")
        return type_id

    def list_meetings(self, *, filters: MeetingFilter, page: PageRequest) -> Page[Meeting]:
        return self._meetings.list_page(filters=filters, page=page)

    def get_meeting(self, meeting_id: int) -> Meeting:
        meeting = self._meetings.get_by_id(int(meeting_id))
        if not meeting:
            raise NotFoundError("Meeting not found")
        return meeting

    def get_meeting_detail(self, meeting_id: int) -> dict:
        meeting = self.get_meeting(meeting_id)
        out = meeting.to_dict()
        out["members"] = [m.to_dict() for m in self._members.list_by_meeting(meeting.meeting_id)]
        out["documents"] = [d.to_dict() for d in self._documents.list_by_meeting(meeting.meeting_id)]
        return out

    def create_meeting(self, data: Mapping[str, Any]) -> Meeting:
        if data.get("meetingDate") in (None, ""):
            raise ValidationError("Meeting date is required")
        if data.get("meetingTime") in (None, ""):
            raise ValidationError("Meeting time is required")
        if data.get("meetingTypeId") in (None, ""):
            raise ValidationError("Meeting type is required")

        meeting_date = to_date(data.get("meetingDate"), "Meeting date")
        meeting_time = to_time(data.get("meetingTime"), "Meeting time")
        title = required_text(data.get("meetingTitle"), "Meeting title", MEETING_TITLE_MAX)
        description = optional_text(data.get("meetingDescription"), "Meeting description", MEETING_DESCRIPTION_MAX)
        document_path = optional_text(data.get("documentPath"), "Document path", DOCUMENT_PATH_MAX)
        remarks = optional_text(data.get("remarks"), "Remarks", REMARKS_MAX)
        type_id = self._require_type(data.get("meetingTypeId"))

        meeting_id = self._meetings.create(
            meeting_date=meeting_date,
            meeting_time=meeting_time,
            meeting_type_id=type_id,
            meeting_title=title,
            meeting_description=description,
            document_path=document_path,
            remarks=remarks,
        )
        log.info("Meeting %s created for %s %s", meeting_id, meeting_date, meeting_time)
        return self.get_meeting(meeting_id)

    def update_meeting(self, meeting_id: int, data: Mapping[str, Any]) -> Meeting:
        current = self.get_meeting(meeting_id)
        changes: dict[str, Any] = {}
        if "meetingDate" in data:
            changes["meeting_date"] = to_date(data["meetingDate"], "Meeting date")
        if "meetingTime" in data:
            changes["meeting_time"] = to_time(data["meetingTime"], "Meeting time")
        if "meetingTypeId" in data:
            changes["meeting_type_id"] = self._require_type(data["meetingTypeId"])
        if "meetingTitle" in data:
            changes["meeting_title"] = required_text(data["meetingTitle"], "Meeting title", MEETING_TITLE_MAX)
        if "meetingDescription" in data:
            changes["meeting_description"] = optional_text(
                data["meetingDescription"], "Meeting description", MEETING_DESCRIPTION_MAX
            )
        if "documentPath" in data:
            changes["document_path"] = optional_text(data["documentPath"], "Document path", DOCUMENT_PATH_MAX)
        if "remarks" in data:
            changes["remarks"] = optional_text(data["remarks"], "Remarks", REMARKS_MAX)
        if "status" in data:
            target = parse_status(data["status"])
            check_transition(current.status, target)
            changes["status"] = target

        if not changes:
            return current

        updated = replace(current, **changes)
        if not self._meetings.update(updated, expected_status=current.status):
            raise InvalidStateError("Meeting was modified concurrently, please retry")
        if updated.status != current.status:
            log.info("Meeting %s status %s -> %s", current.meeting_id, current.status.value, updated.status.value)
        return self.get_meeting(current.meeting_id)

    def cancel_meeting(self, meeting_id: int, *, reason: Any = None) -> Meeting:
        reason_text = optional_text(reason, "Cancellation reason", CANCELLATION_REASON_MAX)
        current = self.get_meeting(meeting_id)
        self._ensure_cancellable(current)

        if not self._meetings.cancel(current.meeting_id, at=self._clock(), reason=reason_text):
            # lost a race with another status change
            self._ensure_cancellable(self.get_meeting(current.meeting_id))
            raise InvalidStateError("Meeting was modified concurrently, please retry")

        log.info("Meeting %s cancelled", current.meeting_id)
        return self.get_meeting(current.meeting_id)

    @staticmethod
    def _ensure_cancellable(meeting: Meeting) -> None:
        if meeting.status == MeetingStatus.CANCELLED:
            raise InvalidStateError("Meeting is already cancelled")
        if meeting.status == MeetingStatus.COMPLETED:
            raise InvalidStateError("Cannot cancel a completed meeting")

    def delete_meeting(self, meeting_id: int) -> None:
        if not self._meetings.delete_cascade(int(meeting_id)):
            raise NotFoundError("Meeting not found")
        log.info("Meeting %s deleted with its members and documents", meeting_id)

    def stats(self) -> MeetingStats:
        return self._meetings.stats(now=self._clock())

    def upcoming(self, *, limit: Any = None) -> Sequence[Meeting]:
        n = DEFAULT_UPCOMING_LIMIT if limit in (None, "") else require_int(limit, "limit")
        if n < 1 or n > MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
        return self._meetings.list_upcoming(now=self._clock(), limit=n)
