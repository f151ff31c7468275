from __future__ import annotations

import pytest

from src.mom_portal.mom_portal.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.mom_portal.mom_portal.meeting_types.service import MeetingTypeService
from tests.fakes import Repos


@pytest.fixture
def repos():
    return Repos()


@pytest.fixture
def service(repos):
    return MeetingTypeService(repos.meeting_types)


def test_duplicate_name_is_rejected(service):
    service.create_type({"meetingTypeName": "Board Meeting"})
    with pytest.raises(ConflictError, match="already exists"):
        service.create_type({"meetingTypeName": "Board Meeting"})
    assert len(service.list_types()) == 1


def test_names_are_case_sensitive(service):
    service.create_type({"meetingTypeName": "Board Meeting"})
    service.create_type({"meetingTypeName": "board meeting"})
    assert len(service.list_types()) == 2


def test_name_is_required(service):
    with pytest.raises(ValidationError):
        service.create_type({"meetingTypeName": "  "})


def test_rename_checks_other_types(service):
    board = service.create_type({"meetingTypeName": "Board Meeting"})
    sync = service.create_type({"meetingTypeName": "Weekly Sync"})

    with pytest.raises(ConflictError):
        service.update_type(sync.meeting_type_id, {"meetingTypeName": "Board Meeting"})

    same = service.update_type(board.meeting_type_id, {"meetingTypeName": "Board Meeting", "remarks": "quarterly"})
    assert same.remarks == "quarterly"


def test_search_is_case_insensitive(service):
    service.create_type({"meetingTypeName": "Board Meeting"})
    service.create_type({"meetingTypeName": "Weekly Sync"})
    assert [t.meeting_type_name for t in service.list_types(search="BOARD")] == ["Board Meeting"]


def test_delete_blocked_while_meetings_use_it(repos, service):
    tid = repos.add_type("Board Meeting")
    repos.add_meeting(tid)
    repos.add_meeting(tid)

    with pytest.raises(ConflictError, match="2 meeting"):
        service.delete_type(tid)
    assert service.get_type(tid).meeting_type_name == "Board Meeting"


def test_delete_unused_type(repos, service):
    tid = repos.add_type("Retro")
    service.delete_type(tid)
    with pytest.raises(NotFoundError, match="Meeting type not found"):
        service.get_type(tid)
