from __future__ import annotations

import pytest

from src.mom_portal.mom_portal.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.mom_portal.mom_portal.members.service import MemberService
from tests.fakes import Repos


@pytest.fixture
def repos():
    return Repos()


@pytest.fixture
def service(repos):
    return MemberService(repos.members, repos.meetings, repos.staff)


@pytest.fixture
def meeting_id(repos):
    return repos.add_meeting(repos.add_type())


def test_add_member_defaults_to_absent(repos, service, meeting_id):
    sid = repos.add_staff("Alice")
    member = service.add_member(meeting_id, {"staffId": sid})
    assert member.is_present is False
    assert member.staff_name == "Alice"


def test_add_member_requires_staff_id(service, meeting_id):
    with pytest.raises(ValidationError, match="Staff ID is required"):
        service.add_member(meeting_id, {})


def test_add_member_unknown_refs(repos, service, meeting_id):
    with pytest.raises(NotFoundError, match="Staff member not found"):
        service.add_member(meeting_id, {"staffId": 99})
    with pytest.raises(NotFoundError, match="Meeting not found"):
        service.add_member(99, {"staffId": repos.add_staff("Bob")})


def test_duplicate_pair_is_rejected(repos, service, meeting_id):
    sid = repos.add_staff("Alice")
    service.add_member(meeting_id, {"staffId": sid})
    with pytest.raises(ConflictError, match="already added"):
        service.add_member(meeting_id, {"staffId": sid})
    assert len(service.list_members(meeting_id)) == 1


def test_bulk_adds_only_new_staff(repos, service, meeting_id):
    a, b, c = (repos.add_staff(n) for n in ("A", "B", "C"))
    repos.add_member(meeting_id, b)

    added, members = service.add_members_bulk(meeting_id, [a, b, c])

    assert added == 2
    assert sorted(m.staff_id for m in members) == [a, c]
    assert len(service.list_members(meeting_id)) == 3


def test_bulk_all_existing_inserts_nothing(repos, service, meeting_id):
    a = repos.add_staff("A")
    b = repos.add_staff("B")
    repos.add_member(meeting_id, a)
    repos.add_member(meeting_id, b)
    before = len(repos.store.members)

    with pytest.raises(ConflictError, match="All staff members are already added"):
        service.add_members_bulk(meeting_id, [a, b])
    assert len(repos.store.members) == before


def test_bulk_unknown_staff_inserts_nothing(repos, service, meeting_id):
    a = repos.add_staff("A")
    with pytest.raises(NotFoundError, match="One or more staff members not found"):
        service.add_members_bulk(meeting_id, [a, 404])
    assert repos.store.members == {}


@pytest.mark.parametrize("payload", [None, [], "1,2", {"ids": [1]}])
def test_bulk_requires_non_empty_list(service, meeting_id, payload):
    with pytest.raises(ValidationError, match="Please provide an array of staff IDs"):
        service.add_members_bulk(meeting_id, payload)


def test_bulk_collapses_repeated_ids(repos, service, meeting_id):
    a = repos.add_staff("A")
    added, _ = service.add_members_bulk(meeting_id, [a, a, str(a)])
    assert added == 1


def test_mark_attendance_and_summary(repos, service, meeting_id):
    ids = [repos.add_member(meeting_id, repos.add_staff(n)) for n in ("A", "B", "C")]

    assert service.mark_attendance(ids[0], True).is_present is True
    service.mark_attendance(ids[1], "true")

    summary = service.attendance(meeting_id)
    assert (summary.total, summary.present, summary.absent) == (3, 2, 1)
    assert summary.to_dict()["attendancePercentage"] == 66.67


def test_mark_attendance_validates_flag(repos, service, meeting_id):
    mid = repos.add_member(meeting_id, repos.add_staff("A"))
    with pytest.raises(ValidationError):
        service.mark_attendance(mid, None)
    with pytest.raises(ValidationError):
        service.mark_attendance(mid, "maybe")


def test_attendance_with_no_members_is_zero(service, meeting_id):
    summary = service.attendance(meeting_id).to_dict()
    assert summary == {"total": 0, "present": 0, "absent": 0, "attendancePercentage": 0}


def test_update_member_remarks_only(repos, service, meeting_id):
    mid = repos.add_member(meeting_id, repos.add_staff("A"), present=True)
    updated = service.update_member(mid, {"remarks": "joined late"})
    assert updated.remarks == "joined late"
    assert updated.is_present is True


def test_remove_member(repos, service, meeting_id):
    mid = repos.add_member(meeting_id, repos.add_staff("A"))
    service.remove_member(mid)
    with pytest.raises(NotFoundError, match="Meeting member not found"):
        service.remove_member(mid)
