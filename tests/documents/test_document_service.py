from __future__ import annotations

from decimal import Decimal

import pytest

from src.mom_portal.mom_portal.core.exceptions import NotFoundError, ValidationError
from src.mom_portal.mom_portal.documents.service import DocumentService
from tests.fakes import Repos


@pytest.fixture
def repos():
    return Repos()


@pytest.fixture
def service(repos):
    return DocumentService(repos.documents, repos.meetings, repos.staff)


@pytest.fixture
def meeting_id(repos):
    return repos.add_meeting(repos.add_type())


def test_first_document_gets_sequence_one(service, meeting_id):
    doc = service.add_document(meeting_id, {"documentName": "Agenda"})
    assert doc.sequence == Decimal("1")
    assert doc.to_dict()["sequence"] == 1


def test_omitted_sequence_appends_after_max(repos, service, meeting_id):
    repos.add_document(meeting_id, "a", sequence="2.5")
    repos.add_document(meeting_id, "b", sequence=7)
    other = repos.add_meeting(repos.add_type("Other"))
    repos.add_document(other, "elsewhere", sequence=50)

    doc = service.add_document(meeting_id, {"documentName": "Minutes"})

    assert doc.sequence == Decimal("8")


def test_explicit_sequence_kept_and_fraction_serialized(service, meeting_id):
    doc = service.add_document(meeting_id, {"documentName": "Annex", "sequence": 1.5})
    assert doc.to_dict()["sequence"] == 1.5


def test_listing_is_ordered_by_sequence(repos, service, meeting_id):
    repos.add_document(meeting_id, "third", sequence=3)
    repos.add_document(meeting_id, "first", sequence=1)
    repos.add_document(meeting_id, "second", sequence="1.5")
    assert [d.document_name for d in service.list_documents(meeting_id)] == ["first", "second", "third"]


def test_add_document_validation(service, meeting_id):
    with pytest.raises(ValidationError):
        service.add_document(meeting_id, {"documentName": "   "})
    with pytest.raises(ValidationError):
        service.add_document(meeting_id, {"documentName": "x", "sequence": -1})
    with pytest.raises(ValidationError, match="2 decimal places"):
        service.add_document(meeting_id, {"documentName": "x", "sequence": "1.005"})
    with pytest.raises(ValidationError, match="cannot exceed"):
        service.add_document(meeting_id, {"documentName": "x", "sequence": "100000000"})
    with pytest.raises(ValidationError):
        service.add_document(meeting_id, {"documentName": "x", "fileSize": -5})
    with pytest.raises(NotFoundError, match="Meeting not found"):
        service.add_document(999, {"documentName": "x"})
    with pytest.raises(NotFoundError, match="Staff member not found"):
        service.add_document(meeting_id, {"documentName": "x", "uploadedBy": 77})


def test_uploader_is_reported_by_name(repos, service, meeting_id):
    sid = repos.add_staff("Alice")
    doc = service.add_document(meeting_id, {"documentName": "Agenda", "uploadedBy": sid})
    assert doc.to_dict()["uploadedBy"] == {"id": sid, "staffName": "Alice"}


def test_reorder_only_touches_documents_of_the_meeting(repos, service, meeting_id):
    d1 = repos.add_document(meeting_id, "one", sequence=1)
    d2 = repos.add_document(meeting_id, "two", sequence=2)
    other = repos.add_meeting(repos.add_type("Other"))
    foreign = repos.add_document(other, "foreign", sequence=1)

    docs = service.reorder(
        meeting_id,
        [
            {"documentId": d1, "sequence": 2},
            {"documentId": d2, "sequence": 1},
            {"documentId": foreign, "sequence": 9},
        ],
    )

    assert [d.document_id for d in docs] == [d2, d1]
    assert repos.documents.get_by_id(foreign).sequence == Decimal("1")


@pytest.mark.parametrize("payload", [None, [], [{"documentId": 1}], ["1"]])
def test_reorder_rejects_malformed_payload(service, meeting_id, payload):
    with pytest.raises(ValidationError):
        service.reorder(meeting_id, payload)


@pytest.mark.parametrize("sequence", ["1.005", 10**9])
def test_reorder_rejects_sequence_outside_column_range(repos, service, meeting_id, sequence):
    d1 = repos.add_document(meeting_id, "one", sequence=1)
    d2 = repos.add_document(meeting_id, "two", sequence=2)

    with pytest.raises(ValidationError):
        service.reorder(
            meeting_id,
            [{"documentId": d2, "sequence": 1}, {"documentId": d1, "sequence": sequence}],
        )

    assert repos.documents.get_by_id(d1).sequence == Decimal("1")
    assert repos.documents.get_by_id(d2).sequence == Decimal("2")


def test_append_refuses_to_run_past_largest_sequence(repos, service, meeting_id):
    repos.add_document(meeting_id, "last", sequence="99999999.50")
    with pytest.raises(ValidationError, match="cannot exceed"):
        service.add_document(meeting_id, {"documentName": "overflow"})


def test_stats_groups_types_and_rounds_megabytes(repos, service, meeting_id):
    repos.add_document(meeting_id, "a", sequence=1, size=1024 * 1024, file_type="application/pdf")
    repos.add_document(meeting_id, "b", sequence=2, size=512 * 1024, file_type="application/pdf")
    repos.add_document(meeting_id, "c", sequence=3, size=10_000)

    stats = service.stats(meeting_id).to_dict()

    assert stats["totalDocuments"] == 3
    assert stats["totalSize"] == 1024 * 1024 + 512 * 1024 + 10_000
    assert stats["totalSizeMB"] == 1.51
    assert stats["fileTypes"] == {"application/pdf": 2, "unknown": 1}


def test_stats_for_empty_meeting(service, meeting_id):
    assert service.stats(meeting_id).to_dict() == {
        "totalDocuments": 0,
        "totalSize": 0,
        "totalSizeMB": 0,
        "fileTypes": {},
    }


def test_update_and_delete(repos, service, meeting_id):
    did = repos.add_document(meeting_id, "draft", sequence=1)
    updated = service.update_document(did, {"documentName": "final", "sequence": "4"})
    assert (updated.document_name, updated.sequence) == ("final", Decimal("4"))

    with pytest.raises(ValidationError):
        service.update_document(did, {"sequence": None})

    removed = service.delete_document(did)
    assert removed.document_name == "final"
    with pytest.raises(NotFoundError, match="Document not found"):
        service.get_document(did)
