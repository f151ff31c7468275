"""In-memory repositories mirroring the MySQL constraints (unique keys, FKs, cascades)."""

from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from src.mom_portal.mom_portal.auth.model import User
from src.mom_portal.mom_portal.auth.tokens import TokenIssuer
from src.mom_portal.mom_portal.common.pagination import Page, PageRequest
from src.mom_portal.mom_portal.common.ratelimit import SlidingWindowRateLimiter
from src.mom_portal.mom_portal.container import Container, wire_container
from src.mom_portal.mom_portal.core.constants import ALLOWED_UPLOAD_MIME_TYPES, MAX_UPLOAD_BYTES, SEQUENCE_MAX
from src.mom_portal.mom_portal.core.enums import MeetingStatus, Role, UserRole
from src.mom_portal.mom_portal.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.mom_portal.mom_portal.documents.model import DocumentStats, MeetingDocument
from src.mom_portal.mom_portal.documents.storage import LocalFileStorage
from src.mom_portal.mom_portal.meeting_types.model import MeetingType
from src.mom_portal.mom_portal.meetings.model import Meeting, MeetingFilter, MeetingStats
from src.mom_portal.mom_portal.members.model import AttendanceSummary, MeetingMember
from src.mom_portal.mom_portal.staff.model import Staff

NOW = datetime(2026, 3, 10, 9, 0, 0)


class FixedClock:
    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class InMemoryStore:
    def __init__(self, clock: Optional[FixedClock] = None):
        self.clock = clock or FixedClock()
        self.users: dict[int, User] = {}
        self.staff: dict[int, Staff] = {}
        self.meeting_types: dict[int, MeetingType] = {}
        self.meetings: dict[int, Meeting] = {}
        self.members: dict[int, MeetingMember] = {}
        self.documents: dict[int, MeetingDocument] = {}
        self._ids: dict[str, itertools.count] = {}
        self._tick = itertools.count(1)

    def next_id(self, table: str) -> int:
        return next(self._ids.setdefault(table, itertools.count(1)))

    def stamp(self) -> datetime:
        # strictly increasing timestamps so "newest first" ordering is deterministic
        return self.clock() + timedelta(seconds=next(self._tick))


class FakeUserRepo:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, user_id):
        return self._s.users.get(int(user_id))

    def get_by_email(self, email):
        return next((u for u in self._s.users.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash, role, mobile_no):
        if self.get_by_email(email):
            raise ConflictError("User with this email already exists")
        uid = self._s.next_id("users")
        now = self._s.stamp()
        self._s.users[uid] = User(
            user_id=uid,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            mobile_no=mobile_no,
            created=now,
            modified=now,
        )
        return uid

    def update_profile(self, user_id, *, name, email):
        user = self._s.users.get(user_id)
        if not user:
            return False
        self._s.users[user_id] = replace(user, name=name, email=email, modified=self._s.stamp())
        return True

    def set_password_hash(self, user_id, password_hash):
        user = self._s.users.get(user_id)
        if not user:
            return False
        self._s.users[user_id] = replace(user, password_hash=password_hash)
        return True

    def touch_last_login(self, user_id, at):
        user = self._s.users[user_id]
        self._s.users[user_id] = replace(user, last_login=at)

    def set_active(self, user_id: int, is_active: bool) -> None:
        self._s.users[user_id] = replace(self._s.users[user_id], is_active=is_active)


class FakeStaffRepo:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, staff_id):
        return self._s.staff.get(int(staff_id))

    def get_by_email(self, email):
        return next((s for s in self._s.staff.values() if s.email_address == email), None)

    def list_page(self, *, search, page: PageRequest):
        items = list(self._s.staff.values())
        if search:
            q = search.lower()
            items = [
                s
                for s in items
                if q in s.staff_name.lower() or q in (s.email_address or "").lower() or q in (s.mobile_no or "").lower()
            ]
        items.sort(key=lambda s: s.staff_id, reverse=True)
        return Page(items=items[page.offset : page.offset + page.limit], total=len(items), page=page.page, limit=page.limit)

    def existing_ids(self, staff_ids: Iterable[int]) -> set[int]:
        return {int(i) for i in staff_ids if int(i) in self._s.staff}

    def _check_email(self, email, exclude_id=None):
        other = self.get_by_email(email) if email else None
        if other and other.staff_id != exclude_id:
            raise ConflictError("Staff member with this email already exists")

    def create(self, *, staff_name, mobile_no, email_address, role, department, remarks):
        self._check_email(email_address)
        sid = self._s.next_id("staff")
        now = self._s.stamp()
        self._s.staff[sid] = Staff(
            staff_id=sid,
            staff_name=staff_name,
            mobile_no=mobile_no,
            email_address=email_address,
            role=role,
            department=department,
            remarks=remarks,
            created=now,
            modified=now,
        )
        return sid

    def update(self, staff: Staff):
        if staff.staff_id not in self._s.staff:
            return False
        self._check_email(staff.email_address, exclude_id=staff.staff_id)
        self._s.staff[staff.staff_id] = replace(staff, modified=self._s.stamp())
        return True

    def delete_by_id(self, staff_id):
        if any(m.staff_id == staff_id for m in self._s.members.values()):
            raise ConflictError("Cannot delete staff member: still assigned to meetings")
        if self._s.staff.pop(staff_id, None) is None:
            return False
        # ON DELETE SET NULL
        for doc_id, doc in list(self._s.documents.items()):
            if doc.uploaded_by == staff_id:
                self._s.documents[doc_id] = replace(doc, uploaded_by=None, uploader_name=None)
        return True

    def count_memberships(self, staff_id):
        return sum(1 for m in self._s.members.values() if m.staff_id == staff_id)

    def list_meeting_history(self, staff_id) -> Sequence[dict]:
        out = []
        for m in self._s.members.values():
            if m.staff_id != staff_id:
                continue
            meeting = self._s.meetings[m.meeting_id]
            out.append({"id": m.member_id, "meetingId": m.meeting_id, "isPresent": m.is_present, "meeting": meeting.to_dict()})
        return out


class FakeMeetingTypeRepo:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, meeting_type_id):
        return self._s.meeting_types.get(int(meeting_type_id))

    def get_by_name(self, name):
        return next((t for t in self._s.meeting_types.values() if t.meeting_type_name == name), None)

    def list_all(self, *, search=None):
        items = list(self._s.meeting_types.values())
        if search:
            items = [t for t in items if search.lower() in t.meeting_type_name.lower()]
        return sorted(items, key=lambda t: t.meeting_type_name)

    def create(self, *, meeting_type_name, remarks):
        if self.get_by_name(meeting_type_name):
            raise ConflictError("Meeting type with this name already exists")
        tid = self._s.next_id("meeting_types")
        now = self._s.stamp()
        self._s.meeting_types[tid] = MeetingType(tid, meeting_type_name, remarks, created=now, modified=now)
        return tid

    def update(self, meeting_type: MeetingType):
        other = self.get_by_name(meeting_type.meeting_type_name)
        if other and other.meeting_type_id != meeting_type.meeting_type_id:
            raise ConflictError("Meeting type with this name already exists")
        self._s.meeting_types[meeting_type.meeting_type_id] = meeting_type
        return True

    def delete_by_id(self, meeting_type_id):
        if self.count_meetings(meeting_type_id):
            raise ConflictError("Cannot delete meeting type: meetings still use it")
        return self._s.meeting_types.pop(meeting_type_id, None) is not None

    def count_meetings(self, meeting_type_id):
        return sum(1 for m in self._s.meetings.values() if m.meeting_type_id == meeting_type_id)


class FakeMeetingRepo:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def _joined(self, meeting: Meeting) -> Meeting:
        mt = self._s.meeting_types.get(meeting.meeting_type_id)
        return replace(meeting, meeting_type_name=mt.meeting_type_name if mt else None)

    def get_by_id(self, meeting_id):
        m = self._s.meetings.get(int(meeting_id))
        return self._joined(m) if m else None

    def list_page(self, *, filters: MeetingFilter, page: PageRequest):
        items = [self._joined(m) for m in self._s.meetings.values()]
        if filters.search:
            q = filters.search.lower()
            items = [m for m in items if q in m.meeting_title.lower() or q in (m.meeting_description or "").lower()]
        if filters.status:
            items = [m for m in items if m.status == filters.status]
        if filters.meeting_type_id is not None:
            items = [m for m in items if m.meeting_type_id == filters.meeting_type_id]
        if filters.start_date:
            items = [m for m in items if m.meeting_date >= filters.start_date]
        if filters.end_date:
            items = [m for m in items if m.meeting_date <= filters.end_date]
        items.sort(key=lambda m: (m.meeting_date, m.meeting_time, m.meeting_id), reverse=True)
        return Page(items=items[page.offset : page.offset + page.limit], total=len(items), page=page.page, limit=page.limit)

    def create(self, *, meeting_date, meeting_time, meeting_type_id, meeting_title, meeting_description, document_path, remarks):
        if meeting_type_id not in self._s.meeting_types:
            raise AssertionError("foreign key violation: meeting type")
        mid = self._s.next_id("meetings")
        now = self._s.stamp()
        self._s.meetings[mid] = Meeting(
            meeting_id=mid,
            meeting_date=meeting_date,
            meeting_time=meeting_time,
            meeting_type_id=meeting_type_id,
            meeting_title=meeting_title,
            meeting_description=meeting_description,
            document_path=document_path,
            remarks=remarks,
            created=now,
            modified=now,
        )
        return mid

    def update(self, meeting: Meeting, *, expected_status: MeetingStatus):
        stored = self._s.meetings.get(meeting.meeting_id)
        if not stored or stored.status != expected_status:
            return False
        self._s.meetings[meeting.meeting_id] = replace(meeting, meeting_type_name=None, modified=self._s.stamp())
        return True

    def cancel(self, meeting_id, *, at, reason):
        stored = self._s.meetings.get(meeting_id)
        if not stored or stored.status not in (MeetingStatus.SCHEDULED, MeetingStatus.ONGOING):
            return False
        self._s.meetings[meeting_id] = replace(
            stored,
            status=MeetingStatus.CANCELLED,
            cancellation_datetime=at,
            cancellation_reason=reason,
            modified=self._s.stamp(),
        )
        return True

    def delete_cascade(self, meeting_id):
        if meeting_id not in self._s.meetings:
            return False
        for mid in [k for k, v in self._s.members.items() if v.meeting_id == meeting_id]:
            del self._s.members[mid]
        for did in [k for k, v in self._s.documents.items() if v.meeting_id == meeting_id]:
            del self._s.documents[did]
        del self._s.meetings[meeting_id]
        return True

    def stats(self, *, now):
        ms = list(self._s.meetings.values())

        def count(status):
            return sum(1 for m in ms if m.status == status)

        return MeetingStats(
            total=len(ms),
            scheduled=count(MeetingStatus.SCHEDULED),
            ongoing=count(MeetingStatus.ONGOING),
            completed=count(MeetingStatus.COMPLETED),
            cancelled=count(MeetingStatus.CANCELLED),
            upcoming=sum(1 for m in ms if m.status == MeetingStatus.SCHEDULED and m.starts_at >= now),
        )

    def list_upcoming(self, *, now, limit):
        items = [
            self._joined(m)
            for m in self._s.meetings.values()
            if m.status == MeetingStatus.SCHEDULED and m.starts_at >= now
        ]
        items.sort(key=lambda m: (m.meeting_date, m.meeting_time))
        return items[:limit]


class FakeMemberRepo:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def _joined(self, m: MeetingMember) -> MeetingMember:
        staff = self._s.staff.get(m.staff_id)
        if not staff:
            return m
        return replace(m, staff_name=staff.staff_name, email_address=staff.email_address, mobile_no=staff.mobile_no)

    def get_by_id(self, member_id):
        m = self._s.members.get(int(member_id))
        return self._joined(m) if m else None

    def get_by_pair(self, meeting_id, staff_id):
        return next(
            (self._joined(m) for m in self._s.members.values() if m.meeting_id == meeting_id and m.staff_id == staff_id),
            None,
        )

    def list_by_meeting(self, meeting_id):
        items = [self._joined(m) for m in self._s.members.values() if m.meeting_id == meeting_id]
        return sorted(items, key=lambda m: ((m.staff_name or ""), m.member_id))

    def staff_ids_for_meeting(self, meeting_id):
        return {m.staff_id for m in self._s.members.values() if m.meeting_id == meeting_id}

    def _insert(self, meeting_id, staff_id, is_present, remarks):
        if staff_id in self.staff_ids_for_meeting(meeting_id):
            raise ConflictError("Staff member is already added to this meeting")
        mid = self._s.next_id("members")
        now = self._s.stamp()
        self._s.members[mid] = MeetingMember(mid, meeting_id, staff_id, is_present, remarks, created=now, modified=now)
        return mid

    def create(self, *, meeting_id, staff_id, is_present, remarks):
        return self._insert(meeting_id, staff_id, is_present, remarks)

    def create_many(self, *, meeting_id, staff_ids):
        ids = list(staff_ids)
        already = self.staff_ids_for_meeting(meeting_id)
        if any(i in already for i in ids) or len(set(ids)) != len(ids):
            raise ConflictError("Staff member is already added to this meeting")
        for sid in ids:
            self._insert(meeting_id, sid, False, None)
        return len(ids)

    def update(self, member: MeetingMember):
        if member.member_id not in self._s.members:
            return False
        self._s.members[member.member_id] = replace(member, modified=self._s.stamp())
        return True

    def delete_by_id(self, member_id):
        return self._s.members.pop(member_id, None) is not None

    def attendance(self, meeting_id):
        rows = [m for m in self._s.members.values() if m.meeting_id == meeting_id]
        return AttendanceSummary(total=len(rows), present=sum(1 for m in rows if m.is_present))


class FakeDocumentRepo:
    def __init__(self, store: InMemoryStore):
        self._s = store
        self.fail_next_write = False

    def _maybe_fail(self):
        if self.fail_next_write:
            self.fail_next_write = False
            raise RuntimeError("simulated database outage")

    def _joined(self, d: MeetingDocument) -> MeetingDocument:
        staff = self._s.staff.get(d.uploaded_by) if d.uploaded_by is not None else None
        return replace(d, uploader_name=staff.staff_name if staff else None)

    def get_by_id(self, document_id):
        d = self._s.documents.get(int(document_id))
        return self._joined(d) if d else None

    def list_by_meeting(self, meeting_id):
        items = [self._joined(d) for d in self._s.documents.values() if d.meeting_id == meeting_id]
        return sorted(items, key=lambda d: (d.sequence, d.document_id))

    def insert(self, *, meeting_id, document_name, document_path, sequence, remarks, file_size, file_type, uploaded_by):
        self._maybe_fail()
        if meeting_id not in self._s.meetings:
            raise NotFoundError("Meeting not found")
        did = self._s.next_id("documents")
        now = self._s.stamp()
        self._s.documents[did] = MeetingDocument(
            document_id=did,
            meeting_id=meeting_id,
            document_name=document_name,
            document_path=document_path,
            sequence=Decimal(sequence),
            remarks=remarks,
            file_size=file_size,
            file_type=file_type,
            uploaded_by=uploaded_by,
            created=now,
            modified=now,
        )
        return did

    def append(self, *, meeting_id, **fields):
        existing = [d.sequence for d in self._s.documents.values() if d.meeting_id == meeting_id]
        next_sequence = (max(existing) if existing else Decimal("0")) + 1
        if next_sequence > SEQUENCE_MAX:
            raise ValidationError(f"Sequence cannot exceed {SEQUENCE_MAX}")
        return self.insert(meeting_id=meeting_id, sequence=next_sequence, **fields)

    def update(self, document: MeetingDocument):
        self._maybe_fail()
        if document.document_id not in self._s.documents:
            return False
        self._s.documents[document.document_id] = replace(document, modified=self._s.stamp())
        return True

    def reorder(self, meeting_id, order):
        matched = 0
        for document_id, sequence in order:
            d = self._s.documents.get(document_id)
            if d and d.meeting_id == meeting_id:
                self._s.documents[document_id] = replace(d, sequence=Decimal(sequence))
                matched += 1
        return matched

    def delete_by_id(self, document_id):
        return self._s.documents.pop(document_id, None) is not None

    def stats(self, meeting_id):
        docs = [d for d in self._s.documents.values() if d.meeting_id == meeting_id]
        types: dict[str, int] = {}
        for d in docs:
            key = d.file_type or "unknown"
            types[key] = types.get(key, 0) + 1
        return DocumentStats(total_documents=len(docs), total_size=sum(d.file_size for d in docs), file_types=types)


class FakeDashboardRepo:
    """Computes the same rows as the SQL aggregates over the in-memory store."""

    def __init__(self, store: InMemoryStore):
        self._s = store
        self._meetings = FakeMeetingRepo(store)

    def totals(self):
        return {
            "meetings": len(self._s.meetings),
            "staff": len(self._s.staff),
            "meeting_types": len(self._s.meeting_types),
            "documents": len(self._s.documents),
        }

    def count_active_meetings_since(self, start: date):
        return sum(
            1 for m in self._s.meetings.values() if m.meeting_date >= start and m.status != MeetingStatus.CANCELLED
        )

    def count_upcoming(self, now):
        return self._meetings.stats(now=now).upcoming

    def status_counts(self):
        counts: dict[str, int] = {}
        for m in self._s.meetings.values():
            counts[m.status.value] = counts.get(m.status.value, 0) + 1
        return [{"status": k, "count": v} for k, v in sorted(counts.items())]

    def member_totals(self):
        ms = list(self._s.members.values())
        return {"total": len(ms), "present": sum(1 for m in ms if m.is_present)}

    def _per_staff(self, members):
        rows: dict[int, dict] = {}
        for m in members:
            staff = self._s.staff[m.staff_id]
            r = rows.setdefault(
                m.staff_id,
                {
                    "staff_id": staff.staff_id,
                    "staff_name": staff.staff_name,
                    "email_address": staff.email_address,
                    "mobile_no": staff.mobile_no,
                    "total": 0,
                    "attended": 0,
                },
            )
            r["total"] += 1
            r["attended"] += int(m.is_present)
        return list(rows.values())

    def staff_activity(self, limit):
        rows = [
            {**r, "meeting_count": r["total"], "attendance_count": r["attended"]}
            for r in self._per_staff(self._s.members.values())
        ]
        rows.sort(key=lambda r: (-r["meeting_count"], r["staff_name"]))
        return rows[:limit]

    def meeting_type_usage(self):
        rows = [
            {"meeting_type_id": t.meeting_type_id, "meeting_type_name": t.meeting_type_name, "count": n}
            for t in self._s.meeting_types.values()
            if (n := sum(1 for m in self._s.meetings.values() if m.meeting_type_id == t.meeting_type_id))
        ]
        return sorted(rows, key=lambda r: (-r["count"], r["meeting_type_name"]))

    def recent_meetings(self, limit, *, by_modified=False):
        items = [self._meetings.get_by_id(m.meeting_id) for m in self._s.meetings.values() if m.status != MeetingStatus.CANCELLED]
        if by_modified:
            items.sort(key=lambda m: (m.modified, m.meeting_id), reverse=True)
        else:
            items.sort(key=lambda m: (m.meeting_date, m.meeting_time, m.meeting_id), reverse=True)
        return items[:limit]

    def _in_window(self, start, end):
        return [m for m in self._s.meetings.values() if start <= m.meeting_date <= end]

    def meeting_trends(self, start, end):
        days: dict[date, dict] = {}
        for m in self._in_window(start, end):
            r = days.setdefault(m.meeting_date, {"day": m.meeting_date, "count": 0, "completed": 0, "cancelled": 0})
            r["count"] += 1
            r["completed"] += int(m.status == MeetingStatus.COMPLETED)
            r["cancelled"] += int(m.status == MeetingStatus.CANCELLED)
        return [days[d] for d in sorted(days)]

    def attendance_by_meeting(self, start, end):
        rows = []
        for m in sorted(self._in_window(start, end), key=lambda m: (m.meeting_date, m.meeting_id), reverse=True):
            ms = [x for x in self._s.members.values() if x.meeting_id == m.meeting_id]
            if ms:
                rows.append(
                    {
                        "meeting_id": m.meeting_id,
                        "meeting_title": m.meeting_title,
                        "meeting_date": m.meeting_date,
                        "total_members": len(ms),
                        "present_members": sum(1 for x in ms if x.is_present),
                    }
                )
        return rows

    def staff_performance(self, start, end):
        ids = {m.meeting_id for m in self._in_window(start, end)}
        return self._per_staff(m for m in self._s.members.values() if m.meeting_id in ids)

    def meeting_type_breakdown(self):
        rows = []
        for t in self._s.meeting_types.values():
            ms = [m for m in self._s.meetings.values() if m.meeting_type_id == t.meeting_type_id]
            if not ms:
                continue
            rows.append(
                {
                    "meeting_type_id": t.meeting_type_id,
                    "meeting_type_name": t.meeting_type_name,
                    "total": len(ms),
                    "completed": sum(1 for m in ms if m.status == MeetingStatus.COMPLETED),
                    "cancelled": sum(1 for m in ms if m.status == MeetingStatus.CANCELLED),
                    "scheduled": sum(1 for m in ms if m.status == MeetingStatus.SCHEDULED),
                }
            )
        return rows

    def recent_staff(self, limit):
        return sorted(self._s.staff.values(), key=lambda s: (s.created, s.staff_id), reverse=True)[:limit]

    def recent_documents(self, limit):
        docs = sorted(self._s.documents.values(), key=lambda d: (d.created, d.document_id), reverse=True)[:limit]
        return [(d, self._s.meetings[d.meeting_id].meeting_title) for d in docs]


class Repos:
    """All fakes over one store, plus helpers for arranging test data."""

    def __init__(self, clock: Optional[FixedClock] = None):
        self.clock = clock or FixedClock()
        self.store = InMemoryStore(self.clock)
        self.users = FakeUserRepo(self.store)
        self.staff = FakeStaffRepo(self.store)
        self.meeting_types = FakeMeetingTypeRepo(self.store)
        self.meetings = FakeMeetingRepo(self.store)
        self.members = FakeMemberRepo(self.store)
        self.documents = FakeDocumentRepo(self.store)
        self.dashboard = FakeDashboardRepo(self.store)

    def add_type(self, name: str = "Board Meeting") -> int:
        return self.meeting_types.create(meeting_type_name=name, remarks=None)

    def add_staff(self, name: str, email: Optional[str] = None, role: Role = Role.STAFF) -> int:
        return self.staff.create(
            staff_name=name, mobile_no=None, email_address=email, role=role, department=None, remarks=None
        )

    def add_meeting(
        self,
        type_id: int,
        *,
        title: str = "Weekly sync",
        day: date = date(2026, 3, 12),
        at: time = time(10, 0),
        status: MeetingStatus = MeetingStatus.SCHEDULED,
    ) -> int:
        mid = self.meetings.create(
            meeting_date=day,
            meeting_time=at,
            meeting_type_id=type_id,
            meeting_title=title,
            meeting_description=None,
            document_path=None,
            remarks=None,
        )
        if status == MeetingStatus.CANCELLED:
            self.meetings.cancel(mid, at=self.clock(), reason="seeded")
        elif status != MeetingStatus.SCHEDULED:
            self.store.meetings[mid] = replace(self.store.meetings[mid], status=status)
        return mid

    def add_member(self, meeting_id: int, staff_id: int, *, present: bool = False) -> int:
        return self.members.create(meeting_id=meeting_id, staff_id=staff_id, is_present=present, remarks=None)

    def add_document(self, meeting_id: int, name: str, *, sequence, size: int = 0, file_type=None) -> int:
        return self.documents.insert(
            meeting_id=meeting_id,
            document_name=name,
            document_path=None,
            sequence=Decimal(str(sequence)),
            remarks=None,
            file_size=size,
            file_type=file_type,
            uploaded_by=None,
        )

    def add_user(self, email: str, password_hash: str, role: UserRole = UserRole.STAFF, name: str = "Test User") -> int:
        return self.users.create_user(name=name, email=email, password_hash=password_hash, role=role, mobile_no=None)


def build_test_container(
    repos: Repos,
    upload_dir,
    *,
    secret: str = "test-jwt-secret",
    rate_limit: int = 1000,
) -> Container:
    return wire_container(
        users_repo=repos.users,
        staff_repo=repos.staff,
        meeting_types_repo=repos.meeting_types,
        meetings_repo=repos.meetings,
        members_repo=repos.members,
        documents_repo=repos.documents,
        dashboard_repo=repos.dashboard,
        tokens=TokenIssuer(secret=secret, expires_hours=1),
        storage=LocalFileStorage(upload_dir, max_bytes=MAX_UPLOAD_BYTES, allowed_types=ALLOWED_UPLOAD_MIME_TYPES),
        rate_limiter=SlidingWindowRateLimiter(max_requests=rate_limit, window_seconds=60),
        clock=repos.clock,
    )
