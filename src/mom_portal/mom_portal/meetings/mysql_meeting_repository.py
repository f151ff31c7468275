from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.pagination import Page, PageRequest
from ..core.enums import MeetingStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_pattern, normalize_mysql_time
from .model import Meeting, MeetingFilter, MeetingStats
from .repository import MeetingRepository

MEETING_SELECT = """
    SELECT m.meeting_id, m.meeting_date, m.meeting_time, m.meeting_type_id, m.meeting_title,
           m.meeting_description, m.document_path, m.remarks, m.status,
           m.cancellation_datetime, m.cancellation_reason, m.created, m.modified,
           t.meeting_type_name
    FROM meetings m
    LEFT JOIN meeting_types t ON t.meeting_type_id = m.meeting_type_id
"""


def row_to_meeting(row: dict) -> Meeting:
    return Meeting(
        meeting_id=int(row["meeting_id"]),
        meeting_date=row["meeting_date"],
        meeting_time=normalize_mysql_time(row["meeting_time"]),
        meeting_type_id=int(row["meeting_type_id"]),
        meeting_title=row["meeting_title"],
        meeting_description=row.get("meeting_description"),
        document_path=row.get("document_path"),
        remarks=row.get("remarks"),
        status=MeetingStatus(row["status"]),
        cancellation_datetime=row.get("cancellation_datetime"),
        cancellation_reason=row.get("cancellation_reason"),
        created=row.get("created"),
        modified=row.get("modified"),
        meeting_type_name=row.get("meeting_type_name"),
    )


def _where(filters: MeetingFilter) -> tuple[str, list]:
    clauses: list[str] = []
    params: list = []
    if filters.search:
        pattern = like_pattern(filters.search)
        clauses.append("(m.meeting_title LIKE %s OR m.meeting_description LIKE %s)")
        params += [pattern, pattern]
    if filters.status:
        clauses.append("m.status=%s")
        params.append(filters.status.value)
    if filters.meeting_type_id is not None:
        clauses.append("m.meeting_type_id=%s")
        params.append(filters.meeting_type_id)
    if filters.start_date:
        clauses.append("m.meeting_date >= %s")
        params.append(filters.start_date)
    if filters.end_date:
        clauses.append("m.meeting_date <= %s")
        params.append(filters.end_date)
    return ("WHERE " + " AND ".join(clauses)) if clauses else "", params


class MySQLMeetingRepository(MeetingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(MEETING_SELECT + " WHERE m.meeting_id=%s", (meeting_id,))
            row = fetchone(cur)
            return row_to_meeting(row) if row else None

    def list_page(self, *, filters: MeetingFilter, page: PageRequest) -> Page[Meeting]:
        where, params = _where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM meetings m {where}", tuple(params))
            total = int(fetchone(cur)["total"])
            cur.execute(
                f"{MEETING_SELECT} {where} ORDER BY m.meeting_date DESC, m.meeting_time DESC, m.meeting_id DESC LIMIT %s OFFSET %s",
                tuple(params + [page.limit, page.offset]),
            )
            items = [row_to_meeting(r) for r in fetchall(cur)]
        return Page(items=items, total=total, page=page.page, limit=page.limit)

    def create(
        self,
        *,
        meeting_date: date,
        meeting_time: time,
        meeting_type_id: int,
        meeting_title: str,
        meeting_description: Optional[str],
        document_path: Optional[str],
        remarks: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO meetings(meeting_date, meeting_time, meeting_type_id, meeting_title,
                                     meeting_description, document_path, remarks, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    meeting_date,
                    meeting_time,
                    meeting_type_id,
                    meeting_title,
                    meeting_description,
                    document_path,
                    remarks,
                    MeetingStatus.SCHEDULED.value,
                ),
            )
            return int(cur.lastrowid)

    def update(self, meeting: Meeting, *, expected_status: MeetingStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE meetings
                SET meeting_date=%s, meeting_time=%s, meeting_type_id=%s, meeting_title=%s,
                    meeting_description=%s, document_path=%s, remarks=%s, status=%s,
                    cancellation_datetime=%s, cancellation_reason=%s
                WHERE meeting_id=%s AND status=%s
                """,
                (
                    meeting.meeting_date,
                    meeting.meeting_time,
                    meeting.meeting_type_id,
                    meeting.meeting_title,
                    meeting.meeting_description,
                    meeting.document_path,
                    meeting.remarks,
                    meeting.status.value,
                    meeting.cancellation_datetime,
                    meeting.cancellation_reason,
                    meeting.meeting_id,
                    expected_status.value,
                ),
            )
            return cur.rowcount > 0

    def cancel(self, meeting_id: int, *, at: datetime, reason: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE meetings
                SET status=%s, cancellation_datetime=%s, cancellation_reason=%s
                WHERE meeting_id=%s AND status IN (%s, %s)
                """,
                (
                    MeetingStatus.CANCELLED.value,
                    at,
                    reason,
                    meeting_id,
                    MeetingStatus.SCHEDULED.value,
                    MeetingStatus.ONGOING.value,
                ),
            )
            return cur.rowcount > 0

    def delete_cascade(self, meeting_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT meeting_id FROM meetings WHERE meeting_id=%s FOR UPDATE", (meeting_id,))
            if not fetchone(cur):
                return False
            cur.execute("DELETE FROM meeting_members WHERE meeting_id=%s", (meeting_id,))
            cur.execute("DELETE FROM meeting_documents WHERE meeting_id=%s", (meeting_id,))
            cur.execute("DELETE FROM meetings WHERE meeting_id=%s", (meeting_id,))
            return cur.rowcount > 0

    def stats(self, *, now: datetime) -> MeetingStats:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total,
                       COALESCE(SUM(status='Scheduled'), 0) AS scheduled,
                       COALESCE(SUM(status='Ongoing'), 0) AS ongoing,
                       COALESCE(SUM(status='Completed'), 0) AS completed,
                       COALESCE(SUM(status='Cancelled'), 0) AS cancelled,
                       COALESCE(SUM(status='Scheduled' AND TIMESTAMP(meeting_date, meeting_time) >= %s), 0) AS upcoming
                FROM meetings
                """,
                (now,),
            )
            row = fetchone(cur) or {}
        return MeetingStats(
            total=int(row.get("total") or 0),
            scheduled=int(row.get("scheduled") or 0),
            ongoing=int(row.get("ongoing") or 0),
            completed=int(row.get("completed") or 0),
            cancelled=int(row.get("cancelled") or 0),
            upcoming=int(row.get("upcoming") or 0),
        )

    def list_upcoming(self, *, now: datetime, limit: int) -> Sequence[Meeting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                MEETING_SELECT
                + """
                WHERE m.status='Scheduled' AND TIMESTAMP(m.meeting_date, m.meeting_time) >= %s
                ORDER BY m.meeting_date ASC, m.meeting_time ASC
                LIMIT %s
                """,
                (now, limit),
            )
            return [row_to_meeting(r) for r in fetchall(cur)]
