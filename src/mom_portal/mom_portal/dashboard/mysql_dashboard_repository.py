from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..documents.mysql_document_repository import row_to_document
from ..documents.model import MeetingDocument
from ..meetings.model import Meeting
from ..meetings.mysql_meeting_repository import MEETING_SELECT, row_to_meeting
from ..staff.model import Staff
from ..staff.mysql_staff_repository import STAFF_COLUMNS, row_to_staff
from .repository import DashboardRepository


class MySQLDashboardRepository(DashboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def totals(self) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT (SELECT COUNT(*) FROM meetings) AS meetings,
                       (SELECT COUNT(*) FROM staff) AS staff,
                       (SELECT COUNT(*) FROM meeting_types) AS meeting_types,
                       (SELECT COUNT(*) FROM meeting_documents) AS documents
                """
            )
            row = fetchone(cur) or {}
        return {k: int(row.get(k) or 0) for k in ("meetings", "staff", "meeting_types", "documents")}

    def count_active_meetings_since(self, start: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM meetings WHERE meeting_date >= %s AND status <> 'Cancelled'",
                (start,),
            )
            return int(fetchone(cur)["total"])

    def count_upcoming(self, now: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total FROM meetings
                WHERE status='Scheduled' AND TIMESTAMP(meeting_date, meeting_time) >= %s
                """,
                (now,),
            )
            return int(fetchone(cur)["total"])

    def status_counts(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT status, COUNT(*) AS count FROM meetings GROUP BY status ORDER BY status")
            return [{"status": r["status"], "count": int(r["count"])} for r in fetchall(cur)]

    def member_totals(self) -> dict:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total, COALESCE(SUM(is_present), 0) AS present FROM meeting_members")
            row = fetchone(cur) or {}
        return {"total": int(row.get("total") or 0), "present": int(row.get("present") or 0)}

    def staff_activity(self, limit: int) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.staff_id, s.staff_name, s.email_address,
                       COUNT(*) AS meeting_count,
                       COALESCE(SUM(mm.is_present), 0) AS attendance_count
                FROM meeting_members mm
                JOIN staff s ON s.staff_id = mm.staff_id
                GROUP BY s.staff_id, s.staff_name, s.email_address
                ORDER BY meeting_count DESC, s.staff_name ASC
                LIMIT %s
                """,
                (limit,),
            )
            return fetchall(cur)

    def meeting_type_usage(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT t.meeting_type_id, t.meeting_type_name, COUNT(*) AS count
                FROM meetings m
                JOIN meeting_types t ON t.meeting_type_id = m.meeting_type_id
                GROUP BY t.meeting_type_id, t.meeting_type_name
                ORDER BY count DESC, t.meeting_type_name ASC
                """
            )
            return fetchall(cur)

    def recent_meetings(self, limit: int, *, by_modified: bool = False) -> Sequence[Meeting]:
        order = "m.modified DESC" if by_modified else "m.meeting_date DESC, m.meeting_time DESC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{MEETING_SELECT} WHERE m.status <> 'Cancelled' ORDER BY {order}, m.meeting_id DESC LIMIT %s",
                (limit,),
            )
            return [row_to_meeting(r) for r in fetchall(cur)]

    def meeting_trends(self, start: date, end: date) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT meeting_date AS day,
                       COUNT(*) AS count,
                       COALESCE(SUM(status='Completed'), 0) AS completed,
                       COALESCE(SUM(status='Cancelled'), 0) AS cancelled
                FROM meetings
                WHERE meeting_date BETWEEN %s AND %s
                GROUP BY meeting_date
                ORDER BY meeting_date ASC
                """,
                (start, end),
            )
            return fetchall(cur)

    def attendance_by_meeting(self, start: date, end: date) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT m.meeting_id, m.meeting_title, m.meeting_date,
                       COUNT(*) AS total_members,
                       COALESCE(SUM(mm.is_present), 0) AS present_members
                FROM meeting_members mm
                JOIN meetings m ON m.meeting_id = mm.meeting_id
                WHERE m.meeting_date BETWEEN %s AND %s
                GROUP BY m.meeting_id, m.meeting_title, m.meeting_date
                ORDER BY m.meeting_date DESC, m.meeting_id DESC
                """,
                (start, end),
            )
            return fetchall(cur)

    def staff_performance(self, start: date, end: date) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.staff_id, s.staff_name, s.email_address, s.mobile_no,
                       COUNT(*) AS total,
                       COALESCE(SUM(mm.is_present), 0) AS attended
                FROM meeting_members mm
                JOIN meetings m ON m.meeting_id = mm.meeting_id
                JOIN staff s ON s.staff_id = mm.staff_id
                WHERE m.meeting_date BETWEEN %s AND %s
                GROUP BY s.staff_id, s.staff_name, s.email_address, s.mobile_no
                """,
                (start, end),
            )
            return fetchall(cur)

    def meeting_type_breakdown(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT t.meeting_type_id, t.meeting_type_name,
                       COUNT(*) AS total,
                       COALESCE(SUM(m.status='Completed'), 0) AS completed,
                       COALESCE(SUM(m.status='Cancelled'), 0) AS cancelled,
                       COALESCE(SUM(m.status='Scheduled'), 0) AS scheduled
                FROM meetings m
                JOIN meeting_types t ON t.meeting_type_id = m.meeting_type_id
                GROUP BY t.meeting_type_id, t.meeting_type_name
                """
            )
            return fetchall(cur)

    def recent_staff(self, limit: int) -> Sequence[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {STAFF_COLUMNS} FROM staff ORDER BY created DESC, staff_id DESC LIMIT %s", (limit,))
            return [row_to_staff(r) for r in fetchall(cur)]

    def recent_documents(self, limit: int) -> Sequence[tuple[MeetingDocument, str]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT d.document_id, d.meeting_id, d.document_name, d.document_path, d.sequence, d.remarks,
                       d.file_size, d.file_type, d.uploaded_by, d.created, d.modified,
                       s.staff_name AS uploader_name, m.meeting_title
                FROM meeting_documents d
                JOIN meetings m ON m.meeting_id = d.meeting_id
                LEFT JOIN staff s ON s.staff_id = d.uploaded_by
                ORDER BY d.created DESC, d.document_id DESC
                LIMIT %s
                """,
                (limit,),
            )
            return [(row_to_document(r), r["meeting_title"]) for r in fetchall(cur)]
