from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, integrity_guard
from .model import AttendanceSummary, MeetingMember
from .repository import MemberRepository

_SELECT = """
    SELECT mm.meeting_member_id, mm.meeting_id, mm.staff_id, mm.is_present, mm.remarks,
           mm.created, mm.modified,
           s.staff_name, s.email_address, s.mobile_no
    FROM meeting_members mm
    LEFT JOIN staff s ON s.staff_id = mm.staff_id
"""
_DUPLICATE = "Staff member is already added to this meeting"
_MISSING_PARENT = "Meeting or staff member not found"


def _row_to_member(row: dict) -> MeetingMember:
    return MeetingMember(
        member_id=int(row["meeting_member_id"]),
        meeting_id=int(row["meeting_id"]),
        staff_id=int(row["staff_id"]),
        is_present=bool(row["is_present"]),
        remarks=row.get("remarks"),
        created=row.get("created"),
        modified=row.get("modified"),
        staff_name=row.get("staff_name"),
        email_address=row.get("email_address"),
        mobile_no=row.get("mobile_no"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[MeetingMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE mm.meeting_member_id=%s", (member_id,))
            row = fetchone(cur)
            return _row_to_member(row) if row else None

    def get_by_pair(self, meeting_id: int, staff_id: int) -> Optional[MeetingMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE mm.meeting_id=%s AND mm.staff_id=%s", (meeting_id, staff_id))
            row = fetchone(cur)
            return _row_to_member(row) if row else None

    def list_by_meeting(self, meeting_id: int) -> Sequence[MeetingMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE mm.meeting_id=%s ORDER BY s.staff_name, mm.meeting_member_id", (meeting_id,))
            return [_row_to_member(r) for r in fetchall(cur)]

    def staff_ids_for_meeting(self, meeting_id: int) -> set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT staff_id FROM meeting_members WHERE meeting_id=%s", (meeting_id,))
            return {int(r["staff_id"]) for r in fetchall(cur)}

    def create(self, *, meeting_id: int, staff_id: int, is_present: bool, remarks: Optional[str]) -> int:
        with integrity_guard(duplicate=_DUPLICATE, missing=_MISSING_PARENT), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO meeting_members(meeting_id, staff_id, is_present, remarks) VALUES(%s,%s,%s,%s)",
                (meeting_id, staff_id, int(bool(is_present)), remarks),
            )
            return int(cur.lastrowid)

    def create_many(self, *, meeting_id: int, staff_ids: Iterable[int]) -> int:
        rows = [(meeting_id, int(sid)) for sid in staff_ids]
        if not rows:
            return 0
        with integrity_guard(duplicate=_DUPLICATE, missing=_MISSING_PARENT), db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "INSERT INTO meeting_members(meeting_id, staff_id, is_present) VALUES(%s,%s,0)",
                rows,
            )
            return len(rows)

    def update(self, member: MeetingMember) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE meeting_members SET is_present=%s, remarks=%s WHERE meeting_member_id=%s",
                (int(member.is_present), member.remarks, member.member_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM meeting_members WHERE meeting_member_id=%s", (member_id,))
            return cur.rowcount > 0

    def attendance(self, meeting_id: int) -> AttendanceSummary:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total, COALESCE(SUM(is_present), 0) AS present
                FROM meeting_members
                WHERE meeting_id=%s
                """,
                (meeting_id,),
            )
            row = fetchone(cur) or {}
        return AttendanceSummary(total=int(row.get("total") or 0), present=int(row.get("present") or 0))
