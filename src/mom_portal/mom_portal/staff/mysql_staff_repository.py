from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import fmt_date, fmt_time
from ..common.pagination import Page, PageRequest
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    integrity_guard,
    like_pattern,
    normalize_mysql_time,
    placeholders,
)
from .model import Staff
from .repository import StaffRepository

STAFF_COLUMNS = "staff_id, staff_name, mobile_no, email_address, role, department, remarks, created, modified"
_DUPLICATE_EMAIL = "Staff member with this email already exists"


def row_to_staff(row: dict) -> Staff:
    return Staff(
        staff_id=int(row["staff_id"]),
        staff_name=row["staff_name"],
        mobile_no=row.get("mobile_no"),
        email_address=row.get("email_address"),
        role=Role(row["role"]),
        department=row.get("department"),
        remarks=row.get("remarks"),
        created=row.get("created"),
        modified=row.get("modified"),
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {STAFF_COLUMNS} FROM staff WHERE staff_id=%s", (staff_id,))
            row = fetchone(cur)
            return row_to_staff(row) if row else None

    def get_by_email(self, email: str) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {STAFF_COLUMNS} FROM staff WHERE email_address=%s", (email,))
            row = fetchone(cur)
            return row_to_staff(row) if row else None

    def list_page(self, *, search: Optional[str], page: PageRequest) -> Page[Staff]:
        where = ""
        params: list = []
        if search:
            pattern = like_pattern(search)
            where = "WHERE staff_name LIKE %s OR email_address LIKE %s OR mobile_no LIKE %s"
            params = [pattern, pattern, pattern]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM staff {where}", tuple(params))
            total = int(fetchone(cur)["total"])
            cur.execute(
                f"SELECT {STAFF_COLUMNS} FROM staff {where} ORDER BY created DESC, staff_id DESC LIMIT %s OFFSET %s",
                tuple(params + [page.limit, page.offset]),
            )
            items = [row_to_staff(r) for r in fetchall(cur)]
        return Page(items=items, total=total, page=page.page, limit=page.limit)

    def existing_ids(self, staff_ids: Iterable[int]) -> set[int]:
        ids = list(dict.fromkeys(int(i) for i in staff_ids))
        if not ids:
            return set()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT staff_id FROM staff WHERE staff_id IN ({placeholders(len(ids))})", tuple(ids))
            return {int(r["staff_id"]) for r in fetchall(cur)}

    def create(
        self,
        *,
        staff_name: str,
        mobile_no: Optional[str],
        email_address: Optional[str],
        role: Role,
        department: Optional[str],
        remarks: Optional[str],
    ) -> int:
        with integrity_guard(duplicate=_DUPLICATE_EMAIL), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff(staff_name, mobile_no, email_address, role, department, remarks)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (staff_name, mobile_no, email_address, role.value, department, remarks),
            )
            return int(cur.lastrowid)

    def update(self, staff: Staff) -> bool:
        with integrity_guard(duplicate=_DUPLICATE_EMAIL), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff
                SET staff_name=%s, mobile_no=%s, email_address=%s, role=%s, department=%s, remarks=%s
                WHERE staff_id=%s
                """,
                (
                    staff.staff_name,
                    staff.mobile_no,
                    staff.email_address,
                    staff.role.value,
                    staff.department,
                    staff.remarks,
                    staff.staff_id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, staff_id: int) -> bool:
        with integrity_guard(
            referenced="Cannot delete staff member: still assigned to meetings",
        ), db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM staff WHERE staff_id=%s", (staff_id,))
            return cur.rowcount > 0

    def count_memberships(self, staff_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM meeting_members WHERE staff_id=%s", (staff_id,))
            return int(fetchone(cur)["total"])

    def list_meeting_history(self, staff_id: int) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT mm.meeting_member_id, mm.meeting_id, mm.is_present, mm.remarks,
                       m.meeting_title, m.meeting_date, m.meeting_time, m.status,
                       t.meeting_type_id, t.meeting_type_name
                FROM meeting_members mm
                JOIN meetings m ON m.meeting_id = mm.meeting_id
                JOIN meeting_types t ON t.meeting_type_id = m.meeting_type_id
                WHERE mm.staff_id=%s
                ORDER BY m.meeting_date DESC, m.meeting_time DESC
                """,
                (staff_id,),
            )
            rows = fetchall(cur)

        out: list[dict] = []
        for r in rows:
            out.append(
                {
                    "id": int(r["meeting_member_id"]),
                    "meetingId": int(r["meeting_id"]),
                    "isPresent": bool(r["is_present"]),
                    "remarks": r.get("remarks"),
                    "meeting": {
                        "id": int(r["meeting_id"]),
                        "meetingTitle": r["meeting_title"],
                        "meetingDate": fmt_date(r["meeting_date"]),
                        "meetingTime": fmt_time(normalize_mysql_time(r["meeting_time"])),
                        "status": r["status"],
                        "meetingType": {
                            "id": int(r["meeting_type_id"]),
                            "meetingTypeName": r["meeting_type_name"],
                        },
                    },
                }
            )
        return out
