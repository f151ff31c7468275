from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, integrity_guard, like_pattern
from .model import MeetingType
from .repository import MeetingTypeRepository

_COLUMNS = "meeting_type_id, meeting_type_name, remarks, created, modified"
_DUPLICATE_NAME = "Meeting type with this name already exists"


def _row_to_type(row: dict) -> MeetingType:
    return MeetingType(
        meeting_type_id=int(row["meeting_type_id"]),
        meeting_type_name=row["meeting_type_name"],
        remarks=row.get("remarks"),
        created=row.get("created"),
        modified=row.get("modified"),
    )


class MySQLMeetingTypeRepository(MeetingTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, meeting_type_id: int) -> Optional[MeetingType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM meeting_types WHERE meeting_type_id=%s", (meeting_type_id,))
            row = fetchone(cur)
            return _row_to_type(row) if row else None

    def get_by_name(self, name: str) -> Optional[MeetingType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM meeting_types WHERE meeting_type_name=%s", (name,))
            row = fetchone(cur)
            return _row_to_type(row) if row else None

    def list_all(self, *, search: Optional[str] = None) -> Sequence[MeetingType]:
        with db_cursor(self._conn_factory) as (_, cur):
            if search:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM meeting_types WHERE LOWER(meeting_type_name) LIKE LOWER(%s) ORDER BY meeting_type_name",
                    (like_pattern(search),),
                )
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM meeting_types ORDER BY meeting_type_name")
            return [_row_to_type(r) for r in fetchall(cur)]

    def create(self, *, meeting_type_name: str, remarks: Optional[str]) -> int:
        with integrity_guard(duplicate=_DUPLICATE_NAME), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO meeting_types(meeting_type_name, remarks) VALUES(%s,%s)",
                (meeting_type_name, remarks),
            )
            return int(cur.lastrowid)

    def update(self, meeting_type: MeetingType) -> bool:
        with integrity_guard(duplicate=_DUPLICATE_NAME), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE meeting_types SET meeting_type_name=%s, remarks=%s WHERE meeting_type_id=%s",
                (meeting_type.meeting_type_name, meeting_type.remarks, meeting_type.meeting_type_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, meeting_type_id: int) -> bool:
        with integrity_guard(referenced="Cannot delete meeting type: meetings still use it"), db_cursor(
            self._conn_factory
        ) as (_, cur):
            cur.execute("DELETE FROM meeting_types WHERE meeting_type_id=%s", (meeting_type_id,))
            return cur.rowcount > 0

    def count_meetings(self, meeting_type_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM meetings WHERE meeting_type_id=%s", (meeting_type_id,))
            return int(fetchone(cur)["total"])
