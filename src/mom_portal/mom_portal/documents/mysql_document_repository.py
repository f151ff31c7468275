from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.constants import SEQUENCE_MAX
from ..core.exceptions import NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, integrity_guard
from .model import DocumentStats, MeetingDocument
from .repository import DocumentRepository

DOCUMENT_SELECT = """
    SELECT d.document_id, d.meeting_id, d.document_name, d.document_path, d.sequence, d.remarks,
           d.file_size, d.file_type, d.uploaded_by, d.created, d.modified,
           s.staff_name AS uploader_name
    FROM meeting_documents d
    LEFT JOIN staff s ON s.staff_id = d.uploaded_by
"""

_MISSING_PARENT = "Meeting or uploading staff member not found"

_INSERT = """
    INSERT INTO meeting_documents(meeting_id, document_name, document_path, sequence, remarks,
                                  file_size, file_type, uploaded_by)
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
"""


def row_to_document(row: dict) -> MeetingDocument:
    return MeetingDocument(
        document_id=int(row["document_id"]),
        meeting_id=int(row["meeting_id"]),
        document_name=row["document_name"],
        document_path=row.get("document_path"),
        sequence=Decimal(str(row.get("sequence") or 0)),
        remarks=row.get("remarks"),
        file_size=int(row.get("file_size") or 0),
        file_type=row.get("file_type"),
        uploaded_by=int(row["uploaded_by"]) if row.get("uploaded_by") is not None else None,
        created=row.get("created"),
        modified=row.get("modified"),
        uploader_name=row.get("uploader_name"),
    )


class MySQLDocumentRepository(DocumentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, document_id: int) -> Optional[MeetingDocument]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(DOCUMENT_SELECT + " WHERE d.document_id=%s", (document_id,))
            row = fetchone(cur)
            return row_to_document(row) if row else None

    def list_by_meeting(self, meeting_id: int) -> Sequence[MeetingDocument]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(DOCUMENT_SELECT + " WHERE d.meeting_id=%s ORDER BY d.sequence ASC, d.document_id ASC", (meeting_id,))
            return [row_to_document(r) for r in fetchall(cur)]

    def insert(
        self,
        *,
        meeting_id: int,
        document_name: str,
        document_path: Optional[str],
        sequence: Decimal,
        remarks: Optional[str],
        file_size: int,
        file_type: Optional[str],
        uploaded_by: Optional[int],
    ) -> int:
        with integrity_guard(missing=_MISSING_PARENT), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _INSERT,
                (meeting_id, document_name, document_path, sequence, remarks, file_size, file_type, uploaded_by),
            )
            return int(cur.lastrowid)

    def append(
        self,
        *,
        meeting_id: int,
        document_name: str,
        document_path: Optional[str],
        remarks: Optional[str],
        file_size: int,
        file_type: Optional[str],
        uploaded_by: Optional[int],
    ) -> int:
        with integrity_guard(missing=_MISSING_PARENT), db_cursor(self._conn_factory) as (_, cur):
            # Row lock on the parent meeting serializes concurrent appends for it
            cur.execute("SELECT meeting_id FROM meetings WHERE meeting_id=%s FOR UPDATE", (meeting_id,))
            if not fetchone(cur):
                raise NotFoundError("Meeting not found")
            cur.execute(
                "SELECT COALESCE(MAX(sequence), 0) + 1 AS next_sequence FROM meeting_documents WHERE meeting_id=%s",
                (meeting_id,),
            )
            next_sequence = Decimal(str(fetchone(cur)["next_sequence"]))
            if next_sequence > SEQUENCE_MAX:
                raise ValidationError(f"Sequence cannot exceed {SEQUENCE_MAX}")
            cur.execute(
                _INSERT,
                (meeting_id, document_name, document_path, next_sequence, remarks, file_size, file_type, uploaded_by),
            )
            return int(cur.lastrowid)

    def update(self, document: MeetingDocument) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE meeting_documents
                SET document_name=%s, document_path=%s, sequence=%s, remarks=%s,
                    file_size=%s, file_type=%s, uploaded_by=%s
                WHERE document_id=%s
                """,
                (
                    document.document_name,
                    document.document_path,
                    document.sequence,
                    document.remarks,
                    document.file_size,
                    document.file_type,
                    document.uploaded_by,
                    document.document_id,
                ),
            )
            return cur.rowcount > 0

    def reorder(self, meeting_id: int, order: Sequence[tuple[int, Decimal]]) -> int:
        matched = 0
        with db_cursor(self._conn_factory) as (_, cur):
            for document_id, sequence in order:
                cur.execute(
                    "UPDATE meeting_documents SET sequence=%s WHERE document_id=%s AND meeting_id=%s",
                    (sequence, document_id, meeting_id),
                )
                matched += cur.rowcount
        return matched

    def delete_by_id(self, document_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM meeting_documents WHERE document_id=%s", (document_id,))
            return cur.rowcount > 0

    def stats(self, meeting_id: int) -> DocumentStats:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(file_type, 'unknown') AS file_type, COUNT(*) AS cnt, COALESCE(SUM(file_size), 0) AS size
                FROM meeting_documents
                WHERE meeting_id=%s
                GROUP BY COALESCE(file_type, 'unknown')
                """,
                (meeting_id,),
            )
            rows = fetchall(cur)
        file_types = {r["file_type"]: int(r["cnt"]) for r in rows}
        return DocumentStats(
            total_documents=sum(file_types.values()),
            total_size=sum(int(r["size"]) for r in rows),
            file_types=file_types,
        )
