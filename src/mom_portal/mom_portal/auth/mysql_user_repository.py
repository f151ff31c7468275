from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import UserRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, integrity_guard
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, name, email, password_hash, mobile_no, role, is_active, last_login, created, modified"


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=UserRole(row["role"]),
        mobile_no=row.get("mobile_no"),
        is_active=bool(row.get("is_active", True)),
        last_login=row.get("last_login"),
        created=row.get("created"),
        modified=row.get("modified"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: UserRole,
        mobile_no: Optional[str],
    ) -> int:
        with integrity_guard(duplicate="User with this email already exists"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(name, email, password_hash, role, mobile_no, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (name, email, password_hash, role.value, mobile_no),
            )
            return int(cur.lastrowid)

    def update_profile(self, user_id: int, *, name: str, email: str) -> bool:
        with integrity_guard(duplicate="Email already in use"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET name=%s, email=%s WHERE user_id=%s", (name, email, user_id))
            return cur.rowcount > 0

    def set_password_hash(self, user_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, user_id))
            return cur.rowcount > 0

    def touch_last_login(self, user_id: int, at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET last_login=%s WHERE user_id=%s", (at, user_id))
