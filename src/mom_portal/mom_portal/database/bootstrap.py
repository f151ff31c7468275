"""Schema and seed loading for a fresh MySQL database.

Used by ``scripts/init_db.py``, ``scripts/seed_db.py`` and by ``create_app`` when
AUTO_INIT_DB / AUTO_SEED_DB are enabled.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, Optional

import mysql.connector
from werkzeug.security import generate_password_hash

from ..app_logger import get_logger
from .connection import DBConfig

log = get_logger("bootstrap")

DEMO_USERS = (
    ("Portal Admin", "admin@example.com", "admin123", "Admin"),
    ("Portal Convener", "convener@example.com", "convener123", "Convener"),
    ("Portal Staff", "staff@example.com", "staff123", "Staff"),
)

_CREATE_DB_RE = re.compile(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$")
_USE_DB_RE = re.compile(r"(?im)^\s*USE\b.*?;\s*$")
_LINE_COMMENT_RE = re.compile(r"(?m)^\s*--.*$")


def _server_connection(cfg: DBConfig, *, database: Optional[str]):
    return mysql.connector.connect(
        host=cfg.host,
        port=cfg.port,
        user=cfg.user,
        password=cfg.password,
        database=database,
        charset=cfg.charset,
        use_pure=True,
    )


def _prepare_script(sql: str) -> str:
    # The target database comes from settings, never from the script.
    for pattern in (_CREATE_DB_RE, _USE_DB_RE, _LINE_COMMENT_RE):
        sql = pattern.sub("", sql)
    return sql


def split_statements(sql: str) -> Iterator[str]:
    """Split on ';' outside quoted literals."""
    buf: list[str] = []
    quote: Optional[str] = None
    chars = iter(sql)
    for ch in chars:
        buf.append(ch)
        if ch == "\\" and quote:
            buf.append(next(chars, ""))
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt
    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: Path) -> int:
    cfg = DBConfig.from_dict(db_config)
    statements = list(split_statements(_prepare_script(path.read_text(encoding="utf-8"))))
    conn = _server_connection(cfg, database=cfg.database)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    return len(statements)


def ensure_database_exists(db_config: dict) -> None:
    cfg = DBConfig.from_dict(db_config)
    conn = _server_connection(cfg, database=None)
    try:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{cfg.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    log.info("Applied schema (%d statements)", _run_script(db_config, Path(schema_path)))


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    log.info("Applied seed data (%d statements)", _run_script(db_config, Path(seed_path)))


def ensure_demo_users(db_config: dict) -> None:
    """Upsert one login account per role so a fresh database is usable."""
    cfg = DBConfig.from_dict(db_config)
    conn = _server_connection(cfg, database=cfg.database)
    try:
        cur = conn.cursor()
        for name, email, password, role in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users (name, email, password_hash, role, is_active)
                VALUES (%s, %s, %s, %s, 1)
                ON DUPLICATE KEY UPDATE
                    name = VALUES(name),
                    password_hash = VALUES(password_hash),
                    role = VALUES(role),
                    is_active = 1
                """,
                (name, email, generate_password_hash(password), role),
            )
        conn.commit()
    finally:
        conn.close()
    log.info("Demo accounts ready: %s", ", ".join(u[1] for u in DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    cfg = DBConfig.from_dict(db_config)
    conn = _server_connection(cfg, database=cfg.database)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(str(row[0]) for row in cur.fetchall())
    finally:
        conn.close()
