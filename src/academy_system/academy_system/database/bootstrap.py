from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)


def _connection(db_config: dict, *, with_database: bool = True):
    return DatabaseConnection(DBConfig.from_dict(db_config)).connect(with_database=with_database)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql must work whatever the configured database name is.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    return re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ';' outside of quoted strings and `--` comments."""

    buf: list[str] = []
    quote = ""
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            buf.append(ch)
            if ch == "\\" and i + 1 < len(sql):
                buf.append(sql[i + 1])
                i += 1
            elif ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
            buf.append(ch)
        elif sql.startswith("--", i):
            end = sql.find("\n", i)
            i = len(sql) if end == -1 else end
            continue
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
        else:
            buf.append(ch)
        i += 1

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_script(db_config: dict, statements: Iterable[str]) -> None:
    conn = _connection(db_config)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connection(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    _exec_script(db_config, _iter_sql_statements(sql))
    logger.info("Applied schema %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(seed_path).read_text(encoding="utf-8"))
    _exec_script(db_config, _iter_sql_statements(sql))
    logger.info("Applied seed %s", seed_path)


DEMO_USERS = (
    # name, email, password, role, software list (students only)
    ("Admin Demo", "admin@academy.local", "admin123", "admin", None),
    ("Faculty Demo", "faculty@academy.local", "faculty123", "faculty", None),
    ("Student One", "student1@academy.local", "student123", "student", ["Photoshop", "Illustrator"]),
    ("Student Two", "student2@academy.local", "student123", "student", ["photoshop"]),
    ("Student Three", "student3@academy.local", "student123", "student", ["Blender"]),
)


def ensure_demo_users(db_config: dict) -> None:
    """Create or refresh the demo accounts (idempotent)."""

    conn = _connection(db_config)
    try:
        cur = conn.cursor(dictionary=True)
        for name, email, password, role, software in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM users WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                user_id = int(existing["id"])
                cur.execute(
                    "UPDATE users SET name=%s, password_hash=%s, role=%s, is_active=1 WHERE id=%s",
                    (name, password_hash, role, user_id),
                )
            else:
                cur.execute(
                    "INSERT INTO users (name, email, password_hash, role, is_active) VALUES (%s, %s, %s, %s, 1)",
                    (name, email, password_hash, role),
                )
                user_id = int(cur.lastrowid)

            if role == "student":
                cur.execute(
                    """
                    INSERT INTO student_profiles (user_id, software_list)
                    VALUES (%s, %s)
                    ON DUPLICATE KEY UPDATE software_list=VALUES(software_list)
                    """,
                    (user_id, json.dumps(software or [])),
                )
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo users ready (%d accounts)", len(DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    conn = _connection(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
