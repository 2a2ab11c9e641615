from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = (
    # (username, password, full_name, email, role)
    ("admin", "admin123", "Admin Demo", "admin@college.test", "admin"),
    ("teacher", "teacher123", "Teacher Demo", "teacher@college.test", "teacher"),
    ("student", "student123", "Student Demo", "student@college.test", "student"),
)

_SQL_TOKEN = re.compile(
    r"'(?:\\.|[^'\\])*'"  # single-quoted string
    r'|"(?:\\.|[^"\\])*"'  # double-quoted string
    r"|--[^\n]*"  # line comment
    r"|;"
    r"|[^'\";-]+"
    r"|.",
    re.S,
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema/seed script on top-level ';'.

    Quoted strings (with backslash escapes) are kept intact; `--` comments are dropped.
    """
    parts: list[str] = []
    for token in _SQL_TOKEN.findall(sql):
        if token.startswith("--"):
            continue
        if token == ";":
            stmt = "".join(parts).strip()
            parts = []
            if stmt:
                yield stmt
            continue
        parts.append(token)

    tail = "".join(parts).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> None:
    for stmt in iter_sql_statements(sql):
        cur.execute(stmt)


def _run_script(conn_factory: DatabaseConnection, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(DatabaseConnection(DBConfig.from_dict(db_config)), schema_path)
    logger.info("Applied schema %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(DatabaseConnection(DBConfig.from_dict(db_config)), seed_path)
    logger.info("Applied seed %s", seed_path)


def ensure_demo_users(db_config: dict) -> None:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor(dictionary=True)
        for username, password, full_name, email, role in DEMO_ACCOUNTS:
            cur.execute(
                """
                INSERT INTO users (username, password_hash, full_name, email, role)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    password_hash=VALUES(password_hash), full_name=VALUES(full_name),
                    email=VALUES(email), role=VALUES(role), is_active=1
                """,
                (username, generate_password_hash(password), full_name, email, role),
            )

        # Demo wiring: the student takes course 1, the teacher owns its units.
        cur.execute(
            """
            INSERT IGNORE INTO enrollments (student_id, course_id)
            SELECT user_id, 1 FROM users WHERE username='student'
            """
        )
        cur.execute(
            """
            UPDATE units SET teacher_id=(SELECT user_id FROM users WHERE username='teacher')
            WHERE teacher_id IS NULL
            """
        )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
