from pathlib import Path

from src.college_attendance.college_attendance.database.bootstrap import _strip_create_db_and_use, iter_sql_statements

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def test_splits_on_semicolons_outside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); -- note; here\nSELECT \"x;y\";\nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'SELECT "x;y"',
        "SELECT 1",
    ]


def test_escaped_quote_does_not_end_string():
    assert list(iter_sql_statements("SELECT 'it\\'s; fine';")) == ["SELECT 'it\\'s; fine'"]


def test_strips_database_selection():
    sql = "CREATE DATABASE IF NOT EXISTS foo;\nUSE foo;\nCREATE TABLE t (id INT);"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_schema_declares_one_record_per_session_and_student():
    statements = list(iter_sql_statements((DATABASE_DIR / "schema.sql").read_text(encoding="utf-8")))
    attendance = [s for s in statements if "CREATE TABLE IF NOT EXISTS attendance" in s]

    assert len(attendance) == 1
    assert "UNIQUE KEY uq_attendance_session_student (session_id, student_id)" in attendance[0]


def test_schema_tables_are_the_ones_the_app_reads():
    statements = list(iter_sql_statements((DATABASE_DIR / "schema.sql").read_text(encoding="utf-8")))
    tables = {s.split()[5] for s in statements if s.upper().startswith("CREATE TABLE IF NOT EXISTS")}

    assert tables == {"users", "levels", "courses", "units", "enrollments", "unit_sessions", "attendance"}
