from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone, placeholders
from .model import UnitSession
from .repository import SessionRepository

_COLUMNS = "session_id, unit_id, start_time, end_time, location, is_active"


def _to_session(r: dict) -> UnitSession:
    return UnitSession(
        session_id=int(r["session_id"]),
        unit_id=int(r["unit_id"]),
        start_time=r["start_time"],
        end_time=r["end_time"],
        location=r.get("location"),
        is_active=as_bool(r.get("is_active")),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[UnitSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM unit_sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_by_units(self, unit_ids: Iterable[int]) -> Sequence[UnitSession]:
        ids = [int(u) for u in unit_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM unit_sessions
                WHERE unit_id IN ({placeholders(len(ids))})
                ORDER BY start_time ASC
                """,
                tuple(ids),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def set_active(self, session_id: int, *, is_active: bool) -> Optional[UnitSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE unit_sessions SET is_active=%s WHERE session_id=%s",
                (1 if is_active else 0, int(session_id)),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM unit_sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None
