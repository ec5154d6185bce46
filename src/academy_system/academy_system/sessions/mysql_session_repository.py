from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import coerce_date
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, normalize_mysql_time
from .model import ScheduledSession
from .repository import SessionRepository


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_in_range_with_members(
        self,
        *,
        start: date,
        end: date,
        student_ids: Sequence[int],
    ) -> Sequence[ScheduledSession]:
        ids = [int(i) for i in student_ids]

        params: list[object] = []
        if ids:
            member_join = f"LEFT JOIN enrollments e ON e.batch_id = s.batch_id AND e.student_id IN ({in_clause(ids)})"
            params.extend(ids)
        else:
            member_join = "LEFT JOIN enrollments e ON FALSE"
        params.extend([start, end])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.id, s.batch_id, s.date, s.start_time, s.end_time, e.student_id
                FROM sessions s
                {member_join}
                WHERE s.date BETWEEN %s AND %s
                ORDER BY s.date, s.id
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        # One row per (session, member); fold back into sessions keeping date order.
        sessions: dict[int, dict] = {}
        for r in rows:
            sid = int(r["id"])
            item = sessions.get(sid)
            if item is None:
                item = {
                    "batch_id": int(r["batch_id"]),
                    "session_date": coerce_date(r["date"], "session date"),
                    "start_time": normalize_mysql_time(r.get("start_time")),
                    "end_time": normalize_mysql_time(r.get("end_time")),
                    "members": set(),
                }
                sessions[sid] = item
            if r.get("student_id") is not None:
                item["members"].add(int(r["student_id"]))

        return [
            ScheduledSession(
                session_id=sid,
                batch_id=item["batch_id"],
                session_date=item["session_date"],
                start_time=item["start_time"],
                end_time=item["end_time"],
                member_ids=frozenset(item["members"]),
            )
            for sid, item in sessions.items()
        ]
