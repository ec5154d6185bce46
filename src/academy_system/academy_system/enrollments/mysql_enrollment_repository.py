from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Enrollment, ExistingEnrollment
from .repository import EnrollmentRepository


class MySQLEnrollmentRepository(EnrollmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_students(self, student_ids: Sequence[int]) -> Sequence[ExistingEnrollment]:
        ids = [int(i) for i in student_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.student_id, b.id AS batch_id, b.title, b.status, b.start_date, b.end_date
                FROM enrollments e
                JOIN batches b ON b.id = e.batch_id
                WHERE e.student_id IN ({in_clause(ids)})
                ORDER BY e.student_id, b.start_date
                """,
                tuple(ids),
            )
            rows = fetchall(cur)

        return [
            ExistingEnrollment(
                student_id=int(r["student_id"]),
                batch_id=int(r["batch_id"]),
                batch_title=r["title"],
                batch_status=r.get("status"),
                batch_start=coerce_date(r["start_date"], "batch start date"),
                batch_end=coerce_date(r["end_date"], "batch end date"),
            )
            for r in rows
        ]

    def list_batch_roster(self, batch_id: int) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT e.id, e.enrollment_date, e.status, u.id AS student_id, u.name, u.email, u.phone
                FROM enrollments e
                JOIN users u ON u.id = e.student_id
                WHERE e.batch_id=%s AND u.role='student' AND u.is_active=1
                ORDER BY e.enrollment_date DESC, e.id DESC
                """,
                (int(batch_id),),
            )
            rows = fetchall(cur)

        return [
            {
                "id": int(r["id"]),
                "enrollmentDate": r["enrollment_date"].isoformat(),
                "status": r.get("status"),
                "student": {
                    "id": int(r["student_id"]),
                    "name": r["name"],
                    "email": r["email"],
                    "phone": r.get("phone"),
                },
            }
            for r in rows
        ]

    def get(self, *, student_id: int, batch_id: int) -> Optional[Enrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, student_id, batch_id, enrollment_date, status
                FROM enrollments
                WHERE student_id=%s AND batch_id=%s
                """,
                (int(student_id), int(batch_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Enrollment(
                enrollment_id=int(r["id"]),
                student_id=int(r["student_id"]),
                batch_id=int(r["batch_id"]),
                enrollment_date=r["enrollment_date"],
                status=r.get("status"),
            )

    def count_for_batch(self, batch_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM enrollments WHERE batch_id=%s", (int(batch_id),))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def create(self, *, student_id: int, batch_id: int, enrollment_date: date, status: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO enrollments(student_id, batch_id, enrollment_date, status)
                VALUES(%s,%s,%s,%s)
                """,
                (int(student_id), int(batch_id), enrollment_date, status),
            )
            return int(cur.lastrowid)
