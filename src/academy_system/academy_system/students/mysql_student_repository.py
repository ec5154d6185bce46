from __future__ import annotations

import logging
from typing import Sequence

from ..core.exceptions import DataIntegrityError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, load_json_column
from .model import Candidate, normalize_software_list
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_candidates(self) -> Sequence[Candidate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.id, u.name, u.email, u.phone, sp.software_list
                FROM users u
                JOIN student_profiles sp ON sp.user_id = u.id
                WHERE u.role='student' AND u.is_active=1
                ORDER BY u.id
                """
            )
            rows = fetchall(cur)

        out: list[Candidate] = []
        for r in rows:
            student_id = int(r["id"])
            try:
                software = normalize_software_list(
                    load_json_column(r.get("software_list"), "student_profiles.software_list"),
                    student_id=student_id,
                )
            except DataIntegrityError as e:
                # A broken profile matches no software; it must not hide the rest of the pool.
                logger.warning("Ignoring software list of student_id=%s: %s", student_id, e)
                software = ()
            out.append(
                Candidate(
                    student_id=student_id,
                    name=r["name"],
                    email=r["email"],
                    phone=r.get("phone"),
                    software_list=software,
                )
            )
        return out
