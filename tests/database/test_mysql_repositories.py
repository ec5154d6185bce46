from __future__ import annotations

import logging
from datetime import date, time, timedelta

from src.academy_system.academy_system.sessions.mysql_session_repository import MySQLSessionRepository
from src.academy_system.academy_system.students.mysql_student_repository import MySQLStudentRepository


class FakeCursor:
    def __init__(self, rows):
        self._rows = rows
        self.executed = []

    def execute(self, sql, params=None):
        self.executed.append((sql, params))

    def fetchall(self):
        return list(self._rows)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.committed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnFactory:
    """Stands in for DatabaseConnection; every connect() shares one canned cursor."""

    def __init__(self, rows):
        self.cursor = FakeCursor(rows)

    def connect(self, *, with_database=True):
        return FakeConnection(self.cursor)


def student_row(student_id, software_list):
    return {
        "id": student_id,
        "name": f"Student {student_id}",
        "email": f"s{student_id}@academy.local",
        "phone": None,
        "software_list": software_list,
    }


def test_malformed_software_list_only_drops_that_student(caplog):
    factory = FakeConnFactory(
        [
            student_row(1, '["Photoshop"]'),
            student_row(2, '"[\\"Blender\\"]"'),
            student_row(3, b'["Ph\xffotoshop"]'),
            student_row(4, "[Photoshop"),
            student_row(5, None),
        ]
    )

    with caplog.at_level(logging.WARNING):
        candidates = MySQLStudentRepository(factory).list_active_candidates()

    assert [c.student_id for c in candidates] == [1, 2, 3, 4, 5]
    assert candidates[0].software_list == ("Photoshop",)
    assert all(c.software_list == () for c in candidates[1:])
    assert not candidates[1].has_software("Blender")
    assert "student_id=2" in caplog.text
    assert "student_id=3" in caplog.text


def session_row(session_id, batch_id, on, student_id, start=None, end=None):
    return {
        "id": session_id,
        "batch_id": batch_id,
        "date": on,
        "start_time": start,
        "end_time": end,
        "student_id": student_id,
    }


def test_session_rows_fold_into_member_sets():
    factory = FakeConnFactory(
        [
            session_row(7, 20, date(2024, 3, 4), 3, start=timedelta(hours=10), end=timedelta(hours=12)),
            session_row(7, 20, date(2024, 3, 4), 4, start=timedelta(hours=10), end=timedelta(hours=12)),
            session_row(8, 21, date(2024, 3, 6), None),
            session_row(9, 20, "2024-03-11", 3),
        ]
    )

    sessions = MySQLSessionRepository(factory).list_in_range_with_members(
        start=date(2024, 3, 1),
        end=date(2024, 3, 31),
        student_ids=[3, 4],
    )

    assert [s.session_id for s in sessions] == [7, 8, 9]
    assert sessions[0].member_ids == frozenset({3, 4})
    assert (sessions[0].start_time, sessions[0].end_time) == (time(10, 0), time(12, 0))
    assert sessions[1].member_ids == frozenset()
    assert sessions[2].session_date == date(2024, 3, 11)

    _, params = factory.cursor.executed[0]
    assert params == (3, 4, date(2024, 3, 1), date(2024, 3, 31))
