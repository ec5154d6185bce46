from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.academy_system.academy_system.batches.model import Batch
from src.academy_system.academy_system.batches.service import BatchService
from src.academy_system.academy_system.core.enums import BatchMode, Role
from src.academy_system.academy_system.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from src.academy_system.academy_system.enrollments.model import ExistingEnrollment
from src.academy_system.academy_system.payments.model import PendingPayment
from src.academy_system.academy_system.sessions.model import ScheduledSession
from src.academy_system.academy_system.students.model import Candidate


class FakeBatchRepo:
    def __init__(self, batches=()):
        self._batches = {b.batch_id: b for b in batches}
        self.created = None

    def get_by_id(self, batch_id):
        return self._batches.get(int(batch_id))

    def list_with_enrollment_counts(self):
        return [(b, 2) for b in self._batches.values()]

    def create(self, **kwargs):
        self.created = kwargs
        batch_id = max(self._batches, default=0) + 1
        self._batches[batch_id] = Batch(
            batch_id=batch_id,
            title=kwargs["title"],
            software=kwargs["software"],
            mode=kwargs["mode"],
            start_date=kwargs["start_date"],
            end_date=kwargs["end_date"],
            max_capacity=kwargs["max_capacity"],
            schedule=kwargs["schedule"],
            status=kwargs["status"],
            created_by=kwargs["created_by"],
        )
        return batch_id


class FakeStudentRepo:
    def __init__(self, candidates):
        self._candidates = list(candidates)

    def list_active_candidates(self):
        return list(self._candidates)


class RecordingRepo:
    """Payments / enrollments / sessions fake that remembers which ids were asked for."""

    def __init__(self, items=()):
        self._items = list(items)
        self.asked = []

    def list_pending_for_students(self, student_ids):
        self.asked.append(list(student_ids))
        return [p for p in self._items if p.student_id in student_ids]

    def list_for_students(self, student_ids):
        self.asked.append(list(student_ids))
        return [e for e in self._items if e.student_id in student_ids]

    def list_batch_roster(self, batch_id):
        return [{"id": 1, "student": {"id": 7}}]

    def list_in_range_with_members(self, *, start, end, student_ids):
        self.asked.append((start, end, list(student_ids)))
        return list(self._items)


def photoshop_batch(**overrides) -> Batch:
    values = dict(
        batch_id=1,
        title="Photoshop March",
        software="Photoshop",
        mode=BatchMode.OFFLINE,
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 31),
        max_capacity=10,
    )
    values.update(overrides)
    return Batch(**values)


def make_service(batches=(), candidates=(), payments=(), enrollments=(), sessions=()):
    repos = {
        "batches": FakeBatchRepo(batches),
        "students": FakeStudentRepo(candidates),
        "payments": RecordingRepo(payments),
        "enrollments": RecordingRepo(enrollments),
        "sessions": RecordingRepo(sessions),
    }
    return BatchService(**repos), repos


def test_suggest_candidates_builds_full_response(today):
    candidates = [
        Candidate(1, "Asha", "asha@x.io", None, ("photoshop",)),
        Candidate(2, "Bala", "bala@x.io", "98", ("Photoshop",)),
        Candidate(3, "Chitra", "chitra@x.io", "97", ("Photoshop", "Illustrator")),
        Candidate(4, "Dev", "dev@x.io", "96", ("Blender",)),
    ]
    svc, repos = make_service(
        batches=[photoshop_batch()],
        candidates=candidates,
        payments=[PendingPayment(2, Decimal("5000"), date(2024, 2, 1))],
        enrollments=[ExistingEnrollment(3, 2, "Illustrator", None, date(2024, 3, 15), date(2024, 4, 1))],
        sessions=[ScheduledSession(1, batch_id=2, session_date=date(2024, 3, 18), member_ids=frozenset({3}))],
    )

    data = svc.suggest_candidates(1, today=today)

    assert data["batch"] == {
        "id": 1,
        "title": "Photoshop March",
        "software": "Photoshop",
        "startDate": "2024-03-01",
        "endDate": "2024-03-31",
        "schedule": None,
    }
    assert [c["id"] for c in data["candidates"]] == [1, 3, 2]
    assert data["candidates"][0]["phone"] == "-"
    assert data["candidates"][1]["statusMessage"] == "Busy - 1 batch(es), 1 session(s)"
    assert data["totalCount"] == 3
    assert data["summary"] == {"available": 1, "busy": 1, "feesOverdue": 1}

    # Only the software-matching pool is fetched from the collaborators.
    assert repos["payments"].asked == [[1, 2, 3]]
    assert repos["sessions"].asked == [(date(2024, 3, 1), date(2024, 3, 31), [1, 2, 3])]


def test_suggest_candidates_unknown_batch_is_not_found(today):
    svc, _ = make_service()

    with pytest.raises(NotFoundError):
        svc.suggest_candidates(99, today=today)


def test_suggest_candidates_requires_software_before_fetching(today):
    svc, repos = make_service(batches=[photoshop_batch(software=None)], candidates=[Candidate(1, "A", "a@x", None, ("x",))])

    with pytest.raises(PreconditionError, match="Batch must have software specified to suggest candidates"):
        svc.suggest_candidates(1, today=today)

    assert repos["payments"].asked == []
    assert repos["enrollments"].asked == []


def test_suggest_candidates_with_empty_pool_skips_lookups(today):
    svc, repos = make_service(batches=[photoshop_batch()], candidates=[Candidate(1, "A", "a@x", None, ("Maya",))])

    data = svc.suggest_candidates(1, today=today)

    assert data["candidates"] == []
    assert data["summary"] == {"available": 0, "busy": 0, "feesOverdue": 0}
    assert repos["sessions"].asked == []


def test_create_batch_persists_validated_fields():
    svc, repos = make_service()

    batch = svc.create_batch(
        current_role=Role.ADMIN,
        admin_user_id=5,
        payload={
            "title": " Photoshop April ",
            "software": "Photoshop",
            "mode": "hybrid",
            "startDate": "2024-04-01",
            "endDate": "2024-04-30T00:00:00.000Z",
            "maxCapacity": "12",
            "schedule": {"Monday": {"startTime": "10:00", "endTime": "12:00"}},
        },
    )

    assert batch.title == "Photoshop April"
    assert batch.mode == BatchMode.HYBRID
    assert batch.end_date == date(2024, 4, 30)
    assert batch.max_capacity == 12
    assert batch.schedule.to_json() == {"Monday": {"startTime": "10:00", "endTime": "12:00"}}
    assert repos["batches"].created["created_by"] == 5


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"title": "T", "mode": "online", "startDate": "2024-04-01"}, "required"),
        ({"title": "T", "mode": "remote", "startDate": "2024-04-01", "endDate": "2024-05-01", "maxCapacity": 5}, "Invalid mode"),
        ({"title": "T", "mode": "online", "startDate": "01-04-2024", "endDate": "2024-05-01", "maxCapacity": 5}, "Invalid date format"),
        ({"title": "T", "mode": "online", "startDate": "2024-04-01garbage", "endDate": "2024-05-01", "maxCapacity": 5}, "Invalid date format"),
        ({"title": "T", "mode": "online", "startDate": "2024-05-01", "endDate": "2024-05-01", "maxCapacity": 5}, "Start date must be before end date"),
        ({"title": "T", "mode": "online", "startDate": "2024-04-01", "endDate": "2024-05-01", "maxCapacity": -3}, "at least 1"),
        (
            {"title": "T", "mode": "online", "startDate": "2024-04-01", "endDate": "2024-05-01", "maxCapacity": 5, "schedule": {"Mon": "10-12"}},
            "Invalid schedule",
        ),
    ],
)
def test_create_batch_rejects_invalid_payload(payload, message):
    svc, repos = make_service()

    with pytest.raises(ValidationError, match=message):
        svc.create_batch(current_role=Role.ADMIN, admin_user_id=1, payload=payload)
    assert repos["batches"].created is None


def test_faculty_cannot_create_batch():
    svc, _ = make_service()

    with pytest.raises(AuthorizationError):
        svc.create_batch(current_role=Role.FACULTY, admin_user_id=1, payload={})


def test_list_batches_adds_enrollment_count():
    svc, _ = make_service(batches=[photoshop_batch()])

    items = svc.list_batches()

    assert items[0]["currentEnrollment"] == 2
    assert items[0]["mode"] == "offline"


def test_list_enrollments_checks_batch_exists():
    svc, _ = make_service(batches=[photoshop_batch()])

    assert svc.list_enrollments(1) == [{"id": 1, "student": {"id": 7}}]
    with pytest.raises(NotFoundError):
        svc.list_enrollments(2)
