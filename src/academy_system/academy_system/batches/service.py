from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import parse_date_prefix
from ..common.validators import require_non_empty
from ..core.constants import MANAGER_ROLES
from ..core.enums import BatchMode, Role
from ..core.exceptions import (
    AuthorizationError,
    DataIntegrityError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from ..enrollments.repository import EnrollmentRepository
from ..payments.repository import PaymentRepository
from ..sessions.repository import SessionRepository
from ..students.repository import StudentRepository
from .eligibility.engine import CandidateEligibilityEngine
from .model import Batch, BatchSchedule
from .repository import BatchRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewBatch:
    title: str
    software: Optional[str]
    mode: BatchMode
    start_date: date
    end_date: date
    max_capacity: int
    schedule: Optional[BatchSchedule]
    status: Optional[str]


class BatchService:
    def __init__(
        self,
        batches: BatchRepository,
        students: StudentRepository,
        payments: PaymentRepository,
        enrollments: EnrollmentRepository,
        sessions: SessionRepository,
        *,
        engine: Optional[CandidateEligibilityEngine] = None,
    ):
        self._batches = batches
        self._students = students
        self._payments = payments
        self._enrollments = enrollments
        self._sessions = sessions
        self._engine = engine or CandidateEligibilityEngine()

    def get_batch(self, batch_id: int) -> Batch:
        batch = self._batches.get_by_id(int(batch_id))
        if not batch:
            raise NotFoundError("Batch not found")
        return batch

    def list_batches(self) -> list[dict]:
        out = []
        for batch, enrolled in self._batches.list_with_enrollment_counts():
            item = batch.to_dict()
            item["currentEnrollment"] = enrolled
            out.append(item)
        return out

    def list_enrollments(self, batch_id: int) -> list[dict]:
        self.get_batch(batch_id)
        return list(self._enrollments.list_batch_roster(int(batch_id)))

    @staticmethod
    def parse_new_batch(payload: dict[str, Any]) -> NewBatch:
        """Validate a create-batch request body."""

        missing = [k for k in ("title", "mode", "startDate", "endDate", "maxCapacity") if not payload.get(k)]
        if missing:
            raise ValidationError("Title, mode, startDate, endDate, and maxCapacity are required")

        try:
            mode = BatchMode(payload["mode"])
        except ValueError:
            allowed = ", ".join(m.value for m in BatchMode)
            raise ValidationError(f"Invalid mode. Allowed values: {allowed}")

        try:
            start = parse_date_prefix(str(payload["startDate"]))
            end = parse_date_prefix(str(payload["endDate"]))
        except ValueError:
            raise ValidationError("Invalid date format")
        if start >= end:
            raise ValidationError("Start date must be before end date")

        try:
            capacity = int(payload["maxCapacity"])
        except (TypeError, ValueError):
            raise ValidationError("Max capacity must be a number")
        if capacity < 1:
            raise ValidationError("Max capacity must be at least 1")

        try:
            schedule = BatchSchedule.from_json(payload.get("schedule") or None)
        except DataIntegrityError as e:
            raise ValidationError(f"Invalid schedule: {e}")

        software = payload.get("software")
        return NewBatch(
            title=require_non_empty(payload["title"], "Title"),
            software=(str(software).strip() or None) if software else None,
            mode=mode,
            start_date=start,
            end_date=end,
            max_capacity=capacity,
            schedule=schedule,
            status=payload.get("status") or None,
        )

    def create_batch(self, *, current_role: Role, admin_user_id: int, payload: dict[str, Any]) -> Batch:
        if current_role not in MANAGER_ROLES:
            raise AuthorizationError("Only admins can create batches")

        new = self.parse_new_batch(payload)
        batch_id = self._batches.create(
            title=new.title,
            software=new.software,
            mode=new.mode,
            start_date=new.start_date,
            end_date=new.end_date,
            max_capacity=new.max_capacity,
            schedule=new.schedule,
            status=new.status,
            created_by=int(admin_user_id),
        )
        logger.info("Batch created: batch_id=%s title=%r", batch_id, new.title)
        return self.get_batch(batch_id)

    def suggest_candidates(self, batch_id: int, *, today: date) -> dict:
        """Rank active students who could be enrolled into the batch."""

        batch = self.get_batch(batch_id)
        if not (batch.software or "").strip():
            raise PreconditionError("Batch must have software specified to suggest candidates")

        candidates = [c for c in self._students.list_active_candidates() if c.has_software(batch.software)]
        student_ids = [c.student_id for c in candidates]

        payments = self._payments.list_pending_for_students(student_ids) if student_ids else []
        enrollments = self._enrollments.list_for_students(student_ids) if student_ids else []
        sessions = (
            self._sessions.list_in_range_with_members(
                start=batch.start_date,
                end=batch.end_date,
                student_ids=student_ids,
            )
            if student_ids
            else []
        )

        ranked = self._engine.evaluate(batch, candidates, payments, enrollments, sessions, today)
        logger.info("Suggested candidates for batch_id=%s: total=%s summary=%s", batch.batch_id, ranked.total_count, ranked.summary)

        result = ranked.to_dict()
        result["batch"] = {
            "id": batch.batch_id,
            "title": batch.title,
            "software": batch.software,
            "startDate": batch.start_date.isoformat(),
            "endDate": batch.end_date.isoformat(),
            "schedule": batch.schedule.to_json() if batch.schedule else None,
        }
        return result
