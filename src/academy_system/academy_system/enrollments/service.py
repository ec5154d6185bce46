from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..batches.repository import BatchRepository
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_ENROLLMENT_STATUS, MANAGER_ROLES
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import Enrollment
from .repository import EnrollmentRepository

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Use case: admins enroll students into batches."""

    def __init__(self, enrollments: EnrollmentRepository, users: UserRepository, batches: BatchRepository):
        self._enrollments = enrollments
        self._users = users
        self._batches = batches

    def enroll(
        self,
        *,
        current_role: Role,
        student_id,
        batch_id,
        enrollment_date: date,
        status: Optional[str] = None,
    ) -> Enrollment:
        if current_role not in MANAGER_ROLES:
            raise AuthorizationError("Only admins can create enrollments")

        if not student_id or not batch_id:
            raise ValidationError("studentId and batchId are required")
        student_id = require_positive_int(student_id, "studentId")
        batch_id = require_positive_int(batch_id, "batchId")

        student = self._users.get_by_id(student_id)
        if not student or student.role != Role.STUDENT:
            raise NotFoundError("Student not found")
        if not student.is_active:
            raise ValidationError("Student account is inactive")

        batch = self._batches.get_by_id(batch_id)
        if not batch:
            raise NotFoundError("Batch not found")

        if self._enrollments.get(student_id=student_id, batch_id=batch_id):
            raise ValidationError("Student is already enrolled in this batch")

        if batch.max_capacity and self._enrollments.count_for_batch(batch_id) >= batch.max_capacity:
            raise ValidationError(f"Batch has reached maximum capacity of {batch.max_capacity} students")

        status = (status or "").strip() or DEFAULT_ENROLLMENT_STATUS
        enrollment_id = self._enrollments.create(
            student_id=student_id,
            batch_id=batch_id,
            enrollment_date=enrollment_date,
            status=status,
        )
        logger.info("Enrollment created: studentId=%s, batchId=%s", student_id, batch_id)

        return Enrollment(
            enrollment_id=enrollment_id,
            student_id=student_id,
            batch_id=batch_id,
            enrollment_date=enrollment_date,
            status=status,
        )
