from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Enrollment, ExistingEnrollment


class EnrollmentRepository(Protocol):
    def list_for_students(self, student_ids: Sequence[int]) -> Sequence[ExistingEnrollment]:
        raise NotImplementedError

    def list_batch_roster(self, batch_id: int) -> Sequence[dict]:
        """Active students enrolled in a batch, newest enrollment first."""

        raise NotImplementedError

    def get(self, *, student_id: int, batch_id: int) -> Optional[Enrollment]:
        raise NotImplementedError

    def count_for_batch(self, batch_id: int) -> int:
        raise NotImplementedError

    def create(self, *, student_id: int, batch_id: int, enrollment_date: date, status: str) -> int:
        """Returns enrollment_id."""

        raise NotImplementedError
