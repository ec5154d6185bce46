from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import INACTIVE_BATCH_STATUSES


@dataclass(frozen=True)
class Enrollment:
    """Domain entity: a student's membership in a batch."""

    enrollment_id: int
    student_id: int
    batch_id: int
    enrollment_date: date
    status: Optional[str] = None


@dataclass(frozen=True)
class ExistingEnrollment:
    """Read-model: an enrollment joined with the batch it belongs to.

    Used to detect calendar conflicts when suggesting candidates.
    """

    student_id: int
    batch_id: int
    batch_title: str
    batch_status: Optional[str]
    batch_start: date
    batch_end: date

    @property
    def batch_is_active(self) -> bool:
        """False once the batch has ended or been cancelled."""
        return (self.batch_status or "").lower() not in INACTIVE_BATCH_STATUSES
