from __future__ import annotations

from typing import Optional

from ....common.datetime_utils import coerce_date
from ....core.enums import CandidateStatus
from ....students.model import Candidate
from ..model import ConflictingBatch, EligibilityDecision
from .base import EligibilityContext, EligibilityRule


class ScheduleConflictRule(EligibilityRule):
    """A student is busy when another commitment overlaps the target batch.

    Two independent checks:
    - an enrollment in a different, still running batch whose date range
      overlaps the target range (touching endpoints count);
    - membership in a session of a different batch dated inside the target
      range. The session's batch status is not looked at here.
    """

    def evaluate(self, candidate: Candidate, context: EligibilityContext) -> Optional[EligibilityDecision]:
        batches = []
        for enrollment in context.enrollments_by_student.get(candidate.student_id, ()):
            if enrollment.batch_id == context.batch_id:
                continue
            if not enrollment.batch_is_active:
                continue
            other_start = coerce_date(enrollment.batch_start, "batch start date")
            other_end = coerce_date(enrollment.batch_end, "batch end date")
            if context.start_date <= other_end and context.end_date >= other_start:
                batches.append(
                    ConflictingBatch(
                        batch_id=enrollment.batch_id,
                        title=enrollment.batch_title,
                        start_date=other_start,
                        end_date=other_end,
                    )
                )

        sessions = 0
        for session in context.sessions:
            if session.batch_id == context.batch_id or candidate.student_id not in session.member_ids:
                continue
            if context.start_date <= coerce_date(session.session_date, "session date") <= context.end_date:
                sessions += 1

        if not batches and not sessions:
            return None

        details = []
        if batches:
            details.append(f"{len(batches)} batch(es)")
        if sessions:
            details.append(f"{sessions} session(s)")

        return EligibilityDecision(
            status=CandidateStatus.BUSY,
            message=f"Busy - {', '.join(details)}",
            conflicting_batches=tuple(batches),
            conflicting_sessions=sessions,
        )
