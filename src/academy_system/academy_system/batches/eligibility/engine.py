from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from ...common.datetime_utils import coerce_date
from ...core.constants import CANDIDATE_STATUS_ORDER, UNKNOWN_STATUS_ORDER
from ...core.enums import CandidateStatus
from ...core.exceptions import PreconditionError
from ...enrollments.model import ExistingEnrollment
from ...payments.model import PendingPayment
from ...sessions.model import ScheduledSession
from ...students.model import Candidate
from ..model import Batch
from .model import CandidateEvaluation, EligibilityDecision, RankedCandidateList
from .rules.base import EligibilityContext, EligibilityRule
from .rules.overdue_fees_rule import OverdueFeesRule
from .rules.schedule_conflict_rule import ScheduleConflictRule

AVAILABLE = EligibilityDecision(status=CandidateStatus.AVAILABLE, message="Available for enrollment")


def _group_by_student(items: Iterable) -> dict[int, list]:
    grouped: dict[int, list] = defaultdict(list)
    for item in items:
        grouped[int(item.student_id)].append(item)
    return grouped


class CandidateEligibilityEngine:
    """Rank students who could join a batch.

    Pure computation over pre-fetched snapshots: no I/O, no clock, no shared
    state. Candidates are filtered by software interest, classified by the
    first matching rule (overdue fees, then schedule conflicts), and stably
    sorted available < busy < fees_overdue.
    """

    def __init__(self, rules: Optional[Sequence[EligibilityRule]] = None):
        self._rules = tuple(rules) if rules is not None else (OverdueFeesRule(), ScheduleConflictRule())

    def evaluate(
        self,
        batch: Batch,
        candidates: Sequence[Candidate],
        pending_payments: Sequence[PendingPayment],
        existing_enrollments: Sequence[ExistingEnrollment],
        scheduled_sessions: Sequence[ScheduledSession],
        today: date,
    ) -> RankedCandidateList:
        software = (batch.software or "").strip()
        if not software:
            raise PreconditionError("Batch must have software specified to suggest candidates")

        context = EligibilityContext(
            batch_id=batch.batch_id,
            start_date=coerce_date(batch.start_date, "batch start date"),
            end_date=coerce_date(batch.end_date, "batch end date"),
            today=coerce_date(today, "reference date"),
            payments_by_student=_group_by_student(pending_payments),
            enrollments_by_student=_group_by_student(existing_enrollments),
            sessions=tuple(scheduled_sessions),
        )

        evaluations = [
            CandidateEvaluation(
                student_id=c.student_id,
                name=c.name,
                email=c.email,
                phone=c.phone,
                decision=self._decide(c, context),
            )
            for c in candidates
            if c.has_software(software)
        ]

        # sorted() is stable: equal statuses keep the candidate pool order.
        ranked = sorted(evaluations, key=lambda e: CANDIDATE_STATUS_ORDER.get(e.status, UNKNOWN_STATUS_ORDER))
        return RankedCandidateList(candidates=tuple(ranked))

    def _decide(self, candidate: Candidate, context: EligibilityContext) -> EligibilityDecision:
        for rule in self._rules:
            decision = rule.evaluate(candidate, context)
            if decision is not None:
                return decision
        return AVAILABLE
