from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from ...core.constants import MISSING_PHONE
from ...core.enums import CandidateStatus


@dataclass(frozen=True)
class ConflictingBatch:
    batch_id: int
    title: str
    start_date: date
    end_date: date

    def to_dict(self) -> dict:
        return {
            "id": self.batch_id,
            "title": self.title,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
        }


@dataclass(frozen=True)
class EligibilityDecision:
    """Outcome of a single rule for a single candidate."""

    status: CandidateStatus
    message: str
    overdue_total: Decimal = Decimal("0")
    conflicting_batches: Tuple[ConflictingBatch, ...] = ()
    conflicting_sessions: int = 0


@dataclass(frozen=True)
class CandidateEvaluation:
    student_id: int
    name: str
    email: str
    phone: Optional[str]
    decision: EligibilityDecision

    @property
    def status(self) -> CandidateStatus:
        return self.decision.status

    def to_dict(self) -> dict:
        d = self.decision
        overdue = d.status == CandidateStatus.FEES_OVERDUE
        return {
            "id": self.student_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone or MISSING_PHONE,
            "status": d.status.value,
            "statusMessage": d.message,
            "hasOverdueFees": overdue,
            "totalOverdueAmount": float(d.overdue_total.quantize(Decimal("0.01"))) if overdue else 0,
            "conflictingBatches": [b.to_dict() for b in d.conflicting_batches],
            "conflictingSessionsCount": d.conflicting_sessions,
        }


@dataclass(frozen=True)
class RankedCandidateList:
    candidates: Tuple[CandidateEvaluation, ...] = field(default_factory=tuple)

    @property
    def total_count(self) -> int:
        return len(self.candidates)

    @property
    def summary(self) -> dict:
        counts = Counter(c.status for c in self.candidates)
        return {
            "available": counts[CandidateStatus.AVAILABLE],
            "busy": counts[CandidateStatus.BUSY],
            "feesOverdue": counts[CandidateStatus.FEES_OVERDUE],
        }

    def to_dict(self) -> dict:
        return {
            "candidates": [c.to_dict() for c in self.candidates],
            "totalCount": self.total_count,
            "summary": self.summary,
        }
