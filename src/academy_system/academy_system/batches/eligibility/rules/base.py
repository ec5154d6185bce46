from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional, Sequence

from ....enrollments.model import ExistingEnrollment
from ....payments.model import PendingPayment
from ....sessions.model import ScheduledSession
from ....students.model import Candidate
from ..model import EligibilityDecision


@dataclass(frozen=True)
class EligibilityContext:
    """Everything a rule may look at, already grouped by student where possible."""

    batch_id: int
    start_date: date
    end_date: date
    today: date
    payments_by_student: Mapping[int, Sequence[PendingPayment]]
    enrollments_by_student: Mapping[int, Sequence[ExistingEnrollment]]
    sessions: Sequence[ScheduledSession]


class EligibilityRule(ABC):
    """Strategy Pattern: one business rule that may claim a candidate's status.

    Rules run in precedence order; the first one returning a decision wins.
    """

    @abstractmethod
    def evaluate(self, candidate: Candidate, context: EligibilityContext) -> Optional[EligibilityDecision]:
        raise NotImplementedError
