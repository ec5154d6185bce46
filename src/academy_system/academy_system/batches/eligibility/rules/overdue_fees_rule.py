from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ....common.datetime_utils import coerce_date
from ....common.validators import parse_amount
from ....core.constants import CURRENCY_SYMBOL, PENDING_PAYMENT_STATUS
from ....core.enums import CandidateStatus
from ....students.model import Candidate
from ..model import EligibilityDecision
from .base import EligibilityContext, EligibilityRule


class OverdueFeesRule(EligibilityRule):
    """Pending installments due strictly before `today` make a student ineligible."""

    def evaluate(self, candidate: Candidate, context: EligibilityContext) -> Optional[EligibilityDecision]:
        total = Decimal("0")
        for payment in context.payments_by_student.get(candidate.student_id, ()):
            if (payment.status or "").lower() != PENDING_PAYMENT_STATUS:
                continue
            amount = parse_amount(payment.amount, "payment amount")
            if coerce_date(payment.due_date, "payment due date") < context.today:
                total += amount

        if total <= 0:
            return None

        return EligibilityDecision(
            status=CandidateStatus.FEES_OVERDUE,
            message=f"Fees overdue ({CURRENCY_SYMBOL}{total:.2f})",
            overdue_total=total,
        )
