from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class PendingPayment:
    """Domain entity: an unpaid installment owed by a student."""

    student_id: int
    amount: Decimal
    due_date: date
    status: str = "pending"
