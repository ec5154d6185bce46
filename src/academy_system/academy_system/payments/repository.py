from __future__ import annotations

from typing import Protocol, Sequence

from .model import PendingPayment


class PaymentRepository(Protocol):
    def list_pending_for_students(self, student_ids: Sequence[int]) -> Sequence[PendingPayment]:
        raise NotImplementedError
