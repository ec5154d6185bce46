from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import coerce_date
from ..common.validators import parse_amount
from ..core.constants import PENDING_PAYMENT_STATUS
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import PendingPayment
from .repository import PaymentRepository


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_pending_for_students(self, student_ids: Sequence[int]) -> Sequence[PendingPayment]:
        ids = [int(i) for i in student_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT student_id, amount, due_date, status
                FROM payment_transactions
                WHERE status=%s AND student_id IN ({in_clause(ids)})
                ORDER BY student_id, due_date
                """,
                (PENDING_PAYMENT_STATUS, *ids),
            )
            rows = fetchall(cur)

        return [
            PendingPayment(
                student_id=int(r["student_id"]),
                amount=parse_amount(r["amount"]),
                due_date=coerce_date(r["due_date"], "payment due date"),
                status=r["status"],
            )
            for r in rows
        ]
