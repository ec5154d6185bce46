from __future__ import annotations

import json
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..core.enums import BatchMode
from ..core.exceptions import DataIntegrityError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column
from .model import Batch, BatchSchedule
from .repository import BatchRepository

_BATCH_COLUMNS = "b.id, b.title, b.software, b.mode, b.start_date, b.end_date, b.max_capacity, b.schedule, b.status, b.created_by_admin_id"


def _to_batch(row: dict) -> Batch:
    try:
        mode = BatchMode(row["mode"])
    except ValueError:
        raise DataIntegrityError(f"Invalid mode for batch {row['id']}: {row['mode']!r}")

    return Batch(
        batch_id=int(row["id"]),
        title=row["title"],
        software=row.get("software") or None,
        mode=mode,
        start_date=coerce_date(row["start_date"], "batch start date"),
        end_date=coerce_date(row["end_date"], "batch end date"),
        max_capacity=int(row["max_capacity"]),
        schedule=BatchSchedule.from_json(load_json_column(row.get("schedule"), "batches.schedule")),
        status=row.get("status"),
        created_by=row.get("created_by_admin_id"),
    )


class MySQLBatchRepository(BatchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, batch_id: int) -> Optional[Batch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_BATCH_COLUMNS} FROM batches b WHERE b.id=%s", (int(batch_id),))
            row = fetchone(cur)
            return _to_batch(row) if row else None

    def list_with_enrollment_counts(self) -> Sequence[tuple[Batch, int]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_BATCH_COLUMNS}, COUNT(e.id) AS enrolled
                FROM batches b
                LEFT JOIN enrollments e ON e.batch_id = b.id
                GROUP BY b.id
                ORDER BY b.created_at DESC, b.id DESC
                """
            )
            rows = fetchall(cur)
            return [(_to_batch(r), int(r["enrolled"])) for r in rows]

    def create(
        self,
        *,
        title: str,
        software: Optional[str],
        mode: BatchMode,
        start_date: date,
        end_date: date,
        max_capacity: int,
        schedule: Optional[BatchSchedule],
        status: Optional[str],
        created_by: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO batches(title, software, mode, start_date, end_date, max_capacity, schedule, status, created_by_admin_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    title,
                    software,
                    mode.value,
                    start_date,
                    end_date,
                    int(max_capacity),
                    json.dumps(schedule.to_json()) if schedule else None,
                    status,
                    created_by,
                ),
            )
            return int(cur.lastrowid)
