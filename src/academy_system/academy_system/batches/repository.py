from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import BatchMode
from .model import Batch, BatchSchedule


class BatchRepository(Protocol):
    def get_by_id(self, batch_id: int) -> Optional[Batch]:
        raise NotImplementedError

    def list_with_enrollment_counts(self) -> Sequence[tuple[Batch, int]]:
        """All batches, newest first, each with its current enrollment count."""

        raise NotImplementedError

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
        """Returns batch_id."""

        raise NotImplementedError
