from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import ScheduledSession


class SessionRepository(Protocol):
    def list_in_range_with_members(
        self,
        *,
        start: date,
        end: date,
        student_ids: Sequence[int],
    ) -> Sequence[ScheduledSession]:
        """Sessions dated within [start, end] (inclusive), each carrying which
        of `student_ids` are enrolled in the session's batch."""

        raise NotImplementedError
