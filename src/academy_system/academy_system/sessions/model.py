from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class ScheduledSession:
    """Domain entity: one class meeting of a batch.

    `member_ids` holds the students enrolled in the owning batch (restricted
    to whichever students the caller asked about).
    """

    session_id: int
    batch_id: int
    session_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    member_ids: FrozenSet[int] = field(default_factory=frozenset)
