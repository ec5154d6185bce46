from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Any, Optional, Tuple

from ..common.datetime_utils import parse_hhmm
from ..core.enums import BatchMode
from ..core.exceptions import DataIntegrityError


@dataclass(frozen=True)
class ScheduleSlot:
    day: str
    start_time: time
    end_time: time


@dataclass(frozen=True)
class BatchSchedule:
    """Weekly timetable of a batch, e.g. {"Monday": {"startTime": "10:00", "endTime": "12:00"}}."""

    slots: Tuple[ScheduleSlot, ...] = ()

    @classmethod
    def from_json(cls, value: Any) -> Optional["BatchSchedule"]:
        if value is None:
            return None
        if not isinstance(value, dict):
            raise DataIntegrityError("Batch schedule must be an object keyed by day")

        slots = []
        for day, times in value.items():
            try:
                slots.append(
                    ScheduleSlot(
                        day=str(day),
                        start_time=parse_hhmm(str(times["startTime"])[:5]),
                        end_time=parse_hhmm(str(times["endTime"])[:5]),
                    )
                )
            except (KeyError, TypeError, ValueError):
                raise DataIntegrityError(f"Invalid schedule entry for {day!r}")
        return cls(slots=tuple(slots))

    def to_json(self) -> dict:
        return {
            s.day: {"startTime": s.start_time.strftime("%H:%M"), "endTime": s.end_time.strftime("%H:%M")}
            for s in self.slots
        }


@dataclass(frozen=True)
class Batch:
    """Domain entity: a scheduled cohort of a course."""

    batch_id: int
    title: str
    software: Optional[str]
    mode: BatchMode
    start_date: date
    end_date: date
    max_capacity: int
    schedule: Optional[BatchSchedule] = None
    status: Optional[str] = None
    created_by: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.batch_id,
            "title": self.title,
            "software": self.software,
            "mode": self.mode.value,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "maxCapacity": self.max_capacity,
            "schedule": self.schedule.to_json() if self.schedule else None,
            "status": self.status,
            "createdByAdminId": self.created_by,
        }
