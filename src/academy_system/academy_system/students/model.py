from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..core.exceptions import DataIntegrityError


def normalize_software_list(value: Any, *, student_id: int) -> Tuple[str, ...]:
    """Validate a decoded `software_list` JSON value into an ordered tuple of tags."""

    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(s, str) for s in value):
        raise DataIntegrityError(f"Invalid software list for student {student_id}")
    return tuple(s.strip() for s in value if s.strip())


@dataclass(frozen=True)
class Candidate:
    """Read-model: an active student as seen by batch candidate suggestion."""

    student_id: int
    name: str
    email: str
    phone: Optional[str]
    software_list: Tuple[str, ...] = ()

    def has_software(self, software: str) -> bool:
        wanted = software.strip().lower()
        return any(s.strip().lower() == wanted for s in self.software_list)
