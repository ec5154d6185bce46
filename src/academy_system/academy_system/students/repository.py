from __future__ import annotations

from typing import Protocol, Sequence

from .model import Candidate


class StudentRepository(Protocol):
    def list_active_candidates(self) -> Sequence[Candidate]:
        """Active students that have a profile, in id order."""

        raise NotImplementedError
