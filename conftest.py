from __future__ import annotations

from datetime import date

import pytest


@pytest.fixture
def today() -> date:
    """Reference date used by eligibility tests (day after the overdue cut-off examples)."""
    return date(2024, 3, 5)
