from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    FACULTY = "faculty"
    STUDENT = "student"
    EMPLOYEE = "employee"


class BatchMode(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    HYBRID = "hybrid"


class CandidateStatus(str, Enum):
    """Enrollment eligibility of a student for a given batch."""

    AVAILABLE = "available"
    BUSY = "busy"
    FEES_OVERDUE = "fees_overdue"
