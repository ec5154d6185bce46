"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import CandidateStatus, Role

# Batch statuses that no longer occupy a student's calendar.
INACTIVE_BATCH_STATUSES = frozenset({"ended", "cancelled"})

PENDING_PAYMENT_STATUS = "pending"
DEFAULT_ENROLLMENT_STATUS = "active"

CURRENCY_SYMBOL = "₹"
MISSING_PHONE = "-"

# Ranking precedence for suggested candidates; unknown statuses sort last.
CANDIDATE_STATUS_ORDER = {
    CandidateStatus.AVAILABLE: 1,
    CandidateStatus.BUSY: 2,
    CandidateStatus.FEES_OVERDUE: 3,
}
UNKNOWN_STATUS_ORDER = 99

MANAGER_ROLES = frozenset({Role.SUPERADMIN, Role.ADMIN})
STAFF_VIEW_ROLES = frozenset({Role.SUPERADMIN, Role.ADMIN, Role.FACULTY})
