from __future__ import annotations

from datetime import date, datetime, time

from ..core.exceptions import DataIntegrityError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_date_prefix(value: str) -> date:
    """Parse YYYY-MM-DD, optionally followed by a time part after "T" or a space."""
    value = value.strip()
    if len(value) > 10 and value[10] not in "T ":
        raise ValueError(f"unexpected text after date: {value!r}")
    return parse_iso_date(value[:10])


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value, "%H:%M").time()


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier. Services never call it;
    the reference date is always passed in by the controller.
    """
    return date.today()


def coerce_date(value, field_name: str) -> date:
    """Interpret a stored date value at day granularity.

    Accepts date, datetime and ISO strings (a time part is ignored).
    Anything else raises DataIntegrityError instead of being skipped.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_date_prefix(value)
        except ValueError:
            pass
    raise DataIntegrityError(f"Invalid {field_name}: {value!r}")
