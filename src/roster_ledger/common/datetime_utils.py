from __future__ import annotations

from datetime import date, datetime, timezone

from ..core.constants import ISO_DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def is_iso_date(value: object) -> bool:
    if not isinstance(value, str):
        return False
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True


def to_iso_date(value: date | str) -> str:
    """Normalize a date or YYYY-MM-DD string into the ledger's date key."""
    if isinstance(value, datetime):
        return value.date().strftime(ISO_DATE_FORMAT)
    if isinstance(value, date):
        return value.strftime(ISO_DATE_FORMAT)
    if is_iso_date(value):
        return parse_iso_date(value).strftime(ISO_DATE_FORMAT)
    raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def today_iso() -> str:
    return date.today().strftime(ISO_DATE_FORMAT)


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)
