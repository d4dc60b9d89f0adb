"""Calendar-day helpers for final-payment due dates."""

from datetime import date, datetime
from typing import Optional


def parse_date(value) -> Optional[date]:
    """Coerce a stored due date into a calendar date.

    Accepts date/datetime objects and ISO strings ('2025-03-01',
    '2025-03-01T10:00:00'). Anything else, including empty and
    malformed values, is treated as "no date".
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def days_remaining(final_payment_date, today) -> Optional[int]:
    """Whole calendar days from today until the final-payment date.

    Positive = due in the future, 0 = due today, negative = past due.
    Returns None when there is no (usable) due date.
    """
    due = parse_date(final_payment_date)
    if due is None:
        return None
    return (due - parse_date(today)).days
