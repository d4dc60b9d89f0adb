"""Cross-category final-payment reminder queue."""

from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Iterable, Optional

from config import DUE_SOON_DAYS, GRACE_PERIOD_DAYS
from payment.dates import days_remaining
from payment.models import Collectible
from payment.status import LABEL_WINDOW_OPENS


class ReminderGroup(IntEnum):
    """Urgency groups, most urgent first."""

    OVERDUE = 1
    GRACE = 2
    DUE_TODAY = 3
    IMMINENT = 4
    NO_DATE = 5
    FUTURE = 6


@dataclass(frozen=True)
class Reminder:
    item: Collectible
    days_remaining: Optional[int]
    group: ReminderGroup

    @property
    def final_payment_date(self) -> Optional[date]:
        return self.item.final_payment_date


def reminder_group(days: Optional[int]) -> ReminderGroup:
    if days is None:
        return ReminderGroup.NO_DATE
    if days < -GRACE_PERIOD_DAYS:
        return ReminderGroup.OVERDUE
    if days < 0:
        return ReminderGroup.GRACE
    if days == 0:
        return ReminderGroup.DUE_TODAY
    if days <= DUE_SOON_DAYS:
        return ReminderGroup.IMMINENT
    return ReminderGroup.FUTURE


def reminder_rank(item: Collectible, today) -> tuple[int, int]:
    """Sort key for the reminder queue (ascending = most urgent).

    Items inside a dated group are ordered by days remaining; undated items
    tie, so a stable sort keeps their input order.
    """
    days = days_remaining(item.final_payment_date, today)
    return int(reminder_group(days)), days if days is not None else 0


def needs_reminder(item: Collectible) -> bool:
    return item.ownership_status == "preorder" and item.payment_status != "full_paid"


def build_reminder_queue(items: Iterable[Collectible], today) -> list[Reminder]:
    """Unresolved preorder payments, most urgent first."""
    pending = [item for item in items if needs_reminder(item)]
    pending.sort(key=lambda item: reminder_rank(item, today))
    reminders = []
    for item in pending:
        days = days_remaining(item.final_payment_date, today)
        reminders.append(Reminder(item=item, days_remaining=days, group=reminder_group(days)))
    return reminders


def reminder_status(reminder: Reminder) -> tuple[str, str]:
    """Status text and css class for a reminder card."""
    days = reminder.days_remaining
    if days is None:
        return "No final payment date set", "no-date"
    if days < -GRACE_PERIOD_DAYS:
        return f"Overdue by {abs(days + GRACE_PERIOD_DAYS)} days", "overdue"
    if days == 0:
        return LABEL_WINDOW_OPENS, "today"
    if days < 0:
        return f"{GRACE_PERIOD_DAYS + days} days left in grace period", "urgent"
    if days <= DUE_SOON_DAYS:
        return f"{days} days left", "urgent"
    return f"{days} days left", "normal"
