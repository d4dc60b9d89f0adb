"""Payment-status engine for preordered collectibles."""

from payment.dates import days_remaining, parse_date
from payment.models import Collectible, CollectibleInput
from payment.reminders import (
    Reminder,
    ReminderGroup,
    build_reminder_queue,
    reminder_rank,
    reminder_status,
)
from payment.status import (
    Countdown,
    StatusInfo,
    arrival_eligible,
    can_mark_paid,
    classify,
    countdown,
)

__all__ = [
    "Collectible",
    "CollectibleInput",
    "Countdown",
    "Reminder",
    "ReminderGroup",
    "StatusInfo",
    "arrival_eligible",
    "build_reminder_queue",
    "can_mark_paid",
    "classify",
    "countdown",
    "days_remaining",
    "parse_date",
    "reminder_rank",
    "reminder_status",
]
