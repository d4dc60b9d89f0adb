"""Payment status badges and action flags for preordered collectibles.

One rule set shared by the doll head, doll body and wardrobe views. The
final-payment date opens a payment window rather than closing it: a
deposit-only preorder is only flagged overdue once GRACE_PERIOD_DAYS have
passed since that date.
"""

from dataclasses import dataclass
from typing import Optional

from config import (
    COUNTDOWN_URGENT_DAYS,
    COUNTDOWN_WARNING_DAYS,
    DUE_SOON_DAYS,
    GRACE_PERIOD_DAYS,
)
from payment.dates import days_remaining
from payment.models import Collectible

LABEL_OWNED = "Owned / arrived"
LABEL_FULL_PAID = "Paid in full"
LABEL_DEPOSIT_PAID = "Deposit paid"
LABEL_DUE_SOON = "Final payment due soon"
LABEL_WINDOW_OPENS = "Final payment window opens today"
LABEL_GRACE = "In grace period, {days} days left"
LABEL_OVERDUE = "Overdue"

BADGE_OWNED = "status-badge-owned"
BADGE_PREORDER = "status-badge-preorder"
BADGE_WARNING = f"{BADGE_PREORDER} status-badge-warning"
BADGE_URGENT = f"{BADGE_PREORDER} status-badge-urgent"
BADGE_OVERDUE = f"{BADGE_PREORDER} status-badge-overdue"


@dataclass(frozen=True)
class StatusInfo:
    label: str
    css_class: str
    actionable: bool  # offer "mark paid" / arrival actions


@dataclass(frozen=True)
class Countdown:
    days: int
    text: str
    css_class: str  # 'countdown-urgent' | 'countdown-warning' | ''


def classify(item: Collectible, today) -> StatusInfo:
    """Badge label, css class and action flag for a collectible."""
    if item.ownership_status == "owned":
        return StatusInfo(LABEL_OWNED, BADGE_OWNED, False)

    if item.payment_status == "full_paid":
        return StatusInfo(LABEL_FULL_PAID, BADGE_PREORDER, True)

    days = days_remaining(item.final_payment_date, today)
    if days is None or days > DUE_SOON_DAYS:
        return StatusInfo(LABEL_DEPOSIT_PAID, BADGE_PREORDER, True)
    if days >= 1:
        return StatusInfo(LABEL_DUE_SOON, BADGE_WARNING, True)
    if days == 0:
        return StatusInfo(LABEL_WINDOW_OPENS, BADGE_URGENT, True)
    if days > -GRACE_PERIOD_DAYS:
        left = GRACE_PERIOD_DAYS + days
        return StatusInfo(LABEL_GRACE.format(days=left), BADGE_WARNING, True)
    return StatusInfo(LABEL_OVERDUE, BADGE_OVERDUE, True)


def arrival_eligible(item: Collectible, today) -> bool:
    """Whether to ask "has this arrived?".

    Either the item is fully paid and still on preorder, or the grace period
    has fully elapsed while only the deposit was paid. The second case can
    coincide with the Overdue badge; both are shown.
    """
    if item.payment_status == "full_paid":
        return item.ownership_status == "preorder"
    days = days_remaining(item.final_payment_date, today)
    return days is not None and days < -GRACE_PERIOD_DAYS


def can_mark_paid(item: Collectible, today) -> bool:
    return classify(item, today).actionable and item.payment_status == "deposit_only"


def countdown(item: Collectible, today) -> Optional[Countdown]:
    """Countdown line shown under the badge of an unpaid preorder."""
    if item.ownership_status != "preorder" or item.payment_status == "full_paid":
        return None
    days = days_remaining(item.final_payment_date, today)
    if days is None:
        return None

    if days > 0:
        text = f"{days} days left"
    elif days == 0:
        text = LABEL_WINDOW_OPENS
    elif days > -GRACE_PERIOD_DAYS:
        text = f"{GRACE_PERIOD_DAYS + days} days left in grace period"
    else:
        text = f"Overdue by {abs(days + GRACE_PERIOD_DAYS)} days"

    if days <= COUNTDOWN_URGENT_DAYS:
        css_class = "countdown-urgent"
    elif days <= COUNTDOWN_WARNING_DAYS:
        css_class = "countdown-warning"
    else:
        css_class = ""
    return Countdown(days=days, text=text, css_class=css_class)
