"""Collection and payment-tracking configuration."""

import os

DB_PATH = os.environ.get("DOLL_DB_PATH", "doll_collection.db")

# Payment windows (days)
GRACE_PERIOD_DAYS = 30  # final-payment window after the due date
DUE_SOON_DAYS = 3  # "due soon" badge / imminent reminders
COUNTDOWN_URGENT_DAYS = 7
COUNTDOWN_WARNING_DAYS = 30

# Backups
BACKUP_DIR = os.environ.get("DOLL_BACKUP_DIR", "backups")
MAX_BACKUPS = 30  # keep the newest N backup files
BACKUP_INTERVAL_MINUTES = 60

OWNERSHIP_STATUSES = ("owned", "preorder")
PAYMENT_STATUSES = ("deposit_only", "full_paid")

WARDROBE_CATEGORIES = (
    "body_accessories",
    "eyes",
    "wigs",
    "headwear",
    "sets",
    "single_items",
    "handheld",
)

COLLECTIONS = {
    "doll_heads": {
        "name": "doll_heads",
        "display_name": "Doll head",
        "endpoint": "doll-heads",
    },
    "doll_bodies": {
        "name": "doll_bodies",
        "display_name": "Doll body",
        "endpoint": "doll-bodies",
    },
    "wardrobe_items": {
        "name": "wardrobe_items",
        "display_name": "Wardrobe",
        "endpoint": "wardrobe",
        "categories": WARDROBE_CATEGORIES,
    },
}
