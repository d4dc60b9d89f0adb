"""Data models for the collection record store."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional


@dataclass
class StatusChange:
    collection: str
    item_id: int
    change_type: str  # 'payment' | 'arrival'
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    changed_at: datetime = field(default_factory=datetime.now)


@dataclass
class ExpenseStats:
    total_count: int = 0
    owned_count: int = 0
    preorder_count: int = 0
    total_amount: float = 0.0
    total_paid: float = 0.0
    total_remaining: float = 0.0
    outstanding: float = 0.0  # final payments still owed on unpaid preorders

    def to_dict(self) -> dict:
        return asdict(self)
