"""Pydantic models for collectibles flowing through the payment engine."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from config import OWNERSHIP_STATUSES, PAYMENT_STATUSES
from payment.dates import parse_date


class Collectible(BaseModel):
    """A doll head, doll body or wardrobe item as seen by the payment engine.

    Reading is lenient: unknown statuses fall back to the defaults and a bad
    due date becomes None, so one broken row never breaks a whole list.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    name: str = ""
    collection: Optional[str] = None  # doll_heads | doll_bodies | wardrobe_items
    category: Optional[str] = None
    ownership_status: Literal["owned", "preorder"] = "owned"
    payment_status: Literal["deposit_only", "full_paid"] = "deposit_only"
    final_payment_date: Optional[date] = None
    final_payment: Optional[float] = None
    profile_image_url: Optional[str] = None

    @field_validator("ownership_status", mode="before")
    @classmethod
    def _default_ownership(cls, v):
        return v if v in OWNERSHIP_STATUSES else "owned"

    @field_validator("payment_status", mode="before")
    @classmethod
    def _default_payment(cls, v):
        return v if v in PAYMENT_STATUSES else "deposit_only"

    @field_validator("final_payment_date", mode="before")
    @classmethod
    def _lenient_date(cls, v):
        return parse_date(v)

    @field_validator("final_payment", mode="before")
    @classmethod
    def _lenient_amount(cls, v):
        if v is None or v == "":
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None

    @property
    def is_preorder(self) -> bool:
        return self.ownership_status == "preorder"

    @property
    def is_full_paid(self) -> bool:
        return self.payment_status == "full_paid"


class CollectibleInput(BaseModel):
    """Validated payload for writing a collectible to the record store."""

    name: str
    company: Optional[str] = None
    category: Optional[str] = None
    size_category: Optional[str] = None
    ownership_status: Literal["owned", "preorder"] = "owned"
    payment_status: Literal["deposit_only", "full_paid"] = "deposit_only"
    original_price: Optional[float] = None
    actual_price: Optional[float] = None
    total_price: Optional[float] = None
    deposit: Optional[float] = None
    final_payment: Optional[float] = None
    final_payment_date: Optional[date] = None
    purchase_channel: Optional[str] = None
    profile_image_url: Optional[str] = None
    sort_order: int = 0

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        if len(v) > 100:
            raise ValueError("name must be at most 100 characters")
        return v

    @field_validator(
        "original_price", "actual_price", "total_price", "deposit", "final_payment"
    )
    @classmethod
    def _non_negative(cls, v):
        if v is not None and v < 0:
            raise ValueError("prices must not be negative")
        return v

    @field_validator("final_payment_date", mode="before")
    @classmethod
    def _strict_date(cls, v):
        if v in (None, ""):
            return None
        if isinstance(v, str) and (len(v) != 10 or parse_date(v) is None):
            raise ValueError("final_payment_date must be YYYY-MM-DD")
        return v
