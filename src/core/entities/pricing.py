"""Pricing configuration and money helpers."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_TAX_RATE = 0.219


def round_money(value: float) -> float:
    """Round a monetary amount to cents."""
    rounded = round(float(value), 2)
    # Normalise -0.0 so stored balances never read as negative zero
    return rounded + 0.0


class PricingType(str, Enum):
    """How a manually entered amount is split into base price and tax."""

    INCLUSIVE = "inclusive"  # entered amount already contains tax
    EXCLUSIVE = "exclusive"  # entered amount is the base price


class PricingConfig(BaseModel):
    """Global pricing settings, loaded from the singleton settings row."""

    tax_rate: float = Field(default=DEFAULT_TAX_RATE, ge=0)
    seeded: bool = False
    updated_at: datetime | None = None
