"""Customer domain entities."""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class Tier(str, Enum):
    """Loyalty tier derived from spend and purchase recency (lowest first)."""

    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"


@dataclass
class Customer:
    """Domain entity representing a stored customer record."""

    name: str
    email: str
    annual_spend: Optional[Decimal] = None
    last_purchase_date: Optional[date] = None
    id: Optional[str] = None  # assigned by the directory on insert

    def __post_init__(self):
        """Validate customer entity."""
        if not self.name or not self.name.strip():
            raise ValueError("name is required")
        if not self.email or not self.email.strip():
            raise ValueError("email is required")
        if self.annual_spend is not None and self.annual_spend < 0:
            raise ValueError("annual_spend must be non-negative")
