"""Request and response objects exchanged with the customer service."""
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from customer_api.domain.entities.customer import Customer, Tier
from customer_api.domain.exceptions import ValidationError

SPEND_QUANTUM = Decimal("0.01")
SPEND_MAX_INTEGER_DIGITS = 8
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
DATE_MESSAGE = "Last purchase date must be a date in YYYY-MM-DD format"


def _parse_spend(value: Any) -> Decimal:
    """Parse a monetary amount, raising ValueError with a client-facing message."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError("Annual spend must be a number")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError("Annual spend must be a number")
    if not amount.is_finite():
        raise ValueError("Annual spend must be a number")
    if amount < 0:
        raise ValueError("Annual spend must not be negative")
    if amount.as_tuple().exponent < -2:
        raise ValueError("Annual spend must have at most 2 decimal places")
    if amount != 0 and amount.adjusted() >= SPEND_MAX_INTEGER_DIGITS:
        raise ValueError(f"Annual spend must have at most {SPEND_MAX_INTEGER_DIGITS} integer digits")
    return amount.quantize(SPEND_QUANTUM)


def _parse_date(value: Any) -> date:
    """Parse a zero-padded ISO calendar date; nothing looser is accepted."""
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise ValueError(DATE_MESSAGE)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(DATE_MESSAGE)


@dataclass
class CustomerRequest:
    """Create/update request for the customer service."""
    name: Optional[str] = None
    email: Optional[str] = None
    annual_spend: Optional[Decimal] = None
    last_purchase_date: Optional[date] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "CustomerRequest":
        """
        Build a request from a decoded JSON body.

        Only type and format problems are reported here; field constraints
        are checked by validate_customer_request.

        Args:
            payload: Decoded JSON body

        Returns:
            CustomerRequest instance

        Raises:
            ValidationError: If a field has the wrong type or format
        """
        if not isinstance(payload, dict):
            raise ValidationError({"body": "Request body must be a JSON object"})

        errors: Dict[str, str] = {}
        values: Dict[str, Any] = {}

        for field in ("name", "email"):
            raw = payload.get(field)
            if raw is not None and not isinstance(raw, str):
                errors[field] = f"{field.capitalize()} must be a string"
            else:
                values[field] = raw

        raw_spend = payload.get("annualSpend")
        if raw_spend is not None:
            try:
                values["annual_spend"] = _parse_spend(raw_spend)
            except ValueError as e:
                errors["annualSpend"] = str(e)

        raw_date = payload.get("lastPurchaseDate")
        if raw_date is not None:
            try:
                values["last_purchase_date"] = _parse_date(raw_date)
            except ValueError as e:
                errors["lastPurchaseDate"] = str(e)

        if errors:
            raise ValidationError(errors)
        return cls(**values)


@dataclass
class CustomerResponse:
    """A stored customer together with its freshly computed tier."""
    id: str
    name: str
    email: str
    annual_spend: Optional[Decimal]
    last_purchase_date: Optional[date]
    tier: Tier

    @classmethod
    def from_customer(cls, customer: Customer, tier: Tier) -> "CustomerResponse":
        return cls(
            id=customer.id,
            name=customer.name,
            email=customer.email,
            annual_spend=customer.annual_spend,
            last_purchase_date=customer.last_purchase_date,
            tier=tier,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape returned by the API."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "annualSpend": str(self.annual_spend) if self.annual_spend is not None else None,
            "lastPurchaseDate": self.last_purchase_date.isoformat() if self.last_purchase_date else None,
            "tier": self.tier.value,
        }
