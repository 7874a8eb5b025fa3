"""Loyalty tier classification.

A customer is PLATINUM when they spent at least 10000 and bought something in
the last 6 months, GOLD when they spent at least 1000 and bought something in
the last 12 months, and SILVER otherwise. Customers with unknown spend or no
known purchase are always SILVER.
"""
import calendar
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from customer_api.domain.entities.customer import Tier

logger = logging.getLogger(__name__)

PLATINUM_SPEND_THRESHOLD = Decimal("10000")
GOLD_SPEND_THRESHOLD = Decimal("1000")
PLATINUM_RECENCY_MONTHS = 6
GOLD_RECENCY_MONTHS = 12


def months_before(day: date, months: int) -> date:
    """
    Step back a number of calendar months.

    The day of month is clamped when the target month is shorter,
    e.g. 2024-08-31 minus 6 months is 2024-02-29.

    Args:
        day: Starting date
        months: Number of months to go back (non-negative)

    Returns:
        The shifted date
    """
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def classify(
    annual_spend: Optional[Decimal],
    last_purchase_date: Optional[date],
    now: date
) -> Tier:
    """
    Classify a customer into a loyalty tier.

    Args:
        annual_spend: Annual spend, None when unknown
        last_purchase_date: Date of the last purchase, None when unknown
        now: Reference date for the recency windows

    Returns:
        The customer's Tier
    """
    if annual_spend is None or last_purchase_date is None:
        logger.debug("Annual spend or last purchase date missing, defaulting to SILVER")
        return Tier.SILVER

    platinum_cutoff = months_before(now, PLATINUM_RECENCY_MONTHS)
    gold_cutoff = months_before(now, GOLD_RECENCY_MONTHS)

    if annual_spend >= PLATINUM_SPEND_THRESHOLD and last_purchase_date >= platinum_cutoff:
        tier = Tier.PLATINUM
    elif annual_spend >= GOLD_SPEND_THRESHOLD and last_purchase_date >= gold_cutoff:
        tier = Tier.GOLD
    else:
        tier = Tier.SILVER

    logger.debug(
        f"Calculated tier {tier.value} for annual_spend={annual_spend}, "
        f"last_purchase_date={last_purchase_date}, now={now}"
    )
    return tier
