"""Stay pricing: nightly base rate by room category plus a weekend surcharge.

Nights are counted by calendar date, not by elapsed hours. Friday and
Saturday nights carry a surcharge of 15% of the base rate, applied per
qualifying night. All money is Decimal.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Mapping

from johotel.domain.models import RoomCategory

NIGHTLY_RATES: Mapping[RoomCategory, Decimal] = {
    RoomCategory.STANDARD: Decimal("1000"),
    RoomCategory.FAMILY: Decimal("1500"),
    RoomCategory.SUITE: Decimal("2500"),
}

WEEKEND_SURCHARGE_RATE = Decimal("0.15")

_CENTS = Decimal("0.01")

# date.weekday(): Monday == 0
_WEEKEND_NIGHTS = frozenset({4, 5})


def nights_between(check_in: datetime, check_out: datetime) -> int:
    """Number of calendar-date boundaries crossed; may be zero or negative."""
    return (check_out.date() - check_in.date()).days


def nightly_rate(
    category: RoomCategory,
    rates: Mapping[RoomCategory, Decimal] = NIGHTLY_RATES,
) -> Decimal:
    return rates[category]


def weekend_nights(first_night: date, nights: int) -> int:
    """Count Friday and Saturday nights among `nights` nights from first_night."""
    return sum(
        1
        for i in range(nights)
        if (first_night + timedelta(days=i)).weekday() in _WEEKEND_NIGHTS
    )


def price_for_stay(
    category: RoomCategory | None,
    check_in: datetime,
    check_out: datetime,
    *,
    rates: Mapping[RoomCategory, Decimal] = NIGHTLY_RATES,
) -> Decimal | None:
    """Total price for a stay, or None if it spans no calendar nights.

    Example: a Standard room from Saturday to Sunday is one weekend night,
    1000 + 0.15 * 1000 = 1150.
    """
    if category is None:
        return None

    nights = nights_between(check_in, check_out)
    if nights <= 0:
        return None

    base = nightly_rate(category, rates)
    surcharge = WEEKEND_SURCHARGE_RATE * base
    total = nights * base + weekend_nights(check_in.date(), nights) * surcharge
    return total.quantize(_CENTS)
