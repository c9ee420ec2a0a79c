"""
Data models: Booking (input reservation) and DayEntry (one calendar day).
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional, Union

Rate = Union[Decimal, float, int]


@dataclass(frozen=True)
class Booking:
    """A stay over the half-open interval [start_date, end_date)."""
    start_date: date
    end_date: date          # exclusive: the checkout day is not occupied
    nightly_rate: Rate
    booking_type: str       # "Owner" | "Customer" | "Bachcare ..." | ...

    def covers(self, day: date) -> bool:
        return self.start_date <= day < self.end_date


@dataclass(frozen=True)
class DayEntry:
    """Occupancy for a single date. Both fields None means nobody is booked."""
    nightly_rate: Optional[Rate] = None
    booking_type: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.nightly_rate is None and self.booking_type is None

    @classmethod
    def from_booking(cls, booking: Booking) -> "DayEntry":
        return cls(nightly_rate=booking.nightly_rate, booking_type=booking.booking_type)


def to_decimal(value) -> Optional[Decimal]:
    """Numeric rate as Decimal; None when missing or not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


EMPTY_DAY = DayEntry()

# Every date of the tax year, ascending, mapped to its entry
Calendar = Dict[date, DayEntry]
