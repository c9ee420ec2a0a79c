"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from core.models import Booking


@pytest.fixture
def full_year_bookings():
    """Bookings spread across tax year 2021/22, one of each kind."""
    return [
        Booking(date(2021, 4, 7), date(2021, 4, 8), Decimal("0.00"), "Owner"),
        Booking(date(2021, 6, 30), date(2021, 7, 5), Decimal("420.69"), "Customer"),
        Booking(date(2021, 12, 30), date(2022, 1, 2), Decimal("150"), "Bachcare Booking"),
        Booking(date(2022, 3, 30), date(2022, 4, 2), Decimal("100"), "Long Term"),
    ]


@pytest.fixture
def wire_calendar():
    """Calendar in its JSON wire shape, as handed over by the booking service."""
    return {
        "2021-04-01": {"nightly_rate": 0.00, "booking_type": "Owner"},
        "2021-04-02": {},
        "2021-04-03": {"nightly_rate": 420.69, "booking_type": "Customer"},
    }
