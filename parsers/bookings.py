"""
Parser for booking records and pre-built calendars.

Input records come from the upstream booking source as dicts:
    {"nightly_rate": 420.69, "start_date": "2021-06-30",
     "end_date": "2021-07-05", "booking_type": "Customer"}

The same columns are accepted from a CSV export
(start_date, end_date, nightly_rate, booking_type; utf-8-sig).

A calendar can also be loaded back from its JSON wire shape:
    {"2021-04-01": {"nightly_rate": 0.0, "booking_type": "Owner"},
     "2021-04-02": {}}
"""

import json
from datetime import date, datetime
from typing import Iterable, List, Mapping

import pandas as pd

from core.models import EMPTY_DAY, Booking, Calendar, DayEntry, to_decimal

BOOKING_COLUMNS = ["start_date", "end_date", "nightly_rate", "booking_type"]


def to_date(val) -> date:
    """ISO YYYY-MM-DD string (or date/datetime) → date."""
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    return datetime.strptime(str(val).strip(), "%Y-%m-%d").date()


def _to_rate(val):
    """
    Rate as Decimal, built from its string form so 420.69 stays 420.69.
    Anything that is not a number is passed through untouched.
    """
    rate = to_decimal(val)
    return val if rate is None else rate


def booking_from_record(record: Mapping) -> Booking:
    """Convert one upstream record into a Booking."""
    try:
        start = to_date(record["start_date"])
        end = to_date(record["end_date"])
    except (KeyError, ValueError, TypeError) as e:
        raise ValueError(f"Invalid booking dates in {dict(record)!r}: {e}") from e

    return Booking(
        start_date=start,
        end_date=end,
        nightly_rate=_to_rate(record.get("nightly_rate")),
        booking_type=record.get("booking_type"),
    )


def parse_booking_records(records: Iterable[Mapping]) -> List[Booking]:
    """Convert upstream records, keeping their order (later ones win overlaps)."""
    return [booking_from_record(r) for r in records]


def parse_bookings_csv(filepath) -> List[Booking]:
    """Read a bookings CSV export and return its rows as Bookings."""
    try:
        df = pd.read_csv(filepath, encoding="utf-8-sig", dtype=str, na_filter=False)
    except Exception as e:
        raise ValueError(f"Error reading bookings CSV: {e}") from e

    df.columns = df.columns.str.strip().str.lower()
    missing = [c for c in BOOKING_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Bookings CSV is missing columns: {', '.join(missing)}")

    bookings = []
    for _, row in df.iterrows():
        # Skip blank lines left by spreadsheet exports
        if not row["start_date"].strip() and not row["end_date"].strip():
            continue
        bookings.append(booking_from_record({
            "start_date": row["start_date"],
            "end_date": row["end_date"],
            "nightly_rate": row["nightly_rate"] if row["nightly_rate"].strip() else None,
            "booking_type": row["booking_type"].strip(),
        }))
    return bookings


def calendar_from_mapping(mapping: Mapping) -> Calendar:
    """
    Wire-shape calendar → Calendar, sorted by date.

    Missing nightly_rate / booking_type stay None so writers leave the
    corresponding cell blank.
    """
    calendar = {}
    for key, record in mapping.items():
        day = to_date(key)
        if isinstance(record, DayEntry):
            calendar[day] = record
        elif not record:
            calendar[day] = EMPTY_DAY
        else:
            calendar[day] = DayEntry(
                nightly_rate=_to_rate(record.get("nightly_rate")),
                booking_type=record.get("booking_type"),
            )
    return dict(sorted(calendar.items()))


def load_calendar_json(filepath) -> Calendar:
    """Load a calendar saved in its JSON wire shape."""
    with open(filepath, encoding="utf-8") as f:
        return calendar_from_mapping(json.load(f))

