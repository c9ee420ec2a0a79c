"""Tests for booking record and calendar parsing."""

import json
from datetime import date
from decimal import Decimal

import pytest

from core.models import EMPTY_DAY, Booking, DayEntry
from parsers.bookings import (
    booking_from_record,
    calendar_from_mapping,
    load_calendar_json,
    parse_booking_records,
    parse_bookings_csv,
)


def test_booking_from_record():
    booking = booking_from_record({
        "nightly_rate": 420.69,
        "start_date": "2021-06-30",
        "end_date": "2021-07-05",
        "booking_type": "Customer",
    })

    assert booking == Booking(date(2021, 6, 30), date(2021, 7, 5), Decimal("420.69"), "Customer")


def test_booking_from_record_keeps_odd_values():
    booking = booking_from_record({"start_date": "2021-06-30", "end_date": "2021-07-01",
                                   "nightly_rate": "tbc"})

    assert booking.nightly_rate == "tbc"
    assert booking.booking_type is None


@pytest.mark.parametrize(
    "record",
    [
        {"start_date": "30/06/2021", "end_date": "2021-07-05"},
        {"start_date": "2021-06-30"},
        {"start_date": None, "end_date": "2021-07-05"},
    ],
)
def test_booking_from_record_rejects_bad_dates(record):
    with pytest.raises(ValueError, match="Invalid booking dates"):
        booking_from_record(record)


def test_parse_booking_records_keeps_order():
    records = [
        {"start_date": "2021-05-01", "end_date": "2021-05-03", "nightly_rate": 1, "booking_type": "B"},
        {"start_date": "2021-04-01", "end_date": "2021-04-03", "nightly_rate": 2, "booking_type": "A"},
    ]

    assert [b.booking_type for b in parse_booking_records(records)] == ["B", "A"]


def test_parse_bookings_csv(tmp_path):
    path = tmp_path / "bookings.csv"
    path.write_text(
        "\ufeffStart_Date,end_date,nightly_rate,booking_type\n"
        "2021-04-07,2021-04-08,0.00,Owner\n"
        ",,,\n"
        "2021-06-30,2021-07-05,420.69, Customer \n"
        "2021-08-01,2021-08-02,,Bachcare\n",
        encoding="utf-8",
    )

    bookings = parse_bookings_csv(path)

    assert bookings == [
        Booking(date(2021, 4, 7), date(2021, 4, 8), Decimal("0.00"), "Owner"),
        Booking(date(2021, 6, 30), date(2021, 7, 5), Decimal("420.69"), "Customer"),
        Booking(date(2021, 8, 1), date(2021, 8, 2), None, "Bachcare"),
    ]


def test_parse_bookings_csv_missing_columns(tmp_path):
    path = tmp_path / "bookings.csv"
    path.write_text("start_date,end_date\n2021-04-07,2021-04-08\n", encoding="utf-8")

    with pytest.raises(ValueError, match="nightly_rate, booking_type"):
        parse_bookings_csv(path)


def test_calendar_from_mapping_sorts_and_fills(wire_calendar):
    shuffled = dict(reversed(list(wire_calendar.items())))

    calendar = calendar_from_mapping(shuffled)

    assert list(calendar) == [date(2021, 4, 1), date(2021, 4, 2), date(2021, 4, 3)]
    assert calendar[date(2021, 4, 1)] == DayEntry(Decimal("0.0"), "Owner")
    assert calendar[date(2021, 4, 2)] is EMPTY_DAY
    assert calendar[date(2021, 4, 3)].nightly_rate == Decimal("420.69")


def test_calendar_from_mapping_missing_field():
    calendar = calendar_from_mapping({"2021-04-01": {"booking_type": "Owner"}})

    assert calendar[date(2021, 4, 1)] == DayEntry(nightly_rate=None, booking_type="Owner")


def test_load_calendar_json(tmp_path, wire_calendar):
    path = tmp_path / "calendar.json"
    path.write_text(json.dumps(wire_calendar), encoding="utf-8")

    calendar = load_calendar_json(path)

    assert len(calendar) == 3
    assert calendar[date(2021, 4, 3)].booking_type == "Customer"
