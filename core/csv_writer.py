"""
CSV report: one line per day of the calendar.

    date,nightly_rate,booking_type
    2021-04-01,0,Owner
    2021-04-02
    2021-04-03,420.69,Customer

Days nobody booked are written as the bare date.
"""

import csv

from core.models import Calendar, to_decimal
from core.writer import Writer

HEADER = ["date", "nightly_rate", "booking_type"]


def format_rate(rate) -> str:
    """Plain decimal without trailing zeros: 0.00 → '0', 420.690 → '420.69'."""
    if rate is None:
        return ""
    number = to_decimal(rate)
    if number is None:
        return str(rate)
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def calendar_rows(calendar: Calendar):
    """Yield the CSV rows (header included) for `calendar`."""
    yield HEADER
    for day, entry in calendar.items():
        if entry.is_empty:
            yield [day.isoformat()]
            continue
        yield [
            day.isoformat(),
            format_rate(entry.nightly_rate),
            entry.booking_type if entry.booking_type is not None else "",
        ]


class CsvWriter(Writer):
    extension = ".csv"

    def _render(self, tmp_path: str, property_id: int, calendar: Calendar) -> None:
        with open(tmp_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerows(calendar_rows(calendar))
