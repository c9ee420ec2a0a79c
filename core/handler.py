"""
Task dispatch: turns an incoming event into written reports.

Event shape:
    {"task": "ping"}
    {"task": "generate", "property_id": 12345, "tax_year": 2021,
     "bookings": [{...}, ...], "formats": ["xlsx", "csv"]}
"""

from datetime import date
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from config import DEFAULT_REPORT_FORMATS
from core.calendar import generate
from core.csv_writer import CsvWriter
from core.errors import MissingEvent, UnrecognisedTask
from core.excel_writer import XlsxWriter
from core.log import ensure_logging, get_logger
from core.models import Booking
from parsers.bookings import parse_booking_records, to_date

logger = get_logger(__name__)

WRITERS = {
    "csv": CsvWriter,
    "xlsx": XlsxWriter,
}


def generate_report(
    property_id: int,
    bookings: Iterable[Booking],
    tax_year,
    formats: Iterable[str] = None,
    output_dir=None,
) -> List[Path]:
    """Build the calendar once and write it in every requested format."""
    if isinstance(formats, str):
        formats = [formats]
    formats = list(formats or DEFAULT_REPORT_FORMATS)
    unknown = [f for f in formats if f not in WRITERS]
    if unknown:
        raise ValueError(f"Unknown report format(s): {', '.join(unknown)}")

    calendar = generate(bookings, tax_year)
    return [WRITERS[fmt](output_dir).write(property_id, calendar) for fmt in formats]


def _ping(event: Mapping) -> dict:
    return {"status": "ok"}


def _tax_year(value):
    """A year (2021, "2021") or any date in it ("2021-04-01")."""
    if isinstance(value, (int, date)):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    return to_date(text)


def _generate(event: Mapping) -> dict:
    try:
        property_id = int(event["property_id"])
        tax_year = _tax_year(event["tax_year"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Event needs an integer property_id and a tax_year: {e}") from e

    bookings = parse_booking_records(event.get("bookings") or [])
    paths = generate_report(property_id, bookings, tax_year, event.get("formats"))
    return {"status": "ok", "property_id": property_id, "files": [str(p) for p in paths]}


TASKS = {
    "ping": _ping,
    "generate": _generate,
}


def handle(event: Optional[Mapping]) -> dict:
    """Run the task named in `event`. Sets up logging if the caller has not."""
    ensure_logging()
    if not event:
        raise MissingEvent("No event supplied")

    task = event.get("task")
    if task not in TASKS:
        raise UnrecognisedTask(task)

    logger.info("task_received", task=task, property_id=event.get("property_id"))
    return TASKS[task](event)
