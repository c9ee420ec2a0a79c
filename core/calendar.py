"""
Calendar builder: expands bookings into one entry per day of the tax year.

Each date of the window gets the entry of the *last* booking (in input
order) whose [start_date, end_date) interval contains it, or the empty
entry when no booking covers it. The checkout date is never occupied,
so back-to-back stays share no day.
"""

from datetime import date, timedelta
from typing import Iterable, Iterator, Tuple, Union

from config import TAX_YEAR_START_DAY, TAX_YEAR_START_MONTH
from core.log import get_logger
from core.models import EMPTY_DAY, Booking, Calendar, DayEntry

logger = get_logger(__name__)

ONE_DAY = timedelta(days=1)


def _anchor_year(anchor: Union[date, int]) -> int:
    """The tax year anchor only matters for its year."""
    if isinstance(anchor, int):
        return anchor
    return anchor.year


def tax_year_window(anchor: Union[date, int]) -> Tuple[date, date]:
    """First and last day (inclusive) of the tax year starting in `anchor`'s year."""
    year = _anchor_year(anchor)
    start = date(year, TAX_YEAR_START_MONTH, TAX_YEAR_START_DAY)
    end = date(year + 1, TAX_YEAR_START_MONTH, TAX_YEAR_START_DAY) - ONE_DAY
    return start, end


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every date from start to end inclusive."""
    day = start
    while day <= end:
        yield day
        day += ONE_DAY


def entry_for(day: date, bookings: Iterable[Booking]) -> DayEntry:
    """Entry of the last booking covering `day`, or the empty entry."""
    entry = EMPTY_DAY
    for booking in bookings:
        if booking.covers(day):
            entry = DayEntry.from_booking(booking)
    return entry


def generate(bookings: Iterable[Booking], tax_year_anchor: Union[date, int]) -> Calendar:
    """
    Build the full-year calendar.

    Returns a dict keyed by every date from 1 April to 31 March inclusive,
    in ascending order. Bookings may overlap and come in any order.
    """
    bookings = list(bookings)
    start, end = tax_year_window(tax_year_anchor)
    logger.debug("calendar_generate", start=start.isoformat(), end=end.isoformat(),
                 bookings=len(bookings))

    # Only bookings touching the window can win a day
    relevant = [b for b in bookings if b.start_date <= end and b.end_date > start]

    return {day: entry_for(day, relevant) for day in iter_days(start, end)}
