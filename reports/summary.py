"""
Summary of Use and monthly totals for a calendar.

Occupied days are grouped by booking-type label (days = number of dates,
value = sum of nightly rates), then labels are bucketed into the
"Bachcare Date" / "Owner Date" categories of config.CATEGORY_RULES.
Labels in neither bucket do not appear in the summary.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List

import pandas as pd

from core.classification import bucket_labels
from core.models import Calendar, DayEntry, to_decimal

ZERO = Decimal("0")


@dataclass(frozen=True)
class SummaryLine:
    """One booking-type label: how many days it used and what they were worth."""
    label: str
    days: int
    value: Decimal


@dataclass(frozen=True)
class CategorySummary:
    name: str
    lines: List[SummaryLine] = field(default_factory=list)

    @property
    def days(self) -> int:
        return sum(line.days for line in self.lines)

    @property
    def value(self) -> Decimal:
        return sum((line.value for line in self.lines), ZERO)


@dataclass(frozen=True)
class SummaryOfUse:
    categories: List[CategorySummary]
    days: int = 0
    value: Decimal = ZERO

    @property
    def line_count(self) -> int:
        return sum(len(c.lines) for c in self.categories)


def _sum_rates(rates: pd.Series) -> Decimal:
    # Missing or non-numeric rates count as 0, the day itself still counts
    return sum((to_decimal(r) or ZERO for r in rates), ZERO)


def label_stats(calendar: Calendar) -> pd.DataFrame:
    """
    Days and value per booking type, labels in order of first appearance.
    Index: booking_type; columns: days, value.
    """
    rows = [
        {"booking_type": entry.booking_type, "nightly_rate": entry.nightly_rate}
        for entry in calendar.values()
        if entry.booking_type is not None
    ]
    if not rows:
        return pd.DataFrame(columns=["days", "value"], index=pd.Index([], name="booking_type"))

    df = pd.DataFrame(rows)
    return df.groupby("booking_type", sort=False).agg(
        days=("nightly_rate", len),
        value=("nightly_rate", _sum_rates),
    )


def build_summary(calendar: Calendar) -> SummaryOfUse:
    """Summary of Use with per-category subtotals and the property total."""
    stats = label_stats(calendar)
    buckets = bucket_labels(stats.index)

    categories = []
    days_total, value_total = 0, ZERO
    for name, labels in buckets.items():
        category = CategorySummary(name=name, lines=[
            SummaryLine(
                label=label,
                days=int(stats.at[label, "days"]),
                value=stats.at[label, "value"],
            )
            for label in labels
        ])
        categories.append(category)
        days_total += category.days
        value_total += category.value

    return SummaryOfUse(categories=categories, days=days_total, value=value_total)


def month_grid(calendar: Calendar) -> Dict[int, Dict[int, DayEntry]]:
    """
    Entries by month number (1-12) and day of month, the way the report grid
    shows them. A calendar that spans the same month twice keeps the earliest
    date for each day of month.
    """
    grid: Dict[int, Dict[int, DayEntry]] = defaultdict(dict)
    for day, entry in sorted(calendar.items()):
        grid[day.month].setdefault(day.day, entry)
    return dict(grid)


def month_totals(calendar: Calendar) -> Dict[int, Decimal]:
    """Sum of nightly rates per month number (1-12), over the entries of month_grid."""
    return {
        month: sum((to_decimal(entry.nightly_rate) or ZERO for entry in days.values()), ZERO)
        for month, days in month_grid(calendar).items()
    }
