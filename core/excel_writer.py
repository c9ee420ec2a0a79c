"""
Spreadsheet report: the tax-year calendar laid out month by month.

Layout (one sheet, 1-based row/column numbers):
  - column A: day numbers 1..31 (rows 10-40) and the "Total" label (row 42)
  - twelve month blocks side by side, in tax-year order Apr..Mar, two
    columns each starting at column B: "Booked By" | "Nightly Rate"
      row 8       month name (merged over the block)
      row 9       sub-headers
      rows 10-40  days 1..31
      row 42      month total
  - "Summary of Use" box from row 46, columns B..E: Bachcare / Owner
    categories, one row per booking type, category totals, property total.

All positions are computed as (row, column) integers; openpyxl only sees
letters where it needs them (column widths).
"""

import calendar as month_names
from decimal import Decimal, localcontext
from typing import Dict

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, Side
from openpyxl.utils import get_column_letter

from config import CURRENCY_FORMAT, RATE_FORMAT, TAX_YEAR_START_MONTH
from core.models import Calendar, DayEntry, to_decimal
from core.writer import Writer
from reports.summary import SummaryOfUse, build_summary, month_grid, month_totals

# ── Layout ───────────────────────────────────────────────────────────────────
DAY_LABEL_COLUMN = 1
MONTH_HEADER_ROW = 8
SUBHEADER_ROW = 9
FIRST_DAY_ROW = 10
DAYS_IN_MONTH = 31
MONTH_TOTAL_ROW = 42
FIRST_MONTH_COLUMN = 2
MONTH_BLOCK_WIDTH = 2           # "Booked By" + "Nightly Rate"
MONTHS_IN_YEAR = 12

SUMMARY_START_ROW = 46
SUMMARY_FIRST_COLUMN = 2        # B
SUMMARY_LAST_COLUMN = 5         # E
SUMMARY_NAME_COLUMN = 2
SUMMARY_DAYS_COLUMN = 4
SUMMARY_VALUE_COLUMN = 5
SUMMARY_HEAD_ROWS = 2           # title + column headers

SUBHEADERS = ("Booked By", "Nightly Rate")

# ── Styles ───────────────────────────────────────────────────────────────────
MEDIUM = Side(style="medium", color="FF000000")
BOLD = Font(bold=True)
CENTER = Alignment(horizontal="center")
RIGHT = Alignment(horizontal="right")


def fiscal_months():
    """Month numbers in tax-year order: 4, 5, ..., 12, 1, 2, 3."""
    return [(TAX_YEAR_START_MONTH - 1 + i) % MONTHS_IN_YEAR + 1 for i in range(MONTHS_IN_YEAR)]


def month_column(month: int) -> int:
    """First column of `month`'s block (Apr → 2, May → 4, ..., Mar → 24)."""
    position = fiscal_months().index(month)
    return FIRST_MONTH_COLUMN + position * MONTH_BLOCK_WIDTH


def day_row(day_of_month: int) -> int:
    return FIRST_DAY_ROW + day_of_month - 1


def summary_row_count(summary: SummaryOfUse) -> int:
    """Rows below the title row: headers, 2 per category (heading + total), lines."""
    return len(summary.categories) * 2 + summary.line_count + SUMMARY_HEAD_ROWS


def _outline(ws, first_row: int, first_col: int, last_row: int, last_col: int, side: Side = MEDIUM):
    """Medium border around a rectangle, keeping the inner borders of edge cells."""
    for row in range(first_row, last_row + 1):
        for col in range(first_col, last_col + 1):
            if first_row < row < last_row and first_col < col < last_col:
                continue
            cell = ws.cell(row=row, column=col)
            old = cell.border
            cell.border = Border(
                left=side if col == first_col else old.left,
                right=side if col == last_col else old.right,
                top=side if row == first_row else old.top,
                bottom=side if row == last_row else old.bottom,
            )


def _total_style(ws, row: int, first_col: int, last_col: int):
    """Bold with a medium rule above and below."""
    for col in range(first_col, last_col + 1):
        cell = ws.cell(row=row, column=col)
        old = cell.border
        cell.font = BOLD
        cell.border = Border(left=old.left, right=old.right, top=MEDIUM, bottom=MEDIUM)


def _money(value) -> Decimal:
    """Round to cents; precision grows with the value so quantize never overflows."""
    number = Decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + 3)
        return number.quantize(Decimal("0.01"))


class XlsxWriter(Writer):
    extension = ".xlsx"

    def _render(self, tmp_path: str, property_id: int, calendar: Calendar) -> None:
        wb = self.build_workbook(calendar)
        wb.save(tmp_path)

    def build_workbook(self, calendar: Calendar) -> Workbook:
        """Lay out the whole report in a new in-memory workbook."""
        wb = Workbook()
        ws = wb.active
        ws.title = "Calendar"

        self._add_day_labels(ws)
        self._add_month_blocks(ws, calendar)
        self._add_summary(ws, build_summary(calendar))
        self._fit_columns(ws)
        return wb

    # ── Month grid ──────────────────────────────────────────────────────────
    def _add_day_labels(self, ws):
        for day in range(1, DAYS_IN_MONTH + 1):
            cell = ws.cell(row=day_row(day), column=DAY_LABEL_COLUMN, value=day)
            cell.alignment = RIGHT
        cell = ws.cell(row=MONTH_TOTAL_ROW, column=DAY_LABEL_COLUMN, value="Total")
        cell.alignment = RIGHT

    def _add_month_blocks(self, ws, calendar: Calendar):
        grid = month_grid(calendar)
        totals = month_totals(calendar)

        for month in fiscal_months():
            col = month_column(month)
            last_col = col + MONTH_BLOCK_WIDTH - 1

            ws.cell(row=MONTH_HEADER_ROW, column=col, value=month_names.month_abbr[month])
            ws.merge_cells(start_row=MONTH_HEADER_ROW, start_column=col,
                           end_row=MONTH_HEADER_ROW, end_column=last_col)
            ws.cell(row=MONTH_HEADER_ROW, column=col).alignment = CENTER

            for offset, label in enumerate(SUBHEADERS):
                ws.cell(row=SUBHEADER_ROW, column=col + offset, value=label)

            for day_of_month, entry in grid.get(month, {}).items():
                self._write_day(ws, day_row(day_of_month), col, entry)

            total = ws.cell(row=MONTH_TOTAL_ROW, column=col + 1,
                            value=_money(totals.get(month, 0)))
            total.number_format = CURRENCY_FORMAT

            _outline(ws, MONTH_HEADER_ROW, col, SUBHEADER_ROW, last_col)
            _outline(ws, MONTH_HEADER_ROW, col, MONTH_TOTAL_ROW, last_col)

    def _write_day(self, ws, row: int, col: int, entry: DayEntry):
        """Booking type and rate for one day; missing values leave the cell blank."""
        if entry.booking_type is not None:
            ws.cell(row=row, column=col, value=str(entry.booking_type))
        rate = to_decimal(entry.nightly_rate)
        if rate is not None:
            cell = ws.cell(row=row, column=col + 1, value=_money(rate))
            cell.number_format = RATE_FORMAT

    # ── Summary of Use ──────────────────────────────────────────────────────
    def _add_summary(self, ws, summary: SummaryOfUse):
        top = SUMMARY_START_ROW
        bottom = top + summary_row_count(summary)

        ws.cell(row=top, column=SUMMARY_NAME_COLUMN, value="Summary of Use")
        ws.merge_cells(start_row=top, start_column=SUMMARY_FIRST_COLUMN,
                       end_row=top, end_column=SUMMARY_LAST_COLUMN)
        title = ws.cell(row=top, column=SUMMARY_NAME_COLUMN)
        title.font = BOLD
        title.alignment = CENTER

        header_row = top + 1
        for col, label in ((SUMMARY_DAYS_COLUMN, "Days"), (SUMMARY_VALUE_COLUMN, "Value $")):
            cell = ws.cell(row=header_row, column=col, value=label)
            cell.font = BOLD

        row = header_row + 1
        for category in summary.categories:
            ws.cell(row=row, column=SUMMARY_NAME_COLUMN, value=category.name).font = BOLD
            row += 1
            for line in category.lines:
                self._summary_line(ws, row, line.label, line.days, line.value)
                row += 1
            self._summary_line(ws, row, f"{category.name} total", category.days, category.value)
            _total_style(ws, row, SUMMARY_FIRST_COLUMN, SUMMARY_LAST_COLUMN)
            row += 1

        # row == bottom here
        self._summary_line(ws, bottom, "Property Total", summary.days, summary.value)
        _total_style(ws, bottom, SUMMARY_FIRST_COLUMN, SUMMARY_LAST_COLUMN)

        _outline(ws, top, SUMMARY_FIRST_COLUMN, bottom, SUMMARY_LAST_COLUMN)

    def _summary_line(self, ws, row: int, label: str, days: int, value):
        ws.cell(row=row, column=SUMMARY_NAME_COLUMN, value=label)
        ws.cell(row=row, column=SUMMARY_DAYS_COLUMN, value=days)
        cell = ws.cell(row=row, column=SUMMARY_VALUE_COLUMN, value=_money(value))
        cell.number_format = CURRENCY_FORMAT

    def _fit_columns(self, ws):
        """openpyxl has no auto-size: approximate it from the longest value."""
        widths: Dict[int, int] = {}
        merged = {c.coordinate for rng in ws.merged_cells.ranges for c in _cells(ws, rng)}
        for row in ws.iter_rows():
            for cell in row:
                if cell.value is None or cell.coordinate in merged:
                    continue
                widths[cell.column] = max(widths.get(cell.column, 0), len(str(cell.value)))
        for col, width in widths.items():
            ws.column_dimensions[get_column_letter(col)].width = width + 2


def _cells(ws, cell_range):
    for row in range(cell_range.min_row, cell_range.max_row + 1):
        for col in range(cell_range.min_col, cell_range.max_col + 1):
            yield ws.cell(row=row, column=col)
