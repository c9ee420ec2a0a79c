"""Tests for the CSV report writer."""

from datetime import date
from decimal import Decimal

import pytest

from core.calendar import generate
from core.csv_writer import CsvWriter, format_rate
from core.errors import ReportWriteError
from core.models import Booking, DayEntry
from core.writer import Writer


def test_writes_expected_csv(tmp_path, wire_calendar):
    path = CsvWriter(tmp_path).write(12345, wire_calendar)

    assert path == tmp_path / "12345.csv"
    assert path.read_text(encoding="utf-8") == (
        "date,nightly_rate,booking_type\n"
        "2021-04-01,0,Owner\n"
        "2021-04-02\n"
        "2021-04-03,420.69,Customer\n"
    )


def test_rows_follow_date_order(tmp_path):
    calendar = {
        date(2021, 4, 3): DayEntry(Decimal("1"), "Owner"),
        date(2021, 4, 1): DayEntry(),
    }

    path = CsvWriter(tmp_path).write(1, calendar)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[1:] == ["2021-04-01", "2021-04-03,1,Owner"]


def test_full_year_has_one_row_per_day(tmp_path, full_year_bookings):
    path = CsvWriter(tmp_path).write(6789, generate(full_year_bookings, 2021))

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1 + 365
    assert "2021-06-30,420.69,Customer" in lines
    assert "2021-07-05" in lines


def test_missing_fields_render_as_empty_cells(tmp_path):
    calendar = {
        date(2021, 4, 1): DayEntry(nightly_rate=None, booking_type="Owner"),
        date(2021, 4, 2): DayEntry(nightly_rate=Decimal("10.50"), booking_type=None),
    }

    path = CsvWriter(tmp_path).write(1, calendar)

    assert path.read_text(encoding="utf-8").splitlines()[1:] == [
        "2021-04-01,,Owner",
        "2021-04-02,10.5,",
    ]


def test_overwrites_existing_report(tmp_path, wire_calendar):
    (tmp_path / "12345.csv").write_text("stale", encoding="utf-8")

    path = CsvWriter(tmp_path).write(12345, wire_calendar)

    assert path.read_text(encoding="utf-8").startswith("date,nightly_rate,booking_type\n")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["12345.csv"]


def test_unwritable_destination_raises(tmp_path, wire_calendar):
    not_a_dir = tmp_path / "reports"
    not_a_dir.write_text("", encoding="utf-8")

    with pytest.raises(ReportWriteError) as exc_info:
        CsvWriter(not_a_dir).write(12345, wire_calendar)

    assert exc_info.value.path == not_a_dir / "12345.csv"
    assert isinstance(exc_info.value.__cause__, OSError)


def test_failed_render_leaves_previous_file_untouched(tmp_path, wire_calendar, monkeypatch):
    (tmp_path / "12345.csv").write_text("previous", encoding="utf-8")

    def boom(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(CsvWriter, "_render", boom)

    with pytest.raises(ReportWriteError):
        CsvWriter(tmp_path).write(12345, wire_calendar)

    assert (tmp_path / "12345.csv").read_text(encoding="utf-8") == "previous"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["12345.csv"]


def test_output_dir_defaults_to_config(tmp_path, monkeypatch, wire_calendar):
    monkeypatch.setattr("core.writer.OUTPUT_DIR", str(tmp_path))

    path = CsvWriter().write(42, wire_calendar)

    assert path == tmp_path / "42.csv"


def test_is_a_writer():
    assert issubclass(CsvWriter, Writer)


@pytest.mark.parametrize(
    "rate, expected",
    [
        (0.00, "0"),
        (Decimal("0.00"), "0"),
        (420.69, "420.69"),
        (Decimal("100.50"), "100.5"),
        (150, "150"),
        (Decimal("1E+2"), "100"),
        ("12.30", "12.3"),
        ("n/a", "n/a"),
        (None, ""),
    ],
)
def test_format_rate(rate, expected):
    assert format_rate(rate) == expected


def test_booking_values_flow_through(tmp_path):
    calendar = generate(
        [Booking(date(2021, 4, 1), date(2021, 4, 2), Decimal("99.90"), "Bachcare Owner")],
        2021,
    )

    path = CsvWriter(tmp_path).write(7, calendar)

    assert path.read_text(encoding="utf-8").splitlines()[1] == "2021-04-01,99.9,Bachcare Owner"
