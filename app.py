"""
Owner Tax Calendar - occupancy report for a tax year (1 April - 31 March).
Streamlit web app: upload bookings, preview the calendar, download CSV/XLSX.
"""

import streamlit as st
import pandas as pd
import os
import sys
import tempfile
from datetime import date

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.calendar import generate, tax_year_window
from core.csv_writer import CsvWriter
from core.errors import ReportWriteError
from core.excel_writer import XlsxWriter
from core.log import configure_logging
from core.models import to_decimal
from parsers.bookings import parse_bookings_csv
from reports.summary import build_summary

configure_logging()

st.set_page_config(
    page_title="Owner Tax Calendar",
    page_icon="🏠",
    layout="wide",
)

st.title("🏠 Owner Tax Calendar")


with st.sidebar:
    st.header("Report")
    property_id = st.number_input("Property ID", min_value=1, value=12345, step=1)
    this_year = date.today().year
    tax_year = st.selectbox(
        "Tax year (starting 1 April)",
        options=list(range(this_year, this_year - 8, -1)),
        format_func=lambda y: f"{y}/{str(y + 1)[-2:]}",
    )
    st.divider()
    st.caption("**Bookings CSV columns:**")
    st.code("start_date,end_date,nightly_rate,booking_type", language=None)
    st.caption("Dates as YYYY-MM-DD; the end date is the checkout day (not counted).")


def _rate(entry):
    rate = to_decimal(entry.nightly_rate)
    return float(rate) if rate is not None else None


def calendar_to_df(calendar) -> pd.DataFrame:
    """Calendar as a DataFrame for display."""
    return pd.DataFrame([
        {
            "Date": day,
            "Booked By": entry.booking_type or "",
            "Nightly Rate": _rate(entry),
        }
        for day, entry in calendar.items()
    ])


def summary_to_df(summary) -> pd.DataFrame:
    rows = []
    for category in summary.categories:
        for line in category.lines:
            rows.append({"Category": category.name, "Booking type": line.label,
                         "Days": line.days, "Value $": float(line.value)})
        rows.append({"Category": category.name, "Booking type": f"{category.name} total",
                     "Days": category.days, "Value $": float(category.value)})
    rows.append({"Category": "", "Booking type": "Property Total",
                 "Days": summary.days, "Value $": float(summary.value)})
    return pd.DataFrame(rows)


def report_bytes(writer_cls, property_id: int, calendar) -> bytes:
    """Write the report to a scratch directory and return its contents."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        path = writer_cls(tmp_dir).write(property_id, calendar)
        return path.read_bytes()


uploaded_file = st.file_uploader(
    "Drop the bookings CSV here or click to select",
    type=["csv"],
)

if uploaded_file:
    with tempfile.NamedTemporaryFile(delete=False, suffix=".csv") as tmp:
        tmp.write(uploaded_file.getbuffer())
        tmp_path = tmp.name

    try:
        bookings = parse_bookings_csv(tmp_path)
    except ValueError as e:
        st.error(f"**{uploaded_file.name}**: {e}")
        st.stop()
    finally:
        os.unlink(tmp_path)

    start, end = tax_year_window(tax_year)
    calendar = generate(bookings, tax_year)
    summary = build_summary(calendar)
    df_cal = calendar_to_df(calendar)
    occupied = df_cal[df_cal["Booked By"] != ""]

    st.subheader(f"Tax year {start:%d/%m/%Y} – {end:%d/%m/%Y}")
    k1, k2, k3 = st.columns(3)
    k1.metric("Bookings", len(bookings))
    k2.metric("Occupied days", len(occupied))
    k3.metric("Total value $", f"{occupied['Nightly Rate'].fillna(0).sum():.2f}")

    st.divider()

    st.subheader("Summary of Use")
    st.dataframe(summary_to_df(summary), use_container_width=True, hide_index=True)

    st.subheader("Days per month")
    if not occupied.empty:
        by_month = occupied.assign(Month=pd.to_datetime(occupied["Date"]).dt.strftime("%Y-%m"))
        st.bar_chart(by_month.groupby("Month").size())

    with st.expander("Daily calendar"):
        st.dataframe(df_cal, use_container_width=True, hide_index=True)

    st.divider()
    st.subheader("Export")
    col_csv, col_xlsx = st.columns(2)
    try:
        with col_csv:
            st.download_button(
                "⬇️ Download CSV",
                report_bytes(CsvWriter, int(property_id), calendar),
                file_name=f"{int(property_id)}.csv",
                mime="text/csv",
            )
        with col_xlsx:
            st.download_button(
                "⬇️ Download Excel",
                report_bytes(XlsxWriter, int(property_id), calendar),
                file_name=f"{int(property_id)}.xlsx",
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            )
    except ReportWriteError as e:
        st.error(f"Error: {e}")
