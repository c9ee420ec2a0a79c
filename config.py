"""
Centralised configuration - change output paths and business rules here.
"""

import os
import tempfile

# Directory where <property_id>.csv / <property_id>.xlsx reports are written
OUTPUT_DIR = os.getenv("OUTPUT_DIR", tempfile.gettempdir())

# Formats produced when the caller does not ask for specific ones
DEFAULT_REPORT_FORMATS = tuple(
    f.strip() for f in os.getenv("REPORT_FORMATS", "xlsx").split(",") if f.strip()
)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "console")  # "console" | "json"

# The tax year runs from 1 April of year Y to 31 March of year Y+1
TAX_YEAR_START_MONTH = 4
TAX_YEAR_START_DAY = 1

# Summary of Use buckets: category → substrings (case-insensitive).
# Order matters: it is the order categories appear in the spreadsheet.
CATEGORY_RULES = {
    "Bachcare Date": ("bachcare",),
    "Owner Date":    ("own", "house", "term"),
}

# Currency format for totals in the spreadsheet (openpyxl format code)
CURRENCY_FORMAT = '"$"#,##0.00_-'
RATE_FORMAT = "0.00"
