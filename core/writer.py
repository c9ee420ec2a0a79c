"""
Common base for report writers.

Every writer exposes write(property_id, calendar) and saves to
<output_dir>/<property_id><extension>. The file is rendered into a
temporary file next to the destination and moved into place with
os.replace, so a failed write never leaves a half-written report.
"""

import os
import tempfile
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Mapping, Union

from config import OUTPUT_DIR
from core.errors import ReportWriteError
from core.log import get_logger
from core.models import Calendar
from parsers.bookings import calendar_from_mapping

logger = get_logger(__name__)


def as_calendar(calendar: Mapping) -> Calendar:
    """Accept a built Calendar or its JSON wire shape (string keys)."""
    if all(isinstance(key, date) for key in calendar):
        return dict(sorted(calendar.items()))
    return calendar_from_mapping(calendar)


class Writer(ABC):
    """Persist a calendar for one property."""

    extension = ""

    def __init__(self, output_dir: Union[str, os.PathLike, None] = None):
        self.output_dir = Path(output_dir if output_dir is not None else OUTPUT_DIR)

    def path_for(self, property_id: int) -> Path:
        return self.output_dir / f"{property_id}{self.extension}"

    def write(self, property_id: int, calendar: Mapping) -> Path:
        """Render `calendar` and save it, overwriting any previous report."""
        calendar = as_calendar(calendar)
        path = self.path_for(property_id)
        log = logger.bind(property_id=property_id, path=str(path))

        tmp_path = None
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{property_id}-", suffix=self.extension, dir=self.output_dir
            )
            os.close(fd)
            self._render(tmp_path, property_id, calendar)
            os.replace(tmp_path, path)
            tmp_path = None
        except Exception as e:
            log.error("report_write_failed", error=str(e))
            raise ReportWriteError(path, f"Could not write {self.extension} report") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        log.info("report_written", days=len(calendar))
        return path

    @abstractmethod
    def _render(self, tmp_path: str, property_id: int, calendar: Calendar) -> None:
        """Write the full report to `tmp_path`."""
