"""Calendar exporters.

Exporters read only the public event accessors exposed through
``Calendar.get_all_events()``; they never distinguish single events from
recurring instances.
"""

from __future__ import annotations

import csv
import io
from typing import Protocol

from daybook.calendar import Calendar
from daybook.events import Event, Visibility
from daybook.logging import get_logger

log = get_logger("daybook.export")

GOOGLE_CSV_HEADER = [
    "Subject",
    "Start Date",
    "Start Time",
    "End Date",
    "End Time",
    "All Day Event",
    "Description",
    "Location",
    "Private",
]

DATE_FORMAT = "%m/%d/%Y"
TIME_FORMAT = "%I:%M %p"


class CalendarExporter(Protocol):
    """Anything that renders a calendar to text."""

    def export(self, calendar: Calendar) -> str: ...


class GoogleCSVExporter:
    """Renders a calendar in the CSV layout Google Calendar imports."""

    def export(self, calendar: Calendar) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(GOOGLE_CSV_HEADER)

        events = calendar.get_all_events()
        for event in events:
            writer.writerow(self._row(event))

        log.debug(
            "calendar_exported",
            calendar=calendar.title,
            format="google_csv",
            rows=len(events),
        )
        return buffer.getvalue()

    @staticmethod
    def _row(event: Event) -> list[str]:
        return [
            event.subject,
            event.start_date.strftime(DATE_FORMAT),
            event.start_time.strftime(TIME_FORMAT) if event.start_time is not None else "",
            event.last_date.strftime(DATE_FORMAT),
            event.end_time.strftime(TIME_FORMAT) if event.end_time is not None else "",
            "TRUE" if event.is_all_day else "FALSE",
            event.description or "",
            event.location or "",
            "TRUE" if event.visibility is Visibility.PRIVATE else "FALSE",
        ]
