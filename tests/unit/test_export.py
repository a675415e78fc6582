"""Unit tests for the Google Calendar CSV exporter."""

from __future__ import annotations

import csv
import io
from datetime import date, time

import pytest

from daybook.calendar import Calendar, ConflictPolicy
from daybook.events import EventBuilder, RecurrencePattern, Visibility, Weekday
from daybook.export import GOOGLE_CSV_HEADER, CalendarExporter, GoogleCSVExporter


@pytest.fixture()
def calendar() -> Calendar:
    return Calendar("Export Test", ConflictPolicy.ALLOW_CONFLICTS)


@pytest.fixture()
def exporter() -> GoogleCSVExporter:
    return GoogleCSVExporter()


def parse(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


class TestGoogleCSVExporter:
    def test_satisfies_protocol(self, exporter: GoogleCSVExporter) -> None:
        instance: CalendarExporter = exporter
        assert callable(instance.export)

    def test_empty_calendar_has_only_header(self, calendar: Calendar, exporter) -> None:
        text = exporter.export(calendar)

        assert text == ",".join(GOOGLE_CSV_HEADER) + "\n"

    def test_timed_private_event(self, calendar: Calendar, exporter) -> None:
        calendar.add_event(
            EventBuilder.create()
            .with_subject("Test Meeting")
            .with_start_date(date(2025, 3, 15))
            .with_start_time(time(14, 30))
            .with_end_time(time(15, 30))
            .with_description("Important meeting")
            .with_location("Conference Room A")
            .with_visibility(Visibility.PRIVATE)
            .build()
        )

        rows = parse(exporter.export(calendar))
        assert rows[1] == [
            "Test Meeting",
            "03/15/2025",
            "02:30 PM",
            "03/15/2025",
            "03:30 PM",
            "FALSE",
            "Important meeting",
            "Conference Room A",
            "TRUE",
        ]

    def test_all_day_event(self, calendar: Calendar, exporter) -> None:
        calendar.add_event(
            EventBuilder.create()
            .with_subject("Holiday")
            .with_start_date(date(2025, 12, 25))
            .with_description("Christmas")
            .build()
        )

        rows = parse(exporter.export(calendar))
        assert rows[1] == [
            "Holiday",
            "12/25/2025",
            "",
            "12/25/2025",
            "",
            "TRUE",
            "Christmas",
            "",
            "FALSE",
        ]

    def test_special_characters_are_quoted(self, calendar: Calendar, exporter) -> None:
        calendar.add_event(
            EventBuilder.create()
            .with_subject("Meeting, with comma")
            .with_start_date(date(2025, 1, 1))
            .with_description('Description with "quotes" and\nnewline')
            .build()
        )

        text = exporter.export(calendar)
        assert '"Meeting, with comma"' in text
        assert '"Description with ""quotes"" and\nnewline"' in text

    def test_includes_recurring_instances(self, calendar: Calendar, exporter) -> None:
        calendar.add_event(
            EventBuilder.create().with_subject("Kickoff").with_start_date(date(2025, 2, 1)).build()
        )
        calendar.add_recurring_event(
            EventBuilder.create()
            .with_subject("Standup")
            .with_start_date(date(2025, 2, 3))
            .with_start_time(time(9))
            .with_end_time(time(9, 15)),
            RecurrencePattern.with_occurrences({Weekday.MONDAY, Weekday.WEDNESDAY}, 3),
            date(2025, 2, 3),
        )

        rows = parse(exporter.export(calendar))
        assert [row[0] for row in rows[1:]] == ["Kickoff", "Standup", "Standup", "Standup"]
        assert [row[1] for row in rows[2:]] == ["02/03/2025", "02/05/2025", "02/10/2025"]
        assert rows[2][2] == "09:00 AM"
