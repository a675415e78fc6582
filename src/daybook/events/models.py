"""Core event types.

An event is anything exposing the accessor surface declared on
:class:`Event`: a subject, a start date, optional times and end date,
a visibility and optional description and location. Two variants exist:
:class:`SingleEvent`, an immutable value, and
:class:`~daybook.events.recurrence.RecurringEventInstance`, one dated
occurrence of a recurring series.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import StrEnum
from typing import TYPE_CHECKING

from daybook.constants import DEFAULT_EVENT_DURATION
from daybook.temporal import end_of_day, overlaps, overlaps_all_day, start_of_day

if TYPE_CHECKING:
    from daybook.events.builder import EventBuilder

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Visibility(StrEnum):
    """Who may see an event."""

    PUBLIC = "public"
    PRIVATE = "private"


class Weekday(StrEnum):
    """Days of the week, Sunday first."""

    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"

    @classmethod
    def of(cls, day: date) -> Weekday:
        """Weekday that ``day`` falls on."""
        # isoweekday: Monday=1 .. Sunday=7
        return _WEEKDAYS[day.isoweekday() % 7]


_WEEKDAYS = tuple(Weekday)


# ---------------------------------------------------------------------------
# Event base
# ---------------------------------------------------------------------------

EventKey = tuple[str, date, time | None]


class Event(ABC):
    """Shared behavior for every calendar event.

    Subclasses provide the fields; derived values such as the datetime
    span and conflict checks are computed here from those fields.
    """

    subject: str
    start_date: date
    start_time: time | None
    end_date: date | None
    end_time: time | None
    visibility: Visibility
    description: str | None
    location: str | None

    @property
    def is_all_day(self) -> bool:
        """An event without a start time spans whole days."""
        return self.start_time is None

    @property
    def key(self) -> EventKey:
        """The (subject, start date, start time) identity triple."""
        return (self.subject, self.start_date, self.start_time)

    @property
    def last_date(self) -> date:
        """Final calendar date the event touches."""
        return self.end_date or self.start_date

    @property
    def start_datetime(self) -> datetime:
        if self.start_time is None:
            return start_of_day(self.start_date)
        return datetime.combine(self.start_date, self.start_time)

    @property
    def end_datetime(self) -> datetime:
        """Resolve the end of the event into a concrete instant.

        All-day events run to the end of their last day. A same-day timed
        event without an end time lasts one hour; a multi-day one runs to
        the end of its last day.
        """
        if self.start_time is None:
            return end_of_day(self.last_date)
        if self.end_time is not None:
            return datetime.combine(self.last_date, self.end_time)
        if self.last_date == self.start_date:
            return self.start_datetime + DEFAULT_EVENT_DURATION
        return end_of_day(self.last_date)

    def is_active_on(self, day: date) -> bool:
        """Return True if ``day`` lies within the event's inclusive date span."""
        return self.start_date <= day <= self.last_date

    def conflicts_with(self, other: Event) -> bool:
        """Return True if this event overlaps ``other`` in time.

        Two all-day events are compared by inclusive date range. Any other
        pairing compares datetime spans, where touching endpoints are not
        a conflict.
        """
        if self.is_all_day and other.is_all_day:
            return overlaps_all_day(
                self.start_date, self.last_date, other.start_date, other.last_date
            )
        return overlaps(
            self.start_datetime,
            self.end_datetime,
            other.start_datetime,
            other.end_datetime,
        )

    @abstractmethod
    def with_updates(self, builder: EventBuilder) -> Event:
        """Apply ``builder`` to this event and return the resulting event."""


# ---------------------------------------------------------------------------
# Single event
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SingleEvent(Event):
    """A standalone, immutable event.

    Equality and hashing consider only the identity triple, so two events
    differing only in description, location or end fields are equal.
    Create instances through :class:`~daybook.events.builder.EventBuilder`.
    """

    subject: str
    start_date: date
    start_time: time | None = None
    end_date: date | None = field(default=None, compare=False)
    end_time: time | None = field(default=None, compare=False)
    visibility: Visibility = field(default=Visibility.PUBLIC, compare=False)
    description: str | None = field(default=None, compare=False)
    location: str | None = field(default=None, compare=False)

    def with_updates(self, builder: EventBuilder) -> SingleEvent:
        return builder.build()

    def __str__(self) -> str:
        when = self.start_time.isoformat() if self.start_time else "all-day"
        return f"Event[subject={self.subject}, date={self.start_date}, time={when}]"
