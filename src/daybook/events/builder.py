"""Fluent builder for single events.

The builder is the only place a :class:`SingleEvent` is validated. Setters
never raise; every rule is checked when :meth:`EventBuilder.build` runs.
"""

from __future__ import annotations

from datetime import date, time

from daybook.events.models import Event, SingleEvent, Visibility


class EventBuildError(Exception):
    """Raised when a builder holds an invalid event configuration."""


class EventBuilder:
    """Mutable accumulator for event fields.

    Also used to describe updates: seed it from an existing event with
    :meth:`from_event`, change what should differ, and hand it to the
    calendar or a recurring series.
    """

    def __init__(self) -> None:
        self.subject: str | None = None
        self.start_date: date | None = None
        self.start_time: time | None = None
        self.end_date: date | None = None
        self.end_time: time | None = None
        self.visibility: Visibility = Visibility.PUBLIC
        self.description: str | None = None
        self.location: str | None = None

    @classmethod
    def create(cls) -> EventBuilder:
        """Start an empty builder."""
        return cls()

    @classmethod
    def from_event(cls, event: Event) -> EventBuilder:
        """Start a builder holding the current field values of ``event``."""
        builder = cls()
        builder.subject = event.subject
        builder.start_date = event.start_date
        builder.start_time = event.start_time
        builder.end_date = event.end_date
        builder.end_time = event.end_time
        builder.visibility = event.visibility
        builder.description = event.description
        builder.location = event.location
        return builder

    def with_subject(self, subject: str) -> EventBuilder:
        self.subject = subject
        return self

    def with_start_date(self, start_date: date) -> EventBuilder:
        self.start_date = start_date
        return self

    def with_start_time(self, start_time: time | None) -> EventBuilder:
        self.start_time = start_time
        return self

    def with_end_date(self, end_date: date | None) -> EventBuilder:
        self.end_date = end_date
        return self

    def with_end_time(self, end_time: time | None) -> EventBuilder:
        self.end_time = end_time
        return self

    def with_visibility(self, visibility: Visibility) -> EventBuilder:
        self.visibility = visibility
        return self

    def with_description(self, description: str | None) -> EventBuilder:
        self.description = description
        return self

    def with_location(self, location: str | None) -> EventBuilder:
        self.location = location
        return self

    def build(self) -> SingleEvent:
        """Validate the accumulated fields and produce a :class:`SingleEvent`.

        Raises:
            EventBuildError: If a required field is missing or the times
                and dates are out of order.
        """
        subject, start_date = self._validate()
        return SingleEvent(
            subject=subject,
            start_date=start_date,
            start_time=self.start_time,
            end_date=self.end_date,
            end_time=self.end_time,
            visibility=self.visibility,
            description=self.description,
            location=self.location,
        )

    def _validate(self) -> tuple[str, date]:
        """Check the build rules in order and return the required fields."""
        subject, start_date = self.subject, self.start_date
        if subject is None or not subject.strip():
            raise EventBuildError("Subject is required")
        if start_date is None:
            raise EventBuildError("Start date is required")
        if self.start_time is None and self.end_time is not None:
            raise EventBuildError("End time cannot be set without start time")
        # Timed events end on their start date unless told otherwise
        if self.start_time is not None and self.end_date is None:
            self.end_date = start_date
        if self.end_date is not None and self.end_date < start_date:
            raise EventBuildError("End date cannot be before start date")
        if (
            self.start_time is not None
            and self.end_time is not None
            and self.end_date == start_date
            and self.end_time < self.start_time
        ):
            raise EventBuildError("End time cannot be before start time on same day")
        return subject, start_date
