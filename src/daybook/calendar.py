"""The calendar aggregate.

A :class:`Calendar` holds standalone events and recurring series, applies
its conflict policy when events are added, and answers date, range and
point-in-time queries across both.

Single events and series report conflicts differently: ``add_event`` and
``update_event`` return ``False``, while ``add_recurring_event`` raises
:class:`RecurringConflictError` naming the first clashing date.
"""

from __future__ import annotations

from datetime import date, time
from enum import StrEnum

from daybook.config import Settings, get_settings
from daybook.events import Event, EventBuilder, RecurrencePattern, RecurringEvent
from daybook.logging import get_logger
from daybook.temporal import plus_hours

log = get_logger("daybook.calendar")


class ConflictPolicy(StrEnum):
    """How a calendar treats overlapping events."""

    ALLOW_CONFLICTS = "allow_conflicts"
    REJECT_CONFLICTS = "reject_conflicts"


class RecurringConflictError(ValueError):
    """Raised when a new recurring series clashes with existing events."""

    def __init__(self, conflict_date: date) -> None:
        super().__init__(f"Recurring event conflicts with existing event on {conflict_date}")
        self.conflict_date = conflict_date


class Calendar:
    """A named collection of single events and recurring series.

    Standalone events and series are both kept in insertion order.
    Queries only read them; mutations go through ``add_event``,
    ``update_event``, ``add_recurring_event`` and the ``remove_*`` methods.
    """

    def __init__(
        self,
        title: str,
        conflict_policy: ConflictPolicy = ConflictPolicy.REJECT_CONFLICTS,
        *,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the calendar.

        Args:
            title: Display title; must not be blank.
            conflict_policy: Whether overlapping events are rejected.
            settings: Source of series time defaults (cached settings if omitted).
        """
        if title is None or not title.strip():
            raise ValueError("Calendar title cannot be empty")
        if conflict_policy is None:
            raise ValueError("Conflict policy is required")
        self._title = title
        self._conflict_policy = conflict_policy
        self._settings = settings or get_settings()
        self._log = log.bind(calendar=title)
        self._events: list[Event] = []
        self._recurring_events: list[RecurringEvent] = []

    @property
    def title(self) -> str:
        return self._title

    @property
    def conflict_policy(self) -> ConflictPolicy:
        return self._conflict_policy

    @property
    def recurring_events(self) -> list[RecurringEvent]:
        return list(self._recurring_events)

    @property
    def _rejects_conflicts(self) -> bool:
        return self._conflict_policy is ConflictPolicy.REJECT_CONFLICTS

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_event(self, event: Event) -> bool:
        """Add a standalone event.

        Returns:
            True if the event was added; False if it duplicates an existing
            standalone event or, under ``REJECT_CONFLICTS``, overlaps any
            held event.
        """
        if event is None:
            raise ValueError("Event cannot be None")

        if any(existing.key == event.key for existing in self._events):
            self._log.info("event_rejected", subject=event.subject, reason="duplicate")
            return False

        if self._rejects_conflicts and self.has_conflict(event):
            self._log.info("event_rejected", subject=event.subject, reason="conflict")
            return False

        self._events.append(event)
        self._log.info(
            "event_added",
            subject=event.subject,
            start_date=event.start_date.isoformat(),
        )
        return True

    def update_event(self, original: Event, updates: EventBuilder) -> bool:
        """Replace ``original`` with the event built from ``updates``.

        ``original`` must be the very object held by this calendar. Under
        ``REJECT_CONFLICTS`` the replacement is checked against the other
        standalone events; recurring series are not consulted.

        Returns:
            True if the event was replaced in place, False otherwise.
        """
        if original is None or updates is None:
            raise ValueError("Original event and updates cannot be None")

        index = self._index_of(original)
        if index is None:
            return False

        updated = updates.build()

        if self._rejects_conflicts:
            for existing in self._events:
                if existing is original:
                    continue
                if existing.conflicts_with(updated):
                    self._log.info("event_rejected", subject=updated.subject, reason="conflict")
                    return False

        self._events[index] = updated
        self._log.info("event_updated", subject=updated.subject, index=index)
        return True

    def remove_event(self, event: Event) -> bool:
        """Remove a standalone event; returns False if it is not held."""
        index = self._index_of(event)
        if index is None:
            return False
        del self._events[index]
        self._log.info("event_removed", subject=event.subject)
        return True

    def add_recurring_event(
        self,
        template: EventBuilder,
        pattern: RecurrencePattern,
        start_date: date,
    ) -> RecurringEvent:
        """Create a recurring series from ``template`` and add it.

        The template supplies subject, visibility, description, location
        and times. Missing times fall back to the configured series
        defaults (09:00 to 10:00 unless overridden).

        Raises:
            RecurringConflictError: Under ``REJECT_CONFLICTS``, if any
                generated instance overlaps a held event. Nothing is added.
        """
        if template is None or pattern is None or start_date is None:
            raise ValueError("Template, pattern and start date are required")

        base = template.build()
        series = RecurringEvent(
            subject=base.subject,
            start_time=base.start_time or self._settings.default_series_start_time,
            end_time=base.end_time or self._settings.default_series_end_time,
            visibility=base.visibility,
            description=base.description,
            location=base.location,
            pattern=pattern,
            start_date=start_date,
        )

        if self._rejects_conflicts:
            for instance in series.instances:
                if self.has_conflict(instance):
                    self._log.info(
                        "recurring_event_rejected",
                        subject=series.subject,
                        conflict_date=instance.start_date.isoformat(),
                    )
                    raise RecurringConflictError(instance.start_date)

        self._recurring_events.append(series)
        self._log.info(
            "recurring_event_added",
            subject=series.subject,
            instances=len(series),
        )
        return series

    def remove_recurring_event(self, series: RecurringEvent) -> bool:
        """Remove a whole series with all of its instances."""
        for index, held in enumerate(self._recurring_events):
            if held is series:
                del self._recurring_events[index]
                self._log.info("event_removed", subject=series.subject, instances=len(series))
                return True
        return False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_event(self, subject: str, day: date, at: time | None = None) -> Event | None:
        """Find a standalone event by its identity triple.

        ``at=None`` matches only all-day events. Recurring instances are
        not searched.
        """
        if subject is None or day is None:
            return None
        for event in self._events:
            if event.key == (subject, day, at):
                return event
        return None

    def get_events_on_date(self, day: date) -> list[Event]:
        """Standalone events active on ``day`` followed by that day's instances."""
        if day is None:
            raise ValueError("Date cannot be None")

        found = [event for event in self._events if event.is_active_on(day)]
        for series in self._recurring_events:
            instance = series.get_instance(day)
            if instance is not None:
                found.append(instance)
        return found

    def get_events_in_range(self, start: date, end: date) -> list[Event]:
        """Events touching the inclusive range ``[start, end]``.

        Results are de-duplicated by identity triple and sorted by start
        date, then start time with all-day events first.
        """
        if start is None or end is None:
            raise ValueError("Start and end dates cannot be None")
        if start > end:
            raise ValueError("Start date must not be after end date")

        found: list[Event] = [
            event
            for event in self._events
            if event.last_date >= start and event.start_date <= end
        ]
        for series in self._recurring_events:
            found.extend(series.instances_between(start, end))

        unique = list(dict.fromkeys(found))
        unique.sort(key=lambda e: (e.start_date, e.start_time or time.min))
        return unique

    def get_all_events(self) -> list[Event]:
        """Every standalone event, then every instance of every series."""
        events = list(self._events)
        for series in self._recurring_events:
            events.extend(series.instances)
        return events

    def is_busy(self, day: date, at: time) -> bool:
        """Return True if any event covers the moment ``at`` on ``day``."""
        if day is None or at is None:
            raise ValueError("Date and time cannot be None")

        for event in self._events:
            if _covers(event, day, at):
                return True
        for series in self._recurring_events:
            instance = series.get_instance(day)
            if instance is not None and _covers(instance, day, at):
                return True
        return False

    def find_conflicts(self, event: Event) -> list[Event]:
        """Held events that overlap ``event``: standalone first, then instances."""
        conflicts = [existing for existing in self._events if existing.conflicts_with(event)]
        for series in self._recurring_events:
            conflicts.extend(
                instance for instance in series.instances if instance.conflicts_with(event)
            )
        return conflicts

    def has_conflict(self, event: Event) -> bool:
        return bool(self.find_conflicts(event))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _index_of(self, event: Event) -> int | None:
        for index, held in enumerate(self._events):
            if held is event:
                return index
        return None

    def __len__(self) -> int:
        return len(self._events) + sum(len(series) for series in self._recurring_events)

    def __repr__(self) -> str:
        return (
            f"Calendar(title={self._title!r}, policy={self._conflict_policy.value}, "
            f"events={len(self._events)}, series={len(self._recurring_events)})"
        )


def _covers(event: Event, day: date, at: time) -> bool:
    """Return True if ``event`` occupies clock time ``at`` on ``day``.

    Timed events are half-open at the end: an event ending at 12:00 does
    not cover 12:00. Multi-day events cover from their start time on the
    first day, all of every middle day, and up to their end time on the
    last day. A one-hour default that runs past midnight covers the rest
    of its start day.
    """
    start_time = event.start_time
    if not event.is_active_on(day):
        return False
    if start_time is None:
        return True

    end_time = event.end_time or plus_hours(start_time, 1)
    first = day == event.start_date
    last = day == event.last_date

    if first and last:
        if event.end_time is None and end_time <= start_time:
            return at >= start_time
        return start_time <= at < end_time
    if first:
        return at >= start_time
    if last:
        return at < end_time
    return True
