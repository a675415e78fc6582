"""Recurring events.

A :class:`RecurringEvent` expands a :class:`RecurrencePattern` into dated
:class:`RecurringEventInstance` objects once, at construction. The set of
dates never changes afterwards; individual instances can be overridden
in place through the ``modify_*`` methods.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from datetime import date, time
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from daybook.constants import RECURRENCE_HORIZON_YEARS
from daybook.events.builder import EventBuilder
from daybook.events.models import Event, SingleEvent, Visibility, Weekday
from daybook.logging import get_logger
from daybook.temporal import ONE_DAY, add_years

log = get_logger("daybook.events.recurrence")

# ---------------------------------------------------------------------------
# Pattern
# ---------------------------------------------------------------------------


class RecurrencePattern(BaseModel):
    """Which weekdays an event repeats on and when it stops.

    Exactly one of ``occurrences`` or ``end_date`` is set. Use
    :meth:`with_occurrences` or :meth:`until_date` to create one.
    """

    model_config = ConfigDict(frozen=True)

    days_of_week: frozenset[Weekday] = Field(min_length=1)
    occurrences: int | None = Field(default=None, gt=0)
    end_date: date | None = None

    @model_validator(mode="after")
    def check_termination(self) -> Self:
        """Require exactly one termination rule."""
        if (self.occurrences is None) == (self.end_date is None):
            raise ValueError("Exactly one of occurrences or end_date must be set")
        return self

    @classmethod
    def with_occurrences(cls, days_of_week: set[Weekday], occurrences: int) -> RecurrencePattern:
        """Repeat on ``days_of_week`` until ``occurrences`` instances exist."""
        if occurrences <= 0:
            raise ValueError("Occurrences must be positive")
        return cls(days_of_week=frozenset(days_of_week), occurrences=occurrences)

    @classmethod
    def until_date(cls, days_of_week: set[Weekday], end_date: date) -> RecurrencePattern:
        """Repeat on ``days_of_week`` up to and including ``end_date``."""
        if end_date is None:
            raise ValueError("End date cannot be None")
        return cls(days_of_week=frozenset(days_of_week), end_date=end_date)

    def is_occurrence_based(self) -> bool:
        return self.occurrences is not None


# ---------------------------------------------------------------------------
# Instance
# ---------------------------------------------------------------------------


class RecurringEventInstance(Event):
    """One dated occurrence of a :class:`RecurringEvent`.

    Until modified, every field comes from the parent series and the
    instance's own date. Once modified, every field comes from the
    override event instead.
    """

    def __init__(self, parent: RecurringEvent, day: date) -> None:
        self._parent = parent
        self._date = day
        self._override: SingleEvent | None = None

    @property
    def parent(self) -> RecurringEvent:
        return self._parent

    @property
    def date(self) -> date:
        """The generated date this instance is indexed under."""
        return self._date

    @property
    def is_modified(self) -> bool:
        return self._override is not None

    @property
    def modified_event(self) -> SingleEvent | None:
        return self._override

    def modify(self, updates: EventBuilder) -> None:
        """Replace this instance's fields with the event ``updates`` builds."""
        self._override = updates.build()

    # Effective values -------------------------------------------------

    @property
    def subject(self) -> str:  # type: ignore[override]
        if self._override is not None:
            return self._override.subject
        return self._parent.subject

    @property
    def start_date(self) -> date:  # type: ignore[override]
        if self._override is not None:
            return self._override.start_date
        return self._date

    @property
    def start_time(self) -> time | None:  # type: ignore[override]
        if self._override is not None:
            return self._override.start_time
        return self._parent.start_time

    @property
    def end_date(self) -> date | None:  # type: ignore[override]
        if self._override is not None:
            return self._override.end_date
        return self._date

    @property
    def end_time(self) -> time | None:  # type: ignore[override]
        if self._override is not None:
            return self._override.end_time
        return self._parent.end_time

    @property
    def visibility(self) -> Visibility:  # type: ignore[override]
        if self._override is not None:
            return self._override.visibility
        return self._parent.visibility

    @property
    def description(self) -> str | None:  # type: ignore[override]
        if self._override is not None:
            return self._override.description
        return self._parent.description

    @property
    def location(self) -> str | None:  # type: ignore[override]
        if self._override is not None:
            return self._override.location
        return self._parent.location

    # Derived ----------------------------------------------------------

    def conflicts_with(self, other: Event) -> bool:
        if self.is_all_day and other.is_all_day:
            return super().conflicts_with(other)
        return (
            other.start_datetime < self.end_datetime
            and self.start_datetime < other.end_datetime
        )

    def with_updates(self, builder: EventBuilder) -> RecurringEventInstance:
        self.modify(builder)
        return self

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, RecurringEventInstance):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return (
            f"RecurringEventInstance(subject={self.subject!r}, date={self._date}, "
            f"modified={self.is_modified})"
        )


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------


class RecurringEvent:
    """A series of events sharing subject, times and details.

    Instances are generated from ``start_date`` onward, one per matching
    weekday, until the pattern's count or end date is reached. Generation
    never walks more than five years past ``start_date``.
    """

    def __init__(
        self,
        subject: str,
        start_time: time,
        end_time: time | None,
        visibility: Visibility,
        description: str | None,
        location: str | None,
        pattern: RecurrencePattern,
        start_date: date,
    ) -> None:
        if not subject:
            raise ValueError("subject is required")
        if start_time is None:
            raise ValueError("start_time is required")
        if visibility is None:
            raise ValueError("visibility is required")
        if pattern is None:
            raise ValueError("pattern is required")
        if start_date is None:
            raise ValueError("start_date is required")

        self._subject = subject
        self._start_time = start_time
        self._end_time = end_time
        self._visibility = visibility
        self._description = description
        self._location = location
        self._pattern = pattern
        self._start_date = start_date
        self._instances: list[RecurringEventInstance] = []
        self._by_date: dict[date, RecurringEventInstance] = {}
        self._dates: list[date] = []

        self._generate_instances(start_date)

    def _generate_instances(self, start_date: date) -> None:
        pattern = self._pattern
        target = pattern.occurrences
        horizon = add_years(start_date, RECURRENCE_HORIZON_YEARS)
        current = start_date
        count = 0

        while (target is None or count < target) and (
            pattern.end_date is None or current <= pattern.end_date
        ):
            if Weekday.of(current) in pattern.days_of_week:
                instance = RecurringEventInstance(self, current)
                self._instances.append(instance)
                self._by_date[current] = instance
                self._dates.append(current)
                count += 1
            current += ONE_DAY

            if current > horizon:
                log.warning(
                    "recurrence_horizon_reached",
                    subject=self._subject,
                    start_date=start_date.isoformat(),
                    generated=count,
                )
                break

        log.debug(
            "recurrence_expanded",
            subject=self._subject,
            start_date=start_date.isoformat(),
            count=count,
        )

    # Accessors --------------------------------------------------------

    @property
    def subject(self) -> str:
        return self._subject

    @property
    def start_time(self) -> time:
        return self._start_time

    @property
    def end_time(self) -> time | None:
        return self._end_time

    @property
    def visibility(self) -> Visibility:
        return self._visibility

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def location(self) -> str | None:
        return self._location

    @property
    def pattern(self) -> RecurrencePattern:
        return self._pattern

    @property
    def start_date(self) -> date:
        return self._start_date

    @property
    def instances(self) -> list[RecurringEventInstance]:
        """All instances in generation (chronological) order."""
        return list(self._instances)

    def get_instance(self, day: date) -> RecurringEventInstance | None:
        """Instance generated for ``day``, if any."""
        return self._by_date.get(day)

    def instances_between(self, start: date, end: date) -> list[RecurringEventInstance]:
        """Instances whose generated date lies within ``[start, end]``."""
        lo = bisect_left(self._dates, start)
        hi = bisect_right(self._dates, end)
        return self._instances[lo:hi]

    # Modification -----------------------------------------------------

    def modify_instance(self, day: date, updates: EventBuilder) -> None:
        """Override the instance generated for ``day``; no-op if none exists."""
        instance = self._by_date.get(day)
        if instance is None:
            return
        instance.modify(updates)
        log.info("instance_modified", subject=self._subject, date=day.isoformat())

    def modify_from(self, from_date: date, updates: EventBuilder) -> None:
        """Override every instance generated on or after ``from_date``."""
        modified = 0
        for instance in self._instances:
            if instance.date >= from_date:
                instance.modify(updates)
                modified += 1
        log.info(
            "instance_modified",
            subject=self._subject,
            from_date=from_date.isoformat(),
            count=modified,
        )

    def modify_all(self, updates: EventBuilder) -> None:
        """Override every instance in the series."""
        for instance in self._instances:
            instance.modify(updates)
        log.info("instance_modified", subject=self._subject, count=len(self._instances))

    def __len__(self) -> int:
        return len(self._instances)

    def __repr__(self) -> str:
        return (
            f"RecurringEvent(subject={self._subject!r}, start_date={self._start_date}, "
            f"instances={len(self._instances)})"
        )
