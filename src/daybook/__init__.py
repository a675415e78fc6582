"""Daybook: a personal calendar with recurring events and conflict detection."""

from daybook.calendar import Calendar, ConflictPolicy, RecurringConflictError
from daybook.events import (
    Event,
    EventBuildError,
    EventBuilder,
    RecurrencePattern,
    RecurringEvent,
    RecurringEventInstance,
    SingleEvent,
    Visibility,
    Weekday,
)

__all__ = [
    "Calendar",
    "ConflictPolicy",
    "Event",
    "EventBuildError",
    "EventBuilder",
    "RecurrencePattern",
    "RecurringConflictError",
    "RecurringEvent",
    "RecurringEventInstance",
    "SingleEvent",
    "Visibility",
    "Weekday",
]
