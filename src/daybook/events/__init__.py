"""Event types: single events, the builder, and recurring series."""

from daybook.events.builder import EventBuildError, EventBuilder
from daybook.events.models import Event, SingleEvent, Visibility, Weekday
from daybook.events.recurrence import (
    RecurrencePattern,
    RecurringEvent,
    RecurringEventInstance,
)

__all__ = [
    "Event",
    "EventBuildError",
    "EventBuilder",
    "RecurrencePattern",
    "RecurringEvent",
    "RecurringEventInstance",
    "SingleEvent",
    "Visibility",
    "Weekday",
]
