"""Recurrence rule engine.

Expands a recurrence category into the concrete occurrence dates of a
task inside a date window. Every category maps to exactly one schedule
shape through an explicit table; categories missing from the table, and
labels nobody recognizes, fall back to the quarterly shape.

All functions in this module are pure - no I/O, no side effects.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, time
from enum import Enum

from dateutil import rrule

from taskplan.domain.shared.errors import UnknownRecurrenceError
from taskplan.domain.task.models import RecurrenceCategory

logger = logging.getLogger(__name__)


class ScheduleShape(str, Enum):
    """Date-generation algorithm a recurrence category selects."""

    ONE_TIME = "ONE_TIME"
    MONTHLY = "MONTHLY"
    TWICE_MONTHLY = "TWICE_MONTHLY"
    QUARTERLY = "QUARTERLY"
    AFTER_COMPLETION = "AFTER_COMPLETION"


CATEGORY_SHAPES: dict[RecurrenceCategory, ScheduleShape] = {
    RecurrenceCategory.ONGOING: ScheduleShape.MONTHLY,
    RecurrenceCategory.PERIODIC: ScheduleShape.MONTHLY,
    RecurrenceCategory.DURING_WORKS: ScheduleShape.MONTHLY,
    RecurrenceCategory.TWICE_MONTHLY: ScheduleShape.TWICE_MONTHLY,
    RecurrenceCategory.QUARTERLY: ScheduleShape.QUARTERLY,
    RecurrenceCategory.ONE_TIME: ScheduleShape.ONE_TIME,
    RecurrenceCategory.AS_NEEDED: ScheduleShape.QUARTERLY,
    RecurrenceCategory.AFTER_COMPLETION: ScheduleShape.AFTER_COMPLETION,
}

DEFAULT_SHAPE = ScheduleShape.QUARTERLY
FALLBACK_CATEGORY = RecurrenceCategory.AS_NEEDED

# Labels used in the program's task register, keyed case-folded
SOURCE_LABELS: dict[str, RecurrenceCategory] = {
    "priebežne": RecurrenceCategory.ONGOING,
    "priebežne (aktualizácia)": RecurrenceCategory.ONGOING,
    "jednorazovo (nastavenie) + priebežne": RecurrenceCategory.ONGOING,
    "2x mesačne": RecurrenceCategory.TWICE_MONTHLY,
    "1x kvartálne": RecurrenceCategory.QUARTERLY,
    "jednorazovo": RecurrenceCategory.ONE_TIME,
    "podľa potreby": RecurrenceCategory.AS_NEEDED,
    "periodicky (podľa harmonogramu)": RecurrenceCategory.PERIODIC,
    "počas stavebných prác": RecurrenceCategory.DURING_WORKS,
    "po ukončení prác": RecurrenceCategory.AFTER_COMPLETION,
}


def resolve_category(
    value: str | RecurrenceCategory,
    strict: bool = False,
) -> RecurrenceCategory:
    """Resolve a category or raw label to a RecurrenceCategory.

    Raw strings match, case-insensitively, an enum value, an enum name
    or a source label. Anything else maps to AS_NEEDED unless strict.

    Args:
        value: Category or label to resolve
        strict: Raise instead of falling back

    Returns:
        The resolved category

    Raises:
        UnknownRecurrenceError: If strict and the label is unrecognized
    """
    if isinstance(value, RecurrenceCategory):
        return value

    key = value.strip().casefold()
    for category in RecurrenceCategory:
        if key in (category.value.casefold(), category.name.casefold()):
            return category
    if key in SOURCE_LABELS:
        return SOURCE_LABELS[key]

    if strict:
        raise UnknownRecurrenceError(value)
    logger.warning(
        "Unrecognized recurrence %r, falling back to %s",
        value,
        FALLBACK_CATEGORY.value,
    )
    return FALLBACK_CATEGORY


def shape_for(category: RecurrenceCategory) -> ScheduleShape:
    """Return the schedule shape for a category (quarterly by default)."""
    return CATEGORY_SHAPES.get(category, DEFAULT_SHAPE)


# =============================================================================
# Shape Handlers
# =============================================================================


def _midnight(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _rule_dates(start: date, end: date, **params) -> list[date]:
    """Dates of a calendar rule that fall within [start, end]."""
    if start > end:
        return []
    rule = rrule.rrule(dtstart=_midnight(start), until=_midnight(end), **params)
    return [occurrence.date() for occurrence in rule]


def _one_time(start: date, end: date) -> list[date]:
    return [start] if start <= end else []


def _monthly(start: date, end: date) -> list[date]:
    return _rule_dates(start, end, freq=rrule.MONTHLY, bymonthday=1)


def _twice_monthly(start: date, end: date) -> list[date]:
    return _rule_dates(start, end, freq=rrule.MONTHLY, bymonthday=(1, 15))


def _quarterly(start: date, end: date) -> list[date]:
    return _rule_dates(
        start,
        end,
        freq=rrule.YEARLY,
        bymonth=(1, 4, 7, 10),
        bymonthday=1,
    )


def _after_completion(start: date, end: date) -> list[date]:
    # Emitted even when the window is empty
    return [end]


_HANDLERS: dict[ScheduleShape, Callable[[date, date], list[date]]] = {
    ScheduleShape.ONE_TIME: _one_time,
    ScheduleShape.MONTHLY: _monthly,
    ScheduleShape.TWICE_MONTHLY: _twice_monthly,
    ScheduleShape.QUARTERLY: _quarterly,
    ScheduleShape.AFTER_COMPLETION: _after_completion,
}


def generate_occurrences(
    category: str | RecurrenceCategory | ScheduleShape,
    start: date,
    end: date,
) -> list[date]:
    """Expand a recurrence into its occurrence dates.

    Args:
        category: Recurrence category, schedule shape or raw label.
            Unrecognized labels use the quarterly shape.
        start: Window start (inclusive)
        end: Window end (inclusive)

    Returns:
        Ascending, duplicate-free list of dates within [start, end];
        for AFTER_COMPLETION always exactly [end]
    """
    if isinstance(category, ScheduleShape):
        shape = category
    elif (
        not isinstance(category, RecurrenceCategory)
        and category.strip().upper() in ScheduleShape.__members__
    ):
        shape = ScheduleShape[category.strip().upper()]
    else:
        shape = shape_for(resolve_category(category))
    return sorted(set(_HANDLERS[shape](start, end)))
