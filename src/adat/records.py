"""
Conversion of persistence rows into engine types.

Rows follow the backend's column layout: ``recurrence_type`` is one of
daily / weekly / custom / one-time, with ``recurrence_days`` for weekly,
``due_date`` for one-time and a ``recurrence_pattern`` object for custom.
A row that cannot be understood gets ``recurrence=None`` (never due).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional

from .core.time import parse_ymd
from .core.types import (
    Annual,
    Daily,
    Interval,
    MonthlyByDay,
    OneTime,
    RecurrenceSpec,
    SchedulableEntity,
    Weekly,
)

logger = logging.getLogger(__name__)

_CALENDARS = {"hijri": "lunar", "lunar": "lunar", "gregorian": "civil", "civil": "civil"}


def _date_or_none(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return parse_ymd(str(value))


def _positive_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _pattern(pattern: Mapping[str, Any]) -> Optional[RecurrenceSpec]:
    kind = pattern.get("type")
    calendar = _CALENDARS.get(pattern.get("calendarType") or "hijri")

    if kind == "interval":
        every = _positive_int(pattern.get("interval"))
        unit = pattern.get("intervalUnit")
        if every is None or unit not in ("days", "weeks"):
            return None
        return Interval(every=every, unit=unit, anchor=_date_or_none(pattern.get("anchorDate")))

    if kind == "monthly":
        day = _positive_int(pattern.get("monthlyDay"))
        if day is None or calendar is None:
            return None
        return MonthlyByDay(day=day, calendar=calendar)

    if kind in ("annual", "yearly"):
        month = _positive_int(pattern.get("month"))
        day = _positive_int(pattern.get("day", pattern.get("monthlyDay")))
        if month is None or day is None or calendar is None:
            return None
        return Annual(month=month, day=day, calendar=calendar)

    return None


def recurrence_from_record(row: Mapping[str, Any]) -> Optional[RecurrenceSpec]:
    kind = row.get("recurrence_type")
    try:
        if kind == "daily":
            return Daily()
        if kind == "weekly":
            days = row.get("recurrence_days") or ()
            return Weekly(days_of_week=frozenset(int(d) for d in days))
        if kind == "one-time":
            return OneTime(due_date=_date_or_none(row.get("due_date")))
        if kind == "custom":
            pattern = row.get("recurrence_pattern")
            if not isinstance(pattern, Mapping):
                return None
            return _pattern(pattern)
    except (TypeError, ValueError) as e:
        logger.warning("Malformed recurrence on %s: %s", row.get("id"), e)
        return None
    return None


def entity_from_record(row: Mapping[str, Any]) -> SchedulableEntity:
    entity_id = str(row.get("id", ""))
    is_active = bool(row.get("is_active", row.get("is_published", True)))
    try:
        start = _date_or_none(row.get("start_date")) or date.min
        end = _date_or_none(row.get("end_date"))
    except ValueError as e:
        logger.warning("Bad date range on %s, treating as inactive: %s", entity_id, e)
        start, end, is_active = date.min, None, False

    return SchedulableEntity(
        id=entity_id,
        title=str(row.get("title") or ""),
        start_date=start,
        end_date=end,
        is_active=is_active,
        recurrence=recurrence_from_record(row),
    )
