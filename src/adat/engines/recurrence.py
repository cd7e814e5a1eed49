"""
adat.engines.recurrence
-----------------------
Decides whether a schedulable entity is due on a given day, expressed in
both calendars. Everything here is a pure function of its arguments: the
caller supplies "today", nothing reads the clock.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional

from adat.core.engine import CalendarEngine
from adat.core.time import DateLike, as_date, weekday_sun0
from adat.core.types import (
    Annual,
    Daily,
    Interval,
    LunarDate,
    MonthlyByDay,
    OccurrenceRecord,
    OneTime,
    RecurrenceSpec,
    SchedulableEntity,
    Weekly,
)

DEFAULT_HORIZON_DAYS = 1100


def in_range(entity: SchedulableEntity, gregorian: DateLike) -> bool:
    """Active, on or after start_date, and not past end_date."""
    if not entity.is_active:
        return False
    d = as_date(gregorian)
    if d < as_date(entity.start_date):
        return False
    if entity.end_date is not None and d > as_date(entity.end_date):
        return False
    return True


def _weekly_due(rule: Weekly, d: date) -> bool:
    days = rule.days_of_week
    if not days or not isinstance(days, (set, frozenset, list, tuple)):
        return False
    return weekday_sun0(d) in days


def _interval_due(rule: Interval, anchor: date, d: date) -> bool:
    if not isinstance(rule.every, int) or rule.every <= 0:
        return False
    if rule.unit not in ("days", "weeks"):
        return False
    if not isinstance(anchor, date):
        return False
    elapsed = (d - anchor).days
    if elapsed < 0:
        return False
    return elapsed % rule.step_days == 0


def _day_of_month(calendar: str, lunar: LunarDate, d: date) -> Optional[int]:
    if calendar == "lunar":
        return lunar.day
    if calendar == "civil":
        return d.day
    return None


def matches(rule: Optional[RecurrenceSpec], entity: SchedulableEntity, lunar: LunarDate, d: date) -> bool:
    """Recurrence test only; range checks are done by is_due."""
    if isinstance(rule, Daily):
        return True

    if isinstance(rule, Weekly):
        return _weekly_due(rule, d)

    if isinstance(rule, Interval):
        anchor = as_date(rule.anchor) if rule.anchor is not None else as_date(entity.start_date)
        return _interval_due(rule, anchor, d)

    if isinstance(rule, MonthlyByDay):
        # No clamping: day 30 never fires in a 29-day month.
        if rule.day is None:
            return False
        return _day_of_month(rule.calendar, lunar, d) == rule.day

    if isinstance(rule, Annual):
        if rule.day is None or rule.month is None:
            return False
        if rule.calendar == "lunar":
            return lunar.month == rule.month and lunar.day == rule.day
        if rule.calendar == "civil":
            return d.month == rule.month and d.day == rule.day
        return False

    if isinstance(rule, OneTime):
        if rule.due_date is None:
            return False
        return d == as_date(rule.due_date)

    # Missing or unrecognised recurrence: never due.
    return False


def is_due(entity: SchedulableEntity, lunar: LunarDate, gregorian: DateLike) -> bool:
    d = as_date(gregorian)
    if not in_range(entity, d):
        return False
    return matches(entity.recurrence, entity, lunar, d)


def due_on(entities: Iterable[SchedulableEntity], lunar: LunarDate, gregorian: DateLike) -> List[SchedulableEntity]:
    """All entities due on the given day, in input order."""
    return [e for e in entities if is_due(e, lunar, gregorian)]


# ============================================================
# Next / previous occurrence
# ============================================================

# Feb 29 can skip a century year, so a civil date recurs within 8 years.
_CIVIL_ANNUAL_SPAN_YEARS = 9


def _direct_candidates(rule: Optional[RecurrenceSpec], d: date, forward: bool) -> Optional[List[date]]:
    """
    Candidate days for rules whose occurrences can be computed without
    walking the calendar, ordered outward from `d`. None means the rule
    has to be scanned day by day.
    """
    if isinstance(rule, OneTime):
        if not isinstance(rule.due_date, date):
            return []
        return [as_date(rule.due_date)]

    if isinstance(rule, Annual) and rule.calendar == "civil":
        if not isinstance(rule.month, int) or not isinstance(rule.day, int):
            return []
        step = 1 if forward else -1
        out: List[date] = []
        for y in range(d.year, d.year + step * _CIVIL_ANNUAL_SPAN_YEARS, step):
            try:
                out.append(date(y, rule.month, rule.day))
            except ValueError:
                continue
        return out

    return None


def _first_direct(
    engine: CalendarEngine,
    entity: SchedulableEntity,
    candidates: List[date],
    d: date,
    forward: bool,
) -> Optional[OccurrenceRecord]:
    for c in candidates:
        if (c < d) if forward else (c > d):
            continue
        lunar = engine.from_date(c)
        if is_due(entity, lunar, c):
            return OccurrenceRecord(entity_id=entity.id, due_gregorian=c, due_lunar=lunar)
    return None


def next_occurrence(
    engine: CalendarEngine,
    entity: SchedulableEntity,
    after: DateLike,
    *,
    inclusive: bool = False,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> Optional[OccurrenceRecord]:
    """
    First due day strictly after `after` (or on it when inclusive).

    One-time and civil annual rules are resolved directly, however far
    away. Other rules are walked day by day for at most horizon_days,
    stepping the lunar date with the engine instead of reconverting it.
    """
    d = as_date(after)
    if not inclusive:
        d += timedelta(days=1)
    d = max(d, as_date(entity.start_date))

    candidates = _direct_candidates(entity.recurrence, d, forward=True)
    if candidates is not None:
        return _first_direct(engine, entity, candidates, d, forward=True)

    lunar = engine.from_date(d)
    for _ in range(horizon_days):
        if entity.end_date is not None and d > as_date(entity.end_date):
            return None
        if is_due(entity, lunar, d):
            return OccurrenceRecord(entity_id=entity.id, due_gregorian=d, due_lunar=lunar)
        d += timedelta(days=1)
        lunar = engine.advance(lunar)
    return None


def previous_occurrence(
    engine: CalendarEngine,
    entity: SchedulableEntity,
    before: DateLike,
    *,
    inclusive: bool = False,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> Optional[OccurrenceRecord]:
    """Mirror image of next_occurrence, stopping at the entity's start_date."""
    d = as_date(before)
    if not inclusive:
        d -= timedelta(days=1)
    if entity.end_date is not None:
        d = min(d, as_date(entity.end_date))
    start = as_date(entity.start_date)

    candidates = _direct_candidates(entity.recurrence, d, forward=False)
    if candidates is not None:
        return _first_direct(engine, entity, candidates, d, forward=False)

    lunar = engine.from_date(d)
    for _ in range(horizon_days):
        if d < start:
            return None
        if is_due(entity, lunar, d):
            return OccurrenceRecord(entity_id=entity.id, due_gregorian=d, due_lunar=lunar)
        d -= timedelta(days=1)
        lunar = engine.retreat(lunar)
    return None
