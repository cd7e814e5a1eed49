"""
adat.engines.scanner
--------------------
Walks a bounded window of past days looking for occurrences that were due
but never marked complete. Past days bind to the pre-boundary lunar date of
their civil day, which is also how completions are keyed.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import AbstractSet, Iterable, List, Sequence, Set, Tuple

from adat.core.engine import CalendarEngine
from adat.core.time import DateLike, as_date
from adat.core.types import DualDate, LunarDate, OccurrenceRecord, SchedulableEntity
from adat.engines.recurrence import is_due

DEFAULT_LOOKBACK_DAYS = 7

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def completion_key(entity_id: str, lunar: LunarDate) -> str:
    return f"{entity_id}:{lunar.key}"


def past_days(engine: CalendarEngine, today: date, lookback_days: int) -> List[Tuple[date, LunarDate]]:
    """(civil, lunar) pairs for 1..lookback_days days ago, most recent first."""
    out: List[Tuple[date, LunarDate]] = []
    if lookback_days <= 0:
        return out
    d = today - timedelta(days=1)
    lunar = engine.from_date(d)
    for _ in range(lookback_days):
        out.append((d, lunar))
        d -= timedelta(days=1)
        lunar = engine.retreat(lunar)
    return out


def find_overdue(
    engine: CalendarEngine,
    entities: Sequence[SchedulableEntity],
    today: DualDate,
    completed_keys: AbstractSet[str],
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> List[OccurrenceRecord]:
    """
    At most one record per entity: the most recent unresolved occurrence.
    Once an entity has been reported, older days are skipped for it.
    """
    reported: Set[str] = set()
    out: List[OccurrenceRecord] = []

    for d, lunar in past_days(engine, today.civil_date, lookback_days):
        for entity in entities:
            if entity.id in reported:
                continue
            if not is_due(entity, lunar, d):
                continue
            if completion_key(entity.id, lunar) in completed_keys:
                continue
            reported.add(entity.id)
            out.append(OccurrenceRecord(entity_id=entity.id, due_gregorian=d, due_lunar=lunar))
    return out


def find_all_missed(
    engine: CalendarEngine,
    entity: SchedulableEntity,
    today: DualDate,
    completed_keys: AbstractSet[str],
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> List[OccurrenceRecord]:
    """Every unresolved occurrence of one entity in the window, most recent first."""
    return [
        OccurrenceRecord(entity_id=entity.id, due_gregorian=d, due_lunar=lunar)
        for d, lunar in past_days(engine, today.civil_date, lookback_days)
        if is_due(entity, lunar, d) and completion_key(entity.id, lunar) not in completed_keys
    ]


def completion_keys(records: Iterable[OccurrenceRecord]) -> Set[str]:
    return {r.completion_key for r in records}


def overdue_label(due: DateLike, today: DateLike) -> str:
    """'Today', 'Yesterday', otherwise '8 Feb'."""
    d, t = as_date(due), as_date(today)
    delta = (t - d).days
    if delta == 0:
        return "Today"
    if delta == 1:
        return "Yesterday"
    return f"{d.day} {_MONTH_ABBR[d.month - 1]}"
