from __future__ import annotations

import logging
from datetime import date, datetime
from typing import AbstractSet, Any, Dict, List, Optional, Sequence

from . import summary as _summary
from .core.engine import CalendarEngine, EngineRegistry
from .core.time import DateLike, as_date, from_jdn, local_datetime, resolve_zone
from .core.types import (
    BoundaryResult,
    DualDate,
    DueReminder,
    DueSchedule,
    LunarDate,
    OccurrenceRecord,
    SchedulableEntity,
)
from .engines import boundary as _boundary
from .engines import dues as _dues
from .engines import recurrence as _recurrence
from .engines import scanner as _scanner
from .engines.factory import make_engine as _make_engine
from .engines.specs import EngineSpec

logger = logging.getLogger(__name__)

DEFAULT_ENGINE = "misri"
_registry: Optional[EngineRegistry] = None

def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Engine registry not initialized")
    return _registry

def get_engine(name: str = DEFAULT_ENGINE) -> CalendarEngine:
    return _reg().get(name)

def list_engines() -> List[str]:
    return _reg().list()

def engine_info(engine: str = DEFAULT_ENGINE) -> Dict[str, Any]:
    return _reg().get(engine).info()

def make_engine(spec: EngineSpec) -> CalendarEngine:
    return _make_engine(spec)

def register_engine(name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
    _reg().register(name, engine, overwrite=overwrite)

# ============================================================
# Calendar conversion
# ============================================================

def to_lunar(instant: DateLike, timezone: Optional[str] = None, *, engine: str = DEFAULT_ENGINE) -> LunarDate:
    """
    Lunar date of the civil day on which `instant` falls in `timezone`
    (host zone when omitted). A plain date is converted as-is.
    """
    eng = _reg().get(engine)
    if not isinstance(instant, datetime):
        return eng.from_date(instant)
    zone, warning = resolve_zone(timezone)
    if warning:
        logger.warning("Falling back to host timezone: %s", warning)
    return eng.from_date(local_datetime(instant, zone).date())

def is_leap_year(year: int, *, engine: str = DEFAULT_ENGINE) -> bool:
    return _reg().get(engine).is_leap_year(year)

def days_in_lunar_month(month: int, year: int, *, engine: str = DEFAULT_ENGINE) -> int:
    return _reg().get(engine).days_in_month(month, year)

def lunar_to_gregorian(year: int, month: int, day: int, *, engine: str = DEFAULT_ENGINE) -> date:
    return from_jdn(_reg().get(engine).to_jdn(year, month, day))

def advance(d: LunarDate, *, engine: str = DEFAULT_ENGINE) -> LunarDate:
    return _reg().get(engine).advance(d)

def retreat(d: LunarDate, *, engine: str = DEFAULT_ENGINE) -> LunarDate:
    return _reg().get(engine).retreat(d)

def month_name(month: int, *, native: bool = False, engine: str = DEFAULT_ENGINE) -> str:
    return _reg().get(engine).month_name(month, native=native)

# ============================================================
# Day boundary
# ============================================================

def resolve_boundary(
    instant: datetime,
    sunset: Optional[str],
    timezone: Optional[str] = None,
    *,
    night_reset_hour: Optional[int] = None,
) -> BoundaryResult:
    return _boundary.resolve_boundary(instant, sunset, timezone, night_reset_hour=night_reset_hour)

def dual_date(
    instant: datetime,
    sunset: Optional[str],
    timezone: Optional[str] = None,
    *,
    engine: str = DEFAULT_ENGINE,
    night_reset_hour: Optional[int] = None,
) -> DualDate:
    return _boundary.build_dual_date(
        _reg().get(engine), instant, sunset, timezone, night_reset_hour=night_reset_hour
    )

# ============================================================
# Recurrence
# ============================================================

def is_due(entity: SchedulableEntity, lunar: LunarDate, gregorian: DateLike) -> bool:
    return _recurrence.is_due(entity, lunar, gregorian)

def due_on(entities: Sequence[SchedulableEntity], lunar: LunarDate, gregorian: DateLike) -> List[SchedulableEntity]:
    return _recurrence.due_on(entities, lunar, gregorian)

def next_occurrence(
    entity: SchedulableEntity,
    after: DateLike,
    *,
    inclusive: bool = False,
    engine: str = DEFAULT_ENGINE,
    horizon_days: int = _recurrence.DEFAULT_HORIZON_DAYS,
) -> Optional[OccurrenceRecord]:
    return _recurrence.next_occurrence(
        _reg().get(engine), entity, after, inclusive=inclusive, horizon_days=horizon_days
    )

def previous_occurrence(
    entity: SchedulableEntity,
    before: DateLike,
    *,
    inclusive: bool = False,
    engine: str = DEFAULT_ENGINE,
    horizon_days: int = _recurrence.DEFAULT_HORIZON_DAYS,
) -> Optional[OccurrenceRecord]:
    return _recurrence.previous_occurrence(
        _reg().get(engine), entity, before, inclusive=inclusive, horizon_days=horizon_days
    )

# ============================================================
# Occurrence scanning
# ============================================================

def find_overdue(
    entities: Sequence[SchedulableEntity],
    today: DualDate,
    completed_keys: AbstractSet[str] = frozenset(),
    lookback_days: int = _scanner.DEFAULT_LOOKBACK_DAYS,
    *,
    engine: str = DEFAULT_ENGINE,
) -> List[OccurrenceRecord]:
    return _scanner.find_overdue(_reg().get(engine), entities, today, completed_keys, lookback_days)

def find_all_missed(
    entity: SchedulableEntity,
    today: DualDate,
    completed_keys: AbstractSet[str] = frozenset(),
    lookback_days: int = _scanner.DEFAULT_LOOKBACK_DAYS,
    *,
    engine: str = DEFAULT_ENGINE,
) -> List[OccurrenceRecord]:
    return _scanner.find_all_missed(_reg().get(engine), entity, today, completed_keys, lookback_days)

def completion_key(entity_id: str, lunar: LunarDate) -> str:
    return _scanner.completion_key(entity_id, lunar)

def overdue_label(due: DateLike, today: DateLike) -> str:
    return _scanner.overdue_label(as_date(due), as_date(today))

# ============================================================
# Dues
# ============================================================

def due_reminders(
    dues: Sequence[DueSchedule],
    today: DualDate,
    paid_ids: AbstractSet[str] = frozenset(),
    *,
    engine: str = DEFAULT_ENGINE,
) -> List[DueReminder]:
    return _dues.due_reminders(_reg().get(engine), dues, today, paid_ids)

# ============================================================
# Display
# ============================================================

def describe(obj: Any, *, engine: str = DEFAULT_ENGINE) -> str:
    eng = _reg().get(engine)
    return _summary.describe(obj, month_name=lambda m: eng.month_name(m))
