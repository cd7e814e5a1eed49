from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import FrozenSet, Literal, Optional, Tuple, Union

CalendarKind = Literal["lunar", "civil"]
IntervalUnit = Literal["days", "weeks"]
ReminderType = Literal["before_7_days", "last_day", "custom"]
Urgency = Literal["due_today", "upcoming"]


@dataclass(frozen=True)
class EngineId:
    family: Literal["tabular", "custom"]
    name: str
    version: str


@dataclass(frozen=True)
class LunarDate:
    day: int
    month: int
    year: int
    month_name: str = ""
    month_name_native: str = ""

    @property
    def key(self) -> str:
        """Storage key, YYYY-MM-DD in the lunar calendar."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)


@dataclass(frozen=True)
class BoundaryResult:
    crossed: bool
    carried_over: bool = False  # after midnight, still the previous evening
    warning: Optional[str] = None


@dataclass(frozen=True)
class DualDate:
    gregorian: datetime
    civil_date: date
    lunar_pre_boundary: LunarDate
    lunar_post_boundary: LunarDate
    boundary_crossed: bool
    warnings: Tuple[str, ...] = ()

    @property
    def lunar(self) -> LunarDate:
        """The lunar date in effect right now."""
        return self.lunar_post_boundary if self.boundary_crossed else self.lunar_pre_boundary


# ------------------------------------------------------------
# Recurrence variants
# ------------------------------------------------------------

@dataclass(frozen=True)
class Daily:
    pass


@dataclass(frozen=True)
class Weekly:
    days_of_week: FrozenSet[int] = frozenset()  # 0=Sunday..6=Saturday


@dataclass(frozen=True)
class Interval:
    every: int
    unit: IntervalUnit = "days"
    anchor: Optional[date] = None  # None: the entity's start_date

    @property
    def step_days(self) -> int:
        return self.every * 7 if self.unit == "weeks" else self.every


@dataclass(frozen=True)
class MonthlyByDay:
    day: int
    calendar: CalendarKind = "lunar"


@dataclass(frozen=True)
class Annual:
    month: int
    day: int
    calendar: CalendarKind = "lunar"


@dataclass(frozen=True)
class OneTime:
    due_date: Optional[date] = None


RecurrenceSpec = Union[Daily, Weekly, Interval, MonthlyByDay, Annual, OneTime]


@dataclass(frozen=True)
class SchedulableEntity:
    id: str
    start_date: date
    recurrence: Optional[RecurrenceSpec]
    end_date: Optional[date] = None
    is_active: bool = True
    title: str = ""


@dataclass(frozen=True)
class OccurrenceRecord:
    entity_id: str
    due_gregorian: date
    due_lunar: LunarDate

    @property
    def completion_key(self) -> str:
        return f"{self.entity_id}:{self.due_lunar.key}"


# ------------------------------------------------------------
# Financial dues
# ------------------------------------------------------------

@dataclass(frozen=True)
class DueSchedule:
    """A monthly financial obligation with a reminder window."""
    id: str
    title: str
    calendar: CalendarKind = "lunar"
    reminder_type: ReminderType = "last_day"
    reminder_day: Optional[int] = None
    start_month: Optional[int] = None
    start_year: Optional[int] = None
    end_month: Optional[int] = None
    end_year: Optional[int] = None
    is_active: bool = True
    amount: float = 0.0


@dataclass(frozen=True)
class DueReminder:
    due_id: str
    title: str
    amount: float
    calendar: CalendarKind
    due_label: str
    days_remaining: int
    urgency: Urgency
    period: Tuple[int, int]  # (year, month) in the due's calendar
    paid: bool = False
