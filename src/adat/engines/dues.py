"""
adat.engines.dues
-----------------
Monthly financial dues. A due belongs to the current month of its calendar
(lunar or civil); reminders open a configurable number of days before the
month ends, on its last day, or from a custom day of the month.
"""

from __future__ import annotations

import calendar as pycal
from datetime import date
from typing import AbstractSet, List, Optional, Sequence, Tuple

from adat.core.engine import CalendarEngine
from adat.core.types import DualDate, DueReminder, DueSchedule, LunarDate, Urgency

REMINDER_WINDOW_DAYS = 7

_CIVIL_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_URGENCY_ORDER = {"due_today": 0, "upcoming": 1}


def days_in_period(engine: CalendarEngine, calendar: str, lunar: LunarDate, civil: date) -> int:
    if calendar == "civil":
        return pycal.monthrange(civil.year, civil.month)[1]
    return engine.days_in_month(lunar.month, lunar.year)


def current_day(calendar: str, lunar: LunarDate, civil: date) -> int:
    return civil.day if calendar == "civil" else lunar.day


def current_period(calendar: str, lunar: LunarDate, civil: date) -> Tuple[int, int]:
    """(year, month) of today in the given calendar."""
    if calendar == "civil":
        return (civil.year, civil.month)
    return (lunar.year, lunar.month)


def days_remaining(engine: CalendarEngine, calendar: str, lunar: LunarDate, civil: date) -> int:
    total = days_in_period(engine, calendar, lunar, civil)
    return max(0, total - current_day(calendar, lunar, civil))


def should_remind(
    engine: CalendarEngine,
    reminder_type: str,
    reminder_day: Optional[int],
    calendar: str,
    lunar: LunarDate,
    civil: date,
) -> bool:
    left = days_remaining(engine, calendar, lunar, civil)
    if reminder_type == "before_7_days":
        return left <= REMINDER_WINDOW_DAYS
    if reminder_type == "last_day":
        return left == 0
    if reminder_type == "custom":
        return reminder_day is not None and current_day(calendar, lunar, civil) >= reminder_day
    return False


def urgency(engine: CalendarEngine, calendar: str, lunar: LunarDate, civil: date) -> Urgency:
    if days_remaining(engine, calendar, lunar, civil) == 0:
        return "due_today"
    return "upcoming"


def due_day(
    engine: CalendarEngine,
    reminder_type: str,
    reminder_day: Optional[int],
    calendar: str,
    lunar: LunarDate,
    civil: date,
) -> int:
    """The custom reminder day, otherwise the last day of the current month."""
    if reminder_type == "custom" and reminder_day:
        return reminder_day
    return days_in_period(engine, calendar, lunar, civil)


def format_due_date(calendar: str, day: int, lunar: LunarDate, civil: date) -> str:
    if calendar == "civil":
        return f"{_CIVIL_MONTHS[civil.month - 1]} {day}"
    return f"{day} {lunar.month_name}"


def in_active_range(
    calendar: str,
    start_month: Optional[int],
    start_year: Optional[int],
    end_month: Optional[int],
    end_year: Optional[int],
    lunar: LunarDate,
    civil: date,
) -> bool:
    """Inclusive (year, month) comparison; missing bounds are open."""
    now = current_period(calendar, lunar, civil)
    if start_month is not None and start_year is not None and now < (start_year, start_month):
        return False
    if end_month is not None and end_year is not None and now > (end_year, end_month):
        return False
    return True


def due_reminders(
    engine: CalendarEngine,
    dues: Sequence[DueSchedule],
    today: DualDate,
    paid_ids: AbstractSet[str] = frozenset(),
) -> List[DueReminder]:
    """
    Reminders for today's effective lunar date. Paid dues stay listed (as
    upcoming) so the UI can show them ticked off for the month.
    """
    lunar, civil = today.lunar, today.civil_date
    out: List[DueReminder] = []

    for due in dues:
        if not due.is_active:
            continue
        if not in_active_range(due.calendar, due.start_month, due.start_year,
                               due.end_month, due.end_year, lunar, civil):
            continue
        paid = due.id in paid_ids
        if not (paid or should_remind(engine, due.reminder_type, due.reminder_day, due.calendar, lunar, civil)):
            continue

        day = due_day(engine, due.reminder_type, due.reminder_day, due.calendar, lunar, civil)
        out.append(DueReminder(
            due_id=due.id,
            title=due.title,
            amount=due.amount,
            calendar=due.calendar,
            due_label=format_due_date(due.calendar, day, lunar, civil),
            days_remaining=days_remaining(engine, due.calendar, lunar, civil),
            urgency="upcoming" if paid else urgency(engine, due.calendar, lunar, civil),
            period=current_period(due.calendar, lunar, civil),
            paid=paid,
        ))

    out.sort(key=lambda r: (_URGENCY_ORDER[r.urgency], r.days_remaining))
    return out
