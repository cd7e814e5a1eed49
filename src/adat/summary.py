"""Short English display strings for recurrences and due dates."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Optional

from .core.types import (
    Annual,
    Daily,
    Interval,
    LunarDate,
    MonthlyByDay,
    OneTime,
    SchedulableEntity,
    Weekly,
)
from .engines.specs import MISRI_MONTHS

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
CIVIL_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

MonthNamer = Callable[[int], str]


def _misri_month(month: int) -> str:
    return MISRI_MONTHS[month - 1][0] if 1 <= month <= 12 else ""


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _calendar_label(calendar: str) -> str:
    return "Gregorian" if calendar == "civil" else "Hijri"


def _is_count(n: Any) -> bool:
    return isinstance(n, int) and not isinstance(n, bool) and n > 0


def _weekly(rule: Weekly) -> str:
    if not rule.days_of_week:
        return "Weekly"
    if not isinstance(rule.days_of_week, (set, frozenset, list, tuple)):
        return "Custom"
    days = sorted(d for d in rule.days_of_week if isinstance(d, int) and 0 <= d <= 6)
    if not days:
        return "Weekly"
    return f"Weekly ({', '.join(DAY_NAMES[d] for d in days)})"


def _interval(rule: Interval) -> str:
    if not _is_count(rule.every) or rule.unit not in ("days", "weeks"):
        return "Custom"
    unit = rule.unit[:-1] if rule.every == 1 else rule.unit
    return f"Every {rule.every} {unit}"


def _annual(rule: Annual, month_name: MonthNamer) -> str:
    if not _is_count(rule.day) or not _is_count(rule.month):
        return "Custom"
    name =month_name(rule.month) if rule.calendar == "lunar" else _civil_month(rule.month)
    if not name:
        return "Custom"
    return f"Every year on {ordinal(rule.day)} {name} ({_calendar_label(rule.calendar)})"


def _civil_month(month: int) -> str:
    return CIVIL_MONTHS[month - 1] if 1 <= month <= 12 else ""


def describe(obj: Any, *, month_name: Optional[MonthNamer] = None) -> str:
    """
    Summarise an entity or a bare recurrence. Unknown or partial patterns
    fall back to "Custom"; this never raises.
    """
    namer = month_name or _misri_month
    rule = obj.recurrence if isinstance(obj, SchedulableEntity) else obj

    if isinstance(rule, Daily):
        return "Daily"
    if isinstance(rule, Weekly):
        return _weekly(rule)
    if isinstance(rule, Interval):
        return _interval(rule)
    if isinstance(rule, MonthlyByDay):
        if not _is_count(rule.day) or rule.calendar not in ("lunar", "civil"):
            return "Custom"
        return f"{ordinal(rule.day)} of each month ({_calendar_label(rule.calendar)})"
    if isinstance(rule, Annual):
        return _annual(rule, namer)
    if isinstance(rule, OneTime):
        if rule.due_date is None:
            return "One-time"
        if not isinstance(rule.due_date, date):
            return "Custom"
        d = rule.due_date
        return f"One-time ({d.day} {CIVIL_MONTHS[d.month - 1][:3]} {d.year})"
    return "Custom"


def describe_date(d: Any) -> str:
    """'12th Ramadan' for a lunar date, '12th March' for a civil one."""
    if isinstance(d, LunarDate):
        return f"{ordinal(d.day)} {d.month_name or _misri_month(d.month)}".rstrip()
    if isinstance(d, date):
        return f"{ordinal(d.day)} {CIVIL_MONTHS[d.month - 1]}"
    return ""


def format_lunar(d: LunarDate, style: str = "long") -> str:
    if style == "short":
        return f"{d.day}/{d.month}/{d.year}"
    if style == "native":
        return f"{d.day} {d.month_name_native} {d.year}"
    return f"{d.day} {d.month_name} {d.year}"


def lunar_date_key(d: LunarDate) -> str:
    return d.key
