"""adat public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Install the built-in engines on import
from .bootstrap import install_registry as _install_registry

_install_registry()

from .api import (
    to_lunar,
    is_leap_year,
    days_in_lunar_month,
    lunar_to_gregorian,
    advance,
    retreat,
    month_name,
    resolve_boundary,
    dual_date,
    is_due,
    due_on,
    next_occurrence,
    previous_occurrence,
    find_overdue,
    find_all_missed,
    completion_key,
    overdue_label,
    due_reminders,
    describe,
    get_engine,
    list_engines,
    engine_info,
    make_engine,
    register_engine,
)
from .core.types import (
    LunarDate,
    DualDate,
    BoundaryResult,
    Daily,
    Weekly,
    Interval,
    MonthlyByDay,
    Annual,
    OneTime,
    SchedulableEntity,
    OccurrenceRecord,
    DueSchedule,
    DueReminder,
)
from .records import entity_from_record, recurrence_from_record
from .summary import describe_date, format_lunar, ordinal

__all__ = [
    "to_lunar",
    "is_leap_year",
    "days_in_lunar_month",
    "lunar_to_gregorian",
    "advance",
    "retreat",
    "month_name",
    "resolve_boundary",
    "dual_date",
    "is_due",
    "due_on",
    "next_occurrence",
    "previous_occurrence",
    "find_overdue",
    "find_all_missed",
    "completion_key",
    "overdue_label",
    "due_reminders",
    "describe",
    "describe_date",
    "format_lunar",
    "ordinal",
    "get_engine",
    "list_engines",
    "engine_info",
    "make_engine",
    "register_engine",
    "entity_from_record",
    "recurrence_from_record",
    "LunarDate",
    "DualDate",
    "BoundaryResult",
    "Daily",
    "Weekly",
    "Interval",
    "MonthlyByDay",
    "Annual",
    "OneTime",
    "SchedulableEntity",
    "OccurrenceRecord",
    "DueSchedule",
    "DueReminder",
]
