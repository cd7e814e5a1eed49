"""
adat.engines.tabular
--------------------
Rule-based (non-astronomical) Hijri calendar. Months alternate 30/29 days;
in the designated leap years of each 30-year cycle the twelfth month gets a
30th day. Conversion goes through the Julian Day Number, so the mapping is
reproducible without any external service.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Tuple

from adat.core.time import to_jdn as civil_to_jdn
from adat.core.types import EngineId, LunarDate

logger = logging.getLogger(__name__)

NORMAL_YEAR_DAYS = 354


@dataclass(frozen=True)
class TabularParams:
    """
    epoch_jdn is the JDN of 1 Muharram 1. leap_positions are year numbers
    mod cycle_years whose last month has 30 days.
    """
    epoch_jdn: int
    leap_positions: Tuple[int, ...]
    month_names: Tuple[Tuple[str, str], ...]  # (transliterated, native script)
    cycle_years: int = 30

    def __post_init__(self) -> None:
        if self.cycle_years <= 0:
            raise ValueError("cycle_years must be positive")
        if len(set(self.leap_positions)) != len(self.leap_positions):
            raise ValueError("leap_positions must be distinct")
        if any(not (0 <= p < self.cycle_years) for p in self.leap_positions):
            raise ValueError("leap_positions must be in 0..cycle_years-1")
        if len(self.month_names) != 12:
            raise ValueError("month_names must have 12 entries")

    @property
    def cycle_days(self) -> int:
        return self.cycle_years * NORMAL_YEAR_DAYS + len(self.leap_positions)


class TabularHijriEngine:
    """
    Strictly handles discrete arithmetic for the tabular calendar.
    Fully implements the CalendarEngine protocol.
    """
    def __init__(self, id: EngineId, params: TabularParams):
        self.id = id
        self.p = params
        self._leaps = frozenset(params.leap_positions)

    # ---------------------------------------------------------
    # Year / month structure
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return (year % self.p.cycle_years) in self._leaps

    def days_in_month(self, month: int, year: int) -> int:
        if not (1 <= month <= 12):
            return 0
        if month == 12 and self.is_leap_year(year):
            return 30
        return 30 if month % 2 == 1 else 29

    def days_in_year(self, year: int) -> int:
        return NORMAL_YEAR_DAYS + 1 if self.is_leap_year(year) else NORMAL_YEAR_DAYS

    def month_name(self, month: int, *, native: bool = False) -> str:
        if not (1 <= month <= 12):
            return ""
        return self.p.month_names[month - 1][1 if native else 0]

    def make_date(self, day: int, month: int, year: int) -> LunarDate:
        return LunarDate(
            day=day,
            month=month,
            year=year,
            month_name=self.month_name(month),
            month_name_native=self.month_name(month, native=True),
        )

    # ---------------------------------------------------------
    # JDN conversion
    # ---------------------------------------------------------

    def to_jdn(self, year: int, month: int, day: int) -> int:
        cycles = (year - 1) // self.p.cycle_years
        jdn = self.p.epoch_jdn + cycles * self.p.cycle_days

        # Complete years inside the current cycle
        for y in range(cycles * self.p.cycle_years + 1, year):
            jdn += self.days_in_year(y)

        for m in range(1, month):
            jdn += self.days_in_month(m, year)

        return jdn + day - 1

    def from_jdn(self, jdn: int) -> LunarDate:
        remaining = jdn - self.p.epoch_jdn
        if remaining < 0:
            logger.warning("JDN %d precedes the calendar epoch; clamped to 1/1/1", jdn)
            return self.make_date(1, 1, 1)

        cycles = remaining // self.p.cycle_days
        remaining -= cycles * self.p.cycle_days

        year = cycles * self.p.cycle_years + 1
        while remaining >= self.days_in_year(year):
            remaining -= self.days_in_year(year)
            year += 1

        month = 1
        while month < 12 and remaining >= self.days_in_month(month, year):
            remaining -= self.days_in_month(month, year)
            month += 1

        return self.make_date(remaining + 1, month, year)

    def from_date(self, d: date) -> LunarDate:
        return self.from_jdn(civil_to_jdn(d))

    # ---------------------------------------------------------
    # Day stepping (leap-year aware)
    # ---------------------------------------------------------

    def advance(self, d: LunarDate) -> LunarDate:
        day, month, year = d.day + 1, d.month, d.year
        if day > self.days_in_month(month, year):
            day = 1
            month += 1
            if month > 12:
                month = 1
                year += 1
        return self.make_date(day, month, year)

    def retreat(self, d: LunarDate) -> LunarDate:
        day, month, year = d.day - 1, d.month, d.year
        if day < 1:
            month -= 1
            if month < 1:
                month = 12
                year -= 1
            day = self.days_in_month(month, year)
        return self.make_date(day, month, year)

    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id.__dict__,
            "epoch_jdn": self.p.epoch_jdn,
            "leap_positions": list(self.p.leap_positions),
            "cycle_years": self.p.cycle_years,
            "cycle_days": self.p.cycle_days,
        }
