from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Protocol

from .errors import UnknownEngineError
from .types import LunarDate

class CalendarEngine(Protocol):
    def info(self) -> Dict[str, Any]: ...
    def is_leap_year(self, year: int) -> bool: ...
    def days_in_month(self, month: int, year: int) -> int: ...
    def month_name(self, month: int, *, native: bool = False) -> str: ...
    def from_jdn(self, jdn: int) -> LunarDate: ...
    def to_jdn(self, year: int, month: int, day: int) -> int: ...
    def from_date(self, d: date) -> LunarDate: ...
    def advance(self, d: LunarDate) -> LunarDate: ...
    def retreat(self, d: LunarDate) -> LunarDate: ...

@dataclass
class EngineRegistry:
    _engines: Dict[str, CalendarEngine]

    def get(self, name: str) -> CalendarEngine:
        if name not in self._engines:
            raise UnknownEngineError(f"Unknown engine '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Engine '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine
