"""
adat.engines.factory
--------------------
Transforms pure data specifications into live, executable Engine objects.
"""

from __future__ import annotations
from adat.core.engine import CalendarEngine
from adat.engines.specs import EngineSpec
from adat.engines.tabular import TabularParams, TabularHijriEngine


def make_engine(spec: EngineSpec) -> CalendarEngine:
    """The universal entry point."""
    if isinstance(spec.payload, TabularParams):
        return TabularHijriEngine(spec.id, spec.payload)
    raise TypeError(f"Unknown engine params type: {type(spec.payload)}")
