"""Builds the default engine registry and installs it for the public API."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from adat.api import set_registry
from adat.core.engine import CalendarEngine, EngineRegistry
from adat.engines.factory import make_engine
from adat.engines.specs import ALL_SPECS, EngineSpec

logger = logging.getLogger(__name__)


def build_registry(specs: Optional[Mapping[str, EngineSpec]] = None) -> EngineRegistry:
    engines: Dict[str, CalendarEngine] = {
        name: make_engine(spec) for name, spec in (specs or ALL_SPECS).items()
    }
    logger.debug("Built calendar engines: %s", sorted(engines))
    return EngineRegistry(engines)


def install_registry(specs: Optional[Mapping[str, EngineSpec]] = None) -> EngineRegistry:
    reg = build_registry(specs)
    set_registry(reg)
    return reg
