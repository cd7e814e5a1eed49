"""
adat.engines.boundary
---------------------
The lunar day starts at sunset (Maghrib), not at civil midnight. This module
decides whether the boundary has been crossed for a given instant and builds
the DualDate carrying both candidate lunar dates for the same civil day.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from adat.core.engine import CalendarEngine
from adat.core.errors import SunsetFormatError
from adat.core.time import local_datetime, parse_hhmm, resolve_zone
from adat.core.types import BoundaryResult, DualDate

logger = logging.getLogger(__name__)


def _degraded(reason: str) -> BoundaryResult:
    logger.warning("Day boundary unavailable, assuming not crossed: %s", reason)
    return BoundaryResult(crossed=False, warning=reason)


def resolve_boundary(
    instant: datetime,
    sunset: Optional[str],
    timezone: Optional[str] = None,
    *,
    night_reset_hour: Optional[int] = None,
) -> BoundaryResult:
    """
    crossed is True iff the wall-clock time in `timezone` is at or after
    `sunset` ("HH:MM"). With night_reset_hour set, the small hours before
    that hour still count as the previous evening (carried_over=True).

    Never raises: a missing sunset time or an unknown zone yields
    crossed=False with a warning attached.
    """
    zone, zone_warning = resolve_zone(timezone)
    if zone_warning:
        return _degraded(zone_warning)
    if not sunset:
        return _degraded("sunset time unavailable")
    try:
        sunset_t = parse_hhmm(sunset)
    except SunsetFormatError as e:
        return _degraded(str(e))

    local = local_datetime(instant, zone)
    if local.time() >= sunset_t:
        return BoundaryResult(crossed=True)
    if night_reset_hour is not None and local.hour < night_reset_hour:
        return BoundaryResult(crossed=True, carried_over=True)
    return BoundaryResult(crossed=False)


def build_dual_date(
    engine: CalendarEngine,
    instant: datetime,
    sunset: Optional[str],
    timezone: Optional[str] = None,
    *,
    night_reset_hour: Optional[int] = None,
) -> DualDate:
    """
    Compose converter + resolver for one captured instant. The caller
    should capture `instant` once per evaluation pass and reuse it.
    """
    boundary = resolve_boundary(instant, sunset, timezone, night_reset_hour=night_reset_hour)
    warnings: List[str] = [boundary.warning] if boundary.warning else []

    zone, zone_warning = resolve_zone(timezone)
    if zone_warning and zone_warning not in warnings:
        warnings.append(zone_warning)

    civil = local_datetime(instant, zone).date()
    base = civil - timedelta(days=1) if boundary.carried_over else civil

    pre = engine.from_date(base)
    post = engine.advance(pre)

    return DualDate(
        gregorian=instant,
        civil_date=civil,
        lunar_pre_boundary=pre,
        lunar_post_boundary=post,
        boundary_crossed=boundary.crossed,
        warnings=tuple(warnings),
    )
