"""Settings from CLI flags, ``ADAT_*`` environment variables and code defaults.

Priority chain (highest to lowest):
  1. Init kwargs (CLI flags)
  2. ``ADAT_*`` environment variables
  3. Code defaults
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from adat.engines.recurrence import DEFAULT_HORIZON_DAYS
from adat.engines.scanner import DEFAULT_LOOKBACK_DAYS


class AdatSettings(BaseSettings):
    """Engine defaults shared by the CLI and embedding applications.

    Attributes:
        engine: Registered calendar engine name.
        timezone: IANA zone for wall-clock views; None uses the host zone.
        lookback_days: Past days scanned for missed occurrences.
        horizon_days: Day-by-day search bound for next/previous occurrence.
        night_reset_hour: If set, hours before it still belong to the
            previous evening for the sunset boundary.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ADAT_",
    }

    engine: str = "misri"
    timezone: Optional[str] = None
    lookback_days: int = Field(default=DEFAULT_LOOKBACK_DAYS, ge=1)
    horizon_days: int = Field(default=DEFAULT_HORIZON_DAYS, ge=1)
    night_reset_hour: Optional[int] = Field(default=None, ge=0, le=12)

    verbose: bool = False
    log_json: bool = False
