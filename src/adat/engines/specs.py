from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

from ..core.types import EngineId
from .tabular import TabularParams


@dataclass(frozen=True)
class EngineSpec:
    """Top-level wrapper for all engine specifications."""
    kind: Literal["tabular"]
    id: EngineId
    payload: TabularParams


# ============================================================
# MONTH NAMES
# ============================================================

MISRI_MONTHS = (
    ("Moharram", "محرم"),
    ("Safar", "صفر"),
    ("Rabiul Awwal", "ربيع الأول"),
    ("Rabiul Akhar", "ربيع الآخر"),
    ("Jamadal Ula", "جمادى الأولى"),
    ("Jamadal Ukra", "جمادى الآخرة"),
    ("Rajab", "رجب"),
    ("Shaban Karim", "شعبان"),
    ("Ramadan", "رمضان"),
    ("Shawwal Mukarram", "شوال"),
    ("Zilqad", "ذو القعدة"),
    ("Zilhaj", "ذو الحجة"),
)

CIVIL_MONTHS = (
    ("Muharram", "محرم"),
    ("Safar", "صفر"),
    ("Rabi al-Awwal", "ربيع الأول"),
    ("Rabi al-Thani", "ربيع الآخر"),
    ("Jumada al-Awwal", "جمادى الأولى"),
    ("Jumada al-Thani", "جمادى الآخرة"),
    ("Rajab", "رجب"),
    ("Shaban", "شعبان"),
    ("Ramadan", "رمضان"),
    ("Shawwal", "شوال"),
    ("Dhul Qadah", "ذو القعدة"),
    ("Dhul Hijjah", "ذو الحجة"),
)


# ============================================================
# TABULAR SCHEMES
# ============================================================

# Fatimid/Misri scheme: 1 Moharram 1 on the evening of 15 July 622 (Julian).
MISRI = EngineSpec(
    kind="tabular",
    id=EngineId("tabular", "misri", "1"),
    payload=TabularParams(
        epoch_jdn=1948439,
        leap_positions=(2, 5, 8, 10, 13, 16, 19, 21, 24, 27, 29),
        month_names=MISRI_MONTHS,
    ),
)

# Common arithmetical scheme: 1 Muharram 1 on Friday 16 July 622 (Julian).
CIVIL = EngineSpec(
    kind="tabular",
    id=EngineId("tabular", "civil", "1"),
    payload=TabularParams(
        epoch_jdn=1948440,
        leap_positions=(2, 5, 7, 10, 13, 16, 18, 21, 24, 26, 29),
        month_names=CIVIL_MONTHS,
    ),
)

ALL_SPECS: Dict[str, EngineSpec] = {
    "misri": MISRI,
    "civil": CIVIL,
}
