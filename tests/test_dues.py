# tests/test_dues.py

from datetime import date, datetime
from typing import get_args
from zoneinfo import ZoneInfo

import adat
from adat import DueSchedule
from adat.core.types import Urgency
from adat.engines.dues import _URGENCY_ORDER, in_active_range

KHI = "Asia/Karachi"


def morning_of(g: date):
    return adat.dual_date(datetime(g.year, g.month, g.day, 9, 0, tzinfo=ZoneInfo(KHI)), "18:30", KHI)


def lunar_day(y, m, d):
    return morning_of(adat.lunar_to_gregorian(y, m, d))


def test_last_day_reminder_on_last_lunar_day():
    today = lunar_day(1445, 9, 30)
    out = adat.due_reminders([DueSchedule(id="rent", title="Rent", amount=500.0)], today)
    assert len(out) == 1
    r = out[0]
    assert r.urgency == "due_today"
    assert r.days_remaining == 0
    assert r.due_label == "30 Ramadan"
    assert r.period == (1445, 9)
    assert r.amount == 500.0
    assert not r.paid


def test_last_day_uses_leap_aware_month_length():
    dues = [DueSchedule(id="d", title="Dues")]
    assert adat.due_reminders(dues, lunar_day(1446, 12, 29))[0].due_label == "29 Zilhaj"
    assert adat.due_reminders(dues, lunar_day(1445, 12, 29)) == []
    assert adat.due_reminders(dues, lunar_day(1445, 12, 30))[0].due_label == "30 Zilhaj"


def test_before_7_days_window():
    due = DueSchedule(id="d", title="Dues", reminder_type="before_7_days")
    assert adat.due_reminders([due], lunar_day(1445, 9, 22)) == []
    out = adat.due_reminders([due], lunar_day(1445, 9, 25))
    assert [(r.urgency, r.days_remaining) for r in out] == [("upcoming", 5)]


def test_custom_reminder_day():
    due = DueSchedule(id="d", title="Dues", reminder_type="custom", reminder_day=20)
    assert adat.due_reminders([due], lunar_day(1445, 9, 19)) == []
    out = adat.due_reminders([due], lunar_day(1445, 9, 25))
    assert out[0].due_label == "20 Ramadan"


def test_civil_due_on_leap_day():
    due = DueSchedule(id="c", title="Utility", calendar="civil")
    out = adat.due_reminders([due], morning_of(date(2024, 2, 29)))
    assert out[0].due_label == "February 29"
    assert out[0].period == (2024, 2)
    assert out[0].urgency == "due_today"
    assert adat.due_reminders([due], morning_of(date(2024, 2, 28))) == []


def test_paid_dues_stay_listed_as_upcoming():
    today = lunar_day(1445, 9, 30)
    due = DueSchedule(id="rent", title="Rent")
    out = adat.due_reminders([due], today, {"rent"})
    assert out[0].paid
    assert out[0].urgency == "upcoming"

    early = adat.due_reminders([due], lunar_day(1445, 9, 3), {"rent"})
    assert early[0].paid


def test_inactive_and_out_of_range_dues_are_skipped():
    today = lunar_day(1445, 9, 30)
    dues = [
        DueSchedule(id="off", title="Off", is_active=False),
        DueSchedule(id="later", title="Later", start_month=10, start_year=1445),
        DueSchedule(id="ended", title="Ended", end_month=8, end_year=1445),
        DueSchedule(id="open", title="Open", start_month=1, start_year=1440),
    ]
    assert [r.due_id for r in adat.due_reminders(dues, today)] == ["open"]


def test_sorted_by_urgency_then_days_remaining():
    today = lunar_day(1445, 9, 30)
    dues = [
        DueSchedule(id="civil", title="Civil", calendar="civil", reminder_type="custom", reminder_day=1),
        DueSchedule(id="lunar", title="Lunar"),
    ]
    assert [r.due_id for r in adat.due_reminders(dues, today)] == ["lunar", "civil"]


def test_in_active_range_inclusive_bounds():
    lunar = adat.to_lunar(date(2024, 3, 12))
    civil = date(2024, 3, 12)
    assert in_active_range("lunar", 9, 1445, 9, 1445, lunar, civil)
    assert in_active_range("civil", 3, 2024, None, None, lunar, civil)
    assert not in_active_range("civil", 4, 2024, None, None, lunar, civil)


def test_urgency_levels_are_today_or_upcoming():
    assert set(_URGENCY_ORDER) == set(get_args(Urgency)) == {"due_today", "upcoming"}

    dues = [
        DueSchedule(id="a", title="A"),
        DueSchedule(id="b", title="B", reminder_type="before_7_days"),
        DueSchedule(id="c", title="C", calendar="civil", reminder_type="custom", reminder_day=1),
    ]
    for g in (adat.lunar_to_gregorian(1445, 9, 30), adat.lunar_to_gregorian(1445, 10, 1)):
        for r in adat.due_reminders(dues, morning_of(g), {"a"}):
            assert r.urgency in ("due_today", "upcoming")
            assert r.days_remaining >= 0
