# tests/test_recurrence.py

import pytest
from datetime import date, datetime, timedelta

import adat
from adat import (
    Annual,
    Daily,
    Interval,
    MonthlyByDay,
    OneTime,
    SchedulableEntity,
    Weekly,
)


def entity(rule, start=date(2024, 1, 1), **kw):
    return SchedulableEntity(id=kw.pop("id", "e1"), start_date=start, recurrence=rule, **kw)


def due(e, g):
    return adat.is_due(e, adat.to_lunar(g), g)


def days(start, n):
    return [start + timedelta(days=i) for i in range(n)]


# --- Reference scenarios ---

def test_daily_respects_start_date():
    e = entity(Daily())
    assert due(e, date(2024, 1, 1))
    assert not due(e, date(2023, 12, 31))


def test_weekly_weekend():
    e = entity(Weekly(frozenset({0, 6})))
    tuesday = date(2024, 1, 16)
    assert not due(e, tuesday)
    assert due(e, tuesday + timedelta(days=4))  # Saturday


def test_monthly_day_30_never_clamps_in_short_month():
    first = adat.lunar_to_gregorian(1446, 2, 1)
    n = adat.days_in_lunar_month(2, 1446)
    assert n == 29

    e = entity(MonthlyByDay(day=30))
    assert not any(due(e, g) for g in days(first, n))

    # the following 30-day month does fire on its last day
    nxt = adat.lunar_to_gregorian(1446, 3, 30)
    assert due(e, nxt)


# --- Per-variant behaviour ---

def test_interval_every_three_days():
    anchor = date(2024, 2, 10)
    e = entity(Interval(every=3, anchor=anchor))
    hits = [g for g in days(anchor, 7) if due(e, g)]
    assert hits == [anchor, anchor + timedelta(days=3), anchor + timedelta(days=6)]
    assert not due(e, anchor - timedelta(days=3))


def test_interval_defaults_to_start_date():
    e = entity(Interval(every=2), start=date(2024, 1, 5))
    assert due(e, date(2024, 1, 5))
    assert not due(e, date(2024, 1, 6))
    assert due(e, date(2024, 1, 7))


def test_interval_in_weeks():
    e = entity(Interval(every=2, unit="weeks", anchor=date(2024, 1, 1)))
    assert due(e, date(2024, 1, 15))
    assert not due(e, date(2024, 1, 8))


def test_weekly_mon_wed_fri():
    e = entity(Weekly(frozenset({1, 3, 5})))
    for g in days(date(2024, 1, 7), 14):  # starts on a Sunday
        assert due(e, g) == (g.isoweekday() in (1, 3, 5))


def test_monthly_lunar_and_civil():
    lunar = entity(MonthlyByDay(day=3))
    civil = entity(MonthlyByDay(day=12, calendar="civil"))
    g = date(2024, 3, 12)  # 3 Ramadan 1445
    assert due(lunar, g)
    assert due(civil, g)
    assert not due(lunar, date(2024, 3, 11))
    assert not due(civil, date(2024, 4, 3))


def test_annual_lunar():
    e = entity(Annual(month=9, day=12))
    hit = adat.lunar_to_gregorian(1445, 9, 12)
    assert due(e, hit)
    assert not due(e, hit + timedelta(days=1))
    assert due(e, adat.lunar_to_gregorian(1446, 9, 12))


def test_annual_civil():
    e = entity(Annual(month=3, day=12, calendar="civil"))
    assert due(e, date(2024, 3, 12))
    assert due(e, date(2025, 3, 12))
    assert not due(e, date(2024, 4, 12))


def test_one_time():
    e = entity(OneTime(due_date=date(2024, 2, 29)))
    assert due(e, date(2024, 2, 29))
    assert not due(e, date(2024, 3, 1))
    assert not due(entity(OneTime()), date(2024, 2, 29))


def test_datetime_queries_use_the_date_part():
    e = entity(OneTime(due_date=date(2024, 2, 29)))
    assert adat.is_due(e, adat.to_lunar(date(2024, 2, 29)), datetime(2024, 2, 29, 23, 59))


# --- Range and malformed input ---

def test_end_date_is_inclusive():
    e = entity(Daily(), end_date=date(2024, 1, 10))
    assert due(e, date(2024, 1, 10))
    assert not due(e, date(2024, 1, 11))


def test_inactive_entity_is_never_due():
    assert not due(entity(Daily(), is_active=False), date(2024, 1, 2))


UNUSABLE_RULES = [
    None,
    "daily",
    Weekly(),
    Weekly(days_of_week=5),
    Interval(every=0),
    Interval(every=-3),
    Interval(every=2, unit="months"),
    Interval(every=2, anchor="2024-01-01"),
    MonthlyByDay(day=None),
    MonthlyByDay(day=12, calendar="julian"),
    MonthlyByDay(day=45),
    MonthlyByDay(day=45, calendar="civil"),
    Annual(month=None, day=1),
    Annual(month=13, day=1),
    Annual(month=13, day=1, calendar="civil"),
    OneTime(due_date="2024-01-05"),
]


@pytest.mark.parametrize("rule", UNUSABLE_RULES)
def test_malformed_rules_are_never_due(rule):
    e = entity(rule)
    assert not any(due(e, g) for g in days(date(2024, 1, 1), 40))


def test_is_due_is_pure():
    e = entity(Interval(every=5, anchor=date(2024, 1, 3)))
    g = date(2024, 1, 13)
    lunar = adat.to_lunar(g)
    assert adat.is_due(e, lunar, g) == adat.is_due(e, lunar, g) is True


def test_due_on_keeps_input_order():
    a = entity(Daily(), id="a")
    b = entity(Weekly(frozenset({2})), id="b")
    c = entity(None, id="c")
    g = date(2024, 1, 16)  # Tuesday
    assert [e.id for e in adat.due_on([b, c, a], adat.to_lunar(g), g)] == ["b", "a"]


# --- Next / previous occurrence ---

def test_next_occurrence_monthly():
    e = entity(MonthlyByDay(day=12))
    occ = adat.next_occurrence(e, date(2024, 3, 12))
    assert occ.due_gregorian == adat.lunar_to_gregorian(1445, 9, 12)
    assert occ.due_lunar.as_tuple() == (1445, 9, 12)
    assert occ.completion_key == "e1:1445-09-12"


def test_next_occurrence_inclusive():
    e = entity(Daily())
    g = date(2024, 5, 1)
    assert adat.next_occurrence(e, g, inclusive=True).due_gregorian == g
    assert adat.next_occurrence(e, g).due_gregorian == g + timedelta(days=1)


def test_next_occurrence_before_start():
    e = entity(Daily(), start=date(2024, 6, 1))
    assert adat.next_occurrence(e, date(2024, 1, 1)).due_gregorian == date(2024, 6, 1)


def test_next_occurrence_none_past_end_or_malformed():
    assert adat.next_occurrence(entity(OneTime(due_date=date(2024, 1, 2))), date(2024, 6, 1)) is None
    assert adat.next_occurrence(entity(None), date(2024, 6, 1), horizon_days=60) is None


def test_previous_occurrence():
    e = entity(MonthlyByDay(day=12))
    occ = adat.previous_occurrence(e, date(2024, 3, 12))
    assert occ.due_lunar.as_tuple() == (1445, 8, 12)
    assert occ.due_gregorian == adat.lunar_to_gregorian(1445, 8, 12)


def test_previous_occurrence_stops_at_start():
    e = entity(Daily(), start=date(2024, 3, 12))
    assert adat.previous_occurrence(e, date(2024, 3, 12)) is None
    assert adat.previous_occurrence(e, date(2024, 3, 12), inclusive=True).due_gregorian == date(2024, 3, 12)


@pytest.mark.parametrize("rule", UNUSABLE_RULES)
def test_malformed_rules_still_describe(rule):
    assert isinstance(adat.describe(entity(rule)), str)


@pytest.mark.parametrize("rule", UNUSABLE_RULES)
def test_malformed_rules_have_no_next_occurrence(rule):
    assert adat.next_occurrence(entity(rule), date(2024, 1, 1), horizon_days=60) is None


# --- Rules recurring less than once a year ---

def test_next_leap_day_is_found_years_ahead():
    e = entity(Annual(month=2, day=29, calendar="civil"))
    occ = adat.next_occurrence(e, date(2024, 3, 1))
    assert occ.due_gregorian == date(2028, 2, 29)
    assert occ.due_lunar == adat.to_lunar(date(2028, 2, 29))


def test_leap_day_skips_century_year():
    e = entity(Annual(month=2, day=29, calendar="civil"))
    assert adat.next_occurrence(e, date(2096, 3, 1)).due_gregorian == date(2104, 2, 29)
    assert adat.previous_occurrence(e, date(2104, 2, 28)).due_gregorian == date(2096, 2, 29)


def test_civil_annual_respects_start_and_end():
    e = entity(Annual(month=3, day=12, calendar="civil"), start=date(2030, 1, 1), end_date=date(2031, 12, 31))
    assert adat.next_occurrence(e, date(2024, 1, 1)).due_gregorian == date(2030, 3, 12)
    assert adat.next_occurrence(e, date(2031, 3, 12)) is None
    assert adat.previous_occurrence(e, date(2040, 1, 1)).due_gregorian == date(2031, 3, 12)
    assert adat.previous_occurrence(e, date(2030, 3, 12)) is None


def test_one_time_far_ahead():
    e = entity(OneTime(due_date=date(2031, 5, 1)))
    occ = adat.next_occurrence(e, date(2024, 1, 1))
    assert occ.due_gregorian == date(2031, 5, 1)
    assert adat.previous_occurrence(e, date(2040, 1, 1)).due_gregorian == date(2031, 5, 1)
    assert adat.next_occurrence(e, date(2031, 5, 1)) is None
    assert adat.next_occurrence(e, date(2031, 5, 1), inclusive=True).due_gregorian == date(2031, 5, 1)


def test_one_time_after_end_date():
    e = entity(OneTime(due_date=date(2031, 5, 1)), end_date=date(2030, 1, 1))
    assert adat.next_occurrence(e, date(2024, 1, 1)) is None
