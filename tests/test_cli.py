# tests/test_cli.py

import json
import pytest

from adat.cli import main

KHI = ["--tz", "Asia/Karachi"]


@pytest.fixture
def entities_file(tmp_path):
    rows = [
        {"id": "fajr", "title": "Fajr", "start_date": "2024-01-01", "recurrence_type": "daily"},
        {"id": "tue", "title": "Class", "start_date": "2024-01-01", "recurrence_type": "weekly",
         "recurrence_days": [2]},
        {"id": "mwf", "title": "Walk", "start_date": "2024-01-01", "recurrence_type": "weekly",
         "recurrence_days": [1, 3, 5]},
        {"id": "ayyam", "title": "Fast", "start_date": "2024-01-01", "recurrence_type": "custom",
         "recurrence_pattern": {"type": "monthly", "monthlyDay": 13}},
        {"id": "broken", "title": "Broken", "start_date": "2024-01-01", "recurrence_type": "custom",
         "recurrence_pattern": {"type": "lunar-phase"}},
    ]
    path = tmp_path / "entities.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return str(path)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("ADAT_ENGINE", "ADAT_TIMEZONE", "ADAT_LOOKBACK_DAYS", "ADAT_NIGHT_RESET_HOUR"):
        monkeypatch.delenv(var, raising=False)


def test_day_after_sunset(capsys):
    assert main(["day", "2024-03-11T18:31", "--sunset", "18:30", *KHI]) == 0
    out = capsys.readouterr().out
    assert "2 Ramadan 1445  [1445-09-02]" in out
    assert "3 Ramadan 1445  [1445-09-03]" in out
    assert "boundary crossed   True" in out
    assert "3 رمضان 1445" in out


def test_day_shorthand_without_sunset(capsys):
    assert main(["2024-03-11T20:00", *KHI]) == 0
    out = capsys.readouterr().out
    assert "boundary crossed   False" in out
    assert "sunset time unavailable" in out


def test_day_with_civil_engine(capsys):
    assert main(["day", "2024-07-07T09:00", "--engine", "civil", *KHI]) == 0
    assert "30 Dhul Hijjah 1445" in capsys.readouterr().out


def test_due(capsys, entities_file):
    assert main(["due", entities_file, "--date", "2024-03-12"]) == 0
    out = capsys.readouterr().out
    assert "3 Ramadan 1445" in out
    assert "fajr" in out and "Daily" in out
    assert "Weekly (Tue)" in out
    assert "mwf" not in out
    assert "ayyam" not in out


def test_overdue(capsys, entities_file):
    argv = ["overdue", entities_file, "--now", "2024-03-12T09:00", "--sunset", "18:30", *KHI]
    assert main(argv) == 0
    out = capsys.readouterr().out
    assert "mwf:1445-09-02" in out
    assert "Yesterday" in out
    assert "broken" not in out

    assert main([*argv, "--completed", "mwf:1445-09-02", "--lookback", "3"]) == 0
    out = capsys.readouterr().out
    assert "mwf" not in out

    assert main([*argv, "--completed", "mwf:1445-09-02"]) == 0
    out = capsys.readouterr().out
    assert "mwf:1445-08-28" in out
    assert "8 Mar" in out


def test_describe(capsys, entities_file):
    assert main(["describe", entities_file]) == 0
    out = capsys.readouterr().out
    assert "Weekly (Mon, Wed, Fri)" in out
    assert "13th of each month (Hijri)" in out
    assert "Custom" in out


def test_bad_entities_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"id": 1}', encoding="utf-8")
    with pytest.raises(SystemExit):
        main(["describe", str(path)])


def test_month_grid(capsys):
    assert main(["month", "--lunar", "1446", "9"]) == 0
    out = capsys.readouterr().out
    assert "Ramadan 1446" in out
    assert "30 days" in out


def test_new_years_table(capsys):
    assert main(["new-years", "--from-year", "1446", "--to-year", "1447"]) == 0
    out = capsys.readouterr().out
    assert "2024-07-07" in out
    assert "2025-06-26" in out


def test_round_trip_diag(capsys):
    assert main(["diag", "round-trip", "-n", "300"]) == 0
    out = capsys.readouterr().out
    assert "misri: 300/300 ok" in out
    assert "civil: 300/300 ok" in out
