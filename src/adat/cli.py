from __future__ import annotations

import argparse
import importlib
import inspect
import json
import re
import sys
from datetime import datetime
from typing import Any, Dict, Optional

import structlog

from adat.config.logging import configure_logging
from adat.config.settings import AdatSettings
from adat.core.time import parse_ymd, resolve_zone


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")

log = structlog.get_logger("adat.cli")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--engine", default=None, help="calendar engine (default: misri)")
    p.add_argument("--tz", default=None, help="IANA timezone (default: host zone)")
    p.add_argument("--verbose", action="store_true")
    p.add_argument("--log-json", action="store_true")


def _settings(args: argparse.Namespace, **extra: Any) -> AdatSettings:
    overrides: Dict[str, Any] = {
        "engine": args.engine,
        "timezone": args.tz,
        "verbose": args.verbose or None,
        "log_json": args.log_json or None,
        **extra,
    }
    s = AdatSettings(**{k: v for k, v in overrides.items() if v is not None})
    configure_logging(verbose=s.verbose, log_json=s.log_json)
    return s


def _parse_instant(s: Optional[str], tz: Optional[str]) -> datetime:
    """Naive input is read as wall-clock time in `tz`; no input means now."""
    zone, _ = resolve_zone(tz)
    if not s:
        return datetime.now(zone) if zone else datetime.now().astimezone()
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=zone) if zone else dt.astimezone()
    return dt


def _load_entities(path: str) -> list:
    import adat

    with open(path, encoding="utf-8") as f:
        rows = json.load(f)
    if not isinstance(rows, list):
        raise SystemExit(f"{path}: expected a JSON list of records")
    return [adat.entity_from_record(r) for r in rows]


def cmd_day(argv: list[str]) -> int:
    import adat

    p = argparse.ArgumentParser(prog="adat day", description="Gregorian instant -> Hijri dual date")
    p.add_argument("when", nargs="?", help="YYYY-MM-DD or ISO instant (default: now)")
    p.add_argument("--sunset", default=None, help="sunset time-of-day HH:MM")
    p.add_argument("--night-reset-hour", type=int, default=None)
    _common(p)
    args = p.parse_args(argv)
    s = _settings(args, night_reset_hour=args.night_reset_hour)

    now = _parse_instant(args.when, s.timezone)
    dd = adat.dual_date(now, args.sunset, s.timezone, engine=s.engine, night_reset_hour=s.night_reset_hour)
    log.debug("day computed", instant=now.isoformat(), engine=s.engine)

    print(f"gregorian          {dd.gregorian.isoformat()}  ({dd.civil_date})")
    print(f"pre-boundary       {adat.format_lunar(dd.lunar_pre_boundary)}  [{dd.lunar_pre_boundary.key}]")
    print(f"post-boundary      {adat.format_lunar(dd.lunar_post_boundary)}  [{dd.lunar_post_boundary.key}]")
    print(f"boundary crossed   {dd.boundary_crossed}")
    print(f"effective          {adat.format_lunar(dd.lunar)}  /  {adat.format_lunar(dd.lunar, 'native')}")
    for w in dd.warnings:
        print(f"warning            {w}")
    return 0


def cmd_due(argv: list[str]) -> int:
    import adat

    p = argparse.ArgumentParser(prog="adat due", description="List entities due on a civil date")
    p.add_argument("file", help="JSON list of entity records")
    p.add_argument("--date", default=None, help="YYYY-MM-DD (default: today in --tz)")
    _common(p)
    args = p.parse_args(argv)
    s = _settings(args)

    day = parse_ymd(args.date) if args.date else _parse_instant(None, s.timezone).date()
    lunar = adat.to_lunar(day, engine=s.engine)
    entities = _load_entities(args.file)

    print(f"{day}  /  {adat.format_lunar(lunar)}")
    for e in adat.due_on(entities, lunar, day):
        print(f"  {e.id:<12} {e.title:<30} {adat.describe(e, engine=s.engine)}")
    return 0


def cmd_overdue(argv: list[str]) -> int:
    import adat

    p = argparse.ArgumentParser(prog="adat overdue", description="Missed occurrences in the lookback window")
    p.add_argument("file", help="JSON list of entity records")
    p.add_argument("--now", default=None, help="ISO instant (default: now)")
    p.add_argument("--sunset", default=None)
    p.add_argument("--completed", action="append", default=[], help="completion key entityId:YYYY-MM-DD (repeatable)")
    p.add_argument("--lookback", type=int, default=None)
    _common(p)
    args = p.parse_args(argv)
    s = _settings(args, lookback_days=args.lookback)

    now = _parse_instant(args.now, s.timezone)
    today = adat.dual_date(now, args.sunset, s.timezone, engine=s.engine)
    entities = _load_entities(args.file)
    titles = {e.id: e.title for e in entities}

    records = adat.find_overdue(entities, today, set(args.completed), s.lookback_days, engine=s.engine)
    for r in records:
        label = adat.overdue_label(r.due_gregorian, today.civil_date)
        print(f"  {r.entity_id:<12} {titles.get(r.entity_id, ''):<30} {label:<10} {r.completion_key}")
    if not records:
        print("  nothing overdue")
    return 0


def cmd_describe(argv: list[str]) -> int:
    import adat

    p = argparse.ArgumentParser(prog="adat describe", description="Summarise each entity's recurrence")
    p.add_argument("file", help="JSON list of entity records")
    _common(p)
    args = p.parse_args(argv)
    s = _settings(args)

    for e in _load_entities(args.file):
        print(f"  {e.id:<12} {e.title:<30} {adat.describe(e, engine=s.engine)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `adat YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="adat", description="Hijri/Gregorian recurrence toolkit CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Gregorian instant -> Hijri dual date", add_help=False)
    sub.add_parser("due", help="Entities due on a date", add_help=False)
    sub.add_parser("overdue", help="Missed occurrences in the lookback window", add_help=False)
    sub.add_parser("describe", help="Summarise recurrences", add_help=False)

    # diagnostics
    sub.add_parser("month", help="Print Hijri/Gregorian month grids (diagnostics)", add_help=False)
    sub.add_parser("new-years", help="Print 1 Muharram table (diagnostics)", add_help=False)
    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["round-trip"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    commands = {
        "day": cmd_day,
        "due": cmd_due,
        "overdue": cmd_overdue,
        "describe": cmd_describe,
    }
    if args.cmd in commands:
        return commands[args.cmd](rest)

    if args.cmd == "month":
        return _run_module_main("adat.diagnostics.pretty_month", rest)

    if args.cmd == "new-years":
        return _run_module_main("adat.diagnostics.new_years_table", rest)

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "adat.diagnostics.round_trip",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
