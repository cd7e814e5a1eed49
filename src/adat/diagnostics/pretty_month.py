from __future__ import annotations

from datetime import date, timedelta
import calendar as pycal
import argparse

import adat


def dow_header() -> str:
    return "Su     Mo     Tu     We     Th     Fr     Sa"


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def layout(first: date, days: list[tuple[str, str]]) -> list[list[tuple[str, str]]]:
    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    pad = first.isoweekday() % 7  # Sunday=0
    for _ in range(pad):
        wk.append(cell("", ""))
    for top, bot in days:
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def lunar_month_calendar(engine: str, Y: int, M: int) -> None:
    d0 = adat.lunar_to_gregorian(Y, M, 1, engine=engine)
    n = adat.days_in_lunar_month(M, Y, engine=engine)
    d1 = d0 + timedelta(days=n - 1)

    days = []
    for i in range(n):
        d = d0 + timedelta(days=i)
        days.append((f"{i + 1:2d}", f"{d.month:02d}-{d.day:02d}"))

    name = adat.month_name(M, engine=engine)
    title = f"{engine} lunar month  {name} {Y}  ({n} days, {d0} .. {d1})"
    print_grid(title, layout(d0, days))


def gregorian_month_calendar(engine: str, gy: int, gm: int) -> None:
    first = date(gy, gm, 1)
    last_day = pycal.monthrange(gy, gm)[1]

    days = []
    for i in range(last_day):
        d = first + timedelta(days=i)
        h = adat.to_lunar(d, engine=engine)
        days.append((f"{d.day:2d}", f"{h.month:02d}-{h.day:02d}"))

    title = f"{engine} Gregorian month  {gy}-{gm:02d}"
    print_grid(title, layout(first, days))

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a lunar-month calendar and/or a Gregorian-month calendar with paired labels."
    )
    p.add_argument("--engine", default="misri", help="misri|civil (default: misri)")

    p.add_argument("--lunar", nargs=2, type=int, metavar=("Y", "M"),
                   help="Lunar month to print: Y M (e.g. 1446 9)")
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2025 3)")

    args = p.parse_args(argv)

    if not args.lunar and not args.greg:
        # sensible default demo
        lunar_month_calendar(args.engine, Y=1446, M=9)
        gregorian_month_calendar(args.engine, gy=2025, gm=3)
        return 0

    if args.lunar:
        Y, M = args.lunar
        lunar_month_calendar(args.engine, Y=Y, M=M)

    if args.greg:
        gy, gm = args.greg
        gregorian_month_calendar(args.engine, gy=gy, gm=gm)

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
