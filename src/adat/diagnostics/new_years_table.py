from __future__ import annotations

from datetime import date
import argparse
from typing import List

import adat


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def parse_engines(arg: str) -> List[str]:
    return [x.strip() for x in arg.split(",") if x.strip()]


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print the Gregorian date of 1 Muharram for a range of Hijri years."
    )
    p.add_argument("--from-year", type=int, default=1440)
    p.add_argument("--to-year", type=int, default=1460)
    p.add_argument("--engines", type=str, default="misri,civil",
                   help="Comma list of engines (default: misri,civil).")
    p.add_argument("--dates", choices=("mmdd", "iso"), default="iso",
                   help="Display format in table columns (default: iso).")
    args = p.parse_args(argv)

    engines = parse_engines(args.engines)

    def fmt(d: date) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year", "Leap"] + engines
    colw = [5, 5] + [max(10, len(h)) for h in engines]
    print("  ".join(h.ljust(w) for h, w in zip(headers, colw)))
    print("  ".join("-" * w for w in colw))

    for Y in range(Y0, Y1 + 1):
        leap = "".join("L" if adat.is_leap_year(Y, engine=e) else "." for e in engines)
        row = [str(Y), leap]
        for e in engines:
            row.append(fmt(adat.lunar_to_gregorian(Y, 1, 1, engine=e)))
        print("  ".join(c.ljust(w) for c, w in zip(row, colw)))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
