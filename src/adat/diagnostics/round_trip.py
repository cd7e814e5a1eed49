from __future__ import annotations

import argparse
import random
from datetime import date, timedelta
from typing import List

import adat
from adat.core.time import parse_ymd


def random_date(start: date, end: date) -> date:
    span = (end - start).days
    return start + timedelta(days=random.randint(0, span))


def parse_engines(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(engine: str, N: int, start: date, end: date, seed: int, *, max_failures: int) -> int:
    random.seed(seed)
    failures = 0

    for _ in range(N):
        d0 = random_date(start, end)
        h = adat.to_lunar(d0, engine=engine)
        back = adat.lunar_to_gregorian(h.year, h.month, h.day, engine=engine)
        ok_range = 1 <= h.day <= adat.days_in_lunar_month(h.month, h.year, engine=engine)
        if back != d0 or not ok_range:
            failures += 1
            print("\nFAIL")
            print("engine:", engine)
            print("d0:", d0)
            print("lunar:", h)
            print("back:", back)
            if failures >= max_failures:
                return failures
    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Gregorian -> Hijri -> Gregorian round-trip check.")
    p.add_argument("--engines", default="misri,civil")
    p.add_argument("-n", type=int, default=20000)
    p.add_argument("--start", default="1900-01-01")
    p.add_argument("--end", default="2100-12-31")
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--max-failures", type=int, default=10)
    args = p.parse_args(argv)

    start, end = parse_ymd(args.start), parse_ymd(args.end)
    total = 0
    for eng in parse_engines(args.engines):
        f = roundtrip_test(eng, args.n, start, end, args.seed, max_failures=args.max_failures)
        print(f"{eng}: {args.n - f}/{args.n} ok")
        total += f
    return 1 if total else 0


if __name__ == "__main__":
    raise SystemExit(main())
