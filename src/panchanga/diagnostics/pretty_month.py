from __future__ import annotations

from datetime import date, timedelta
import calendar as pycal
import argparse
from typing import Any, Dict, List

import panchanga
from panchanga.core.types import GeoLocation


def dow_header() -> str:
    return "Mo     Tu     We     Th     Fr     Sa     Su"


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


def month_rows(gy: int, gm: int, loc: GeoLocation, *, engine: str = "lahiri") -> List[Dict[str, Any]]:
    """
    One record per civil day. A tithi prevailing at two consecutive sunrises
    is marked repeated on the second day; a tithi that never prevails at a
    sunrise is listed as skipped on the day it falls in.
    """
    first = date(gy, gm, 1)
    last = date(gy, gm, pycal.monthrange(gy, gm)[1])

    prev = panchanga.compute_tithi(first - timedelta(days=1), loc, engine=engine).unit.number
    rows = []
    d = first
    while d <= last:
        res = panchanga.compute_panchanga(d, loc, engine=engine)
        t = res.tithi.number if res.tithi else None
        rows.append({
            "date": d,
            "vara": res.vara.number,
            "tithi": t,
            "tithi_name": res.tithi.name if res.tithi else None,
            "end": res.tithi.end_time if res.tithi else None,
            "repeated": t is not None and t == prev,
            "skipped": res.additional_tithi.number if res.additional_tithi else None,
            "nakshatra": res.nakshatra.number if res.nakshatra else None,
            "masa": res.masa.number if res.masa else None,
            "is_leap_month": bool(res.masa and res.masa.is_leap_month),
            "sunrise": res.sunrise,
        })
        prev = t
        d += timedelta(days=1)
    return rows


def gregorian_month_calendar(rows: List[Dict[str, Any]], title: str) -> None:
    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    pad = rows[0]["date"].weekday()  # Monday=0
    for _ in range(pad):
        wk.append(cell("", ""))
    for r in rows:
        mark = "=" if r["repeated"] else ("+" if r["skipped"] else "")
        leap_tag = "L" if r["is_leap_month"] else ""
        top = f"{r['date'].day:2d}"
        bot = f"{r['masa'] or 0:02d}{leap_tag}-{r['tithi'] or 0:02d}{mark}"
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    print_grid(title, weeks)


def print_table(rows: List[Dict[str, Any]]) -> None:
    print(f"{'date':<10}  {'rise':<8}  {'tithi':<24}  {'until':<8}  note")
    for r in rows:
        note = []
        if r["repeated"]:
            note.append("repeated")
        if r["skipped"]:
            note.append(f"skips {r['skipped']}")
        end = str(r["end"]) if r["end"] is not None else "-"
        rise = str(r["sunrise"]) if r["sunrise"] is not None else "-"
        name = f"{r['tithi']:2d} {r['tithi_name']}" if r["tithi"] is not None else "unavailable"
        print(f"{r['date'].isoformat():<10}  {rise:<8}  {name:<24}  {end:<8}  {', '.join(note)}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a Gregorian-month calendar with masa-tithi labels (= repeated, + a tithi is skipped)."
    )
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    p.add_argument("--engine", default="lahiri")
    p.add_argument("--lat", type=float, default=12.9716)
    p.add_argument("--lon", type=float, default=77.5946)
    p.add_argument("--tz", type=float, default=5.5)
    p.add_argument("--table", action="store_true", help="Day-by-day table instead of a grid")
    args = p.parse_args(argv)

    loc = panchanga.validate_location(GeoLocation(args.lat, args.lon, args.tz))
    rows = month_rows(args.year, args.month, loc, engine=args.engine)
    if args.table:
        print_table(rows)
    else:
        gregorian_month_calendar(rows, f"{args.engine} Gregorian month  {args.year}-{args.month:02d}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
