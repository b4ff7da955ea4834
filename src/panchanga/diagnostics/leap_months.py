#!/usr/bin/env python3
from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

import panchanga
from panchanga.core.time import from_jdn, to_jdn
from panchanga.engines import elements as el


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "panchanga[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "panchanga[diagnostics]"') from e


@dataclass(frozen=True)
class Style:
    label: str
    engine: str
    marker: str
    size: float
    hollow: bool
    color: str = "0.15"
    lw: float = 1.2
    alpha: float = 0.95


DEFAULT_STYLES: Dict[str, Style] = {
    "lahiri": Style("Lahiri (sidereal)", "lahiri", marker="o", size=22, hollow=False),
    "sayana": Style("Sayana (tropical)", "sayana", marker="s", size=80, hollow=True),
    "lahiri-ephemeris": Style("Lahiri (ephemeris)", "lahiri-ephemeris", marker="o", size=95, hollow=True),
}


def parse_engines(s: str) -> List[str]:
    names = [x.strip() for x in s.split(",")]
    names = [x for x in names if x]
    if not names or len(names) > 3:
        raise SystemExit(f"expected 1 to 3 engines, got '{s}'")
    return names


def leap_months(start_year: int, end_year: int, *, engine: str = "lahiri") -> List[Tuple[int, int]]:
    """
    (Gregorian year of the opening new moon, masa number) for every adhika
    lunation opening in [start_year, end_year].
    """
    eng = panchanga.get_engine(engine)
    jd_end = to_jdn(date(end_year + 1, 1, 1)) - 0.5

    nm, _ = eng.new_moons(to_jdn(date(start_year, 1, 1)) - 0.5)
    r = el.rashi_index(eng.sun(nm, "masa"))
    out = []
    while nm < jd_end:
        _, nm_next = eng.new_moons(nm + 1.0)
        r_next = el.rashi_index(eng.sun(nm_next, "masa"))
        year = from_jdn(math.floor(nm + 0.5)).year
        if el.is_leap_month(r, r_next) and year >= start_year:
            out.append((year, el.masa_number(r)))
        nm, r = nm_next, r_next
    return out


def build_points(np, engine: str, start_year: int, end_year: int):
    pts = leap_months(start_year, end_year, engine=engine)
    xs = [y for y, _ in pts]
    ys = [m for _, m in pts]
    return np.array(xs, dtype=int), np.array(ys, dtype=int)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Adhika-masa pattern (year x masa) for up to three engines.")
    p.add_argument("year_range", nargs="?", default="1960:2030", help="START:END, inclusive (default 1960:2030)")
    p.add_argument("--engines", default="lahiri,sayana", help="Comma list of 1-3 engines (default: lahiri,sayana)")
    p.add_argument("--list", action="store_true", help="Print the leap months instead of plotting")
    p.add_argument("--out", default="adhika_masa.png")
    p.add_argument("--label-every", type=int, default=5, help="Year tick spacing")
    args = p.parse_args(argv)

    try:
        start_year, end_year = (int(x) for x in args.year_range.split(":"))
    except ValueError:
        raise SystemExit(f"bad year range '{args.year_range}' (expected START:END)") from None
    if end_year < start_year:
        raise SystemExit("END must not precede START")

    styles = []
    for name in parse_engines(args.engines):
        st = DEFAULT_STYLES.get(name)
        if st is None:
            raise SystemExit(f"No plot style for engine '{name}'. Known: {', '.join(DEFAULT_STYLES)}")
        styles.append(st)

    if args.list:
        for st in styles:
            print(st.label)
            for year, masa in leap_months(start_year, end_year, engine=st.engine):
                print(f"  {year}  {masa:2d}  {panchanga.api.default_names().resolve('masa', masa)}")
        return 0

    np = _need_numpy()
    plt = _need_matplotlib()

    fig, ax = plt.subplots(figsize=(16, 3.6))
    for st in styles:
        x, m = build_points(np, st.engine, start_year, end_year)
        face = "none" if st.hollow else st.color
        ax.scatter(x, m, s=st.size, marker=st.marker, facecolors=face, edgecolors=st.color,
                   linewidths=st.lw, alpha=st.alpha, label=f"{st.label} ({len(x)})", zorder=3)

    # one row per masa, one column per year
    ax.set_xticks(np.arange(start_year, end_year + 1), minor=True)
    ax.set_yticks(np.arange(1, 13))
    ax.set_xticks(np.arange(start_year, end_year + 1, max(1, args.label_every)))
    ax.grid(True, which="both", color="0.9", lw=0.5, zorder=0)
    ax.set_xlim(start_year - 0.5, end_year + 0.5)
    ax.set_ylim(0.5, 12.5)
    ax.set_xlabel("Gregorian year of the opening new moon")
    ax.set_ylabel("Masa (1 = Caitra)")
    ax.set_title(f"Adhika masa {start_year}-{end_year}")
    ax.legend(loc="upper left", bbox_to_anchor=(1.01, 1.0), frameon=False)
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Wrote {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
