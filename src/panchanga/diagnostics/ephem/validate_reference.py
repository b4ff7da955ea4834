#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

from panchanga.engines.astro.model import SimplifiedModel
from panchanga.ephemeris.skyfield_model import DEFAULT_KERNEL, SkyfieldModel
from panchanga.reference import astro_args as aa


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


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate the truncated solar/lunar series against a JPL kernel (skyfield).")
    p.add_argument("--year-start", type=int, default=1900)
    p.add_argument("--year-end", type=int, default=2050)
    p.add_argument("--step-days", type=float, default=7.3)
    p.add_argument("--kernel", default=DEFAULT_KERNEL)
    p.add_argument("--out-png", default="reference_validation.png")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    print(f"Loading {args.kernel}...")
    eph = SkyfieldModel.load(args.kernel)
    ref = SimplifiedModel()

    jd_start = aa.J2000 + (args.year_start - 2000) * 365.25
    jd_end = aa.J2000 + (args.year_end - 2000) * 365.25
    if jd_start >= jd_end:
        raise SystemExit("--year-end must be after --year-start")

    jds = np.arange(jd_start, jd_end, args.step_days)
    years = 2000 + (jds - aa.J2000) / 365.25

    print(f"Validating {len(jds)} points from {years[0]:.0f} to {years[-1]:.0f}...")

    err_solar_lon = []
    err_lunar_lon = []
    err_lunar_lat = []
    err_phase = []

    for jd in jds:
        jd = float(jd)
        # residuals in arcminutes (series - ephemeris)
        err_solar_lon.append(aa.wrap180(ref.solar_longitude(jd) - eph.solar_longitude(jd)) * 60.0)
        err_lunar_lon.append(aa.wrap180(ref.lunar_longitude(jd) - eph.lunar_longitude(jd)) * 60.0)
        err_lunar_lat.append((ref.lunar_latitude(jd) - eph.lunar_latitude(jd)) * 60.0)
        err_phase.append(aa.wrap180(ref.lunar_phase(jd) - eph.lunar_phase(jd)) * 60.0)

    rows = (
        ("Solar longitude", err_solar_lon, "orange"),
        ("Lunar longitude", err_lunar_lon, "blue"),
        ("Lunar latitude", err_lunar_lat, "green"),
        ("Phase (Moon - Sun)", err_phase, "purple"),
    )

    for title, err, _ in rows:
        e = np.asarray(err)
        print(f"  {title:<20} mean {e.mean():+8.3f}'  rms {np.sqrt((e * e).mean()):7.3f}'  max |{np.abs(e).max():7.3f}'|")

    fig, axs = plt.subplots(len(rows), 1, figsize=(12, 12), sharex=True)
    for ax, (title, err, color) in zip(axs, rows):
        ax.scatter(years, err, s=1, alpha=0.5, color=color)
        ax.set_title(f"{title} error (series - {args.kernel})")
        ax.set_ylabel("Error (arcmin)")
        ax.grid(True, alpha=0.3)
    axs[-1].set_xlabel("Year")

    plt.suptitle(f"Reference Model Validation ({years[0]:.0f} to {years[-1]:.0f})", fontsize=14)
    plt.tight_layout()
    plt.savefig(args.out_png, dpi=200)
    print(f"Validation complete. Plot saved to {args.out_png}")

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
