from __future__ import annotations

import argparse
from datetime import date
import sys
import re
import importlib
import inspect
import logging
from typing import Optional, Union


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Bangalore
DEFAULT_LAT = 12.9716
DEFAULT_LON = 77.5946
DEFAULT_TZ = 5.5


def _parse_ymd(s: str) -> date:
    try:
        y, m, d = map(int, s.split("-"))
        return date(y, m, d)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date '{s}' (expected YYYY-MM-DD)") from e


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


def add_location_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", type=float, default=DEFAULT_LAT, help="Observer latitude in degrees (positive North)")
    p.add_argument("--lon", type=float, default=DEFAULT_LON, help="Observer longitude in degrees (positive East)")
    p.add_argument("--tz", type=float, default=DEFAULT_TZ, help="UTC offset in hours")
    p.add_argument("--place", default=None, help="Display name of the location")


def add_engine_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--engine", default="lahiri")
    p.add_argument("--names", default=None, metavar="FILE", help="JSON file with name overrides")


def location_from_args(args: argparse.Namespace):
    from panchanga.core.types import GeoLocation
    return GeoLocation(args.lat, args.lon, args.tz, args.place)


def _fmt_unit(unit, with_end: bool = True) -> str:
    if unit is None:
        return "unavailable"
    s = f"{unit.name} ({unit.number})"
    if with_end and hasattr(unit, "end_time"):
        s += f" until {unit.end_time}" if unit.end_time is not None else " (whole day)"
    return s


def format_result(res) -> str:
    loc = res.location
    place = f"{loc.name} " if loc.name else ""
    lines = [
        f"Panchanga for {res.date} at {place}({loc.latitude:.4f}, {loc.longitude:.4f}, UTC{loc.utc_offset_hours:+g})",
        f"  Vara       : {_fmt_unit(res.vara)}",
        f"  Tithi      : {_fmt_unit(res.tithi)}",
    ]
    if res.additional_tithi is not None:
        lines.append(f"     then    : {_fmt_unit(res.additional_tithi)} [skipped]")
    lines.append(f"  Nakshatra  : {_fmt_unit(res.nakshatra)}")
    if res.additional_nakshatra is not None:
        lines.append(f"     then    : {_fmt_unit(res.additional_nakshatra)} [skipped]")
    lines.append(f"  Yoga       : {_fmt_unit(res.yoga)}")
    if res.additional_yoga is not None:
        lines.append(f"     then    : {_fmt_unit(res.additional_yoga)} [skipped]")
    lines.append(f"  Karana     : {_fmt_unit(res.karana)}")

    if res.masa is not None:
        leap = " (adhika)" if res.masa.is_leap_month else ""
        lines.append(f"  Masa       : {res.masa.name} ({res.masa.number}){leap}")
    else:
        lines.append("  Masa       : unavailable")
    lines.append(f"  Ritu       : {_fmt_unit(res.ritu)}")
    lines.append(f"  Samvatsara : {_fmt_unit(res.samvatsara)}")

    def t(x) -> str:
        return str(x) if x is not None else "--:--:--"

    lines.append(f"  Sunrise    : {t(res.sunrise)}   Sunset : {t(res.sunset)}")
    lines.append(f"  Moonrise   : {t(res.moonrise)}   Moonset: {t(res.moonset)}")
    if res.day_duration_hours is not None:
        lines.append(f"  Day length : {res.day_duration_hours:.4f} h")
    if res.unavailable:
        lines.append(f"  Unavailable: {', '.join(res.unavailable)}")
    return "\n".join(lines)


def _load_names(path: Optional[str]):
    if path is None:
        return None
    from panchanga.names import load_names
    return load_names(path)


def cmd_day(argv: list[str]) -> int:
    import panchanga

    p = argparse.ArgumentParser(prog="panchanga day", description="Gregorian date -> the five limbs and calendar context")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")
    add_location_args(p)
    add_engine_args(p)
    p.add_argument("--debug", action="store_true", help="Also print raw model quantities at sunrise")
    args = p.parse_args(argv)

    loc = location_from_args(args)
    res = panchanga.compute_panchanga(args.date, loc, engine=args.engine, names=_load_names(args.names))
    print(format_result(res))
    if args.debug:
        for k, v in panchanga.explain(args.date, loc, engine=args.engine).items():
            print(f"  {k:<16} = {v}")
    return 0


def cmd_element(element: str, argv: list[str]) -> int:
    import panchanga

    p = argparse.ArgumentParser(prog=f"panchanga {element}", description=f"Compute the {element} of a civil day")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")
    add_location_args(p)
    add_engine_args(p)
    args = p.parse_args(argv)

    fn = getattr(panchanga, f"compute_{element}")
    out = fn(args.date, location_from_args(args), engine=args.engine, names=_load_names(args.names))

    unit = getattr(out, "unit", out)
    print(f"{element.capitalize()}: {_fmt_unit(unit)}")
    additional = getattr(out, "additional", None)
    if additional is not None:
        print(f"  then: {_fmt_unit(additional)} [skipped]")
    return 0


def cmd_sun(argv: list[str]) -> int:
    import panchanga

    p = argparse.ArgumentParser(prog="panchanga sun", description="Local sunrise and sunset")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")
    add_location_args(p)
    p.add_argument("--engine", default="lahiri")
    args = p.parse_args(argv)

    rise, sset = panchanga.sunrise_sunset(args.date, location_from_args(args), engine=args.engine)
    print(f"Sunrise: {rise if rise is not None else 'does not rise'}")
    print(f"Sunset : {sset if sset is not None else 'does not set'}")
    return 0


def cmd_solar(argv: list[str]) -> int:
    from panchanga.reference import solar
    from panchanga.reference import astro_args as aa

    p = argparse.ArgumentParser(prog="panchanga solar", description="Solar longitude, declination and EOT at a JD.")
    p.add_argument("--jd", type=float, default=aa.J2000, help="Julian Date (default: J2000.0 = 2451545.0)")
    p.add_argument("--lat", type=float, default=DEFAULT_LAT, help="Observer latitude in degrees")
    args = p.parse_args(argv)

    jd = args.jd
    T = aa.T_centuries(jd)
    L = solar.solar_longitude(jd)
    eps = aa.mean_obliquity_deg(T)
    delta = solar.solar_declination_deg(L, eps)
    H = solar.hour_angle_deg(args.lat, delta)
    ayan = aa.ayanamsa_deg(T, aa.LAHIRI_A0_DEG, aa.LAHIRI_A1_DEG_PER_CENTURY)

    print(f"JD = {jd:.6f}   T = {T:.12f}")
    print()
    print("Solar Position (degrees):")
    print(f"  Tropical Longitude (L)      = {L:.6f}")
    print(f"  Sidereal Longitude (Lahiri) = {aa.wrap_deg(L - ayan):.6f}")
    print(f"  Declination        (delta)  = {delta:.6f}")
    print(f"  Mean obliquity     (eps)    = {eps:.6f}")
    print()
    print(f"Equation of Time (minutes) = {solar.equation_of_time_minutes(jd):.4f}")
    if H is None:
        print(f"Hour angle at lat {args.lat:g}: Sun does not rise or set.")
    else:
        print(f"Hour angle at lat {args.lat:g}: {H:.6f} deg  (half day {H / 15.0:.4f} h)")
    return 0


def cmd_lunar(argv: list[str]) -> int:
    from panchanga.reference import lunar
    from panchanga.reference import astro_args as aa
    from panchanga.engines import elements as el

    p = argparse.ArgumentParser(
        prog="panchanga lunar",
        description="Lunar longitude, latitude and phase at a JD."
    )
    p.add_argument(
        "--jd",
        type=float,
        default=aa.J2000,
        help="Julian Date (default: J2000.0 = 2451545.0)"
    )
    args = p.parse_args(argv)

    jd = args.jd
    lon = lunar.lunar_longitude(jd)
    phase = lunar.lunar_phase(jd)

    print(f"JD = {jd:.6f}")
    print()
    print("Lunar Position (degrees):")
    print(f"  Longitude (lambda) = {lon:.6f}")
    print(f"  Latitude  (beta)   = {lunar.lunar_latitude(jd):.6f}")
    print()
    print(f"Phase (Moon - Sun)   = {phase:.6f}")
    print(f"  tithi {el.tithi_number(phase)}, karana {el.karana_number(phase)}")
    return 0


def _configure_logging(level: Union[str, int]) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--log-level", default="WARNING", type=str.upper,
                     choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    known, argv = pre.parse_known_args(argv)
    _configure_logging(known.log_level)

    # Backward compatibility: `panchanga YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="panchanga", description="Panchanga (Hindu lunisolar calendar) toolkit CLI.",
                                parents=[pre])
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Full panchanga of a civil day", add_help=False)
    for element in ("tithi", "nakshatra", "yoga", "karana", "vara", "masa"):
        sub.add_parser(element, help=f"Compute the {element} of a civil day", add_help=False)
    sub.add_parser("sun", help="Local sunrise and sunset", add_help=False)

    # diagnostics
    sub.add_parser("month", help="Day-by-day table of a Gregorian month (diagnostics)", add_help=False)

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["leap-months", "validate-ref"],
        help="Which diagnostic to run",
    )

    # astronomy tools
    sub.add_parser("solar", help="Solar longitude, declination and EOT at a JD.", add_help=False)
    sub.add_parser("lunar", help="Lunar longitude, latitude and phase at a JD.", add_help=False)

    args, rest = p.parse_known_args(argv)

    if args.cmd == "day":
        return cmd_day(rest)

    if args.cmd in ("tithi", "nakshatra", "yoga", "karana", "vara", "masa"):
        return cmd_element(args.cmd, rest)

    if args.cmd == "sun":
        return cmd_sun(rest)

    if args.cmd == "month":
        return _run_module_main("panchanga.diagnostics.pretty_month", rest)

    if args.cmd == "diag":
        tool_map = {
            "leap-months": "panchanga.diagnostics.leap_months",
            "validate-ref": "panchanga.diagnostics.ephem.validate_reference",
        }
        return _run_module_main(tool_map[args.tool], rest)

    if args.cmd == "solar":
        return cmd_solar(rest)

    if args.cmd == "lunar":
        return cmd_lunar(rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
