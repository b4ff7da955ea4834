"""
panchanga.engines.panchanga
---------------------------
The Orchestrator. Binds a CelestialModel and a RiseSetModel together and maps
the continuous longitudes onto the discrete calendar units of a civil day,
anchored at local sunrise.

Boundary policy: the unit reported for a day is the one prevailing at sunrise.
Its end time is searched in [sunrise, next sunrise]; a unit that begins and
ends inside that window never prevails at a sunrise and is reported as the
skipped "additional" unit. A unit still prevailing at the next sunrise has no
end time for the day.

End times are local clock times relative to midnight of the civil day, so a
boundary after midnight reads as e.g. 25:10:00.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar

from panchanga.core.errors import BoundarySearchError
from panchanga.core.time import jd_to_local_hours, local_midnight_jd, to_jdn
from panchanga.core.types import (
    CivilDate, ClockTime, ElementReading, ElementUnit, EngineId, GeoLocation,
    MasaUnit, NamedUnit, PanchangaResult, SearchDef,
)
from panchanga.engines import elements as el
from panchanga.engines._solver import find_crossing, find_crossing_near
from panchanga.engines.interfaces import CelestialModel, NameResolver, RiseSet, RiseSetModel
from panchanga.reference.astro_args import MEAN_PHASE_RATE, SYNODIC_MONTH, wrap_deg

logger = logging.getLogger(__name__)

# Elements indexed on ayanamsa-corrected longitudes when the zodiac is sidereal;
# every other element reads tropical longitudes.
# Tithi and karana depend on the elongation only, which is frame-independent.
SIDEREAL_ELEMENTS = frozenset({"nakshatra", "yoga", "masa"})

# Anchor used when the Sun does not rise (local clock hours).
FALLBACK_ANCHOR_HOURS = 6.0

T = TypeVar("T")


@dataclass(frozen=True)
class DayContext:
    date: CivilDate
    location: GeoLocation
    jdn: int
    sunrise: Optional[RiseSet]
    sunset: Optional[RiseSet]
    anchor: float
    next_anchor: float


class PanchangaEngine:
    """
    Derives the eight panchanga elements for a civil date and location.
    Stateless: every call depends only on its arguments and the bound models.
    """
    def __init__(
        self,
        id: EngineId,
        model: CelestialModel,
        riseset: RiseSetModel,
        zodiac: str = "sidereal",
        search: SearchDef = SearchDef(),
        samvatsara_epoch_year: int = 1987,
    ):
        if zodiac not in ("sidereal", "tropical"):
            raise ValueError("zodiac must be 'sidereal' or 'tropical'")
        self.id = id
        self.model = model
        self.riseset = riseset
        self.zodiac = zodiac
        self.search = search
        self.samvatsara_epoch_year = samvatsara_epoch_year

    # ---------------------------------------------------------
    # Angles
    # ---------------------------------------------------------
    def _frame(self, lon: float, jd: float, category: str) -> float:
        if self.zodiac == "sidereal" and category in SIDEREAL_ELEMENTS:
            return wrap_deg(lon - self.model.ayanamsa(jd))
        return lon

    def sun(self, jd: float, category: str = "masa") -> float:
        """Solar longitude in the frame used for category."""
        return self._frame(self.model.solar_longitude(jd), jd, category)

    def moon(self, jd: float, category: str = "nakshatra") -> float:
        """Lunar longitude in the frame used for category."""
        return self._frame(self.model.lunar_longitude(jd), jd, category)

    def yoga_angle(self, jd: float) -> float:
        return wrap_deg(self.sun(jd, "yoga") + self.moon(jd, "yoga"))

    def _driver(self, cycle: el.Cycle) -> Callable[[float], float]:
        if cycle is el.TITHI:
            return self.model.lunar_phase
        if cycle is el.NAKSHATRA:
            return lambda jd: self.moon(jd, "nakshatra")
        if cycle is el.YOGA:
            return self.yoga_angle
        raise ValueError(f"No boundary tracking for {cycle.category}")

    # ---------------------------------------------------------
    # Day anchoring
    # ---------------------------------------------------------
    def _anchor(self, rise: Optional[RiseSet], jdn: int, loc: GeoLocation) -> float:
        if rise is not None:
            return rise.jd
        return local_midnight_jd(jdn, loc.utc_offset_hours) + FALLBACK_ANCHOR_HOURS / 24.0

    def day_context(self, d: CivilDate, loc: GeoLocation) -> DayContext:
        jdn = to_jdn(d)
        rise = self.riseset.sunrise(jdn, loc)
        sset = self.riseset.sunset(jdn, loc)
        next_rise = self.riseset.sunrise(jdn + 1, loc)

        if rise is None:
            logger.warning(
                "No sunrise on %s at lat=%.4f; anchoring elements at %02d:00 local time",
                d, loc.latitude, FALLBACK_ANCHOR_HOURS,
            )

        ctx = DayContext(
            date=d,
            location=loc,
            jdn=jdn,
            sunrise=rise,
            sunset=sset,
            anchor=self._anchor(rise, jdn, loc),
            next_anchor=self._anchor(next_rise, jdn + 1, loc),
        )
        logger.debug("day context %s: JDN %d, anchor %.6f, next anchor %.6f", d, jdn, ctx.anchor, ctx.next_anchor)
        return ctx

    def _clock(self, jd: Optional[float], ctx: DayContext) -> Optional[ClockTime]:
        if jd is None:
            return None
        return ClockTime.from_decimal_hours(jd_to_local_hours(jd, ctx.jdn, ctx.location.utc_offset_hours))

    # ---------------------------------------------------------
    # Tithi / Nakshatra / Yoga
    # ---------------------------------------------------------
    def _end_of(self, cycle: el.Cycle, fn: Callable[[float], float], number: int, t0: float, t1: float) -> Optional[float]:
        return find_crossing(
            fn, cycle.end_angle(number), t0, t1,
            tol=self.search.tol_days, max_iter=self.search.max_iter,
        )

    def _reading(self, cycle: el.Cycle, ctx: DayContext, names: NameResolver) -> ElementReading:
        cat = cycle.category
        fn = self._driver(cycle)

        n = cycle.number(fn(ctx.anchor))
        end = self._end_of(cycle, fn, n, ctx.anchor, ctx.next_anchor)
        unit = ElementUnit(n, names.resolve(cat, n), self._clock(end, ctx))
        if end is None:
            return ElementReading(unit)

        k = cycle.succ(n)
        m = cycle.number(fn(ctx.next_anchor))
        if m in (n, k):
            return ElementReading(unit)

        # k began and ended between the two sunrises
        if cycle.succ(k) != m:
            raise BoundarySearchError(
                f"{cat}: more than one unit between sunrises on {ctx.date} ({n} -> {m})"
            )
        k_end = self._end_of(cycle, fn, k, end, ctx.next_anchor)
        if k_end is None:
            raise BoundarySearchError(f"{cat} {k}: end not found before next sunrise on {ctx.date}")

        logger.debug("%s %d skipped on %s", cat, k, ctx.date)
        additional = ElementUnit(k, names.resolve(cat, k), self._clock(k_end, ctx), is_skipped=True)
        return ElementReading(unit, additional)

    def _karana(self, ctx: DayContext, names: NameResolver) -> NamedUnit:
        n = el.karana_number(self.model.lunar_phase(ctx.anchor))
        return NamedUnit(n, names.resolve("karana", n))

    def _vara(self, jdn: int, names: NameResolver) -> NamedUnit:
        n = el.vara_number(jdn)
        return NamedUnit(n, names.resolve("vara", n))

    # ---------------------------------------------------------
    # Masa / Samvatsara / Ritu
    # ---------------------------------------------------------
    def new_moons(self, jd: float) -> tuple[float, float]:
        """The new moon at or before jd and the one after it."""
        phase = self.model.lunar_phase(jd)
        opts = dict(
            halfwidth_days=self.search.lunation_halfwidth_days,
            tol=self.search.tol_days,
            max_iter=self.search.max_iter,
        )
        nm_prev = find_crossing_near(self.model.lunar_phase, 0.0, jd - phase / MEAN_PHASE_RATE, **opts)
        nm_next = find_crossing_near(self.model.lunar_phase, 0.0, nm_prev + SYNODIC_MONTH, **opts)
        return nm_prev, nm_next

    def _masa(self, ctx: DayContext, names: NameResolver) -> MasaUnit:
        nm_prev, nm_next = self.new_moons(ctx.anchor)
        r_prev = el.rashi_index(self.sun(nm_prev, "masa"))
        r_next = el.rashi_index(self.sun(nm_next, "masa"))
        n = el.masa_number(r_prev)
        return MasaUnit(n, names.resolve("masa", n), el.is_leap_month(r_prev, r_next))

    def _samvatsara(self, d: CivilDate, masa: MasaUnit, names: NameResolver) -> NamedUnit:
        year = el.lunar_year(d.year, d.month, masa.number)
        n = el.samvatsara_number(year, self.samvatsara_epoch_year)
        return NamedUnit(n, names.resolve("samvatsara", n))

    def _ritu(self, masa: MasaUnit, names: NameResolver) -> NamedUnit:
        n = el.ritu_number(masa.number)
        return NamedUnit(n, names.resolve("ritu", n))

    # ---------------------------------------------------------
    # Per-element entry points
    # ---------------------------------------------------------
    def tithi(self, d: CivilDate, loc: GeoLocation, names: NameResolver) -> ElementReading:
        return self._reading(el.TITHI, self.day_context(d, loc), names)

    def nakshatra(self, d: CivilDate, loc: GeoLocation, names: NameResolver) -> ElementReading:
        return self._reading(el.NAKSHATRA, self.day_context(d, loc), names)

    def yoga(self, d: CivilDate, loc: GeoLocation, names: NameResolver) -> ElementReading:
        return self._reading(el.YOGA, self.day_context(d, loc), names)

    def karana(self, d: CivilDate, loc: GeoLocation, names: NameResolver) -> NamedUnit:
        return self._karana(self.day_context(d, loc), names)

    def vara(self, d: CivilDate, names: NameResolver) -> NamedUnit:
        return self._vara(to_jdn(d), names)

    def masa(self, d: CivilDate, loc: GeoLocation, names: NameResolver) -> MasaUnit:
        return self._masa(self.day_context(d, loc), names)

    # ---------------------------------------------------------
    # Composite
    # ---------------------------------------------------------
    @staticmethod
    def _isolated(label: str, fn: Callable[[], T], ctx: DayContext, unavailable: List[str]) -> Optional[T]:
        try:
            return fn()
        except BoundarySearchError:
            logger.exception("%s unavailable for %s", label, ctx.date)
            unavailable.append(label)
            return None

    def panchanga(self, d: CivilDate, loc: GeoLocation, names: NameResolver) -> PanchangaResult:
        ctx = self.day_context(d, loc)
        unavailable: List[str] = []

        tithi = self._isolated("tithi", lambda: self._reading(el.TITHI, ctx, names), ctx, unavailable)
        nakshatra = self._isolated("nakshatra", lambda: self._reading(el.NAKSHATRA, ctx, names), ctx, unavailable)
        yoga = self._isolated("yoga", lambda: self._reading(el.YOGA, ctx, names), ctx, unavailable)
        masa = self._isolated("masa", lambda: self._masa(ctx, names), ctx, unavailable)

        samvatsara = ritu = None
        if masa is not None:
            samvatsara = self._samvatsara(d, masa, names)
            ritu = self._ritu(masa, names)
        else:
            unavailable += ["samvatsara", "ritu"]

        moonrise = self.riseset.moonrise(ctx.jdn, loc)
        moonset = self.riseset.moonset(ctx.jdn, loc)

        day_hours = None
        if ctx.sunrise is not None and ctx.sunset is not None:
            day_hours = (ctx.sunset.jd - ctx.sunrise.jd) * 24.0

        for label, value in (("sunrise", ctx.sunrise), ("sunset", ctx.sunset),
                             ("moonrise", moonrise), ("moonset", moonset)):
            if value is None:
                logger.warning("%s unavailable on %s at lat=%.4f", label, d, loc.latitude)
                unavailable.append(label)

        return PanchangaResult(
            date=d,
            location=loc,
            tithi=tithi.unit if tithi else None,
            nakshatra=nakshatra.unit if nakshatra else None,
            yoga=yoga.unit if yoga else None,
            karana=self._karana(ctx, names),
            vara=self._vara(ctx.jdn, names),
            masa=masa,
            samvatsara=samvatsara,
            ritu=ritu,
            sunrise=ctx.sunrise.local if ctx.sunrise else None,
            sunset=ctx.sunset.local if ctx.sunset else None,
            moonrise=moonrise,
            moonset=moonset,
            day_duration_hours=day_hours,
            additional_tithi=tithi.additional if tithi else None,
            additional_nakshatra=nakshatra.additional if nakshatra else None,
            additional_yoga=yoga.additional if yoga else None,
            unavailable=tuple(unavailable),
        )

    # ---------------------------------------------------------
    # Diagnostics
    # ---------------------------------------------------------
    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id.__dict__,
            "zodiac": self.zodiac,
            "model": type(self.model).__name__,
            "riseset": type(self.riseset).__name__,
        }

    def explain(self, d: CivilDate, loc: GeoLocation) -> Dict[str, Any]:
        """Raw quantities at the day's anchor."""
        ctx = self.day_context(d, loc)
        t = ctx.anchor
        return {
            "jdn": ctx.jdn,
            "anchor_jd": t,
            "next_anchor_jd": ctx.next_anchor,
            "sunrise_jd": ctx.sunrise.jd if ctx.sunrise else None,
            "sunset_jd": ctx.sunset.jd if ctx.sunset else None,
            "solar_longitude": self.model.solar_longitude(t),
            "lunar_longitude": self.model.lunar_longitude(t),
            "lunar_latitude": self.model.lunar_latitude(t),
            "ayanamsa": self.model.ayanamsa(t),
            "lunar_phase": self.model.lunar_phase(t),
            "zodiac": self.zodiac,
            "sun_in_zodiac": self.sun(t),
            "moon_in_zodiac": self.moon(t),
        }
