"""
panchanga.engines.astro.sunrise
-------------------------------
Horizon events for a civil day at a location.

Sunrise and sunset come from the hour-angle equation evaluated on the Sun's
declination, with one refinement pass at the event instant. Local apparent
time is turned into clock time with the observer longitude, the zone offset
and (optionally) the equation of time.

Moonrise and moonset are a low-confidence placeholder: a sinusoidal offset
of up to two hours around local mean noon/midnight, driven by the Moon's
longitude. Callers must tolerate None from both.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from panchanga.core.time import jd_to_local_hours, local_midnight_jd, wrap_hours
from panchanga.core.types import ClockTime, GeoLocation, SunriseDef
from panchanga.engines.interfaces import CelestialModel, RiseSet, RiseSetModel
from panchanga.reference import astro_args as aa
from panchanga.reference import lunar, solar

logger = logging.getLogger(__name__)

RISE = -1
SET = 1


@dataclass(frozen=True)
class HourAngleRiseSet(RiseSetModel):
    model: CelestialModel
    p: SunriseDef = SunriseDef()
    refinements: int = 1

    # ---------------------------------------------------------
    # Sun
    # ---------------------------------------------------------
    def _event_ut_hours(self, jd: float, loc: GeoLocation, sign: int) -> Optional[float]:
        T = aa.T_centuries(jd)
        decl = solar.solar_declination_deg(self.model.solar_longitude(jd), aa.mean_obliquity_deg(T))
        H0 = solar.hour_angle_deg(loc.latitude, decl, self.p.h0_deg)
        if H0 is None:
            return None

        # 15 degrees per hour
        app_hours = 12.0 + sign * H0 / 15.0
        eot_hours = solar.equation_of_time_minutes(jd) / 60.0 if self.p.equation_of_time else 0.0
        return app_hours - eot_hours - loc.longitude / 15.0

    def _solar_event(self, jdn: int, loc: GeoLocation, sign: int) -> Optional[RiseSet]:
        midnight = local_midnight_jd(jdn, loc.utc_offset_hours)
        # Base approximation at local clock noon of the civil day
        jd = midnight + 0.5
        for _ in range(1 + self.refinements):
            ut_hours = self._event_ut_hours(jd, loc, sign)
            if ut_hours is None:
                logger.debug(
                    "no %s at lat=%.4f on JDN %d (polar day/night)",
                    "sunrise" if sign == RISE else "sunset", loc.latitude, jdn,
                )
                return None
            # UT hours count from 0h UT of the date holding jd
            jd = math.floor(jd - 0.5) + 0.5 + ut_hours / 24.0
            # move by whole days onto the civil day
            jd -= math.floor(jd - midnight)

        local_hours = jd_to_local_hours(jd, jdn, loc.utc_offset_hours)
        return RiseSet(jd=jd, local_hours=local_hours, local=ClockTime.of_day(local_hours))

    def sunrise(self, jdn: int, loc: GeoLocation) -> Optional[RiseSet]:
        return self._solar_event(jdn, loc, RISE)

    def sunset(self, jdn: int, loc: GeoLocation) -> Optional[RiseSet]:
        return self._solar_event(jdn, loc, SET)

    # ---------------------------------------------------------
    # Moon (placeholder)
    # ---------------------------------------------------------
    def _lunar_event(self, jdn: int, loc: GeoLocation, sign: int) -> Optional[ClockTime]:
        jd = local_midnight_jd(jdn, loc.utc_offset_hours) + 0.5
        lam = self.model.lunar_longitude(jd)
        beta = self.model.lunar_latitude(jd)
        decl = lunar.lunar_declination_deg(lam, beta, aa.mean_obliquity_deg(aa.T_centuries(jd)))
        if solar.hour_angle_deg(loc.latitude, decl) is None:
            logger.debug("moon circumpolar or never up at lat=%.4f on JDN %d", loc.latitude, jdn)
            return None

        offset = 2.0 * math.sin(math.radians(lam))
        mean_hours = 12.0 + offset if sign == RISE else 24.0 - offset
        local_hours = wrap_hours(mean_hours - loc.longitude / 15.0 + loc.utc_offset_hours)
        return ClockTime.of_day(local_hours)

    def moonrise(self, jdn: int, loc: GeoLocation) -> Optional[ClockTime]:
        return self._lunar_event(jdn, loc, RISE)

    def moonset(self, jdn: int, loc: GeoLocation) -> Optional[ClockTime]:
        return self._lunar_event(jdn, loc, SET)
