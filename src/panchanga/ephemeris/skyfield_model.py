#ephemeris/skyfield_model.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from panchanga.core.errors import EngineUnavailableError
from panchanga.core.types import AyanamsaDef
from panchanga.engines.interfaces import CelestialModel
from panchanga.reference import astro_args as aa

from . import require_ephemeris

logger = logging.getLogger(__name__)

DEFAULT_KERNEL = "de421.bsp"


@dataclass(frozen=True)
class SkyfieldModel(CelestialModel):
    """
    Apparent geocentric longitudes referred to the true ecliptic and equinox
    of date, from a JPL kernel via skyfield. Instants are UT1 Julian days.

    Requires optional deps:
      pip install "panchanga[ephemeris]"
    """
    ts: Any
    earth: Any
    sun: Any
    moon: Any
    ayanamsa_def: AyanamsaDef = AyanamsaDef(aa.LAHIRI_A0_DEG, aa.LAHIRI_A1_DEG_PER_CENTURY)

    @classmethod
    def load(
        cls,
        kernel: str = DEFAULT_KERNEL,
        *,
        directory: Optional[Union[str, Path]] = None,
        ayanamsa_def: Optional[AyanamsaDef] = None,
    ) -> "SkyfieldModel":
        require_ephemeris()
        from skyfield.api import Loader, load  # type: ignore

        loader = Loader(str(directory)) if directory is not None else load
        try:
            eph = loader(kernel)
        except (OSError, ValueError) as e:
            raise EngineUnavailableError(f"Cannot load ephemeris kernel '{kernel}': {e}") from e
        logger.info("Loaded ephemeris kernel: %s", kernel)

        kw = {} if ayanamsa_def is None else {"ayanamsa_def": ayanamsa_def}
        return cls(ts=loader.timescale(), earth=eph["earth"], sun=eph["sun"], moon=eph["moon"], **kw)

    def _latlon(self, body: Any, jd: float) -> Tuple[float, float]:
        from skyfield.framelib import ecliptic_frame  # type: ignore

        t = self.ts.ut1_jd(jd)
        lat, lon, _ = self.earth.at(t).observe(body).apparent().frame_latlon(ecliptic_frame)
        return float(lat.degrees), aa.wrap_deg(float(lon.degrees))

    def solar_longitude(self, jd: float) -> float:
        return self._latlon(self.sun, jd)[1]

    def lunar_longitude(self, jd: float) -> float:
        return self._latlon(self.moon, jd)[1]

    def lunar_latitude(self, jd: float) -> float:
        return self._latlon(self.moon, jd)[0]

    def lunar_phase(self, jd: float) -> float:
        return aa.wrap_deg(self.lunar_longitude(jd) - self.solar_longitude(jd))

    def ayanamsa(self, jd: float) -> float:
        return aa.ayanamsa_deg(
            aa.T_centuries(jd),
            self.ayanamsa_def.a0_deg,
            self.ayanamsa_def.a1_deg_per_century,
        )
