"""
panchanga.engines.astro.model
-----------------------------
The truncated-series celestial model behind the default engines.
"""

from __future__ import annotations
from dataclasses import dataclass

from panchanga.core.types import AyanamsaDef
from panchanga.engines.interfaces import CelestialModel
from panchanga.reference import astro_args as aa
from panchanga.reference import lunar, solar


@dataclass(frozen=True)
class SimplifiedModel(CelestialModel):
    """Closed-form solar/lunar series; instants are used directly as TT (no Delta T)."""
    ayanamsa_def: AyanamsaDef = AyanamsaDef(aa.LAHIRI_A0_DEG, aa.LAHIRI_A1_DEG_PER_CENTURY)

    def solar_longitude(self, jd: float) -> float:
        return solar.solar_longitude(jd)

    def lunar_longitude(self, jd: float) -> float:
        return lunar.lunar_longitude(jd)

    def lunar_latitude(self, jd: float) -> float:
        return lunar.lunar_latitude(jd)

    def lunar_phase(self, jd: float) -> float:
        return lunar.lunar_phase(jd)

    def ayanamsa(self, jd: float) -> float:
        return aa.ayanamsa_deg(
            aa.T_centuries(jd),
            self.ayanamsa_def.a0_deg,
            self.ayanamsa_def.a1_deg_per_century,
        )
