from __future__ import annotations

from typing import Dict

from ..core.types import AyanamsaDef, EngineId, PanchangaSpec, SearchDef, SunriseDef
from ..reference.astro_args import LAHIRI_A0_DEG, LAHIRI_A1_DEG_PER_CENTURY


# ============================================================
# SHARED DEFINITIONS
# ============================================================

LAHIRI_DEF = AyanamsaDef(a0_deg=LAHIRI_A0_DEG, a1_deg_per_century=LAHIRI_A1_DEG_PER_CENTURY)
NO_AYANAMSA_DEF = AyanamsaDef(a0_deg=0.0, a1_deg_per_century=0.0)

# Geometric disc-centre sunrise, as in almanacs computed without refraction
SUNRISE_CENTRE_DEF = SunriseDef(h0_deg=0.0, equation_of_time=True)

DEFAULT_SEARCH_DEF = SearchDef(tol_days=1e-6, max_iter=64, lunation_halfwidth_days=3.0)


# ============================================================
# SIMPLIFIED SERIES
# ============================================================

LAHIRI = PanchangaSpec(
    kind="simplified",
    id=EngineId("simplified", "lahiri", "0.1"),
    zodiac="sidereal",
    ayanamsa=LAHIRI_DEF,
    sunrise=SUNRISE_CENTRE_DEF,
    search=DEFAULT_SEARCH_DEF,
    meta={"description": "Truncated solar/lunar series, linear Lahiri ayanamsa, sidereal elements"},
)

SAYANA = LAHIRI.tweak(
    id=EngineId("simplified", "sayana", "0.1"),
    zodiac="tropical",
    ayanamsa=NO_AYANAMSA_DEF,
    meta={"description": "Truncated solar/lunar series, tropical (sayana) elements"},
)


# ============================================================
# EPHEMERIS (optional, needs the ephemeris extra)
# ============================================================

LAHIRI_EPHEMERIS = LAHIRI.tweak(
    kind="ephemeris",
    id=EngineId("ephemeris", "lahiri-ephemeris", "0.1"),
    meta={"description": "Skyfield/JPL positions, linear Lahiri ayanamsa, sidereal elements",
          "ephemeris": "de421.bsp"},
)


SIMPLIFIED_SPECS: Dict[str, PanchangaSpec] = {
    "lahiri": LAHIRI,
    "sayana": SAYANA,
}

EPHEMERIS_SPECS: Dict[str, PanchangaSpec] = {
    "lahiri-ephemeris": LAHIRI_EPHEMERIS,
}

ALL_SPECS: Dict[str, PanchangaSpec] = {**SIMPLIFIED_SPECS, **EPHEMERIS_SPECS}
