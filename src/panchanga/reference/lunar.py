# reference/lunar.py

from __future__ import annotations

import math

from . import astro_args as aa
from .solar import solar_longitude


# (d, m, m', coefficient in degrees): leading terms of the ELP2000 longitude
# series. Deliberately truncated; the target is tithi/nakshatra boundaries
# within the day, not arcsecond positions.
LUNAR_LON_TERMS = (
    (0, 0, 1, 6.288774),
    (2, 0, -1, 1.274027),
    (2, 0, 0, 0.658314),
    (0, 1, 0, -0.185116),
)

# (m', f, coefficient in degrees)
LUNAR_LAT_TERMS = (
    (0, 1, 5.128122),
    (1, 1, 0.280602),
    (1, -1, 0.277693),
)


def lunar_longitude(jd: float) -> float:
    """Tropical lunar longitude (degrees, [0,360))."""
    lm = aa.lunar_mean_elements(aa.T_centuries(jd))

    L = lm.Lp_deg
    for d, m, mp, coef in LUNAR_LON_TERMS:
        arg = d * lm.D_deg + m * lm.M_deg + mp * lm.Mp_deg
        L += coef * math.sin(math.radians(arg))

    return aa.wrap_deg(L)


def lunar_latitude(jd: float) -> float:
    """
    Lunar ecliptic latitude (degrees). Signed, within about +/-5.7 deg,
    so it is not wrapped to [0,360).
    """
    lm = aa.lunar_mean_elements(aa.T_centuries(jd))

    B = 0.0
    for mp, f, coef in LUNAR_LAT_TERMS:
        B += coef * math.sin(math.radians(mp * lm.Mp_deg + f * lm.F_deg))
    return B


def lunar_phase(jd: float) -> float:
    """Elongation of the Moon from the Sun, wrapped to [0,360)."""
    return aa.wrap_deg(lunar_longitude(jd) - solar_longitude(jd))


def lunar_declination_deg(L_deg: float, B_deg: float, eps_deg: float) -> float:
    """Declination of a body at ecliptic (L, B)."""
    L = math.radians(L_deg)
    B = math.radians(B_deg)
    eps = math.radians(eps_deg)
    sin_delta = math.sin(B) * math.cos(eps) + math.cos(B) * math.sin(eps) * math.sin(L)
    return math.degrees(math.asin(sin_delta))
