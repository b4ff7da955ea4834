# reference/solar.py

from __future__ import annotations

import math
from typing import Optional

from . import astro_args as aa


def solar_longitude(jd: float) -> float:
    """
    Tropical solar longitude (degrees, [0,360)) for a Julian instant:
    mean longitude plus a three-term equation of center.
    Accurate to roughly 0.01 deg near the present epoch.
    """
    T = aa.T_centuries(jd)
    sm = aa.solar_mean_elements(T)
    M_rad = math.radians(sm.M_deg)

    # Equation of Center (C_sun)
    C_sun = (
        (1.914602 - 0.004817 * T - 0.000014 * T * T) * math.sin(M_rad)
        + (0.019993 - 0.000101 * T) * math.sin(2.0 * M_rad)
        + 0.000289 * math.sin(3.0 * M_rad)
    )

    return aa.wrap_deg(sm.L0_deg + C_sun)


def solar_declination_deg(L_deg: float, eps_deg: float) -> float:
    """Solar declination from ecliptic longitude and obliquity."""
    sin_delta = math.sin(math.radians(eps_deg)) * math.sin(math.radians(L_deg))
    return math.degrees(math.asin(sin_delta))


def equation_of_time_minutes(jd: float) -> float:
    """
    Equation of Time in minutes (apparent minus mean solar time),
    EOT = 4 * (L0 - alpha_sun).
    """
    T = aa.T_centuries(jd)
    L0_deg = aa.solar_mean_elements(T).L0_deg
    L_rad = math.radians(solar_longitude(jd))
    eps_rad = math.radians(aa.mean_obliquity_deg(T))

    # Right ascension; atan2 keeps the quadrant
    y = math.cos(eps_rad) * math.sin(L_rad)
    x = math.cos(L_rad)
    alpha_deg = aa.wrap_deg(math.degrees(math.atan2(y, x)))

    return 4.0 * aa.wrap180(L0_deg - alpha_deg)


def hour_angle_deg(lat_deg: float, decl_deg: float, h0_deg: float = 0.0) -> Optional[float]:
    """
    Semi-diurnal arc H0 (degrees) from the spherical law of cosines:
      cos H0 = (sin h0 - sin(lat) sin(decl)) / (cos(lat) cos(decl))
    With h0 = 0 this is cos H0 = -tan(lat) tan(decl).
    Returns None if the body does not rise or set (polar day/night).
    """
    lat_rad = math.radians(lat_deg)
    decl_rad = math.radians(decl_deg)

    denominator = math.cos(lat_rad) * math.cos(decl_rad)
    if abs(denominator) < 1e-12:
        return None

    cos_H0 = (math.sin(math.radians(h0_deg)) - math.sin(lat_rad) * math.sin(decl_rad)) / denominator
    if cos_H0 < -1.0 or cos_H0 > 1.0:
        return None

    return math.degrees(math.acos(cos_H0))
