from __future__ import annotations

from dataclasses import dataclass
from math import fmod


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    # a tiny negative remainder rounds up to exactly 360.0
    if y >= 360.0:
        y = 0.0
    return y

def wrap180(deg: float) -> float:
    """Wraps an angle in degrees to the range [-180.0, 180.0)."""
    return (deg + 180.0) % 360.0 - 180.0

# ------------------------------------------------------------
# Time variable
# ------------------------------------------------------------

J2000 = 2451545.0  # JD at J2000.0


def T_centuries(jd: float) -> float:
    """Julian centuries from J2000.0."""
    return (jd - J2000) / 36525.0


# ------------------------------------------------------------
# Mean periods (days)
# ------------------------------------------------------------

SYNODIC_MONTH = 29.530588853

# mean elongation rate, degrees per day
MEAN_PHASE_RATE = 360.0 / SYNODIC_MONTH


# ------------------------------------------------------------
# Sun mean elements (Meeus-style, degrees, wrapped)
# ------------------------------------------------------------

@dataclass(frozen=True)
class SolarMean:
    L0_deg: float  # mean longitude of Sun
    M_deg: float   # mean anomaly of Sun


def solar_mean_elements(T: float) -> SolarMean:
    T2 = T * T
    L0 = 280.46646 + 36000.76983 * T + 0.0003032 * T2
    M = 357.52911 + 35999.05029 * T - 0.0001537 * T2
    return SolarMean(L0_deg=wrap_deg(L0), M_deg=wrap_deg(M))


# ------------------------------------------------------------
# Lunar mean elements, truncated at T^2
# ------------------------------------------------------------

@dataclass(frozen=True)
class LunarMean:
    """Mean elements used by the truncated lunar series (degrees, wrapped to [0,360))."""
    Lp_deg: float   # Moon's mean longitude
    D_deg: float    # mean elongation of the Moon from the Sun
    M_deg: float    # Sun's mean anomaly
    Mp_deg: float   # Moon's mean anomaly
    F_deg: float    # Moon's argument of latitude


def lunar_mean_elements(T: float) -> LunarMean:
    """
    Quadratic truncation of the ELP/Meeus fundamental arguments:
      L' = 218.3164477 + 481267.88123421 T - 0.0015786 T^2
      D  = 297.8501921 + 445267.1114034  T - 0.0018819 T^2
      M  = 357.5291092 + 35999.0502909   T - 0.0001536 T^2
      M' = 134.9633964 + 477198.8675055  T + 0.0087414 T^2
      F  = 93.2720950  + 483202.0175233  T - 0.0036539 T^2
    """
    T2 = T * T
    Lp = 218.3164477 + 481267.88123421 * T - 0.0015786 * T2
    D = 297.8501921 + 445267.1114034 * T - 0.0018819 * T2
    M = 357.5291092 + 35999.0502909 * T - 0.0001536 * T2
    Mp = 134.9633964 + 477198.8675055 * T + 0.0087414 * T2
    F = 93.2720950 + 483202.0175233 * T - 0.0036539 * T2
    return LunarMean(
        Lp_deg=wrap_deg(Lp),
        D_deg=wrap_deg(D),
        M_deg=wrap_deg(M),
        Mp_deg=wrap_deg(Mp),
        F_deg=wrap_deg(F),
    )


# ------------------------------------------------------------
# Obliquity & ayanamsa (linear models)
# ------------------------------------------------------------

def mean_obliquity_deg(T: float) -> float:
    """Linear mean obliquity of the ecliptic: 23.4393 - 0.013 T (degrees)."""
    return 23.4393 - 0.013 * T


LAHIRI_A0_DEG = 23.85
LAHIRI_A1_DEG_PER_CENTURY = 1.3972  # general precession, ~50.3"/yr


def ayanamsa_deg(
    T: float,
    a0_deg: float = LAHIRI_A0_DEG,
    a1_deg_per_century: float = LAHIRI_A1_DEG_PER_CENTURY,
) -> float:
    """Two-term linear sidereal correction, wrapped to [0,360)."""
    return wrap_deg(a0_deg + a1_deg_per_century * T)
