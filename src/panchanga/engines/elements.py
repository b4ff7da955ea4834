"""
panchanga.engines.elements
--------------------------
Index arithmetic mapping continuous angles onto the discrete calendar units.

All cyclic units use the same rule: number = ceil(angle / span), with a
result of 0 remapped to the last unit of the cycle. An angle sitting exactly
on a boundary therefore belongs to the unit that is ending there, and a
phase of 0 (the new moon instant) is the end of tithi 30, not the start of 1.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from panchanga.reference.astro_args import wrap_deg


@dataclass(frozen=True)
class Cycle:
    category: str
    count: int

    @property
    def span_deg(self) -> float:
        return 360.0 / self.count

    def number(self, angle_deg: float) -> int:
        """Unit prevailing at angle_deg (any real; reduced to [0,360) first)."""
        x = wrap_deg(angle_deg)
        n = math.ceil(x / self.span_deg)
        # guards x/span rounding to count + tiny
        n = min(n, self.count)
        return self.count if n == 0 else n

    def end_angle(self, number: int) -> float:
        """Angle (in [0,360)) at which unit `number` ends."""
        return wrap_deg(number * self.span_deg)

    def succ(self, number: int) -> int:
        return number % self.count + 1


TITHI = Cycle("tithi", 30)          # 12 deg of elongation
NAKSHATRA = Cycle("nakshatra", 27)  # 13 deg 20' of lunar longitude
YOGA = Cycle("yoga", 27)            # 13 deg 20' of sun + moon
KARANA = Cycle("karana", 60)        # half tithi, 6 deg of elongation

RASHI_SPAN_DEG = 30.0


def tithi_number(phase_deg: float) -> int:
    return TITHI.number(phase_deg)

def nakshatra_number(lunar_lon_deg: float) -> int:
    return NAKSHATRA.number(lunar_lon_deg)

def yoga_number(solar_lon_deg: float, lunar_lon_deg: float) -> int:
    return YOGA.number(wrap_deg(solar_lon_deg + lunar_lon_deg))

def karana_number(phase_deg: float) -> int:
    return KARANA.number(phase_deg)

def vara_number(jdn: int) -> int:
    """Weekday, 0 = Sunday .. 6 = Saturday."""
    return int(math.floor(jdn + 1)) % 7

def rashi_index(solar_lon_deg: float) -> int:
    """Zodiacal sign 0 = Mesha .. 11 = Mina."""
    return int(wrap_deg(solar_lon_deg) // RASHI_SPAN_DEG) % 12

def masa_number(rashi_at_new_moon: int) -> int:
    """
    Amanta month named after the sign the Sun occupies at the opening new moon:
    Sun in Mina (11) -> 1 Caitra, Mesha (0) -> 2 Vaisakha, ...
    """
    return (rashi_at_new_moon + 1) % 12 + 1

def is_leap_month(rashi_at_new_moon: int, rashi_at_next_new_moon: int) -> bool:
    """No sankranti between two new moons: the lunation is intercalary (adhika)."""
    return rashi_at_new_moon == rashi_at_next_new_moon

def ritu_number(masa: int) -> int:
    """Six seasons of two months each, 1 = Vasanta (Caitra, Vaisakha)."""
    return (masa - 1) // 2 + 1

def lunar_year(civil_year: int, civil_month: int, masa: int) -> int:
    """
    The lunar year opens with Caitra. January-April dates still in the
    closing months (Margasirsa .. Phalguna) belong to the previous year.
    """
    if civil_month <= 4 and masa >= 9:
        return civil_year - 1
    return civil_year

def samvatsara_number(year: int, epoch_year: int = 1987) -> int:
    """Position in the 60-year cycle, 1 = Prabhava at epoch_year."""
    return (year - epoch_year) % 60 + 1
