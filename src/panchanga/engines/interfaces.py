"""
panchanga.engines.interfaces
----------------------------
Defines the boundaries between the continuous astronomy (CelestialModel),
the horizon geometry (RiseSetModel), presentation (NameResolver) and the
orchestrator that derives the discrete calendar elements.

Standard Reference Frame:
All time variables are Julian instants (JD, days). Integral values are the
Julian Day Numbers of civil days, i.e. noon UT of that day.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from panchanga.core.types import ClockTime, GeoLocation


class CelestialModel(Protocol):
    """
    Pure functions of a Julian instant. Every angle is returned in [0,360),
    except lunar_latitude which is signed.
    """
    def solar_longitude(self, jd: float) -> float:
        """Tropical solar ecliptic longitude (degrees)."""
        ...

    def lunar_longitude(self, jd: float) -> float:
        """Tropical lunar ecliptic longitude (degrees)."""
        ...

    def lunar_latitude(self, jd: float) -> float:
        """Lunar ecliptic latitude (degrees, signed)."""
        ...

    def lunar_phase(self, jd: float) -> float:
        """Elongation of the Moon from the Sun (degrees)."""
        ...

    def ayanamsa(self, jd: float) -> float:
        """Sidereal correction subtracted from tropical longitudes (degrees)."""
        ...


@dataclass(frozen=True)
class RiseSet:
    """A horizon crossing: the instant, and its local clock rendering."""
    jd: float
    local_hours: float      # local clock hours in [0,24)
    local: ClockTime


class RiseSetModel(Protocol):
    """
    Horizon events for the civil day jdn at a location. An unavailable event
    (polar day/night, placeholder not meaningful) is returned as None.
    """
    def sunrise(self, jdn: int, loc: GeoLocation) -> Optional[RiseSet]: ...
    def sunset(self, jdn: int, loc: GeoLocation) -> Optional[RiseSet]: ...
    def moonrise(self, jdn: int, loc: GeoLocation) -> Optional[ClockTime]: ...
    def moonset(self, jdn: int, loc: GeoLocation) -> Optional[ClockTime]: ...


class NameResolver(Protocol):
    """Maps (category, index) to a display string; never fails."""
    def resolve(self, category: str, index: int) -> str: ...
