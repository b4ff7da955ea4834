from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, Literal, Optional, Tuple

@dataclass(frozen=True)
class EngineId:
    family: Literal["simplified", "ephemeris", "custom"]
    name: str
    version: str

@dataclass(frozen=True)
class CivilDate:
    """Proleptic-Gregorian civil date. Validity is checked, never assumed."""
    year: int
    month: int
    day: int

    @property
    def is_valid(self) -> bool:
        try:
            date(self.year, self.month, self.day)
        except (TypeError, ValueError, OverflowError):
            return False
        return True

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, d: date) -> "CivilDate":
        return cls(d.year, d.month, d.day)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

@dataclass(frozen=True)
class GeoLocation:
    latitude: float
    longitude: float             # degrees, positive East
    utc_offset_hours: float
    name: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        # NaN fails every comparison, so it is rejected here too
        return (
            -90.0 <= self.latitude <= 90.0
            and -180.0 <= self.longitude <= 180.0
            and -12.0 <= self.utc_offset_hours <= 14.0
        )

@dataclass(frozen=True)
class ClockTime:
    """Sexagesimal rendering of a decimal-hour value (h, m, s)."""
    hours: int
    minutes: int
    seconds: int

    @classmethod
    def from_decimal_hours(cls, h: float) -> "ClockTime":
        # Round once at the seconds level and carry, so 59.6 s never shows up as 60.
        total = int(round(h * 3600.0))
        hours, rem = divmod(total, 3600)
        minutes, seconds = divmod(rem, 60)
        return cls(hours, minutes, seconds)

    @classmethod
    def of_day(cls, h: float) -> "ClockTime":
        """Wall-clock reading in 00:00:00..23:59:59; rounding up to midnight wraps to 00:00:00."""
        total = int(round(h * 3600.0)) % 86400
        hours, rem = divmod(total, 3600)
        minutes, seconds = divmod(rem, 60)
        return cls(hours, minutes, seconds)

    def to_decimal_hours(self) -> float:
        return self.hours + self.minutes / 60.0 + self.seconds / 3600.0

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"

@dataclass(frozen=True)
class ElementUnit:
    """Shared shape of tithi, nakshatra and yoga readings."""
    number: int
    name: str
    end_time: Optional[ClockTime] = None
    is_skipped: bool = False

@dataclass(frozen=True)
class NamedUnit:
    """Karana, vara, samvatsara and ritu: a number and its display name."""
    number: int
    name: str

@dataclass(frozen=True)
class MasaUnit:
    number: int
    name: str
    is_leap_month: bool = False

@dataclass(frozen=True)
class ElementReading:
    """Unit prevailing at sunrise plus the unit that was skipped before the next sunrise."""
    unit: ElementUnit
    additional: Optional[ElementUnit] = None

@dataclass(frozen=True)
class PanchangaResult:
    date: CivilDate
    location: GeoLocation
    tithi: Optional[ElementUnit]
    nakshatra: Optional[ElementUnit]
    yoga: Optional[ElementUnit]
    karana: NamedUnit
    vara: NamedUnit
    masa: Optional[MasaUnit]
    samvatsara: Optional[NamedUnit]
    ritu: Optional[NamedUnit]
    sunrise: Optional[ClockTime]
    sunset: Optional[ClockTime]
    moonrise: Optional[ClockTime] = None
    moonset: Optional[ClockTime] = None
    day_duration_hours: Optional[float] = None
    additional_tithi: Optional[ElementUnit] = None
    additional_nakshatra: Optional[ElementUnit] = None
    additional_yoga: Optional[ElementUnit] = None
    unavailable: Tuple[str, ...] = ()

# ------------------------------------------------------------
# Engine specifications (pure data)
# ------------------------------------------------------------

@dataclass(frozen=True)
class AyanamsaDef:
    """Linear sidereal correction: a0 + a1 * T (degrees, T in Julian centuries)."""
    a0_deg: float
    a1_deg_per_century: float

@dataclass(frozen=True)
class SunriseDef:
    h0_deg: float = 0.0              # 0 => cos H = -tan(lat) tan(decl)
    equation_of_time: bool = True

@dataclass(frozen=True)
class SearchDef:
    tol_days: float = 1e-6           # ~0.09 s
    max_iter: int = 64
    lunation_halfwidth_days: float = 3.0

@dataclass(frozen=True)
class PanchangaSpec:
    """Top-level engine specification."""
    kind: Literal["simplified", "ephemeris"]
    id: EngineId
    zodiac: Literal["sidereal", "tropical"]
    ayanamsa: AyanamsaDef
    sunrise: SunriseDef = SunriseDef()
    search: SearchDef = SearchDef()
    samvatsara_epoch_year: int = 1987
    meta: Dict[str, Any] = field(default_factory=dict)

    def tweak(self, **kwargs) -> "PanchangaSpec":
        return replace(self, **kwargs)
