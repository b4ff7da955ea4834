from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple, Union

from .core.engine import EngineRegistry, PanchangaEngine
from .core.errors import InvalidDateError, InvalidLocationError
from .core.time import DateLike, as_civil, to_jdn
from .core.types import (
    CivilDate, ClockTime, ElementReading, GeoLocation, MasaUnit, NamedUnit,
    PanchangaResult, PanchangaSpec,
)
from .engines.factory import make_engine as _make_engine
from .engines.interfaces import NameResolver
from .names import NameTable

logger = logging.getLogger(__name__)

DEFAULT_ENGINE = "lahiri"
_registry: Optional[EngineRegistry] = None

def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Engine registry not initialized")
    return _registry

@lru_cache(maxsize=1)
def default_names() -> NameTable:
    """Built-in name table, built once per process."""
    return NameTable.default()

def _names(names: Optional[NameResolver]) -> NameResolver:
    return default_names() if names is None else names

# ============================================================
# Engine registry
# ============================================================

def list_engines() -> List[str]:
    """Registered engines plus presets that are built on first use."""
    from .engines.specs import ALL_SPECS
    return sorted(set(_reg().list()) | set(ALL_SPECS))

def get_engine(name: str) -> PanchangaEngine:
    eng = _reg().find(name)
    if eng is not None:
        return eng

    from .engines.specs import ALL_SPECS
    if name not in ALL_SPECS:
        # raises KeyError listing what is available
        return _reg().get(name)
    logger.info("Building engine '%s' on first use", name)
    eng = _make_engine(ALL_SPECS[name])
    _reg().register(name, eng, overwrite=True)
    return eng

def engine_info(engine: str) -> Dict[str, Any]:
    return get_engine(engine).info()

def make_engine(spec: PanchangaSpec) -> PanchangaEngine:
    return _make_engine(spec)

def register_engine(name: str, engine: PanchangaEngine, *, overwrite: bool = False) -> None:
    _reg().register(name, engine, overwrite=overwrite)

# ============================================================
# Validation
# ============================================================

def validate_date(d: Union[DateLike, Tuple[int, int, int]]) -> CivilDate:
    """Normalize to CivilDate; InvalidDateError if it is not a real calendar date."""
    if isinstance(d, tuple):
        if len(d) != 3:
            raise InvalidDateError(f"Expected (year, month, day), got {d!r}")
        d = CivilDate(*d)
    try:
        cd = as_civil(d)
    except TypeError as e:
        raise InvalidDateError(str(e)) from e
    if not cd.is_valid:
        raise InvalidDateError(f"Invalid date: {cd.year}-{cd.month}-{cd.day}")
    return cd

def validate_location(loc: GeoLocation) -> GeoLocation:
    if not isinstance(loc, GeoLocation):
        raise InvalidLocationError(f"Expected GeoLocation, got {type(loc).__name__}")
    if not loc.is_valid:
        raise InvalidLocationError(
            f"Invalid location: lat={loc.latitude}, lon={loc.longitude}, tz={loc.utc_offset_hours}"
        )
    return loc

def _checked(d: Any, loc: Optional[GeoLocation], *, required: bool = True) -> Tuple[CivilDate, Optional[GeoLocation]]:
    cd = validate_date(d)
    if required or loc is not None:
        validate_location(loc)
    return cd, loc

# ============================================================
# Panchanga
# ============================================================

def compute_panchanga(
    d: DateLike,
    location: GeoLocation,
    *,
    engine: str = DEFAULT_ENGINE,
    names: Optional[NameResolver] = None,
) -> PanchangaResult:
    """All eight elements, sunrise/sunset and moonrise/moonset for one civil day."""
    cd, loc = _checked(d, location)
    logger.debug("compute_panchanga %s at (%.4f, %.4f) engine=%s", cd, loc.latitude, loc.longitude, engine)
    return get_engine(engine).panchanga(cd, loc, _names(names))

def compute_tithi(d: DateLike, location: GeoLocation, *, engine: str = DEFAULT_ENGINE,
                  names: Optional[NameResolver] = None) -> ElementReading:
    cd, loc = _checked(d, location)
    return get_engine(engine).tithi(cd, loc, _names(names))

def compute_nakshatra(d: DateLike, location: GeoLocation, *, engine: str = DEFAULT_ENGINE,
                      names: Optional[NameResolver] = None) -> ElementReading:
    cd, loc = _checked(d, location)
    return get_engine(engine).nakshatra(cd, loc, _names(names))

def compute_yoga(d: DateLike, location: GeoLocation, *, engine: str = DEFAULT_ENGINE,
                 names: Optional[NameResolver] = None) -> ElementReading:
    cd, loc = _checked(d, location)
    return get_engine(engine).yoga(cd, loc, _names(names))

def compute_karana(d: DateLike, location: GeoLocation, *, engine: str = DEFAULT_ENGINE,
                   names: Optional[NameResolver] = None) -> NamedUnit:
    cd, loc = _checked(d, location)
    return get_engine(engine).karana(cd, loc, _names(names))

def compute_vara(d: DateLike, location: Optional[GeoLocation] = None, *, engine: str = DEFAULT_ENGINE,
                 names: Optional[NameResolver] = None) -> NamedUnit:
    """Weekday of the civil date; the location, if given, is only validated."""
    cd, _ = _checked(d, location, required=False)
    return get_engine(engine).vara(cd, _names(names))

def compute_masa(d: DateLike, location: GeoLocation, *, engine: str = DEFAULT_ENGINE,
                 names: Optional[NameResolver] = None) -> MasaUnit:
    cd, loc = _checked(d, location)
    return get_engine(engine).masa(cd, loc, _names(names))

def sunrise_sunset(d: DateLike, location: GeoLocation, *,
                   engine: str = DEFAULT_ENGINE) -> Tuple[Optional[ClockTime], Optional[ClockTime]]:
    """Local clock sunrise and sunset; None where the Sun does not cross the horizon."""
    cd, loc = _checked(d, location)
    eng = get_engine(engine)
    jdn = to_jdn(cd)
    rise = eng.riseset.sunrise(jdn, loc)
    sset = eng.riseset.sunset(jdn, loc)
    return (rise.local if rise else None, sset.local if sset else None)

def explain(d: DateLike, location: GeoLocation, *, engine: str = DEFAULT_ENGINE) -> Dict[str, Any]:
    cd, loc = _checked(d, location)
    return get_engine(engine).explain(cd, loc)
