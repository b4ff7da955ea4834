"""panchanga public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

import logging

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    compute_panchanga,
    compute_tithi,
    compute_nakshatra,
    compute_yoga,
    compute_karana,
    compute_vara,
    compute_masa,
    sunrise_sunset,
    explain,
    validate_date,
    validate_location,
    list_engines,
    engine_info,
    get_engine,
    make_engine,
    register_engine,
)
from .core.errors import (
    PanchangaError,
    PreconditionError,
    InvalidDateError,
    InvalidLocationError,
    BoundarySearchError,
    EngineUnavailableError,
    NameTableError,
)
from .core.types import CivilDate, ClockTime, GeoLocation, PanchangaResult, PanchangaSpec
from .names import NameTable, load_names

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "compute_panchanga",
    "compute_tithi",
    "compute_nakshatra",
    "compute_yoga",
    "compute_karana",
    "compute_vara",
    "compute_masa",
    "sunrise_sunset",
    "explain",
    "validate_date",
    "validate_location",
    "list_engines",
    "engine_info",
    "get_engine",
    "make_engine",
    "register_engine",
    "PanchangaError",
    "PreconditionError",
    "InvalidDateError",
    "InvalidLocationError",
    "BoundarySearchError",
    "EngineUnavailableError",
    "NameTableError",
    "CivilDate",
    "ClockTime",
    "GeoLocation",
    "PanchangaResult",
    "PanchangaSpec",
    "NameTable",
    "load_names",
]
