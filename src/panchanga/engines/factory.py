"""
panchanga.engines.factory
-------------------------
Transforms pure data specifications into live, executable Engine objects.
"""

from __future__ import annotations
from panchanga.core.types import PanchangaSpec
from panchanga.engines.astro.model import SimplifiedModel
from panchanga.engines.astro.sunrise import HourAngleRiseSet
from panchanga.engines.interfaces import CelestialModel
from panchanga.engines.panchanga import PanchangaEngine


def build_model(spec: PanchangaSpec) -> CelestialModel:
    """Transforms the spec's model choice into a live CelestialModel."""
    if spec.kind == "simplified":
        return SimplifiedModel(ayanamsa_def=spec.ayanamsa)
    if spec.kind == "ephemeris":
        # skyfield is optional; import only when asked for
        from panchanga.ephemeris.skyfield_model import DEFAULT_KERNEL, SkyfieldModel
        kernel = spec.meta.get("ephemeris", DEFAULT_KERNEL)
        return SkyfieldModel.load(kernel, ayanamsa_def=spec.ayanamsa)
    raise TypeError(f"Unknown engine kind: {spec.kind!r}")


def make_engine(spec: PanchangaSpec) -> PanchangaEngine:
    """The universal entry point."""
    model = build_model(spec)
    return PanchangaEngine(
        id=spec.id,
        model=model,
        riseset=HourAngleRiseSet(model, spec.sunrise),
        zodiac=spec.zodiac,
        search=spec.search,
        samvatsara_epoch_year=spec.samvatsara_epoch_year,
    )
