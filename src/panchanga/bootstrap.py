from __future__ import annotations
from panchanga.core.engine import EngineRegistry
from panchanga.engines.specs import ALL_SPECS
from panchanga.engines.factory import make_engine

def build_registry() -> EngineRegistry:
    # ephemeris engines are built on first use (see api.get_engine)
    engines = {}
    for name, spec in ALL_SPECS.items():
        if spec.kind == "simplified":
            engines[name] = make_engine(spec)
    return EngineRegistry(engines)
