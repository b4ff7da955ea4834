from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from .types import (
    CivilDate, ElementReading, GeoLocation, MasaUnit, NamedUnit, PanchangaResult,
)

class PanchangaEngine(Protocol):
    riseset: Any

    def info(self) -> Dict[str, Any]: ...
    def panchanga(self, d: CivilDate, loc: GeoLocation, names: Any) -> PanchangaResult: ...
    def tithi(self, d: CivilDate, loc: GeoLocation, names: Any) -> ElementReading: ...
    def nakshatra(self, d: CivilDate, loc: GeoLocation, names: Any) -> ElementReading: ...
    def yoga(self, d: CivilDate, loc: GeoLocation, names: Any) -> ElementReading: ...
    def karana(self, d: CivilDate, loc: GeoLocation, names: Any) -> NamedUnit: ...
    def vara(self, d: CivilDate, names: Any) -> NamedUnit: ...
    def masa(self, d: CivilDate, loc: GeoLocation, names: Any) -> MasaUnit: ...
    def explain(self, d: CivilDate, loc: GeoLocation) -> Dict[str, Any]: ...

@dataclass
class EngineRegistry:
    _engines: Dict[str, PanchangaEngine]

    def get(self, name: str) -> PanchangaEngine:
        if name not in self._engines:
            raise KeyError(f"Unknown engine '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: PanchangaEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Engine '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine

    def find(self, name: str) -> Optional[PanchangaEngine]:
        return self._engines.get(name)
