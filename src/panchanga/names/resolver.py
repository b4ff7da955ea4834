from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from panchanga.core.errors import NameTableError
from panchanga.engines.interfaces import NameResolver
from .tables import default_tables

logger = logging.getLogger(__name__)

CATEGORIES = ("masa", "tithi", "nakshatra", "yoga", "karana", "vara", "samvatsara", "ritu")

# keys used by names files of the older service layout
_ALIASES = {
    "masas": "masa",
    "tithis": "tithi",
    "nakshatras": "nakshatra",
    "yogas": "yoga",
    "karanas": "karana",
    "varas": "vara",
    "samvats": "samvatsara",
    "samvatsaras": "samvatsara",
    "ritus": "ritu",
}


def fallback_name(category: str, index: int) -> str:
    return f"{category.capitalize()}-{index}"


@dataclass(frozen=True)
class NameTable(NameResolver):
    """Immutable category -> {index -> name} table with a deterministic fallback."""
    tables: Mapping[str, Mapping[int, str]]

    def resolve(self, category: str, index: int) -> str:
        name = self.tables.get(category, {}).get(index)
        return name if name is not None else fallback_name(category, index)

    @classmethod
    def build(cls, tables: Mapping[str, Mapping[int, str]]) -> "NameTable":
        frozen = {c: MappingProxyType(dict(t)) for c, t in tables.items()}
        return cls(MappingProxyType(frozen))

    @classmethod
    def default(cls) -> "NameTable":
        return cls.build(default_tables())

    @classmethod
    def empty(cls) -> "NameTable":
        """Every lookup falls back to '<Category>-<index>'."""
        return cls.build({})

    @classmethod
    def from_json(cls, path: Union[str, Path], *, merge_defaults: bool = True) -> "NameTable":
        """
        Load names from a JSON object of the form {"tithi": {"1": "..."}, ...}.
        Plural keys ("tithis", "samvats", ...) are accepted.
        """
        p = Path(path)
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except OSError as e:
            raise NameTableError(f"cannot read names file {p}: {e}") from e
        except json.JSONDecodeError as e:
            raise NameTableError(f"names file {p} is not valid JSON: {e}") from e

        if not isinstance(raw, dict):
            raise NameTableError(f"names file {p} must hold a JSON object")

        tables: Dict[str, Dict[int, str]] = default_tables() if merge_defaults else {}
        for key, entries in raw.items():
            category = _ALIASES.get(key, key)
            if category not in CATEGORIES:
                raise NameTableError(f"unknown name category '{key}' in {p}. Known: {list(CATEGORIES)}")
            if not isinstance(entries, dict):
                raise NameTableError(f"category '{key}' in {p} must map indices to names")
            table = tables.setdefault(category, {})
            for idx, name in entries.items():
                try:
                    table[int(idx)] = str(name)
                except ValueError as e:
                    raise NameTableError(f"non-integer index '{idx}' in category '{key}' of {p}") from e

        logger.info("Loaded names from: %s", p)
        return cls.build(tables)


def load_names(path: Optional[Union[str, Path]] = None) -> NameTable:
    """The default table, or a file overlaid on it."""
    if path is None:
        return NameTable.default()
    return NameTable.from_json(path)
