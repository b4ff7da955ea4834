"""Name resolution: numeric element indices to display strings."""

from .resolver import CATEGORIES, NameTable, fallback_name, load_names

__all__ = ["CATEGORIES", "NameTable", "fallback_name", "load_names"]
