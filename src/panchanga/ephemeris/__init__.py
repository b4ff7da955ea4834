"""Ephemeris adapters/providers (optional).

This package provides thin wrappers around external ephemeris libraries.
Install with:
  pip install "panchanga[ephemeris]"
"""

from panchanga.core.errors import EngineUnavailableError


def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import skyfield  # noqa: F401
    except ImportError as e:
        raise EngineUnavailableError('Ephemeris support requires: pip install "panchanga[ephemeris]"') from e
