class PanchangaError(Exception):
    """Base error."""

class PreconditionError(PanchangaError, ValueError):
    """Raised when a query carries an invalid date or location."""

class InvalidDateError(PreconditionError):
    """The civil date is not a constructible proleptic-Gregorian date."""

class InvalidLocationError(PreconditionError):
    """Latitude, longitude or UTC offset out of range."""

class BoundarySearchError(PanchangaError, ArithmeticError):
    """A boundary search did not converge (monotone-advance assumption violated)."""

class EngineUnavailableError(PanchangaError):
    """Raised when an optional engine (e.g. the skyfield ephemeris) is not available."""

class NameTableError(PanchangaError):
    """Raised when a name table file cannot be read or has the wrong shape."""
