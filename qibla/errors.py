from __future__ import annotations


class QiblaError(Exception):
    """Base class for compass engine errors."""


class CoordinateRangeError(QiblaError, ValueError):
    """Raised when latitude/longitude fall outside valid bounds."""


class LocationError(QiblaError):
    """Raised by location providers when no fix can be produced."""


class LocationPermissionDenied(LocationError):
    pass


class LocationUnavailable(LocationError):
    pass
