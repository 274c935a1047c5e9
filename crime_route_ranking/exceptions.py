"""
Error types raised by the route ranking core and its boundary layers.
"""

from typing import Optional


class RouteRankingError(Exception):
    """Base class for route ranking errors."""


class DataUnavailableError(RouteRankingError):
    """
    An incident feed or route source returned nothing usable.

    The core treats missing data as zero incidents / zero routes; this error is
    raised only by loaders and the service layer so the caller can tell the
    end user.
    """

    def __init__(self, source: str, message: Optional[str] = None):
        self.source = source
        super().__init__(message or f"No usable data from {source}")


class InvalidSelectionError(RouteRankingError):
    """A selection event referenced a route index outside the ranked sequence."""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        if count == 0:
            message = f"Cannot select route {index}: no ranked routes available"
        else:
            message = f"Route index {index} out of range (0-{count - 1})"
        super().__init__(message)
