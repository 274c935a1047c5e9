"""
Candidate route geometry as returned by a routing source.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

Coordinate = Tuple[float, float]  # (lng, lat)

METERS_PER_MILE = 1609.34


@dataclass(frozen=True)
class RouteCandidate:
    """Ordered (lng, lat) geometry plus the distance and duration the router reported."""

    coordinates: Tuple[Coordinate, ...]
    distance: float = 0.0  # meters
    duration: float = 0.0  # seconds

    @classmethod
    def from_route(cls, route: Dict[str, Any]) -> 'RouteCandidate':
        """
        Build a candidate from one routing-source route object.

        Args:
            route: Route with 'geometry.coordinates' as [lng, lat] pairs,
                'distance' in meters and 'duration' in seconds

        Raises:
            ValueError: If the geometry is missing or holds non-numeric pairs
        """
        geometry = route.get('geometry')
        if isinstance(geometry, dict):
            raw_coords = geometry.get('coordinates')
        else:
            raw_coords = route.get('coordinates')

        if raw_coords is None:
            raise ValueError("Route has no geometry coordinates")

        coords = []
        for pair in raw_coords:
            if len(pair) < 2:
                raise ValueError(f"Invalid coordinate pair: {pair!r}")
            coords.append((float(pair[0]), float(pair[1])))

        return cls(
            coordinates=tuple(coords),
            distance=float(route.get('distance') or 0.0),
            duration=float(route.get('duration') or 0.0)
        )

    @property
    def distance_km(self) -> float:
        return self.distance / 1000.0

    @property
    def distance_miles(self) -> float:
        return self.distance / METERS_PER_MILE

    @property
    def duration_minutes(self) -> int:
        # Half-up rounding, as shown on the route panel
        return int(math.floor(self.duration / 60.0 + 0.5))

    def __len__(self) -> int:
        return len(self.coordinates)
