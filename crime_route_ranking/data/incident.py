"""
Incident record model.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from .date_window import parse_timestamp


class IncidentCategory(Enum):
    """Incident categories known to the scorer."""
    THEFT = "THEFT"
    BATTERY = "BATTERY"
    ASSAULT = "ASSAULT"
    ROBBERY = "ROBBERY"
    HATE_CRIME = "HATE_CRIME"
    OTHER = "OTHER"

    @classmethod
    def from_value(cls, value: Any) -> 'IncidentCategory':
        """Map a feed category onto the enumeration; anything unrecognised is OTHER."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.OTHER
        try:
            return cls(value.strip().upper().replace(' ', '_'))
        except ValueError:
            return cls.OTHER


KNOWN_CATEGORIES = frozenset(c for c in IncidentCategory if c is not IncidentCategory.OTHER)


def _coerce_coordinate(value: Any, name: str) -> float:
    try:
        coordinate = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name}: {value!r}")
    if not math.isfinite(coordinate):
        raise ValueError(f"Invalid {name}: {value!r}")
    return coordinate


@dataclass(frozen=True)
class IncidentRecord:
    """One historical incident at a location and optional time."""

    category: IncidentCategory
    lat: float
    lng: float
    timestamp: Optional[datetime] = None
    description: Optional[str] = None
    raw_category: Optional[str] = None

    @classmethod
    def from_feed(cls, record: Dict[str, Any]) -> 'IncidentRecord':
        """
        Build an incident from a feed record.

        Accepts the keys used by the incident API (type, lat, lng, rawDate,
        date, desc) and their long-form aliases (category, lon, timestamp,
        description).

        Raises:
            ValueError: If coordinates are missing or not finite numbers
        """
        raw_category = record.get('type', record.get('category'))
        lat = _coerce_coordinate(record.get('lat'), 'latitude')
        lng = _coerce_coordinate(record.get('lng', record.get('lon')), 'longitude')

        # rawDate takes precedence over the display date
        timestamp = parse_timestamp(
            record.get('rawDate') or record.get('date') or record.get('timestamp')
        )

        description = record.get('desc', record.get('description'))

        return cls(
            category=IncidentCategory.from_value(raw_category),
            lat=lat,
            lng=lng,
            timestamp=timestamp,
            description=str(description) if description is not None else None,
            raw_category=str(raw_category) if raw_category is not None else None
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.raw_category or self.category.value,
            'category': self.category.value,
            'lat': self.lat,
            'lng': self.lng,
            'date': self.timestamp.isoformat() if self.timestamp else None,
            'desc': self.description
        }
