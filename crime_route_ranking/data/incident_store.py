"""
Working set of incidents and spatial indexing for point-radius queries.
"""

import logging
import math
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Union

import numpy as np
from scipy.spatial import cKDTree

from .date_window import DateWindow
from .incident import IncidentRecord

logger = logging.getLogger(__name__)


class IncidentStore:
    """
    Holds the active incident set (post date filter) and answers radius queries.
    """

    def __init__(self):
        self.incidents: List[IncidentRecord] = []
        self.incident_points: Optional[np.ndarray] = None  # [N, 2] array of (lat, lng)
        self.spatial_index: Optional[cKDTree] = None
        self.skipped_count = 0

    def rebuild(self, all_incidents: Iterable[Union[IncidentRecord, Dict[str, Any]]],
                date_window: Optional[DateWindow]) -> List[IncidentRecord]:
        """
        Replace the working set with the incidents that pass the date window.

        Args:
            all_incidents: Full dataset, as IncidentRecords or raw feed records
            date_window: Inclusive window; None disables temporal filtering

        Returns:
            The new active incident list
        """
        active = []
        skipped = 0

        for item in all_incidents:
            record = self._coerce_record(item)
            if record is None:
                skipped += 1
                continue
            if date_window is None or date_window.contains(record.timestamp):
                active.append(record)

        self.incidents = active
        self.skipped_count = skipped
        self._build_spatial_index()

        if skipped:
            logger.info(f"Skipped {skipped} malformed incident records")
        logger.info(f"Incident store rebuilt with {len(active)} active incidents")

        return list(active)

    def _coerce_record(self, item: Any) -> Optional[IncidentRecord]:
        if isinstance(item, IncidentRecord):
            record = item
        elif isinstance(item, dict):
            try:
                record = IncidentRecord.from_feed(item)
            except ValueError as e:
                logger.debug(f"Dropping malformed incident record: {e}")
                return None
        else:
            logger.debug(f"Dropping unsupported incident record: {item!r}")
            return None

        if not (isinstance(record.lat, (int, float)) and isinstance(record.lng, (int, float))
                and math.isfinite(record.lat) and math.isfinite(record.lng)):
            logger.debug(f"Dropping incident with invalid coordinates: {record}")
            return None

        return record

    def _build_spatial_index(self) -> None:
        """Build KD-tree over (lat, lng) for fast radius lookup."""
        if not self.incidents:
            self.incident_points = np.empty((0, 2))
            self.spatial_index = None
            return

        self.incident_points = np.array([(r.lat, r.lng) for r in self.incidents])
        self.spatial_index = cKDTree(self.incident_points)
        logger.debug(f"Spatial index built with {len(self.incidents)} incidents")

    def query_radius(self, lat: float, lng: float, radius: float) -> List[IncidentRecord]:
        """
        Get active incidents strictly within a degree radius of a point.

        Args:
            lat: Latitude of center point
            lng: Longitude of center point
            radius: Search radius in coordinate degrees

        Returns:
            Incidents in working-set order
        """
        if self.spatial_index is None:
            return []

        indices = self.spatial_index.query_ball_point([lat, lng], r=radius)
        nearby = []
        for idx in sorted(indices):
            record = self.incidents[idx]
            # query_ball_point is inclusive at the boundary
            if math.sqrt((lat - record.lat) ** 2 + (lng - record.lng) ** 2) < radius:
                nearby.append(record)
        return nearby

    def __len__(self) -> int:
        return len(self.incidents)

    def statistics(self) -> Dict[str, Any]:
        """
        Get statistical summary of the active incidents.

        Returns:
            Dictionary with counts per category and coordinate bounds
        """
        if not self.incidents:
            return {"total_incidents": 0, "by_category": {}}

        lats = self.incident_points[:, 0]
        lngs = self.incident_points[:, 1]
        counts = Counter(r.category.value for r in self.incidents)

        return {
            "total_incidents": len(self.incidents),
            "by_category": dict(counts),
            "skipped_records": self.skipped_count,
            "bounds": {
                "lat_min": float(lats.min()),
                "lat_max": float(lats.max()),
                "lng_min": float(lngs.min()),
                "lng_max": float(lngs.max())
            }
        }
