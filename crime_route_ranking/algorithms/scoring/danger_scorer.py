"""
Proximity-weighted danger scoring for map points.

Every incident of an enabled category within the danger radius adds its
category weight scaled by a linear falloff: full weight on top of the
incident, nothing at the radius. Scores are summed and never normalized, so a
point near many incidents scores higher than a point near one.
"""

import logging
from typing import AbstractSet, Optional, Sequence

from .base_scorer import BaseDangerScorer, Point
from ...config.ranking_config import RankingConfig
from ...data.incident import IncidentCategory, IncidentRecord
from ...data.incident_store import IncidentStore

logger = logging.getLogger(__name__)


class LinearFalloffScorer(BaseDangerScorer):
    """
    Reference scorer: scans every incident for each point.

    Cost is O(incidents) per point, which is fine for city-sized feeds and a
    few hundred sample points per ranking pass.
    """

    def score(self, point: Point, active_incidents: Sequence[IncidentRecord],
              active_categories: AbstractSet[IncidentCategory]) -> float:
        if not active_categories:
            return 0.0

        total = 0.0
        for incident in active_incidents:
            if incident.category not in active_categories:
                continue
            total += self.contribution(point, incident)

        return total


class IndexedDangerScorer(BaseDangerScorer):
    """
    Same scoring formula, with candidate incidents drawn from a KD-tree.

    The index is rebuilt whenever a different incident sequence is passed in,
    so results always match LinearFalloffScorer for the same inputs.
    """

    def __init__(self, config: Optional[RankingConfig] = None):
        super().__init__(config)
        self._indexed_incidents: Optional[Sequence[IncidentRecord]] = None
        self._store = IncidentStore()

    def _ensure_index(self, active_incidents: Sequence[IncidentRecord]) -> None:
        if active_incidents is self._indexed_incidents:
            return
        self._store.rebuild(active_incidents, None)
        self._indexed_incidents = active_incidents

    def score(self, point: Point, active_incidents: Sequence[IncidentRecord],
              active_categories: AbstractSet[IncidentCategory]) -> float:
        if not active_categories or not active_incidents:
            return 0.0

        self._ensure_index(active_incidents)

        lat, lng = point
        total = 0.0
        for incident in self._store.query_radius(lat, lng, self.danger_radius):
            if incident.category not in active_categories:
                continue
            total += self.contribution(point, incident)

        return total
