"""
Base abstract class for danger scoring strategies.
"""

import math
from abc import ABC, abstractmethod
from typing import AbstractSet, Sequence, Tuple, Optional

from ...config.ranking_config import RankingConfig
from ...data.incident import IncidentCategory, IncidentRecord

Point = Tuple[float, float]  # (lat, lng)


class BaseDangerScorer(ABC):
    """
    Abstract base class for danger scoring strategies.

    This defines the interface that all scoring implementations must follow.
    Implementations must be pure: the same point, incidents and filter set
    always give the same score.
    """

    def __init__(self, config: Optional[RankingConfig] = None):
        """
        Initialize the scorer.

        Args:
            config: Ranking configuration parameters
        """
        self.config = config or RankingConfig()
        self.danger_radius = self.config.danger_radius

    @abstractmethod
    def score(self, point: Point, active_incidents: Sequence[IncidentRecord],
              active_categories: AbstractSet[IncidentCategory]) -> float:
        """
        Calculate the danger score at a point.

        Args:
            point: (lat, lng) to score
            active_incidents: Current working set of incidents
            active_categories: Categories currently switched on

        Returns:
            Danger score (higher = more dangerous, unbounded above)
        """
        pass

    def contribution(self, point: Point, incident: IncidentRecord) -> float:
        """
        Danger contributed by one incident, with linear falloff to the radius.

        Args:
            point: (lat, lng) being scored
            incident: Incident to measure against

        Returns:
            weight * (1 - distance / radius) inside the radius, else 0
        """
        lat, lng = point
        # Plain degree distance, no latitude correction
        distance = math.sqrt((lat - incident.lat) ** 2 + (lng - incident.lng) ** 2)

        if not distance < self.danger_radius:  # also rejects NaN
            return 0.0

        weight = self.config.weight_for(incident.category.value)
        return weight * (1.0 - distance / self.danger_radius)

    def get_scoring_parameters(self) -> dict:
        """Get scorer parameters for debugging/analysis."""
        return {
            'method': type(self).__name__,
            'danger_radius': self.danger_radius,
            'category_weights': dict(self.config.category_weights),
            'default_category_weight': self.config.default_category_weight
        }
