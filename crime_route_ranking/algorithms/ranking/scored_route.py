"""
Scored route container and severity labelling.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ...config.ranking_config import RankingConfig
from ...data.route_candidate import Coordinate, RouteCandidate

SAFE = "Safe"
MODERATE = "Moderate"
HIGH_RISK = "High Risk"


def severity_label(score: float, config: Optional[RankingConfig] = None) -> str:
    """
    Label a route score against the severity thresholds.

    Args:
        score: Aggregate danger score
        config: Ranking configuration with safe/moderate thresholds

    Returns:
        "Safe", "Moderate" or "High Risk"
    """
    config = config or RankingConfig()
    if score < config.safe_threshold:
        return SAFE
    if score < config.moderate_threshold:
        return MODERATE
    return HIGH_RISK


@dataclass(frozen=True)
class ScoredRoute:
    """A route candidate with its aggregate danger score and ranking position."""

    candidate: RouteCandidate
    score: float
    source_index: int
    rank: int
    severity: str

    @property
    def is_safest(self) -> bool:
        return self.rank == 0

    @property
    def coordinates(self) -> Tuple[Coordinate, ...]:
        return self.candidate.coordinates

    @property
    def distance(self) -> float:
        return self.candidate.distance

    @property
    def duration(self) -> float:
        return self.candidate.duration

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics for the route panel."""
        return {
            'rank': self.rank,
            'source_index': self.source_index,
            'score': round(self.score, 2),
            'severity': self.severity,
            'is_safest': self.is_safest,
            'distance_km': round(self.candidate.distance_km, 1),
            'distance_miles': round(self.candidate.distance_miles, 1),
            'duration_min': self.candidate.duration_minutes,
            'point_count': len(self.candidate)
        }
