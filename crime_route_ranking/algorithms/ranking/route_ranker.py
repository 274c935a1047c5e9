"""
Route ranking by aggregate danger score.
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Any, Dict, List, Optional, Sequence

from .scored_route import ScoredRoute, severity_label
from ..sampling.route_sampler import RouteSampler
from ..scoring.base_scorer import BaseDangerScorer
from ..scoring.scorer_factory import create_scorer_from_string
from ...config.ranking_config import RankingConfig
from ...data.incident import IncidentCategory, IncidentRecord
from ...data.route_candidate import RouteCandidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncidentContext:
    """Incident working set and enabled categories used for one ranking pass."""

    incidents: Sequence[IncidentRecord]
    active_categories: AbstractSet[IncidentCategory]


class RouteRanker:
    """
    Score candidate routes and order them from safest to most dangerous.
    """

    def __init__(self, config: Optional[RankingConfig] = None,
                 scorer: Optional[BaseDangerScorer] = None,
                 sampler: Optional[RouteSampler] = None):
        """
        Initialize route ranker.

        Args:
            config: Ranking configuration parameters
            scorer: Danger scorer (defaults to the configured scoring method)
            sampler: Route sampler (defaults to one built from config)
        """
        self.config = config or RankingConfig()
        self.config.validate()

        self.scorer = scorer or create_scorer_from_string(self.config.scoring_method, self.config)
        self.sampler = sampler or RouteSampler(self.config)

    def score_route(self, candidate: RouteCandidate, context: IncidentContext) -> float:
        """
        Sum the danger score over the sampled points of a route.

        Args:
            candidate: Route to score
            context: Incidents and enabled categories

        Returns:
            Aggregate danger score (0 for an empty geometry)
        """
        total = 0.0
        for lng, lat in self.sampler.sample(candidate.coordinates):
            total += self.scorer.score((lat, lng), context.incidents, context.active_categories)
        return total

    def rank(self, routes: Sequence[RouteCandidate], context: IncidentContext) -> List[ScoredRoute]:
        """
        Rank routes ascending by aggregate danger score.

        Ties keep their source order. Position 0 is always the safest route.

        Args:
            routes: Candidates in routing-source order
            context: Incidents and enabled categories

        Returns:
            Ranked routes (empty for empty input)
        """
        if not routes:
            logger.info("No routes to rank")
            return []

        scored = [(self.score_route(route, context), index, route)
                  for index, route in enumerate(routes)]

        # sorted() is stable, so equal scores keep source order
        scored = sorted(scored, key=lambda item: item[0])

        ranked = [
            ScoredRoute(
                candidate=route,
                score=score,
                source_index=index,
                rank=rank,
                severity=severity_label(score, self.config)
            )
            for rank, (score, index, route) in enumerate(scored)
        ]

        order = ", ".join(f"#{r.source_index}={r.score:.1f}" for r in ranked)
        logger.info(f"Ranked {len(ranked)} routes: {order}")
        return ranked

    def analyze(self, ranked: Sequence[ScoredRoute]) -> Dict[str, Any]:
        """Analyze ranked routes and generate comparison metrics."""
        summaries = [route.get_summary() for route in ranked]

        return {
            'route_summaries': summaries,
            'recommendation': self._generate_recommendation(ranked),
            'comparison': self._compare_routes(ranked)
        }

    def _generate_recommendation(self, ranked: Sequence[ScoredRoute]) -> Dict[str, Any]:
        if not ranked:
            return {
                'recommended_route': None,
                'reason': 'No routes found'
            }

        safest = ranked[0]
        return {
            'recommended_route': safest.source_index,
            'reason': f'Lowest danger score ({safest.score:.1f}, {safest.severity})'
        }

    def _compare_routes(self, ranked: Sequence[ScoredRoute]) -> Dict[str, Any]:
        if len(ranked) < 2:
            return {}

        safest = ranked[0]
        shortest = min(ranked, key=lambda r: r.distance)
        fastest = min(ranked, key=lambda r: r.duration)

        return {
            'score_spread': ranked[-1].score - safest.score,
            'extra_distance_m': safest.distance - shortest.distance,
            'extra_duration_s': safest.duration - fastest.duration,
            'safest_is_shortest': safest.source_index == shortest.source_index
        }
