"""
Scoring and ranking algorithms.

This module contains:
- Danger scoring strategies
- Route polyline sampling
- Route ranking and comparison
"""

from .scoring import (
    BaseDangerScorer,
    LinearFalloffScorer,
    IndexedDangerScorer,
    ScorerFactory,
    ScoringMethod,
    create_scorer_from_string
)
from .sampling import RouteSampler
from .ranking import RouteRanker, IncidentContext, ScoredRoute, severity_label

__all__ = [
    'BaseDangerScorer',
    'LinearFalloffScorer',
    'IndexedDangerScorer',
    'ScorerFactory',
    'ScoringMethod',
    'create_scorer_from_string',
    'RouteSampler',
    'RouteRanker',
    'IncidentContext',
    'ScoredRoute',
    'severity_label'
]
