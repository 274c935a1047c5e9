"""
Danger scoring strategies for route ranking.
"""

from .base_scorer import BaseDangerScorer
from .danger_scorer import LinearFalloffScorer, IndexedDangerScorer
from .scorer_factory import ScorerFactory, ScoringMethod, create_scorer_from_string

__all__ = [
    'BaseDangerScorer',
    'LinearFalloffScorer',
    'IndexedDangerScorer',
    'ScorerFactory',
    'ScoringMethod',
    'create_scorer_from_string'
]
