"""
Route ranking by aggregate danger.
"""

from .scored_route import ScoredRoute, severity_label, SAFE, MODERATE, HIGH_RISK
from .route_ranker import RouteRanker, IncidentContext

__all__ = [
    'ScoredRoute',
    'severity_label',
    'SAFE',
    'MODERATE',
    'HIGH_RISK',
    'RouteRanker',
    'IncidentContext'
]
