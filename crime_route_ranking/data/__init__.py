"""
Data model and loading utilities for route ranking.

This module contains:
- Incident records and categories
- Incident and route feed loading
- Date window computation
- The active incident store
"""

from .incident import IncidentCategory, IncidentRecord, KNOWN_CATEGORIES
from .date_window import DateWindow, compute_window, parse_timestamp
from .incident_store import IncidentStore
from .route_candidate import RouteCandidate
from .data_loader import load_incident_data, parse_incident_feed
from .route_loader import load_route_candidates, parse_route_candidates

__all__ = [
    'IncidentCategory',
    'IncidentRecord',
    'KNOWN_CATEGORIES',
    'DateWindow',
    'compute_window',
    'parse_timestamp',
    'IncidentStore',
    'RouteCandidate',
    'load_incident_data',
    'parse_incident_feed',
    'load_route_candidates',
    'parse_route_candidates'
]
