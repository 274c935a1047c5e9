"""
Shared test fixtures for the route ranking tests.
"""

from datetime import datetime
from typing import Dict, Sequence

import pytest
from fastapi.testclient import TestClient

from crime_route_ranking.algorithms.scoring.base_scorer import BaseDangerScorer
from crime_route_ranking.data.incident import IncidentCategory, IncidentRecord
from crime_route_ranking.data.route_candidate import RouteCandidate


def make_incident(category, lat, lng, timestamp=None, description=None) -> IncidentRecord:
    category = IncidentCategory.from_value(category)
    return IncidentRecord(
        category=category,
        lat=lat,
        lng=lng,
        timestamp=timestamp,
        description=description,
        raw_category=category.value
    )


def make_route(*coordinates, distance=1000.0, duration=600.0) -> RouteCandidate:
    return RouteCandidate(coordinates=tuple(coordinates), distance=distance, duration=duration)


class FixedPointScorer(BaseDangerScorer):
    """Returns a preset score per (lat, lng) point, 0 elsewhere."""

    def __init__(self, scores: Dict[tuple, float]):
        super().__init__()
        self.scores = scores

    def score(self, point, active_incidents: Sequence[IncidentRecord], active_categories) -> float:
        return self.scores.get(point, 0.0)


@pytest.fixture
def downtown_incidents():
    """Small Chicago-style dataset with dated, undated and unknown-category records."""
    return [
        make_incident("THEFT", 41.8789, -87.6359, datetime(2021, 1, 5, 14, 20)),
        make_incident("BATTERY", 41.8827, -87.6233, datetime(2021, 1, 17, 22, 5)),
        make_incident("ASSAULT", 41.8800, -87.6300, datetime(2021, 2, 2, 1, 40)),
        make_incident("ROBBERY", 41.8812, -87.6278, datetime(2021, 2, 10, 23, 15)),
        make_incident("HATE_CRIME", 41.8790, -87.6265, datetime(2021, 2, 21, 18, 30)),
        make_incident("THEFT", 41.8845, -87.6320, datetime(2021, 3, 1, 9, 10)),
        make_incident("BATTERY", 41.8768, -87.6291),
        make_incident("CRIMINAL_DAMAGE", 41.8776, -87.6310, datetime(2021, 2, 14, 3, 0)),
    ]


@pytest.fixture
def osrm_response():
    """Three alternatives: straight through the incidents, south detour, north detour."""
    return {
        "code": "Ok",
        "routes": [
            {
                "geometry": {"coordinates": [[-87.6359, 41.8781], [-87.6330, 41.8790], [-87.6300, 41.8800],
                                             [-87.6278, 41.8812], [-87.6250, 41.8820], [-87.6233, 41.8827]]},
                "distance": 1320.5,
                "duration": 240.0
            },
            {
                "geometry": {"coordinates": [[-87.6359, 41.8700], [-87.6300, 41.8700], [-87.6240, 41.8700]]},
                "distance": 1870.2,
                "duration": 330.0
            },
            {
                "geometry": {"coordinates": [[-87.6359, 41.8950], [-87.6290, 41.8950], [-87.6233, 41.8950]]},
                "distance": 1795.8,
                "duration": 315.0
            }
        ]
    }


@pytest.fixture
def api_client(downtown_incidents):
    from api.main import app
    from api.services.ranking_service import RouteRankingService, get_ranking_service

    service = RouteRankingService(incidents=downtown_incidents)
    app.dependency_overrides[get_ranking_service] = lambda: service

    yield TestClient(app)

    app.dependency_overrides.clear()
