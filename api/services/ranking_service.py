"""
Service layer for the route ranking API.
"""

import json
import logging
import os
import threading
from typing import List, Optional

import geojson

from crime_route_ranking.config.ranking_config import RankingConfig
from crime_route_ranking.data.data_loader import load_incident_data
from crime_route_ranking.data.date_window import DateWindow, parse_timestamp
from crime_route_ranking.data.incident import IncidentRecord
from crime_route_ranking.data.route_loader import parse_route_candidates
from crime_route_ranking.exceptions import DataUnavailableError
from crime_route_ranking.session import RankingSession
from crime_route_ranking.visualization.route_styles import (
    heat_points,
    incident_color,
    ranked_routes_to_geojson,
    route_style,
    routes_bounds
)
from api.schemas.ranking import (
    CategoryToggleRequest,
    DateWindowModel,
    DateWindowRequest,
    DateWindowResponse,
    HealthResponse,
    HeatmapResponse,
    IncidentPoint,
    IncidentsResponse,
    RankedRoute,
    RankRequest,
    RankResponse,
    RouteStyle,
    SelectionResponse
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
DEFAULT_INCIDENTS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), '../../data/incidents.json')


class RouteRankingService:
    """
    Service class that owns the ranking session behind the API.

    FastAPI runs sync endpoints in a threadpool, so every session access is
    serialized through one lock.
    """

    def __init__(self, incidents: Optional[List[IncidentRecord]] = None,
                 config: Optional[RankingConfig] = None):
        """
        Initialize the ranking service.

        Args:
            incidents: Incident dataset; loaded from CRIME_ROUTE_INCIDENTS_PATH when None
            config: Ranking configuration; scoring method from CRIME_ROUTE_SCORING_METHOD
        """
        self.config = config or RankingConfig(
            scoring_method=os.getenv("CRIME_ROUTE_SCORING_METHOD", "linear")
        )
        self._lock = threading.Lock()

        if incidents is None:
            incidents = self._load_incidents()

        self.session = RankingSession(incidents, self.config)
        self.is_initialized = bool(incidents)

    def _load_incidents(self) -> List[IncidentRecord]:
        """Load the incident feed, falling back to an empty dataset."""
        data_path = os.getenv("CRIME_ROUTE_INCIDENTS_PATH", DEFAULT_INCIDENTS_PATH)
        try:
            logger.info("Initializing route ranking service...")
            incidents = load_incident_data(data_path)
            logger.info(f"Service initialized with {len(incidents)} incidents")
            return incidents
        except (FileNotFoundError, ValueError, DataUnavailableError) as e:
            logger.warning(f"Incident data unavailable: {e}")
            return []

    def get_health_status(self) -> HealthResponse:
        """Get the health status of the ranking service."""
        with self._lock:
            return HealthResponse(
                status="healthy" if self.is_initialized else "degraded",
                version=API_VERSION,
                incident_data_loaded=self.is_initialized,
                incident_count=len(self.session.all_incidents),
                active_incident_count=len(self.session.active_incidents)
            )

    # Incidents

    def _require_incidents(self) -> None:
        if not self.session.all_incidents:
            raise DataUnavailableError("incident feed", "Failed to load crime data")

    def list_incidents(self) -> IncidentsResponse:
        """Visible incidents with marker colors."""
        with self._lock:
            self._require_incidents()
            points = []
            for incident in self.session.visible_incidents():
                record = incident.to_dict()
                points.append(IncidentPoint(color=incident_color(incident.category, self.config), **record))

            return IncidentsResponse(
                count=len(points),
                active_categories=sorted(c.value for c in self.session.active_categories),
                points=points
            )

    def get_heatmap(self) -> HeatmapResponse:
        with self._lock:
            self._require_incidents()
            return HeatmapResponse(
                points=heat_points(self.session.active_incidents, self.session.active_categories)
            )

    def toggle_category(self, request: CategoryToggleRequest) -> IncidentsResponse:
        with self._lock:
            self.session.toggle_category(request.category, request.enabled)
        return self.list_incidents()

    # Date window

    def get_date_window(self) -> DateWindowResponse:
        with self._lock:
            return DateWindowResponse(
                available=self._window_model(self.session.available_window),
                applied=self._window_model(self.session.date_window),
                active_incident_count=len(self.session.active_incidents)
            )

    def apply_date_window(self, request: DateWindowRequest) -> DateWindowResponse:
        """
        Apply a date window.

        Raises:
            ValueError: If the window is invalid
        """
        start = parse_timestamp(request.start)
        end = parse_timestamp(request.end)
        with self._lock:
            self.session.apply_date_window(start, end)
        return self.get_date_window()

    def reset_date_window(self) -> DateWindowResponse:
        with self._lock:
            self.session.reset_date_window()
        return self.get_date_window()

    @staticmethod
    def _window_model(window: Optional[DateWindow]) -> Optional[DateWindowModel]:
        if window is None:
            return None
        return DateWindowModel(start=window.start, end=window.end)

    # Routes

    def rank_routes(self, request: RankRequest) -> RankResponse:
        """
        Rank the alternatives of a routing-source response.

        Args:
            request: Routing-source response

        Returns:
            RankResponse; success is False when no usable route was supplied
        """
        candidates = parse_route_candidates(request.model_dump(), self.config.max_routes)

        with self._lock:
            outcome = self.session.rank_routes(candidates)

            if not outcome.has_result:
                logger.info("Ranking produced no routes")
                return RankResponse(success=False, message=outcome.message)

            bounds = routes_bounds(outcome.ranked)
            return RankResponse(
                success=True,
                message=outcome.message,
                routes=self._ranked_routes(outcome.selected_index),
                selected_index=outcome.selected_index,
                analysis=outcome.analysis,
                route_geojson=json.loads(geojson.dumps(
                    ranked_routes_to_geojson(outcome.ranked, outcome.selected_index, self.config))),
                bounds=list(bounds) if bounds else None
            )

    def select_route(self, index: int) -> SelectionResponse:
        """
        Select a ranked route.

        Raises:
            InvalidSelectionError: If index is out of range
        """
        with self._lock:
            self.session.select_route(index)
            return self._selection_response()

    def clear_routes(self) -> SelectionResponse:
        with self._lock:
            self.session.clear_routes()
            return self._selection_response()

    def get_selection(self) -> SelectionResponse:
        with self._lock:
            return self._selection_response()

    def _selection_response(self) -> SelectionResponse:
        selection = self.session.selection
        return SelectionResponse(
            success=not selection.is_empty,
            selected_index=selection.selected_index,
            count=selection.count,
            routes=self._ranked_routes(selection.selected_index)
        )

    def _ranked_routes(self, selected_index: Optional[int]) -> List[RankedRoute]:
        routes = []
        for route in self.session.ranked:
            summary = route.get_summary()
            routes.append(RankedRoute(
                style=RouteStyle(**route_style(route.rank, selected_index, self.config)),
                coordinates=[list(coord) for coord in route.coordinates],
                **summary
            ))
        return routes


_service: Optional[RouteRankingService] = None


def get_ranking_service() -> RouteRankingService:
    """Lazily created service instance, shared by all requests."""
    global _service
    if _service is None:
        _service = RouteRankingService()
    return _service
