"""
FastAPI routes for incident filtering and route ranking endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from crime_route_ranking.exceptions import InvalidSelectionError
from api.schemas.ranking import (
    CategoryToggleRequest,
    DateWindowRequest,
    DateWindowResponse,
    ErrorResponse,
    HealthResponse,
    HeatmapResponse,
    IncidentsResponse,
    RankRequest,
    RankResponse,
    SelectionResponse,
    SelectRequest
)
from api.services.ranking_service import RouteRankingService, get_ranking_service

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    422: {"model": ErrorResponse, "description": "Request validation failed"},
    503: {"model": ErrorResponse, "description": "Incident data unavailable"}
}

incidents_router = APIRouter(prefix="/api/incidents", tags=["incidents"], responses=ERROR_RESPONSES)
routes_router = APIRouter(prefix="/api/routes", tags=["routes"],
                          responses={422: ERROR_RESPONSES[422]})


@incidents_router.get("", response_model=IncidentsResponse, summary="Visible Incidents")
def get_incidents(service: RouteRankingService = Depends(get_ranking_service)):
    """
    Get the incidents inside the applied date window whose category is enabled.

    An empty category filter returns no incidents.
    """
    return service.list_incidents()


@incidents_router.get("/heatmap", response_model=HeatmapResponse, summary="Incident Heatmap")
def get_heatmap(service: RouteRankingService = Depends(get_ranking_service)):
    return service.get_heatmap()


@incidents_router.put("/categories", response_model=IncidentsResponse, summary="Toggle Category")
def toggle_category(request: CategoryToggleRequest,
                    service: RouteRankingService = Depends(get_ranking_service)):
    """
    Switch one incident category on or off.

    Unknown category names are treated as the catch-all OTHER category.
    """
    return service.toggle_category(request)


@incidents_router.get("/date-window", response_model=DateWindowResponse, summary="Date Window")
def get_date_window(service: RouteRankingService = Depends(get_ranking_service)):
    return service.get_date_window()


@incidents_router.post("/date-window", response_model=DateWindowResponse, summary="Apply Date Window")
def apply_date_window(request: DateWindowRequest,
                      service: RouteRankingService = Depends(get_ranking_service)):
    """
    Filter incidents to an inclusive date window.

    Incidents without a parseable date are always kept.
    """
    try:
        return service.apply_date_window(request)
    except ValueError as e:
        logger.warning(f"Date window rejected: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@incidents_router.delete("/date-window", response_model=DateWindowResponse, summary="Reset Date Window")
def reset_date_window(service: RouteRankingService = Depends(get_ranking_service)):
    return service.reset_date_window()


@routes_router.post("/rank", response_model=RankResponse, summary="Rank Alternative Routes")
def rank_routes(request: RankRequest,
                service: RouteRankingService = Depends(get_ranking_service)):
    """
    Rank the alternatives of a routing-source response by danger.

    Routes come back from safest to most dangerous and the safest one is
    selected. When no usable route is supplied the response has
    success=false and a message for the user.

    Example:
        ```json
        {
            "code": "Ok",
            "routes": [
                {
                    "geometry": {"coordinates": [[-87.6298, 41.8781], [-87.6270, 41.8800]]},
                    "distance": 1520.4,
                    "duration": 310.2
                }
            ]
        }
        ```
    """
    logger.info(f"Ranking request with {len(request.routes)} routes")
    return service.rank_routes(request)


@routes_router.get("/selection", response_model=SelectionResponse, summary="Current Selection")
def get_selection(service: RouteRankingService = Depends(get_ranking_service)):
    return service.get_selection()


@routes_router.post("/select", response_model=SelectionResponse, summary="Select Route")
def select_route(request: SelectRequest,
                 service: RouteRankingService = Depends(get_ranking_service)):
    """Emphasize a ranked route; out-of-range indexes are rejected without changing state."""
    try:
        return service.select_route(request.index)
    except InvalidSelectionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@routes_router.delete("", response_model=SelectionResponse, summary="Clear Routes")
def clear_routes(service: RouteRankingService = Depends(get_ranking_service)):
    return service.clear_routes()


@routes_router.get("/health", response_model=HealthResponse, summary="Health Check")
def health_check(service: RouteRankingService = Depends(get_ranking_service)):
    """
    Check the health status of the ranking service.

    Returns:
        HealthResponse: Service health information
    """
    return service.get_health_status()
