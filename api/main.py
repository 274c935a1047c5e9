"""
Crime-Aware Route Ranking API - FastAPI Main Application

A RESTful API that ranks the alternative routes of a routing service by how
close they pass to historical incidents.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from crime_route_ranking.exceptions import DataUnavailableError
from api.routes.ranking import incidents_router, routes_router
from api.services.ranking_service import API_VERSION, RouteRankingService, get_ranking_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown events.
    """
    logger.info("Starting Crime-Aware Route Ranking API...")

    health = get_ranking_service().get_health_status()
    if health.incident_data_loaded:
        logger.info(f"✓ Ranking service ready with {health.incident_count} incidents")
    else:
        logger.warning("⚠ Ranking service running in degraded mode - incident data not loaded")

    yield

    logger.info("Shutting down Crime-Aware Route Ranking API...")


app = FastAPI(
    title="Crime-Aware Route Ranking API",
    description="""
    **Pick the least dangerous of a routing service's alternatives**

    Incidents near each route are weighted by category severity and by how
    close they are, then the routes are sorted from safest to most dangerous.

    ## Features

    - **Route Ranking**: Safe / Moderate / High Risk labels per route
    - **Category Filters**: Switch incident categories on and off
    - **Date Window**: Restrict scoring to a period of the dataset
    - **Route Selection**: Track the emphasized route for display
    - **GeoJSON Output**: Ranked routes ready for mapping applications

    ## Quick Start

    1. Check service health: `GET /api/routes/health`
    2. Rank routes: `POST /api/routes/rank` with an OSRM response
    3. Select an alternative: `POST /api/routes/select`
    """,
    version=API_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors with detailed information.
    """
    logger.warning(f"Validation error for {request.url}: {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "validation_error",
            "message": "Request validation failed",
            "details": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
                for error in exc.errors()
            ]
        }
    )


@app.exception_handler(DataUnavailableError)
async def data_unavailable_handler(request: Request, exc: DataUnavailableError):
    """
    Surface missing incident or route data to the client.
    """
    logger.warning(f"Data unavailable for {request.url}: {exc}")
    return JSONResponse(
        status_code=503,
        content={
            "success": False,
            "error": "data_unavailable",
            "message": str(exc),
            "details": {"source": exc.source}
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected errors gracefully.
    """
    logger.error(f"Unexpected error for {request.url}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "details": None
        }
    )


app.include_router(incidents_router)
app.include_router(routes_router)


@app.get("/", tags=["general"])
async def root():
    """
    API root endpoint with basic information.
    """
    return {
        "api": "Crime-Aware Route Ranking API",
        "version": API_VERSION,
        "status": "operational",
        "documentation": "/docs",
        "health_check": "/api/routes/health"
    }


@app.get("/health", tags=["general"])
def api_health(service: RouteRankingService = Depends(get_ranking_service)):
    """
    Simple health check endpoint.
    """
    service_health = service.get_health_status()
    return {
        "api_status": "healthy",
        "service_status": service_health.status
    }


if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
