"""
Pydantic schemas for the route ranking API.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class RouteGeometry(BaseModel):
    """GeoJSON-style line geometry."""
    type: str = Field(default="LineString", description="Geometry type")
    coordinates: List[List[float]] = Field(..., description="Ordered [longitude, latitude] pairs")

    @field_validator('coordinates')
    def validate_pairs(cls, v):
        """Every coordinate must hold at least longitude and latitude."""
        for pair in v:
            if len(pair) < 2:
                raise ValueError('Each coordinate must be a [longitude, latitude] pair')
        return v


class RouteInput(BaseModel):
    """One alternative route as returned by the routing source."""
    geometry: RouteGeometry = Field(..., description="Route geometry")
    distance: float = Field(default=0.0, ge=0.0, description="Route distance in meters")
    duration: float = Field(default=0.0, ge=0.0, description="Route duration in seconds")


class RankRequest(BaseModel):
    """Routing-source response to rank (OSRM format)."""
    code: Optional[str] = Field(default=None, description="Routing source status code, 'Ok' on success")
    routes: List[RouteInput] = Field(default_factory=list, description="Alternative routes in source order")


class RouteStyle(BaseModel):
    """Polyline style for rendering."""
    color: str
    weight: int
    opacity: float
    selected: bool


class RankedRoute(BaseModel):
    """A ranked route with its danger score and display values."""
    rank: int = Field(..., description="Position in the ranking (0 = safest)")
    source_index: int = Field(..., description="Position in the routing source response")
    score: float = Field(..., ge=0.0, description="Aggregate danger score")
    severity: str = Field(..., description="'Safe', 'Moderate' or 'High Risk'")
    is_safest: bool = Field(..., description="Whether this is the safest route")
    distance_km: float
    distance_miles: float
    duration_min: int
    point_count: int
    style: RouteStyle
    coordinates: List[List[float]] = Field(..., description="Route [longitude, latitude] pairs")


class RankResponse(BaseModel):
    """Response model for route ranking."""
    success: bool = Field(..., description="Whether any route could be ranked")
    message: str = Field(..., description="Status message")
    routes: List[RankedRoute] = Field(default_factory=list, description="Routes from safest to most dangerous")
    selected_index: Optional[int] = Field(default=None, description="Selected ranked position")
    analysis: Optional[Dict[str, Any]] = Field(default=None, description="Route comparison and recommendation")
    route_geojson: Optional[Dict[str, Any]] = Field(default=None, description="Ranked routes as GeoJSON FeatureCollection")
    bounds: Optional[List[float]] = Field(default=None, description="[min_lng, min_lat, max_lng, max_lat]")


class SelectRequest(BaseModel):
    """Route selection event."""
    index: int = Field(..., description="Ranked position to select")


class SelectionResponse(BaseModel):
    """Current selection state."""
    success: bool
    selected_index: Optional[int]
    count: int
    routes: List[RankedRoute] = Field(default_factory=list)


class CategoryToggleRequest(BaseModel):
    """Incident category toggle event."""
    category: str = Field(..., description="Category name, e.g. 'THEFT'")
    enabled: bool = Field(..., description="Whether the category is switched on")


class DateWindowRequest(BaseModel):
    """Date window apply event."""
    start: datetime = Field(..., description="Window start (inclusive)")
    end: datetime = Field(..., description="Window end (inclusive)")

    @field_validator('start', 'end')
    def to_naive_utc(cls, v):
        """Compare and filter in naive UTC, like feed timestamps."""
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @model_validator(mode='after')
    def validate_order(self):
        """Ensure start <= end."""
        if self.start > self.end:
            raise ValueError('start must not be after end')
        return self


class DateWindowModel(BaseModel):
    start: datetime
    end: datetime


class DateWindowResponse(BaseModel):
    """Available and applied date windows."""
    available: Optional[DateWindowModel] = Field(default=None, description="Span of the dataset, null when undated")
    applied: Optional[DateWindowModel] = Field(default=None, description="Window currently filtering incidents")
    active_incident_count: int


class IncidentPoint(BaseModel):
    type: str
    category: str
    lat: float
    lng: float
    date: Optional[str] = None
    desc: Optional[str] = None
    color: str


class IncidentsResponse(BaseModel):
    """Visible incidents."""
    count: int
    active_categories: List[str]
    points: List[IncidentPoint]


class HeatmapResponse(BaseModel):
    points: List[List[float]] = Field(..., description="[lat, lng, intensity] triples")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    incident_data_loaded: bool = Field(..., description="Whether incident data is loaded")
    incident_count: int = Field(..., description="Number of incidents in the dataset")
    active_incident_count: int = Field(..., description="Number of incidents inside the date window")


class ErrorResponse(BaseModel):
    """Error response model."""
    success: bool = Field(False, description="Always false for error responses")
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Detailed error message")
    details: Optional[Any] = Field(None, description="Additional error details")
