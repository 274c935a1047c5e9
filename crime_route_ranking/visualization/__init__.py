"""
Display styling and GeoJSON export.
"""

from .route_styles import (
    route_style,
    incident_color,
    visible_incidents,
    heat_points,
    incidents_to_geojson,
    ranked_routes_to_geojson,
    routes_bounds
)

__all__ = [
    'route_style',
    'incident_color',
    'visible_incidents',
    'heat_points',
    'incidents_to_geojson',
    'ranked_routes_to_geojson',
    'routes_bounds'
]
