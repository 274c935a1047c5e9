"""
Display styling and GeoJSON export for ranked routes and incidents.

Renderers consume these as plain data; nothing here draws a map.
"""

import logging
from typing import AbstractSet, Any, Dict, List, Optional, Sequence, Tuple

import geojson
from shapely.geometry import MultiPoint

from ..algorithms.ranking.scored_route import ScoredRoute
from ..config.ranking_config import RankingConfig
from ..data.incident import IncidentCategory, IncidentRecord

logger = logging.getLogger(__name__)

HATE_CRIME_INTENSITY = 1.0
DEFAULT_INTENSITY = 0.6


def route_style(rank: int, selected_index: Optional[int],
                config: Optional[RankingConfig] = None) -> Dict[str, Any]:
    """
    Polyline style for a ranked route.

    The selected route is drawn heaviest and most opaque; the safest route
    stays slightly heavier than the other alternatives.

    Args:
        rank: Position in the ranked sequence
        selected_index: Currently selected ranked position, or None
        config: Ranking configuration with color and weight palettes

    Returns:
        Dictionary with color, weight, opacity and selected flag
    """
    config = config or RankingConfig()
    colors = config.route_colors
    weights = config.route_weights

    color = colors[rank] if rank < len(colors) else colors[-1]

    if selected_index is None:
        weight = weights[rank] if rank < len(weights) else weights[-1]
        opacity = config.selected_opacity if rank == 0 else config.unselected_opacity
        selected = False
    elif rank == selected_index:
        weight = weights[0]
        opacity = config.selected_opacity
        selected = True
    else:
        weight = weights[min(1, len(weights) - 1)] if rank == 0 else weights[-1]
        opacity = config.unselected_opacity
        selected = False

    return {'color': color, 'weight': weight, 'opacity': opacity, 'selected': selected}


def incident_color(category: IncidentCategory, config: Optional[RankingConfig] = None) -> str:
    """Marker color for an incident category."""
    config = config or RankingConfig()
    return config.color_for(category.value)


def visible_incidents(incidents: Sequence[IncidentRecord],
                      active_categories: AbstractSet[IncidentCategory]) -> List[IncidentRecord]:
    """Incidents whose category is enabled; an empty filter shows nothing."""
    if not active_categories:
        return []
    return [incident for incident in incidents if incident.category in active_categories]


def heat_points(incidents: Sequence[IncidentRecord],
                active_categories: AbstractSet[IncidentCategory]) -> List[List[float]]:
    """
    Heatmap points for the enabled incidents.

    Returns:
        List of [lat, lng, intensity]; hate crimes carry full intensity
    """
    return [
        [incident.lat, incident.lng,
         HATE_CRIME_INTENSITY if incident.category is IncidentCategory.HATE_CRIME else DEFAULT_INTENSITY]
        for incident in visible_incidents(incidents, active_categories)
    ]


def incidents_to_geojson(incidents: Sequence[IncidentRecord],
                         active_categories: AbstractSet[IncidentCategory],
                         config: Optional[RankingConfig] = None) -> geojson.FeatureCollection:
    """Convert enabled incidents to a GeoJSON FeatureCollection of points."""
    config = config or RankingConfig()
    features = []
    for incident in visible_incidents(incidents, active_categories):
        properties = incident.to_dict()
        properties['color'] = incident_color(incident.category, config)
        features.append(geojson.Feature(
            geometry=geojson.Point((incident.lng, incident.lat)),
            properties=properties
        ))
    return geojson.FeatureCollection(features)


def ranked_routes_to_geojson(ranked: Sequence[ScoredRoute],
                             selected_index: Optional[int] = None,
                             config: Optional[RankingConfig] = None) -> geojson.FeatureCollection:
    """
    Convert ranked routes to a GeoJSON FeatureCollection.

    Each route becomes a LineString carrying its score, severity and style;
    start and end markers are taken from the safest route.

    Args:
        ranked: Routes in ranked order
        selected_index: Currently selected ranked position
        config: Ranking configuration for styling

    Returns:
        GeoJSON FeatureCollection (empty when there are no routes)
    """
    config = config or RankingConfig()
    features = []

    for route in ranked:
        properties = route.get_summary()
        properties['style'] = route_style(route.rank, selected_index, config)
        features.append(geojson.Feature(
            geometry=geojson.LineString([list(coord) for coord in route.coordinates]),
            properties=properties
        ))

    if ranked and ranked[0].coordinates:
        coords = ranked[0].coordinates
        features.append(geojson.Feature(
            geometry=geojson.Point(list(coords[0])),
            properties={"type": "start", "name": "Start"}
        ))
        features.append(geojson.Feature(
            geometry=geojson.Point(list(coords[-1])),
            properties={"type": "end", "name": "Destination"}
        ))

    return geojson.FeatureCollection(features)


def routes_bounds(ranked: Sequence[ScoredRoute]) -> Optional[Tuple[float, float, float, float]]:
    """
    Bounding box covering every ranked route, for fitting the map view.

    Returns:
        (min_lng, min_lat, max_lng, max_lat), or None without coordinates
    """
    points = [coord for route in ranked for coord in route.coordinates]
    if not points:
        return None
    return tuple(MultiPoint(points).bounds)
