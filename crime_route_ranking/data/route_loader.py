"""
Route source payload parsing.
"""

import json
import logging
import os
from typing import Any, List

from .route_candidate import RouteCandidate
from ..exceptions import DataUnavailableError

logger = logging.getLogger(__name__)


def parse_route_candidates(payload: Any, max_routes: int = 3) -> List[RouteCandidate]:
    """
    Convert a routing-source response into route candidates.

    Accepts an OSRM-style object ({"code": "Ok", "routes": [...]}) or a bare
    list of route objects. Routes with broken geometry are skipped.

    Args:
        payload: Decoded JSON payload
        max_routes: Number of alternatives to keep, in source order

    Returns:
        List of candidates in source order (possibly empty)
    """
    if isinstance(payload, dict):
        code = payload.get('code')
        if code is not None and code != 'Ok':
            logger.warning(f"Routing source returned code {code!r}")
            return []
        routes = payload.get('routes') or []
    elif isinstance(payload, list):
        routes = payload
    else:
        logger.warning(f"Unrecognised route payload type: {type(payload).__name__}")
        return []

    candidates = []
    for position, route in enumerate(routes[:max_routes]):
        try:
            candidates.append(RouteCandidate.from_route(route))
        except (ValueError, TypeError, AttributeError) as e:
            logger.debug(f"Skipping route {position}: {e}")

    logger.info(f"Parsed {len(candidates)} route candidates")
    return candidates


def load_route_candidates(data_path: str, max_routes: int = 3) -> List[RouteCandidate]:
    """
    Load route candidates from a saved routing-source response.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON
        DataUnavailableError: If no usable routes are found
    """
    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Route data file not found: {data_path}")

    try:
        with open(data_path, 'r') as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format in route data file: {e}")

    candidates = parse_route_candidates(payload, max_routes)
    if not candidates:
        raise DataUnavailableError("route source", f"No usable routes in {data_path}")

    return candidates
