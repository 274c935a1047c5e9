"""
Incident feed loader with per-record validation.
"""

import json
import logging
import os
from typing import Any, Dict, List

from .incident import IncidentRecord
from ..exceptions import DataUnavailableError

logger = logging.getLogger(__name__)


def _feature_to_record(feature: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a GeoJSON point feature into a feed record."""
    geometry = feature.get('geometry') or {}
    if geometry.get('type') != 'Point':
        raise ValueError(f"Unsupported geometry type: {geometry.get('type')}")

    coords = geometry.get('coordinates') or []
    if len(coords) < 2:
        raise ValueError("Point geometry without coordinates")

    record = dict(feature.get('properties') or {})
    record['lng'], record['lat'] = coords[0], coords[1]
    return record


def parse_incident_feed(payload: Any) -> List[IncidentRecord]:
    """
    Convert an incident feed payload into incident records.

    Accepts a list of records, an object with a 'points' list, or a GeoJSON
    FeatureCollection of points. Malformed records are skipped.

    Args:
        payload: Decoded JSON payload

    Returns:
        List of valid incident records (possibly empty)

    Raises:
        ValueError: If the payload shape is not recognised
    """
    if isinstance(payload, dict) and 'features' in payload:
        raw_records = []
        for feature in payload['features']:
            try:
                raw_records.append(_feature_to_record(feature))
            except (ValueError, AttributeError, TypeError) as e:
                logger.debug(f"Skipping feature: {e}")
    elif isinstance(payload, dict) and 'points' in payload:
        raw_records = payload['points']
    elif isinstance(payload, list):
        raw_records = payload
    else:
        raise ValueError("Incident feed must be a list, a {'points': [...]} object or a GeoJSON FeatureCollection")

    incidents = []
    skipped = 0

    for raw in raw_records or []:
        if not isinstance(raw, dict):
            skipped += 1
            continue
        try:
            incidents.append(IncidentRecord.from_feed(raw))
        except ValueError as e:
            skipped += 1
            logger.debug(f"Skipping malformed incident: {e}")

    if skipped:
        logger.info(f"Skipped {skipped} malformed incident records")

    return incidents


def load_incident_data(data_path: str) -> List[IncidentRecord]:
    """
    Load incident records from a JSON or GeoJSON file.

    Args:
        data_path: Path to the incident feed file

    Returns:
        List of incident records

    Raises:
        FileNotFoundError: If incident data file not found
        ValueError: If data format is invalid
        DataUnavailableError: If the file holds no usable incidents
    """
    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Incident data file not found: {data_path}")

    logger.info(f"Loading incident data from: {data_path}")

    try:
        with open(data_path, 'r') as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format in incident data file: {e}")

    incidents = parse_incident_feed(payload)

    if not incidents:
        raise DataUnavailableError("incident feed", f"No usable incidents in {data_path}")

    logger.info(f"Loaded {len(incidents)} incidents")
    return incidents
