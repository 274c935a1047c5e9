"""
Crime-Aware Route Ranking

Ranks the alternative routes returned by a routing service by how close they
pass to historical incidents, so the user can pick the least dangerous one.

## Quick Start

```python
from crime_route_ranking import RankingSession, load_incident_data, parse_route_candidates

session = RankingSession(load_incident_data("incidents.json"))

outcome = session.rank_routes(parse_route_candidates(osrm_response))
for route in outcome.ranked:
    print(route.rank, route.source_index, route.score, route.severity)

session.select_route(1)
```

## Main Components

- **RankingSession**: Owns filters, date window, ranked routes and selection
- **RouteRanker**: Scores and sorts candidate routes
- **LinearFalloffScorer / IndexedDangerScorer**: Point danger scoring
- **RouteSampler**: Bounded polyline sampling
- **RouteSelection**: Selection state machine
- **RankingConfig**: Configuration management

## Architecture

- `algorithms/`: Scoring, sampling and ranking
- `data/`: Incident and route models, loaders, date windows, incident store
- `selection/`: Route selection state
- `visualization/`: Route styles and GeoJSON export
- `config/`: Configuration management
"""

from .algorithms import (
    RouteRanker,
    IncidentContext,
    ScoredRoute,
    RouteSampler,
    LinearFalloffScorer,
    IndexedDangerScorer,
    severity_label
)
from .config import RankingConfig
from .data import (
    IncidentCategory,
    IncidentRecord,
    DateWindow,
    IncidentStore,
    RouteCandidate,
    compute_window,
    load_incident_data,
    parse_incident_feed,
    parse_route_candidates
)
from .exceptions import RouteRankingError, DataUnavailableError, InvalidSelectionError
from .selection import RouteSelection, SelectionEvent
from .session import RankingSession, RankingOutcome

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    'RankingSession',
    'RankingOutcome',
    'RouteRanker',
    'RouteSelection',
    'RankingConfig',

    # Core algorithms
    'LinearFalloffScorer',
    'IndexedDangerScorer',
    'RouteSampler',
    'IncidentContext',
    'ScoredRoute',
    'severity_label',

    # Data
    'IncidentCategory',
    'IncidentRecord',
    'DateWindow',
    'IncidentStore',
    'RouteCandidate',
    'compute_window',
    'load_incident_data',
    'parse_incident_feed',
    'parse_route_candidates',
    'SelectionEvent',

    # Errors
    'RouteRankingError',
    'DataUnavailableError',
    'InvalidSelectionError',

    '__version__'
]
