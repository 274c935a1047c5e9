"""
Per-user ranking session.

Owns every piece of mutable state the ranking core needs: the full incident
dataset, the enabled categories, the applied date window, the active incident
store, the last ranked routes and the selection state.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Union

from .algorithms.ranking.route_ranker import IncidentContext, RouteRanker
from .algorithms.ranking.scored_route import ScoredRoute
from .algorithms.scoring.base_scorer import BaseDangerScorer
from .config.ranking_config import RankingConfig
from .data.date_window import DateWindow, compute_window
from .data.incident import IncidentCategory, IncidentRecord, KNOWN_CATEGORIES
from .data.incident_store import IncidentStore
from .data.route_candidate import RouteCandidate
from .selection.route_selection import RouteSelection
from .visualization.route_styles import visible_incidents

logger = logging.getLogger(__name__)

NO_ROUTES_MESSAGE = "Could not calculate routes. Try different addresses."


@dataclass
class RankingOutcome:
    """Result of one ranking pass as seen by the caller."""

    ranked: List[ScoredRoute] = field(default_factory=list)
    analysis: Dict[str, Any] = field(default_factory=dict)
    selected_index: Optional[int] = None
    message: str = ""

    @property
    def has_result(self) -> bool:
        return bool(self.ranked)


class RankingSession:
    """Incident filters, ranking and route selection for one user."""

    def __init__(self, all_incidents: Iterable[IncidentRecord] = (),
                 config: Optional[RankingConfig] = None,
                 scorer: Optional[BaseDangerScorer] = None):
        """
        Initialize a session over an incident dataset.

        Args:
            all_incidents: Full historical dataset
            config: Ranking configuration parameters
            scorer: Optional scorer override (defaults to config.scoring_method)
        """
        self.config = config or RankingConfig()
        self.ranker = RouteRanker(self.config, scorer=scorer)
        self.selection = RouteSelection()
        self.store = IncidentStore()

        self.active_categories: Set[IncidentCategory] = set(KNOWN_CATEGORIES)
        self.all_incidents: List[IncidentRecord] = []
        self.available_window: Optional[DateWindow] = None
        self.date_window: Optional[DateWindow] = None
        self.ranked: List[ScoredRoute] = []

        self.load_incidents(all_incidents)

    # Incident data

    def load_incidents(self, all_incidents: Iterable[IncidentRecord]) -> None:
        """Replace the dataset and reset the date window to its full span."""
        self.all_incidents = list(all_incidents)
        self.available_window = compute_window(r.timestamp for r in self.all_incidents)
        self.date_window = self.available_window
        self.store.rebuild(self.all_incidents, self.date_window)

        if not self.all_incidents:
            logger.warning("Session has no incident data - all routes will score 0")

    @property
    def active_incidents(self) -> List[IncidentRecord]:
        return self.store.incidents

    def visible_incidents(self) -> List[IncidentRecord]:
        """Active incidents of enabled categories."""
        return visible_incidents(self.store.incidents, self.active_categories)

    # Category filter

    def toggle_category(self, category: Union[str, IncidentCategory], enabled: bool) -> None:
        """Switch one category on or off."""
        category = IncidentCategory.from_value(category)
        if enabled:
            self.active_categories.add(category)
        else:
            self.active_categories.discard(category)
        logger.info(f"Category {category.value} {'enabled' if enabled else 'disabled'}")

    def set_categories(self, categories: Iterable[Union[str, IncidentCategory]]) -> None:
        """Replace the enabled categories; an empty iterable disables everything."""
        self.active_categories = {IncidentCategory.from_value(c) for c in categories}

    # Date window

    def apply_date_window(self, start: datetime, end: datetime) -> DateWindow:
        """
        Filter the working set to an inclusive date window.

        Raises:
            ValueError: If start is after end
        """
        window = DateWindow(start, end)
        self.date_window = window
        active = self.store.rebuild(self.all_incidents, window)
        logger.info(f"Filtered to {len(active)} incidents between "
                    f"{window.start.date()} and {window.end.date()}")
        return window

    def reset_date_window(self) -> Optional[DateWindow]:
        """Discard the applied window and go back to the full available span."""
        self.date_window = self.available_window
        self.store.rebuild(self.all_incidents, self.date_window)
        return self.date_window

    # Ranking and selection

    def context(self) -> IncidentContext:
        return IncidentContext(
            incidents=self.store.incidents,
            active_categories=frozenset(self.active_categories)
        )

    def rank_routes(self, candidates: Sequence[RouteCandidate]) -> RankingOutcome:
        """
        Rank candidates against the current incidents and reset the selection.

        Returns:
            RankingOutcome; has_result is False with a user-facing message
            when there were no candidates
        """
        self.ranked = self.ranker.rank(candidates, self.context())
        self.selection.on_ranking_complete(self.ranked)

        if not self.ranked:
            return RankingOutcome(message=NO_ROUTES_MESSAGE)

        return RankingOutcome(
            ranked=list(self.ranked),
            analysis=self.ranker.analyze(self.ranked),
            selected_index=self.selection.selected_index,
            message=f"Found {len(self.ranked)} routes"
        )

    def select_route(self, index: int) -> ScoredRoute:
        """
        Select a ranked route.

        Raises:
            InvalidSelectionError: If index is out of range
        """
        self.selection.on_user_select(index)
        return self.selection.selected_route

    def clear_routes(self) -> None:
        self.ranked = []
        self.selection.on_clear()
