"""
Selection state for ranked routes.

Two states: Empty (nothing ranked) and Selected(index). Every completed
ranking pass resets the selection to the safest route; user selections only
move it within the current ranked sequence; clearing drops back to Empty.
The machine never transitions on its own.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..algorithms.ranking.scored_route import ScoredRoute
from ..exceptions import InvalidSelectionError

logger = logging.getLogger(__name__)

RANKED = "ranked"
SELECTED = "selected"
CLEARED = "cleared"


@dataclass(frozen=True)
class SelectionEvent:
    """Notification sent to listeners after every state change."""

    kind: str  # 'ranked', 'selected' or 'cleared'
    index: Optional[int]
    count: int


SelectionListener = Callable[[SelectionEvent], None]


class RouteSelection:
    """Tracks which ranked route is currently emphasized."""

    def __init__(self):
        self._routes: List[ScoredRoute] = []
        self._index: Optional[int] = None
        self._listeners: List[SelectionListener] = []

    @property
    def is_empty(self) -> bool:
        return self._index is None

    @property
    def selected_index(self) -> Optional[int]:
        return self._index

    @property
    def count(self) -> int:
        return len(self._routes)

    @property
    def routes(self) -> List[ScoredRoute]:
        return list(self._routes)

    @property
    def selected_route(self) -> Optional[ScoredRoute]:
        if self._index is None:
            return None
        return self._routes[self._index]

    def subscribe(self, listener: SelectionListener) -> None:
        """Register a callback for selection events."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: SelectionListener) -> None:
        self._listeners.remove(listener)

    def on_ranking_complete(self, ranked_routes: Sequence[ScoredRoute]) -> None:
        """
        Adopt a new ranked sequence.

        Any previous manual selection is discarded: a non-empty sequence always
        starts at the safest route, an empty one leaves nothing selected.
        """
        self._routes = list(ranked_routes)
        self._index = 0 if self._routes else None

        logger.info(f"Selection reset after ranking: {self._index} of {len(self._routes)}")
        self._notify(RANKED)

    def on_user_select(self, index: int) -> None:
        """
        Emphasize the route at a ranked position.

        Raises:
            InvalidSelectionError: If nothing is ranked or index is out of
                range; the current state is left unchanged
        """
        if self._index is None or not 0 <= index < len(self._routes):
            logger.warning(f"Rejected route selection {index} (count={len(self._routes)})")
            raise InvalidSelectionError(index, len(self._routes))

        self._index = index
        logger.info(f"Selected route {index + 1}")
        self._notify(SELECTED)

    def on_clear(self) -> None:
        """Drop all ranked routes; listeners should discard route display artifacts."""
        self._routes = []
        self._index = None
        self._notify(CLEARED)

    def _notify(self, kind: str) -> None:
        event = SelectionEvent(kind=kind, index=self._index, count=len(self._routes))
        for listener in list(self._listeners):
            listener(event)
