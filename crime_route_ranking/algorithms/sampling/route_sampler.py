"""
Evenly spaced subsampling of route polylines.
"""

import logging
import math
from typing import List, Optional, Sequence, TypeVar

from ...config.ranking_config import RankingConfig

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RouteSampler:
    """
    Reduce a route polyline to a bounded, deterministic set of evaluation points.
    """

    def __init__(self, config: Optional[RankingConfig] = None):
        self.config = config or RankingConfig()
        self.max_samples = self.config.max_samples

    def sample(self, coordinates: Sequence[T]) -> List[T]:
        """
        Sample points along a route.

        Walks the coordinates from index 0 with a fixed stride of
        ceil(len(coordinates) / max_samples). The walk always reaches the last
        stride of the route and never visits more than max_samples points.

        Args:
            coordinates: Route coordinates in itinerary order

        Returns:
            Sampled coordinates in itinerary order, at most max_samples long
        """
        n = len(coordinates)
        if n == 0:
            return []

        stride = max(math.ceil(n / self.max_samples), 1)
        samples = list(coordinates[::stride])

        logger.debug(f"Sampled {len(samples)} of {n} route points (stride {stride})")
        return samples
