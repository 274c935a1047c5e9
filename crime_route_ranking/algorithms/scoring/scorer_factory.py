"""
Factory for creating danger scoring strategies.

Both strategies compute the same score; switching between them through
configuration only changes how nearby incidents are found.
"""

from enum import Enum
from typing import Dict, Optional

from .base_scorer import BaseDangerScorer
from .danger_scorer import IndexedDangerScorer, LinearFalloffScorer
from ...config.ranking_config import RankingConfig


class ScoringMethod(Enum):
    """Available danger scoring methods."""
    LINEAR = "linear"
    INDEXED = "indexed"


class ScorerFactory:
    """
    Factory for creating danger scorers.
    """

    @staticmethod
    def create_scorer(method: ScoringMethod,
                      config: Optional[RankingConfig] = None) -> BaseDangerScorer:
        """
        Create a danger scorer using the specified method.

        Args:
            method: Scoring method to use
            config: Ranking configuration

        Returns:
            Configured scorer instance

        Raises:
            ValueError: If method is not supported
        """
        if config is None:
            config = RankingConfig()

        if method == ScoringMethod.LINEAR:
            return LinearFalloffScorer(config)

        elif method == ScoringMethod.INDEXED:
            return IndexedDangerScorer(config)

        else:
            raise ValueError(f"Unsupported scoring method: {method}")

    @staticmethod
    def get_available_methods() -> Dict[str, str]:
        """
        Get available scoring methods with descriptions.

        Returns:
            Dictionary mapping method names to descriptions
        """
        return {
            ScoringMethod.LINEAR.value: "Linear falloff - scans every incident per point",
            ScoringMethod.INDEXED.value: "Linear falloff - KD-tree lookup of incidents within the radius"
        }


def create_scorer_from_string(method_name: str,
                              config: Optional[RankingConfig] = None) -> BaseDangerScorer:
    """
    Create scorer from string name.

    Args:
        method_name: Name of the method ('linear' or 'indexed')
        config: Ranking configuration

    Returns:
        Configured danger scorer
    """
    try:
        method = ScoringMethod(method_name.lower())
    except ValueError:
        available = list(ScorerFactory.get_available_methods().keys())
        raise ValueError(f"Unknown method '{method_name}'. Available: {available}")
    return ScorerFactory.create_scorer(method, config)
