"""
Configuration management for danger scoring and route ranking parameters.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class RankingConfig:
    """Configuration parameters for danger scoring and route ranking."""

    # Scoring Strategy
    scoring_method: str = 'linear'  # 'linear' or 'indexed'

    # Danger Scoring
    danger_radius: float = 0.003  # degrees - incidents at or beyond contribute nothing
    category_weights: Dict[str, float] = field(default_factory=lambda: {
        'HATE_CRIME': 10.0,
        'ROBBERY': 8.0,
        'ASSAULT': 7.0,
        'BATTERY': 5.0,
        'THEFT': 3.0,
    })
    default_category_weight: float = 3.0  # unknown / other categories

    # Route Sampling
    max_samples: int = 50  # max evaluation points per route

    # Severity Labels
    safe_threshold: float = 20.0      # score below this is "Safe"
    moderate_threshold: float = 50.0  # score below this is "Moderate", otherwise "High Risk"

    # Route Source
    max_routes: int = 3  # alternatives kept from the routing source

    # Visualization
    category_colors: Dict[str, str] = field(default_factory=lambda: {
        'THEFT': '#ff4444',
        'BATTERY': '#ff8844',
        'ASSAULT': '#ffcc00',
        'ROBBERY': '#cc0000',
        'HATE_CRIME': '#9900ff',
    })
    default_category_color: str = '#999999'
    route_colors: List[str] = field(default_factory=lambda: ['#003d99', '#6699cc', '#99bbdd'])
    route_weights: List[int] = field(default_factory=lambda: [6, 5, 4])
    selected_opacity: float = 0.9
    unselected_opacity: float = 0.6

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.danger_radius <= 0:
            raise ValueError("danger_radius must be positive")
        if self.max_samples <= 0:
            raise ValueError("max_samples must be positive")
        if self.max_routes <= 0:
            raise ValueError("max_routes must be positive")
        if self.default_category_weight < 0:
            raise ValueError("default_category_weight must be non-negative")
        for category, weight in self.category_weights.items():
            if weight < 0:
                raise ValueError(f"weight for {category} must be non-negative")
        if self.safe_threshold > self.moderate_threshold:
            raise ValueError("safe_threshold must not exceed moderate_threshold")
        if not self.route_colors or not self.route_weights:
            raise ValueError("route_colors and route_weights must not be empty")

    def weight_for(self, category: str) -> float:
        """Score weight for a category name, falling back to the default weight."""
        return self.category_weights.get(category, self.default_category_weight)

    def color_for(self, category: str) -> str:
        """Display color for a category name, falling back to the default color."""
        return self.category_colors.get(category, self.default_category_color)

    @classmethod
    def create_default_config(cls) -> 'RankingConfig':
        """Create the default configuration (0.003 degree radius, 20/50 thresholds)."""
        return cls()

    @classmethod
    def create_strict_config(cls) -> 'RankingConfig':
        """
        Create configuration that flags danger earlier.

        Wider influence radius and lower severity thresholds, so more routes are
        labelled Moderate or High Risk.
        """
        return cls(
            danger_radius=0.005,
            safe_threshold=10.0,
            moderate_threshold=30.0
        )

    @classmethod
    def create_lenient_config(cls) -> 'RankingConfig':
        """Create configuration that only reacts to incidents right on the route."""
        return cls(
            danger_radius=0.0015,
            safe_threshold=30.0,
            moderate_threshold=80.0
        )
