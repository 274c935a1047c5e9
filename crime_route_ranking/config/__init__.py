"""
Configuration management for route ranking.
"""

from .ranking_config import RankingConfig

__all__ = ['RankingConfig']
