"""
Route polyline sampling.
"""

from .route_sampler import RouteSampler

__all__ = ['RouteSampler']
