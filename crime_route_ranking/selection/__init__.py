"""
Route selection state machine.
"""

from .route_selection import RouteSelection, SelectionEvent, RANKED, SELECTED, CLEARED

__all__ = ['RouteSelection', 'SelectionEvent', 'RANKED', 'SELECTED', 'CLEARED']
