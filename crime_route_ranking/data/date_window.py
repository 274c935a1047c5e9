"""
Date window computation and incident date filtering.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Optional

import pandas as pd

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a feed timestamp into a naive UTC datetime.

    Args:
        value: Date string, datetime, or None

    Returns:
        Parsed datetime, or None when the value is missing or unparseable
    """
    if not isinstance(value, (str, datetime)) or value == "":
        return None

    try:
        parsed = pd.to_datetime(value, errors="coerce", utc=True)
    except (TypeError, ValueError, OverflowError):
        return None

    if parsed is None or pd.isna(parsed):
        return None

    return parsed.tz_convert(None).to_pydatetime()


@dataclass(frozen=True)
class DateWindow:
    """Closed interval [start, end] of timestamps, both ends inclusive."""

    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Date window start {self.start} is after end {self.end}")

    def contains(self, timestamp: Optional[datetime]) -> bool:
        """Check whether a timestamp passes the window; undated records always pass."""
        if timestamp is None:
            return True
        return self.start <= timestamp <= self.end

    def to_dict(self) -> dict:
        return {'start': self.start.isoformat(), 'end': self.end.isoformat()}


def compute_window(timestamps: Iterable[Optional[datetime]]) -> Optional[DateWindow]:
    """
    Compute the window spanned by the valid timestamps of a dataset.

    Args:
        timestamps: Timestamps in any order; None entries are ignored

    Returns:
        DateWindow from earliest to latest timestamp, or None when no valid
        timestamps exist (no temporal filtering is possible)
    """
    valid: List[datetime] = sorted(ts for ts in timestamps if ts is not None)

    if not valid:
        logger.info("No valid timestamps - date filtering disabled")
        return None

    window = DateWindow(valid[0], valid[-1])
    logger.info(f"Date range: {window.start.date()} to {window.end.date()}")
    return window
