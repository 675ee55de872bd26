"""
Time utilities for candle intervals and history ranges.

All timestamps handled by the core are UTC epoch milliseconds.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Iterator, Optional

DAY_MS = 86_400_000


class TimeFrame(str, Enum):
    """Supported candle intervals."""
    MIN_1 = "1min"
    MIN_5 = "5min"
    MIN_15 = "15min"
    MIN_30 = "30min"
    HOUR_1 = "1h"
    HOUR_4 = "4h"
    DAY = "day"


_TIMEFRAME_MS = {
    TimeFrame.MIN_1: 60_000,
    TimeFrame.MIN_5: 300_000,
    TimeFrame.MIN_15: 900_000,
    TimeFrame.MIN_30: 1_800_000,
    TimeFrame.HOUR_1: 3_600_000,
    TimeFrame.HOUR_4: 14_400_000,
    TimeFrame.DAY: DAY_MS,
}


def timeframe_to_ms(interval: str) -> int:
    """
    Convert an interval name to its length in milliseconds.

    Raises:
        ValueError: If the interval is not a known TimeFrame
    """
    return _TIMEFRAME_MS[TimeFrame(interval)]


def floor_to_interval(timestamp_ms: int, interval: str) -> int:
    """Interval start for a timestamp."""
    step = timeframe_to_ms(interval)
    return timestamp_ms - timestamp_ms % step


def now_ms() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def is_weekend(timestamp_ms: int) -> bool:
    """True when the UTC day of the timestamp is Saturday or Sunday."""
    day = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return day.weekday() >= 5


def day_windows(start_ms: int, end_ms: int) -> Iterator[tuple[int, int]]:
    """
    Split [start_ms, end_ms] into consecutive windows of at most one day.

    Yields:
        (window_start, window_end) pairs, both inclusive
    """
    cursor = start_ms
    while cursor < end_ms:
        window_end = min(cursor + DAY_MS, end_ms)
        yield cursor, window_end
        cursor = window_end


def format_ms(timestamp_ms: Optional[int]) -> Optional[str]:
    """ISO8601 rendering of an epoch-millisecond timestamp for logs."""
    if timestamp_ms is None:
        return None
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).isoformat()
