"""
History providers and the day-by-day history fetch.

A provider serves candles for a time range. get_history() walks the
requested period one UTC day at a time, skips weekend days for venues that
are closed then, keeps only candles inside each window and returns them in
time order without duplicates.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional

import structlog

from ..data.models import Candle
from ..errors import HistoryError
from ..utils.time import DAY_MS, day_windows, format_ms, is_weekend, now_ms

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class HistoryRequest:
    """Period and instrument to fetch history for."""
    broker: str
    ticker: str
    days: int
    interval: str
    gap_days: int = 0              # Days before now the period ends
    instrument_type: str = "SPOT"

    def period(self, now: int) -> tuple[int, int]:
        """(start_ms, end_ms) of the requested period."""
        end = now - self.gap_days * DAY_MS
        start = end - self.days * DAY_MS
        return start, end


class HistoryProvider(ABC):
    """Source of historical candles for one venue."""

    # Stock venues have no weekend sessions
    skip_weekends: bool = False

    @abstractmethod
    async def fetch_range(self, request: HistoryRequest, start_ms: int, end_ms: int) -> list[Candle]:
        """Candles of the request's instrument between start_ms and end_ms."""


class MemoryHistoryProvider(HistoryProvider):
    """Serves a preloaded candle list."""

    def __init__(self, candles: Iterable[Candle], skip_weekends: bool = False) -> None:
        self.candles = sorted(candles, key=lambda candle: candle.time)
        self.skip_weekends = skip_weekends

    async def fetch_range(self, request: HistoryRequest, start_ms: int, end_ms: int) -> list[Candle]:
        return [candle for candle in self.candles if start_ms <= candle.time <= end_ms]


async def get_history(
    provider: HistoryProvider,
    request: HistoryRequest,
    now: Optional[int] = None
) -> list[Candle]:
    """
    Fetch the request's period from the provider.

    Raises:
        HistoryError: If the provider fails for any window
    """
    if request.days <= 0:
        return []

    start, end = request.period(now if now is not None else now_ms())
    by_time: dict[int, Candle] = {}

    for window_start, window_end in day_windows(start, end):
        if provider.skip_weekends and is_weekend(window_start):
            continue

        try:
            candles = await provider.fetch_range(request, window_start, window_end)
        except HistoryError:
            raise
        except Exception as e:
            logger.error(
                "History request failed",
                broker=request.broker,
                ticker=request.ticker,
                window_start=format_ms(window_start),
                window_end=format_ms(window_end),
                error=str(e),
                error_type=type(e).__name__
            )
            raise HistoryError(
                f"History request failed for {request.ticker}: {e}",
                ticker=request.ticker,
                start=window_start,
                end=window_end
            ) from e

        for candle in candles:
            if window_start <= candle.time <= window_end:
                by_time[candle.time] = candle

    history = [by_time[ts] for ts in sorted(by_time)]
    logger.info(
        "History loaded",
        ticker=request.ticker,
        interval=request.interval,
        days=request.days,
        candles=len(history)
    )
    return history
