"""
Canonical data models for market data.

This module defines immutable data structures for candles (ticks carry the
in-progress candle of their interval) and the venue-resolved instrument.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Candle:
    """OHLCV aggregate for one interval."""
    open: float
    high: float
    low: float
    close: float
    volume: float
    time: int          # Interval start, UTC epoch milliseconds

    @property
    def range(self) -> float:
        """High-low range of the candle."""
        return self.high - self.low


@dataclass(frozen=True)
class Instrument:
    """Venue identity of the traded symbol, fixed for a session."""
    ticker: str
    id: str
    lot: float = 1             # Units per lot
    pip_size: float = 0.01     # Minimal price increment
    figi: Optional[str] = None
    lot_precision: int = 0     # Decimal places allowed in a lot count
