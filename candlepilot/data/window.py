"""
Bounded candle window.

Keeps the most recent candles most-recent-first: index 0 is the candle still
in progress, index 1 the last closed one. Once full, pushing a new candle
evicts the oldest.
"""

from collections import deque
from typing import Iterator, Optional

from .models import Candle

DEFAULT_WINDOW_SIZE = 10


class CandleWindow:
    """Most-recent-first candle history with a fixed maximum length."""

    def __init__(self, max_len: int = DEFAULT_WINDOW_SIZE) -> None:
        if max_len < 2:
            raise ValueError("Candle window must hold at least the current and previous candle")
        self._candles: deque[Candle] = deque(maxlen=max_len)

    @property
    def max_len(self) -> int:
        return self._candles.maxlen  # type: ignore[return-value]

    @property
    def current(self) -> Optional[Candle]:
        """Candle still in progress, None before the first tick."""
        return self._candles[0] if self._candles else None

    @property
    def previous(self) -> Optional[Candle]:
        """Last closed candle, None until the first interval closes."""
        return self._candles[1] if len(self._candles) > 1 else None

    def is_new_interval(self, tick: Candle) -> bool:
        """True when a current candle exists and the tick belongs to another interval."""
        current = self.current
        return current is not None and current.time != tick.time

    def update_current(self, tick: Candle) -> None:
        """Overwrite the in-progress candle with the latest tick."""
        if self._candles:
            self._candles[0] = tick
        else:
            self._candles.appendleft(tick)

    def push(self, tick: Candle) -> None:
        """Close the current candle and start a new one from the tick."""
        self._candles.appendleft(tick)

    def apply(self, tick: Candle) -> bool:
        """
        Consume one tick.

        Returns:
            True if the tick crossed an interval boundary
        """
        changed = self.is_new_interval(tick)
        if changed:
            self.push(tick)
        else:
            self.update_current(tick)
        return changed

    def snapshot(self) -> list[Candle]:
        """Copy of the window, most recent first."""
        return list(self._candles)

    def clear(self) -> None:
        self._candles.clear()

    def __len__(self) -> int:
        return len(self._candles)

    def __iter__(self) -> Iterator[Candle]:
        return iter(self._candles)

    def __getitem__(self, index: int) -> Candle:
        return self._candles[index]
