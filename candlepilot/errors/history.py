"""Historical data retrieval errors."""

from typing import Optional

from .base import EngineError, ErrorEnvironment


class HistoryError(EngineError):
    """Historical candles could not be retrieved from the venue."""

    def __init__(self, message: str, ticker: Optional[str] = None,
                 start: Optional[int] = None, end: Optional[int] = None, **kwargs):
        super().__init__(message, environment=ErrorEnvironment.HISTORY, **kwargs)
        self.ticker = ticker
        self.start = start
        self.end = end
