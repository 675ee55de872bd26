"""
Core and configuration error classifications.

Configuration errors are fatal and raised at construction time. Core errors
cover order book invariant violations and order submission failures; the
order lifecycle logs them instead of terminating the engine.
"""

from typing import Any, Optional

from .base import EngineError, ErrorEnvironment


class ConfigurationError(EngineError):
    """Invalid or unsupported strategy configuration."""

    def __init__(self, message: str, errors: Optional[list[Any]] = None, **kwargs):
        super().__init__(message, environment=ErrorEnvironment.CONFIG, **kwargs)
        self.errors = errors or []
        self.recoverable = False


class CoreError(EngineError):
    """Invariant violation or failed trade action inside the core."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, environment=ErrorEnvironment.CORE, **kwargs)


class OrderNotFoundError(CoreError):
    """An order expected in the order book is missing."""

    def __init__(self, message: str, cid: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.cid = cid


class OrderSubmissionError(CoreError):
    """The venue rejected an order or could not be reached."""

    def __init__(self, message: str, cid: Optional[str] = None,
                 side: Optional[str] = None, close: bool = False, **kwargs):
        super().__init__(message, **kwargs)
        self.cid = cid
        self.side = side
        self.close = close


class StateTransitionError(CoreError):
    """Order lifecycle transition not allowed from the current state."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_state: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_state = attempted_state
        self.recoverable = False
