"""
Error classification system for the strategy execution core.

This module provides a structured exception hierarchy for the different
environments an error can originate from: configuration, the core order and
candle machinery, historical data retrieval and the trading venue.
"""

from .base import EngineError, ErrorEnvironment
from .core import (
    ConfigurationError,
    CoreError,
    OrderNotFoundError,
    OrderSubmissionError,
    StateTransitionError,
)
from .history import HistoryError

__all__ = [
    # Base
    "EngineError",
    "ErrorEnvironment",
    # Configuration
    "ConfigurationError",
    # Core
    "CoreError",
    "OrderNotFoundError",
    "OrderSubmissionError",
    "StateTransitionError",
    # History
    "HistoryError",
]
