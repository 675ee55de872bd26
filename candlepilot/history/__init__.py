"""
Historical candle retrieval used to warm up a strategy before it goes live.
"""
from .provider import HistoryProvider, HistoryRequest, MemoryHistoryProvider, get_history

__all__ = ["HistoryProvider", "HistoryRequest", "MemoryHistoryProvider", "get_history"]
