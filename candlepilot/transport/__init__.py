"""
Trading venue transports.

The engine depends on BaseTransport only. PaperTransport is an in-memory
venue for replays and demos.
"""
from .base import BaseTransport, TickHandler, Unsubscribe
from .paper import PaperTransport

__all__ = ["BaseTransport", "PaperTransport", "TickHandler", "Unsubscribe"]
