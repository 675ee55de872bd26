"""
candlepilot - Tick/Candle Strategy Execution Core

Execution core of an automated trading strategy runner. Aggregates a price
tick stream for one instrument into candles, drives an ordered pipeline of
behaviour plugins at fixed lifecycle hooks, and manages trade orders
(open, close, rollback on failure) against an external trading venue.
"""

__version__ = "0.1.0"
__author__ = "candlepilot Team"
