"""
Market data module.

Canonical candle and instrument models plus the bounded candle window the
engine aggregates ticks into.
"""
