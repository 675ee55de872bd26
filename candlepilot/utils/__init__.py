"""
Utility functions module.

Time Semantics:
- Candle and tick timestamps are epoch milliseconds of the interval start
- A tick belongs to a new candle when its interval start differs from the
  current candle's
- History ranges are split into whole UTC days
"""
