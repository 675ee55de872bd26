#!/usr/bin/env python3
"""
Basic Usage Example - candlepilot Strategy Engine

This script demonstrates the strategy engine against the in-memory paper
venue. It shows how to:
- Subclass the engine with simple entry/exit logic
- Register plugins (a trading-hours guard and a trade journal)
- Warm the strategy up on history, then stream live ticks
- Dispose the strategy, closing what is still open

Run: python examples/basic_usage.py
"""

import asyncio
import time

from candlepilot.data.models import Candle, Instrument
from candlepilot.engine import StrategyEngine
from candlepilot.history import MemoryHistoryProvider
from candlepilot.logging import configure_logging
from candlepilot.transport import PaperTransport

MINUTE_MS = 60_000


class MomentumStrategy(StrategyEngine):
    """Buys after two rising candles, exits after two falling ones."""

    async def on_candle(self, candle: Candle) -> None:
        prev = self.prev_candle
        if prev is None:
            return

        rising = candle.close > prev.close and candle.close > candle.open
        falling = candle.close < prev.close and candle.close < candle.open

        if rising and not self.orders.snapshot():
            await self.create_order("buy")
        elif falling:
            await self.close_all()


class TradeJournal:
    """Plugin recording finished round trips."""

    name = "journal"

    def __init__(self):
        self.trades = []
        self.api = self.trades

    def on_close(self, order, closing):
        profit = (order.price - closing.price) * closing.executed_lots * closing.lot_size
        if closing.side.value == "sell":
            profit = -profit
        self.trades.append({
            "open": closing.price,
            "close": order.price,
            "profit": round(profit, 2),
            "learning": closing.learning,
        })


class SessionGuard:
    """Plugin refusing new positions while learning."""

    name = "session_guard"

    def __init__(self, engine_ref):
        self.engine_ref = engine_ref

    def on_before_open(self, order):
        return self.engine_ref() is not None and self.engine_ref().learning


def create_candles(start_ms: int, closes: list) -> list:
    """Build one candle per minute from a close price series."""
    candles = []
    prev_close = closes[0]
    for i, close in enumerate(closes):
        candles.append(Candle(
            open=prev_close,
            high=max(prev_close, close) + 0.5,
            low=min(prev_close, close) - 0.5,
            close=close,
            volume=1000 + i * 10,
            time=start_ms + i * MINUTE_MS,
        ))
        prev_close = close
    return candles


async def main() -> None:
    configure_logging(level="INFO")

    print("🚀 candlepilot Strategy Engine - Basic Usage Example")
    print("=" * 60)
    print()

    now = int(time.time() * 1000)
    now -= now % MINUTE_MS

    history = create_candles(now - 30 * MINUTE_MS, [100 + (i % 6) for i in range(30)])
    transport = PaperTransport(Instrument(ticker="BTCUSDT", id="BTCUSDT", lot_precision=3), fee=0.001)

    holder = {}
    journal = TradeJournal()
    strategy = MomentumStrategy(
        transport,
        {"broker": "binance", "ticker": "BTCUSDT", "amount": 1000, "interval": "1min"},
        history=MemoryHistoryProvider(history),
        plugins=[SessionGuard(lambda: holder.get("engine")), journal],
    )
    holder["engine"] = strategy

    print("1. Learning on history (orders refused by the session guard)...")
    await strategy.learn(days=1)
    print(f"   Candles in window: {len(strategy.candles)}")
    print(f"   Open orders after learning: {len(strategy.orders)}")
    print()

    print("2. Going live...")
    dispose = await strategy.start()

    live_closes = [101, 102, 104, 103, 101, 102, 104, 106, 105, 103]
    for i, close in enumerate(live_closes):
        minute = now + i * MINUTE_MS
        # Two ticks per interval, the second one carries the final close
        await transport.emit(Candle(close - 1, close + 0.5, close - 1.5, close - 0.5, 10, minute))
        await transport.emit(Candle(close - 1, close + 1, close - 1.5, close, 25, minute))
        print(f"   {i + 1:>2}. close={close:<6} open orders={len(strategy.orders)}")
    print()

    print("3. Disposing strategy...")
    await dispose()
    print(f"   Open orders: {len(strategy.orders)}")
    print(f"   Orders sent to venue: {len(transport.placed)}")
    print()

    print("4. Trade journal:")
    for trade in strategy.plugins["journal"]:
        print(f"   open={trade['open']} close={trade['close']} profit={trade['profit']}")
    print()

    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    asyncio.run(main())
