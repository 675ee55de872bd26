"""Pytest configuration and shared fixtures."""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from candlepilot.data.models import Candle, Instrument
from candlepilot.engine import StrategyEngine
from candlepilot.transport.paper import PaperTransport


def make_tick(time: int, close: float, open_: Optional[float] = None,
              high: Optional[float] = None, low: Optional[float] = None,
              volume: float = 1.0) -> Candle:
    """Tick carrying the in-progress candle of its interval."""
    open_ = close if open_ is None else open_
    return Candle(
        open=open_,
        high=max(open_, close) if high is None else high,
        low=min(open_, close) if low is None else low,
        close=close,
        volume=volume,
        time=time,
    )


class FakeTransport(PaperTransport):
    """Paper venue with failure injection and a gate to hold order submissions."""

    def __init__(self, instrument: Optional[Instrument] = None) -> None:
        super().__init__(instrument or Instrument(
            ticker="BTCUSDT", id="BTCUSDT", lot=1, pip_size=0.01, lot_precision=3
        ))
        self.fail_open = False
        self.fail_close = False
        self.hold: Optional[asyncio.Event] = None
        self.waiting = 0
        self.attempts: List[Any] = []
        self.unsubscribed = 0

    async def place_order(self, order, options):
        self.attempts.append(order)
        if self.hold is not None:
            self.waiting += 1
            await self.hold.wait()
            self.waiting -= 1
        if (order.close and self.fail_close) or (not order.close and self.fail_open):
            raise ConnectionError("venue unavailable")
        return await super().place_order(order, options)

    async def subscribe_to_tick(self, options, handler):
        unsubscribe = await super().subscribe_to_tick(options, handler)

        def counted() -> None:
            self.unsubscribed += 1
            unsubscribe()

        return counted

    def close_attempts(self) -> List[Any]:
        return [order for order in self.attempts if order.close]


class RecordingPlugin:
    """Plugin implementing every hook, recording calls into a shared list."""

    def __init__(self, name: str, calls: List[tuple], veto: Optional[set] = None) -> None:
        self.name = name
        self.calls = calls
        self.veto = veto or set()

    def _record(self, hook: str, *args: Any) -> None:
        self.calls.append((self.name, hook, args))

    async def on_start(self):
        self._record("on_start")

    async def on_before_tick(self, tick):
        self._record("on_before_tick", tick)
        return "on_before_tick" in self.veto

    async def on_tick(self, tick):
        self._record("on_tick", tick)

    async def on_candle(self, candle):
        self._record("on_candle", candle)

    async def on_after_candle(self, candle):
        self._record("on_after_candle", candle)

    async def on_before_open(self, order):
        self._record("on_before_open", order)
        return "on_before_open" in self.veto

    async def on_open(self, order):
        self._record("on_open", order)

    async def on_before_close(self, order, closing):
        self._record("on_before_close", order, closing)
        return "on_before_close" in self.veto

    async def on_close(self, order, closing):
        self._record("on_close", order, closing)

    async def on_dispose(self):
        self._record("on_dispose")


def hooks_called(calls: List[tuple], hook: str) -> List[tuple]:
    return [call for call in calls if call[1] == hook]


@pytest.fixture
def options() -> Dict[str, Any]:
    """Strategy options for a spot strategy on a futures-capable venue."""
    return {
        "broker": "binance",
        "ticker": "BTCUSDT",
        "amount": 1000.0,
        "interval": "1min",
    }


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def calls() -> List[tuple]:
    return []


@pytest.fixture
def engine(transport, options, calls) -> StrategyEngine:
    """Engine with one recording plugin and an instrument already resolved."""
    engine = StrategyEngine(transport, options, plugins=[RecordingPlugin("recorder", calls)])
    engine._instrument = transport.instrument
    return engine
