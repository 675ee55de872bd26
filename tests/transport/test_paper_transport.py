"""Tests for the paper trading venue."""

import asyncio

import pytest

from candlepilot.config.defaults import EngineOptions
from candlepilot.data.models import Instrument
from candlepilot.orders.models import OrderSide, OrderState, PendingOrder
from candlepilot.transport.paper import PaperTransport
from conftest import make_tick

OPTIONS = EngineOptions(broker="paper", ticker="SBER", amount=1000)


def make_request(lots: float = 2, close: bool = False) -> PendingOrder:
    return PendingOrder(
        cid="cid-1", side=OrderSide.BUY, ticker="SBER", instrument_id="SBER",
        price=250.0, lots=lots, time=0, lot_size=10, close=close, state=OrderState.PENDING,
    )


class TestPaperTransport:
    """Test the in-memory venue."""

    def test_default_instrument(self):
        transport = PaperTransport()
        instrument = asyncio.run(transport.get_instrument(OPTIONS))
        assert instrument.ticker == "SBER"
        assert instrument.id == "SBER"

    def test_place_order_fills_at_request_price(self):
        transport = PaperTransport(fee=0.001)
        request = make_request()
        first = asyncio.run(transport.place_order(request, OPTIONS))
        second = asyncio.run(transport.place_order(make_request(), OPTIONS))

        assert first.order_id == "1"
        assert second.order_id == "2"
        assert first.cid == request.cid
        assert first.price == 250.0
        assert first.executed_lots == 2
        assert first.state is OrderState.EXECUTED
        assert first.commission == pytest.approx(5.0)
        assert len(transport.placed) == 2
        assert transport.placed[0] is request

    def test_prepare_lots(self):
        whole = PaperTransport(Instrument(ticker="SBER", id="SBER", lot=10))
        assert whole.prepare_lots(3.9, "SBER") == 3
        assert whole.prepare_lots(0.2, "SBER") == 1

        fractional = PaperTransport(Instrument(ticker="BTC", id="BTC", lot_precision=3))
        assert fractional.prepare_lots(0.12345, "BTC") == 0.123

    def test_emit_and_unsubscribe(self):
        transport = PaperTransport()
        received = []

        async def handler(tick):
            received.append(tick)

        async def scenario():
            unsubscribe = await transport.subscribe_to_tick(OPTIONS, handler)
            await transport.emit(make_tick(0, 1.0))
            unsubscribe()
            unsubscribe()
            await transport.emit(make_tick(0, 2.0))

        asyncio.run(scenario())
        assert [tick.close for tick in received] == [1.0]
        assert transport.subscribed is False
