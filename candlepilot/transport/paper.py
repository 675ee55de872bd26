"""
In-memory paper trading venue.

Fills every order immediately at its requested price and delivers ticks
pushed through emit() to subscribed handlers.
"""

import itertools
import math
from typing import Optional

import structlog

from ..config.defaults import EngineOptions
from ..data.models import Candle, Instrument
from ..orders.models import ExecutedOrder, PendingOrder
from .base import BaseTransport, TickHandler, Unsubscribe

logger = structlog.get_logger(__name__)


class PaperTransport(BaseTransport):
    """Simulated venue with instant fills."""

    def __init__(self, instrument: Optional[Instrument] = None, fee: float = 0.0) -> None:
        self.logger = logger
        self.instrument = instrument
        self.fee = fee
        self.placed: list[PendingOrder] = []
        self._handlers: list[TickHandler] = []
        self._order_ids = itertools.count(1)

    async def get_instrument(self, options: EngineOptions) -> Instrument:
        if self.instrument is None:
            self.instrument = Instrument(ticker=options.ticker, id=options.ticker)
        return self.instrument

    async def subscribe_to_tick(self, options: EngineOptions, handler: TickHandler) -> Unsubscribe:
        self._handlers.append(handler)
        self.logger.info("Tick subscription started", ticker=options.ticker, interval=options.interval)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)
                self.logger.info("Tick subscription stopped", ticker=options.ticker)

        return unsubscribe

    async def emit(self, tick: Candle) -> None:
        """Deliver a tick to every subscriber, one after another."""
        for handler in list(self._handlers):
            await handler(tick)

    @property
    def subscribed(self) -> bool:
        return bool(self._handlers)

    async def place_order(self, order: PendingOrder, options: EngineOptions) -> ExecutedOrder:
        self.placed.append(order)
        order_id = str(next(self._order_ids))
        commission = order.price * order.lots * order.lot_size * self.fee
        executed = ExecutedOrder.from_pending(order, order_id=order_id, commission=commission)

        self.logger.debug(
            "Paper order filled",
            cid=order.cid,
            order_id=order_id,
            side=order.side.value,
            price=order.price,
            lots=order.lots,
            close=order.close
        )
        return executed

    def prepare_lots(self, lots: float, instrument_id: str) -> float:
        precision = self.instrument.lot_precision if self.instrument else 0
        factor = 10 ** precision
        prepared = math.floor(lots * factor) / factor
        if precision == 0:
            prepared = max(int(prepared), 1)
        return prepared
