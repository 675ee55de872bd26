"""
Order lifecycle manager.

Opens and closes orders through the transport while keeping the order book
consistent. Optimistic book updates made before a venue call are rolled
back when the call fails: a failed open leaves no pending entry behind and
a failed close puts the position back at the front of the book. Plugin hook
errors are not caught here.
"""

from typing import Optional, Protocol, Union

from ..config.defaults import EngineOptions
from ..data.models import Candle, Instrument
from ..errors import CoreError, OrderNotFoundError, OrderSubmissionError
from ..logging.config import get_order_logger
from ..plugins.driver import PluginDriver
from ..plugins.hooks import PluginHook
from ..transport.base import BaseTransport
from .book import OrderBook
from .models import ExecutedOrder, OrderSide, OrderState, PendingOrder, generate_cid
from .transitions import transition

order_logger = get_order_logger(__name__)


class OrderContext(Protocol):
    """What the manager reads from and reports to its owning engine."""

    @property
    def current_candle(self) -> Optional[Candle]: ...

    @property
    def instrument(self) -> Optional[Instrument]: ...

    @property
    def learning(self) -> bool: ...

    @property
    def name(self) -> str: ...

    async def on_order_opened(self, order: ExecutedOrder) -> None: ...

    async def on_order_closed(self, order: ExecutedOrder, closing: ExecutedOrder) -> None: ...


class OrderLifecycleManager:
    """Runs open and close operations against one order book."""

    def __init__(
        self,
        context: OrderContext,
        transport: BaseTransport,
        plugins: PluginDriver,
        options: EngineOptions,
        book: Optional[OrderBook] = None
    ) -> None:
        self.logger = order_logger
        self.context = context
        self.transport = transport
        self.plugins = plugins
        self.options = options
        self.book = book if book is not None else OrderBook()

    async def open(self, side: Union[OrderSide, str]) -> Optional[ExecutedOrder]:
        """
        Place a market order at the current candle's close price.

        Returns:
            The executed order, or None if vetoed or rejected by the venue
        """
        side = OrderSide(side)
        market = self._market()
        if market is None:
            return None
        candle, instrument = market

        lot_price = candle.close * instrument.lot
        lots = self.transport.prepare_lots(
            (self.options.amount / lot_price) * self.options.lots_multiplier,
            instrument.id
        )
        pending = self._build_request(
            side=side,
            candle=candle,
            instrument=instrument,
            lots=lots,
            learning=self.context.learning,
            futures=self.options.futures,
            instrument_type=self.options.instrument_type,
            sandbox=self.options.sandbox,
        )

        if await self.plugins.skip_reduce(PluginHook.ON_BEFORE_OPEN, pending):
            self.logger.info("Order open vetoed by plugin", cid=pending.cid, side=side.value)
            return None

        self.book.add(pending)
        transition(pending, OrderState.PENDING, trigger="submit_open")

        try:
            order = await self.transport.place_order(pending, self.options)
        except Exception as e:
            error = OrderSubmissionError(
                f"Error placing order: {e}",
                cid=pending.cid,
                side=side.value,
                close=False
            )
            self.logger.error(
                "Order placement failed",
                cid=pending.cid,
                side=side.value,
                price=pending.price,
                lots=pending.lots,
                error=str(error),
                error_type=type(e).__name__
            )
            self.book.remove_by_cid(pending.cid)
            transition(pending, OrderState.REJECTED, trigger="venue_error")
            return None

        transition(pending, OrderState.EXECUTED, trigger="venue_ack")
        order.state = OrderState.EXECUTED

        try:
            self.book.replace_by_cid(order)
        except OrderNotFoundError as e:
            self.logger.error(
                "Executed order has no pending entry",
                cid=order.cid,
                order_id=order.order_id,
                error=str(e),
                context=e.context
            )

        await self.plugins.reduce(PluginHook.ON_OPEN, order)
        await self.context.on_order_opened(order)

        self.logger.info(
            "Order opened",
            cid=order.cid,
            order_id=order.order_id,
            side=order.side.value,
            price=order.price,
            lots=order.executed_lots,
            learning=order.learning
        )
        return order

    async def close(self, closing: Union[ExecutedOrder, PendingOrder]) -> Optional[ExecutedOrder]:
        """
        Close an executed order with an opposite market order.

        A second close of an order already being closed, or a close of an
        order the venue has not acknowledged yet, does nothing.

        Returns:
            The executed closing order, or None if skipped, vetoed or rejected
        """
        if (
            not isinstance(closing, ExecutedOrder)
            or closing.order_id is None
            or closing.state is not OrderState.EXECUTED
        ):
            self.logger.debug(
                "Close skipped, order is not closable",
                cid=closing.cid,
                state=closing.state.value
            )
            return None

        market = self._market()
        if market is None:
            return None
        candle, instrument = market

        transition(closing, OrderState.CLOSING, trigger="close_requested")

        try:
            request = self._build_request(
                side=closing.side.inverse(),
                candle=candle,
                instrument=instrument,
                lots=closing.executed_lots,
                learning=closing.learning,
                futures=closing.futures,
                instrument_type=closing.instrument_type,
                sandbox=closing.sandbox,
                close=True,
                open_id=closing.order_id,
                open_price=closing.price,
            )

            if await self.plugins.skip_reduce(PluginHook.ON_BEFORE_CLOSE, request, closing):
                self.logger.info("Order close vetoed by plugin", cid=closing.cid, order_id=closing.order_id)
                return None

            self.book.remove(closing)
            transition(request, OrderState.PENDING, trigger="submit_close")

            try:
                order = await self.transport.place_order(request, self.options)
            except Exception as e:
                error = OrderSubmissionError(
                    f"Error closing order: {e}",
                    cid=closing.cid,
                    side=request.side.value,
                    close=True
                )
                self.logger.error(
                    "Order close failed, restoring position",
                    cid=closing.cid,
                    order_id=closing.order_id,
                    error=str(error),
                    error_type=type(e).__name__
                )
                transition(request, OrderState.REJECTED, trigger="venue_error")
                if closing not in self.book:
                    self.book.insert_front(closing)
                return None

            transition(request, OrderState.EXECUTED, trigger="venue_ack")
            order.state = OrderState.EXECUTED
            transition(closing, OrderState.CLOSED, trigger="venue_ack")

            await self.plugins.reduce(PluginHook.ON_CLOSE, order, closing)
            await self.context.on_order_closed(order, closing)

            self.logger.info(
                "Order closed",
                cid=closing.cid,
                order_id=closing.order_id,
                close_order_id=order.order_id,
                open_price=closing.price,
                close_price=order.price,
                learning=closing.learning
            )
            return order
        finally:
            if closing.state is OrderState.CLOSING:
                transition(closing, OrderState.EXECUTED, trigger="close_aborted")

    async def close_all(self) -> list[ExecutedOrder]:
        """Close every open order one after another."""
        if not len(self.book):
            return []

        closed = []
        for order in self.book.snapshot():
            result = await self.close(order)
            if result is not None:
                closed.append(result)

        return closed

    def _market(self) -> Optional[tuple[Candle, Instrument]]:
        candle = self.context.current_candle
        instrument = self.context.instrument
        if candle is None or instrument is None:
            error = CoreError(
                "Order requires a current candle and a resolved instrument",
                context={
                    "has_candle": candle is not None,
                    "has_instrument": instrument is not None
                }
            )
            self.logger.warning("Order action skipped", error=str(error), context=error.context)
            return None
        return candle, instrument

    def _build_request(
        self,
        side: OrderSide,
        candle: Candle,
        instrument: Instrument,
        lots: float,
        learning: bool,
        futures: bool,
        instrument_type: Optional[str],
        sandbox: bool,
        close: bool = False,
        open_id: Optional[str] = None,
        open_price: Optional[float] = None
    ) -> PendingOrder:
        return PendingOrder(
            cid=generate_cid(),
            side=side,
            ticker=instrument.ticker,
            instrument_id=instrument.id,
            figi=instrument.figi,
            price=candle.close,
            lots=lots,
            time=candle.time,
            lot_size=instrument.lot,
            pip_size=instrument.pip_size,
            close=close,
            open_id=open_id,
            open_price=open_price,
            broker=self.options.broker,
            currency=self.options.currency,
            interval=self.options.interval,
            author=self.context.name,
            sandbox=sandbox,
            learning=learning,
            margin=self.options.margin,
            futures=futures,
            instrument_type=instrument_type,
            lots_multiplier=self.options.lots_multiplier,
            equity_level=self.options.equity_level,
        )
