"""
Strategy execution engine.

Wires the transport, the plugin pipeline, the candle window and the order
lifecycle manager together for one instrument:
Transport → Tick Handler → Plugins → Candle Window → Orders → Transport
"""

from typing import Any, Awaitable, Callable, Iterable, Optional, Union

import structlog

from .config.defaults import EngineOptions
from .config.loader import build_options
from .data.models import Candle, Instrument
from .data.window import CandleWindow
from .errors import HistoryError
from .history.provider import HistoryProvider, HistoryRequest, get_history
from .logging.config import get_tick_logger
from .orders.book import OrderBook
from .orders.manager import OrderLifecycleManager
from .orders.models import ExecutedOrder, OrderSide, PendingOrder
from .plugins.driver import Plugin, PluginDriver
from .plugins.hooks import PluginHook
from .transport.base import BaseTransport

logger = structlog.get_logger(__name__)
tick_logger = get_tick_logger(__name__)

Disposer = Callable[[], Awaitable[None]]


class StrategyEngine:
    """
    Execution core of one strategy instance.

    Subclasses implement trading logic in the extension points
    (on_tick, on_candle, on_order_opened, on_order_closed) and call
    create_order / close_order / close_all from there. Plugins observe the
    same lifecycle through hooks.
    """

    def __init__(
        self,
        transport: BaseTransport,
        options: Union[EngineOptions, dict[str, Any]],
        history: Optional[HistoryProvider] = None,
        plugins: Iterable[Union[Plugin, Any]] = ()
    ) -> None:
        """
        Raises:
            ConfigurationError: If the options are invalid or unsupported
        """
        self.logger = logger
        self.tick_logger = tick_logger

        self.options = build_options(options)
        self.transport = transport
        self.history = history

        self._window = CandleWindow(self.options.candles_window_size)
        self._book = OrderBook()
        self._driver = PluginDriver()
        self._orders = OrderLifecycleManager(
            context=self,
            transport=transport,
            plugins=self._driver,
            options=self.options,
            book=self._book,
        )

        self._instrument: Optional[Instrument] = None
        self._learning = False
        self.plugins: dict[str, Any] = {}
        self.dispose: Disposer = _noop_dispose

        self.register_plugins(plugins)

        self.logger.info(
            "Strategy engine initialized",
            strategy=self.name,
            broker=self.options.broker,
            ticker=self.options.ticker,
            interval=self.options.interval,
            instrument_type=self.options.instrument_type
        )

    @property
    def name(self) -> str:
        """Strategy name used for logs and as order author."""
        return type(self).__name__

    @property
    def current_candle(self) -> Optional[Candle]:
        """Candle in progress, reflects the latest tick."""
        return self._window.current

    @property
    def prev_candle(self) -> Optional[Candle]:
        """Last closed candle."""
        return self._window.previous

    @property
    def candles(self) -> list[Candle]:
        """Candle history, most recent first."""
        return self._window.snapshot()

    @property
    def orders(self) -> OrderBook:
        """Open orders of this strategy."""
        return self._book

    @property
    def instrument(self) -> Optional[Instrument]:
        return self._instrument

    @property
    def learning(self) -> bool:
        """True while historical candles are being replayed."""
        return self._learning

    def register_plugins(self, plugins: Iterable[Union[Plugin, Any]]) -> None:
        """Append plugins to the pipeline and refresh their public APIs."""
        self._driver.register(plugins)
        self.plugins = self._driver.public_api()

    async def start(self) -> Disposer:
        """
        Start listening to ticks for the configured instrument.

        Returns:
            Async disposer closing all positions and releasing the subscription
        """
        await self._driver.reduce(PluginHook.ON_START)
        self._instrument = await self.transport.get_instrument(self.options)
        unsubscribe = await self.transport.subscribe_to_tick(self.options, self.handle_tick)

        async def dispose() -> None:
            try:
                closed = await self.close_all()
                self.logger.info("Positions closed on dispose", strategy=self.name, closed=len(closed))
            finally:
                unsubscribe()
                self.dispose = _noop_dispose
                await self._driver.reduce(PluginHook.ON_DISPOSE)

        self.dispose = dispose
        self.logger.info(
            "Strategy started",
            strategy=self.name,
            ticker=self._instrument.ticker,
            instrument_id=self._instrument.id
        )
        return dispose

    async def learn(self, days: int = 7) -> None:
        """
        Feed historical candles through the tick handler before going live.

        Orders are not suppressed; plugins and subclasses branch on
        ``learning`` themselves.

        Raises:
            HistoryError: If no provider is configured or retrieval fails
        """
        if self.history is None:
            raise HistoryError("No history provider configured", ticker=self.options.ticker)

        self._instrument = await self.transport.get_instrument(self.options)
        request = HistoryRequest(
            broker=self.options.broker,
            ticker=self.options.ticker,
            days=days,
            interval=self.options.interval,
            gap_days=0,
            instrument_type=self.options.instrument_type,
        )

        self._learning = True
        try:
            ticks = await get_history(self.history, request)
            for tick in ticks:
                await self.handle_tick(tick)
        finally:
            self._learning = False

        self.logger.info("Learning finished", strategy=self.name, days=days, candles=len(ticks))

    async def handle_tick(self, tick: Candle) -> None:
        """Run one tick through the plugin pipeline and the candle window."""
        changed = self._window.is_new_interval(tick)

        if await self._driver.skip_reduce(PluginHook.ON_BEFORE_TICK, tick):
            self.tick_logger.debug("Tick skipped by plugin", time=tick.time, price=tick.close)
            return

        # Orders placed from tick hooks must see the price just received
        if not changed:
            self._window.update_current(tick)

        await self._driver.reduce(PluginHook.ON_TICK, tick)
        await self.on_tick(tick)

        if changed:
            closed = self._window.current
            await self._driver.reduce(PluginHook.ON_CANDLE, closed)
            await self.on_candle(closed)
            await self._driver.reduce(PluginHook.ON_AFTER_CANDLE, closed)
            self._window.push(tick)

            self.tick_logger.debug(
                "Candle closed",
                time=closed.time,
                open=closed.open,
                close=closed.close,
                volume=closed.volume
            )

    async def create_order(self, side: Union[OrderSide, str]) -> Optional[ExecutedOrder]:
        """Open a market order, None if vetoed or rejected."""
        return await self._orders.open(side)

    async def close_order(self, order: Union[ExecutedOrder, PendingOrder]) -> Optional[ExecutedOrder]:
        """Close an open order, None if skipped, vetoed or rejected."""
        return await self._orders.close(order)

    async def close_all(self) -> list[ExecutedOrder]:
        """Close every open order sequentially."""
        return await self._orders.close_all()

    async def on_tick(self, tick: Candle) -> None:
        """Called for every accepted tick after the on_tick hooks."""

    async def on_candle(self, candle: Candle) -> None:
        """Called with each closed candle after the on_candle hooks."""

    async def on_order_opened(self, order: ExecutedOrder) -> None:
        """Called after an order is opened and the on_open hooks ran."""

    async def on_order_closed(self, order: ExecutedOrder, closing: ExecutedOrder) -> None:
        """Called after an order is closed and the on_close hooks ran."""


async def _noop_dispose() -> None:
    return None
