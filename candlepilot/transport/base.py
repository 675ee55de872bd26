"""Base class for trading venue transports."""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from ..config.defaults import EngineOptions
from ..data.models import Candle, Instrument
from ..orders.models import ExecutedOrder, PendingOrder

TickHandler = Callable[[Candle], Awaitable[None]]
Unsubscribe = Callable[[], None]


class BaseTransport(ABC):
    """Venue operations the execution core relies on."""

    @abstractmethod
    async def get_instrument(self, options: EngineOptions) -> Instrument:
        """Resolve the traded instrument."""

    @abstractmethod
    async def subscribe_to_tick(self, options: EngineOptions, handler: TickHandler) -> Unsubscribe:
        """
        Start delivering ticks to the handler.

        The transport must await each handler call before delivering the
        next tick.

        Returns:
            Callable that stops the subscription
        """

    @abstractmethod
    async def place_order(self, order: PendingOrder, options: EngineOptions) -> ExecutedOrder:
        """
        Submit an order to the venue.

        Raises:
            Exception: On venue rejection or network failure
        """

    @abstractmethod
    def prepare_lots(self, lots: float, instrument_id: str) -> float:
        """Normalize a raw lot count to what the venue accepts."""
