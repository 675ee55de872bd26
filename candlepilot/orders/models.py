"""
Order data models for the order lifecycle.

A PendingOrder is an order intent waiting for the venue. The venue answers
with an ExecutedOrder carrying its own order id. Both mutate only through
the lifecycle state.
"""

import uuid
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Optional


class OrderSide(str, Enum):
    """Direction of an order."""
    BUY = "buy"
    SELL = "sell"

    def inverse(self) -> "OrderSide":
        """Side that closes a position opened with this side."""
        return OrderSide.SELL if self is OrderSide.BUY else OrderSide.BUY


class OrderState(str, Enum):
    """Order lifecycle states."""
    PROPOSED = "proposed"
    PENDING = "pending"
    EXECUTED = "executed"
    CLOSING = "closing"
    CLOSED = "closed"
    REJECTED = "rejected"


def generate_cid() -> str:
    """Correlation id unique across every order this process issues."""
    return uuid.uuid4().hex


@dataclass(eq=False)
class PendingOrder:
    """Order request sent to the venue."""

    cid: str
    side: OrderSide
    ticker: str
    instrument_id: str
    price: float
    lots: float
    time: int
    lot_size: float = 1
    pip_size: float = 0.01
    figi: Optional[str] = None

    # Close intent
    close: bool = False
    open_id: Optional[str] = None          # Venue id of the order being closed
    open_price: Optional[float] = None     # Entry price of the order being closed

    # Strategy context
    broker: Optional[str] = None
    currency: Optional[str] = None
    interval: Optional[str] = None
    author: Optional[str] = None
    sandbox: bool = False
    learning: bool = False
    margin: bool = False
    futures: bool = False
    instrument_type: Optional[str] = None
    lots_multiplier: float = 1
    equity_level: float = 1

    state: OrderState = OrderState.PROPOSED

    @property
    def processing(self) -> bool:
        """True while a close of this order is in flight."""
        return self.state is OrderState.CLOSING

    @property
    def is_open(self) -> bool:
        return self.state in (OrderState.PENDING, OrderState.EXECUTED, OrderState.CLOSING)

    def to_dict(self) -> dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["side"] = self.side.value
        data["state"] = self.state.value
        return data


@dataclass(eq=False)
class ExecutedOrder(PendingOrder):
    """Order acknowledged by the venue."""

    order_id: Optional[str] = None
    executed_lots: float = 0
    commission: Optional[float] = None

    @classmethod
    def from_pending(
        cls,
        pending: PendingOrder,
        order_id: str,
        executed_lots: Optional[float] = None,
        price: Optional[float] = None,
        commission: Optional[float] = None
    ) -> "ExecutedOrder":
        """Build the venue acknowledgment for a pending order."""
        data = {f.name: getattr(pending, f.name) for f in fields(PendingOrder)}
        data["state"] = OrderState.EXECUTED
        if price is not None:
            data["price"] = price
        return cls(
            **data,
            order_id=order_id,
            executed_lots=pending.lots if executed_lots is None else executed_lots,
            commission=commission,
        )
