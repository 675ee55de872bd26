"""
Order book of a strategy instance.

Holds every open order (pending, executed or closing) in insertion order.
Membership is by identity; correlation ids are unique.
"""

from typing import Iterator, Optional, Union

from ..errors import CoreError, OrderNotFoundError
from .models import ExecutedOrder, PendingOrder

AnyOrder = Union[ExecutedOrder, PendingOrder]


class OrderBook:
    """Ordered collection of the open orders of one strategy."""

    def __init__(self) -> None:
        self._orders: list[AnyOrder] = []

    def add(self, order: AnyOrder) -> None:
        """
        Append an order.

        Raises:
            CoreError: If an order with the same cid is already held
        """
        if self.find_by_cid(order.cid) is not None:
            raise CoreError(
                f"Order {order.cid} is already in the order book",
                context={"cid": order.cid}
            )
        self._orders.append(order)

    def insert_front(self, order: AnyOrder) -> None:
        """Put an order back at the front, used to restore a failed close."""
        if self.find_by_cid(order.cid) is not None:
            raise CoreError(
                f"Order {order.cid} is already in the order book",
                context={"cid": order.cid}
            )
        self._orders.insert(0, order)

    def remove(self, order: AnyOrder) -> bool:
        """Remove the given order object. Returns whether it was present."""
        idx = self.index_of(order)
        if idx == -1:
            return False
        del self._orders[idx]
        return True

    def remove_by_cid(self, cid: str) -> Optional[AnyOrder]:
        """Remove the order with the given cid, if any."""
        for idx, item in enumerate(self._orders):
            if item.cid == cid:
                return self._orders.pop(idx)
        return None

    def replace_by_cid(self, order: ExecutedOrder) -> AnyOrder:
        """
        Swap the pending entry sharing the order's cid for the executed order.

        Raises:
            OrderNotFoundError: If no entry has that cid
        """
        for idx, item in enumerate(self._orders):
            if item.cid == order.cid:
                self._orders[idx] = order
                return item
        raise OrderNotFoundError(
            f"Unknown order for replace: {order.cid}",
            cid=order.cid,
            context={"open_cids": [item.cid for item in self._orders]}
        )

    def index_of(self, order: AnyOrder) -> int:
        for idx, item in enumerate(self._orders):
            if item is order:
                return idx
        return -1

    def find_by_cid(self, cid: str) -> Optional[AnyOrder]:
        for item in self._orders:
            if item.cid == cid:
                return item
        return None

    def find_by_order_id(self, order_id: str) -> Optional[ExecutedOrder]:
        for item in self._orders:
            if isinstance(item, ExecutedOrder) and item.order_id == order_id:
                return item
        return None

    def snapshot(self) -> list[AnyOrder]:
        """Shallow copy safe to iterate while the book changes."""
        return list(self._orders)

    def __contains__(self, order: object) -> bool:
        return any(item is order for item in self._orders)

    def __len__(self) -> int:
        return len(self._orders)

    def __iter__(self) -> Iterator[AnyOrder]:
        return iter(list(self._orders))

    def __getitem__(self, index: int) -> AnyOrder:
        return self._orders[index]
