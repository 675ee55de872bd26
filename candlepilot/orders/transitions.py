"""
Order lifecycle state machine.

Every state change of an order goes through transition() so that no state is
skipped and a position is always EXECUTED before it can be CLOSED.
"""

from typing import Optional

from ..errors import StateTransitionError
from ..logging.config import get_order_logger, log_order_transition
from .models import OrderState, PendingOrder

order_logger = get_order_logger(__name__)

ALLOWED_TRANSITIONS: dict[OrderState, frozenset[OrderState]] = {
    OrderState.PROPOSED: frozenset({OrderState.PENDING, OrderState.REJECTED}),
    OrderState.PENDING: frozenset({OrderState.EXECUTED, OrderState.REJECTED}),
    OrderState.EXECUTED: frozenset({OrderState.CLOSING}),
    # Rollback after a vetoed or failed close
    OrderState.CLOSING: frozenset({OrderState.CLOSED, OrderState.EXECUTED}),
    OrderState.CLOSED: frozenset(),
    OrderState.REJECTED: frozenset(),
}


def can_transition(current: OrderState, new_state: OrderState) -> bool:
    return new_state in ALLOWED_TRANSITIONS[current]


def transition(
    order: PendingOrder,
    new_state: OrderState,
    trigger: str,
    context: Optional[dict] = None
) -> PendingOrder:
    """
    Move an order to a new lifecycle state.

    Raises:
        StateTransitionError: If the table does not allow the move
    """
    current = order.state
    if not can_transition(current, new_state):
        raise StateTransitionError(
            f"Invalid order transition from {current.value} to {new_state.value}",
            current_state=current.value,
            attempted_state=new_state.value,
            context={"cid": order.cid, "trigger": trigger}
        )

    order.state = new_state
    log_order_transition(
        order_logger,
        cid=order.cid,
        from_state=current.value,
        to_state=new_state.value,
        trigger=trigger,
        context=context
    )
    return order
