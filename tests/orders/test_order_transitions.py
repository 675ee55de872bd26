"""Tests for the order lifecycle state machine."""

import pytest

from candlepilot.errors import StateTransitionError
from candlepilot.orders.models import ExecutedOrder, OrderSide, OrderState, PendingOrder
from candlepilot.orders.transitions import ALLOWED_TRANSITIONS, can_transition, transition


def make_order(state: OrderState = OrderState.PROPOSED) -> PendingOrder:
    return PendingOrder(
        cid="cid", side=OrderSide.BUY, ticker="T", instrument_id="T",
        price=1.0, lots=1, time=0, state=state,
    )


class TestOrderTransitions:
    """Test allowed and forbidden lifecycle moves."""

    def test_happy_path(self):
        order = make_order()
        for state in (OrderState.PENDING, OrderState.EXECUTED, OrderState.CLOSING, OrderState.CLOSED):
            transition(order, state, trigger="test")
            assert order.state is state

    def test_close_rollback_returns_to_executed(self):
        order = make_order(OrderState.CLOSING)
        transition(order, OrderState.EXECUTED, trigger="close_aborted")
        assert order.state is OrderState.EXECUTED
        assert order.processing is False

    def test_rejection_exits(self):
        assert can_transition(OrderState.PROPOSED, OrderState.REJECTED)
        assert can_transition(OrderState.PENDING, OrderState.REJECTED)
        assert not can_transition(OrderState.EXECUTED, OrderState.REJECTED)

    @pytest.mark.parametrize("current,target", [
        (OrderState.PROPOSED, OrderState.EXECUTED),
        (OrderState.PENDING, OrderState.CLOSED),
        (OrderState.EXECUTED, OrderState.CLOSED),
        (OrderState.CLOSED, OrderState.EXECUTED),
        (OrderState.REJECTED, OrderState.PENDING),
    ])
    def test_skipping_states_is_rejected(self, current, target):
        order = make_order(current)
        with pytest.raises(StateTransitionError) as exc_info:
            transition(order, target, trigger="test")

        assert order.state is current
        assert exc_info.value.current_state == current.value
        assert exc_info.value.attempted_state == target.value
        assert exc_info.value.recoverable is False

    def test_terminal_states(self):
        assert ALLOWED_TRANSITIONS[OrderState.CLOSED] == frozenset()
        assert ALLOWED_TRANSITIONS[OrderState.REJECTED] == frozenset()

    def test_processing_mirrors_closing_state(self):
        order = ExecutedOrder.from_pending(make_order(OrderState.PENDING), order_id="1")
        assert order.state is OrderState.EXECUTED
        assert order.processing is False
        transition(order, OrderState.CLOSING, trigger="test")
        assert order.processing is True
        assert order.is_open is True

    def test_inverse_side(self):
        assert OrderSide.BUY.inverse() is OrderSide.SELL
        assert OrderSide.SELL.inverse() is OrderSide.BUY

    def test_from_pending_copies_request(self):
        pending = make_order(OrderState.PENDING)
        pending.lots = 3
        executed = ExecutedOrder.from_pending(pending, order_id="7", price=1.5, commission=0.01)
        assert executed.cid == pending.cid
        assert executed.executed_lots == 3
        assert executed.price == 1.5
        assert executed.commission == 0.01
        assert executed.to_dict()["side"] == "buy"
        assert executed.to_dict()["state"] == "executed"
