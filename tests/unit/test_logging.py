"""Tests for structured logging helpers."""

from unittest.mock import Mock

from candlepilot.logging.config import (
    configure_logging,
    get_order_logger,
    get_tick_logger,
    log_order_transition,
)


class TestLoggingHelpers:
    """Test logger factories and the transition log format."""

    def setup_method(self):
        configure_logging(level="DEBUG", format_json=True)

    def test_log_order_transition_binds_fields(self):
        logger = Mock()
        bound = logger.bind.return_value
        bound.bind.return_value = bound

        log_order_transition(
            logger,
            cid="abc",
            from_state="executed",
            to_state="closing",
            trigger="close_requested",
            context={"price": 10.0}
        )

        logger.bind.assert_called_once_with(
            cid="abc",
            from_state="executed",
            to_state="closing",
            trigger="close_requested",
        )
        bound.bind.assert_called_once_with(context={"price": 10.0})
        bound.info.assert_called_once_with("Order state transition")

    def test_log_order_transition_without_context(self):
        logger = Mock()
        log_order_transition(logger, cid="abc", from_state="a", to_state="b", trigger="t")
        logger.bind.return_value.bind.assert_not_called()
        logger.bind.return_value.info.assert_called_once()

    def test_subsystem_loggers_are_usable(self):
        get_order_logger("tests.orders").info("order event", cid="x")
        get_tick_logger("tests.ticks").debug("tick event", price=1.0)
