"""Tests for the bounded candle window."""

import pytest

from candlepilot.data.models import Candle
from candlepilot.data.window import CandleWindow
from conftest import make_tick


class TestCandleWindow:
    """Test candle aggregation into a most-recent-first window."""

    def test_empty_window(self):
        window = CandleWindow()
        assert len(window) == 0
        assert window.current is None
        assert window.previous is None
        assert window.max_len == 10

    def test_rejects_window_without_room_for_previous_candle(self):
        with pytest.raises(ValueError):
            CandleWindow(max_len=1)

    def test_first_tick_seeds_current_candle(self):
        window = CandleWindow()
        changed = window.apply(make_tick(0, 10.0))
        assert changed is False
        assert len(window) == 1
        assert window.current.close == 10.0

    def test_same_interval_overwrites_current(self):
        window = CandleWindow()
        window.apply(make_tick(0, 10.0))
        changed = window.apply(make_tick(0, 11.0))

        assert changed is False
        assert len(window) == 1
        assert window.current.close == 11.0
        assert window.previous is None

    def test_boundary_closes_current_candle(self):
        window = CandleWindow()
        window.apply(make_tick(0, 10.0))
        window.apply(make_tick(0, 11.0))
        changed = window.apply(make_tick(60_000, 12.0))

        assert changed is True
        assert len(window) == 2
        assert window.current.close == 12.0
        assert window.current.open == 12.0
        assert window.previous.close == 11.0
        assert window.previous.time == 0

    def test_is_new_interval(self):
        window = CandleWindow()
        tick = make_tick(0, 10.0)
        assert window.is_new_interval(tick) is False
        window.apply(tick)
        assert window.is_new_interval(make_tick(0, 11.0)) is False
        assert window.is_new_interval(make_tick(60_000, 11.0)) is True

    def test_length_never_exceeds_bound(self):
        window = CandleWindow(max_len=10)
        for minute in range(25):
            for price in (1.0, 2.0, 3.0):
                window.apply(make_tick(minute * 60_000, minute + price))
                assert len(window) <= 10

        assert len(window) == 10
        # Oldest intervals evicted first
        assert [candle.time for candle in window] == [m * 60_000 for m in range(24, 14, -1)]

    def test_previous_is_last_tick_of_preceding_interval(self):
        window = CandleWindow(max_len=4)
        for minute in range(1, 8):
            window.apply(make_tick(minute * 60_000, 100.0 + minute, open_=100.0))
            window.apply(make_tick(minute * 60_000, 200.0 + minute, open_=100.0))
            if minute > 1:
                prev = window.previous
                assert prev.time == (minute - 1) * 60_000
                assert prev.close == 200.0 + minute - 1

    def test_closed_candles_are_not_mutated(self):
        window = CandleWindow()
        window.apply(make_tick(0, 10.0))
        window.apply(make_tick(60_000, 12.0))
        closed = window.previous
        window.apply(make_tick(60_000, 13.0))
        window.apply(make_tick(60_000, 14.0))

        assert window.previous is closed
        assert window.previous.close == 10.0
        assert window.current.close == 14.0

    def test_snapshot_is_a_copy(self):
        window = CandleWindow()
        window.apply(make_tick(0, 10.0))
        snapshot = window.snapshot()
        window.apply(make_tick(60_000, 11.0))
        assert len(snapshot) == 1
        assert isinstance(snapshot[0], Candle)

    def test_candle_range(self):
        candle = make_tick(0, 10.0, open_=9.0, high=12.0, low=8.5)
        assert candle.range == pytest.approx(3.5)
