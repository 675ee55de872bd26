"""Lifecycle hook names a plugin can implement."""

from enum import Enum


class PluginHook(str, Enum):
    """Closed set of hook points, values are the handler attribute names."""
    ON_START = "on_start"
    ON_BEFORE_TICK = "on_before_tick"
    ON_TICK = "on_tick"
    ON_CANDLE = "on_candle"
    ON_AFTER_CANDLE = "on_after_candle"
    ON_BEFORE_OPEN = "on_before_open"
    ON_OPEN = "on_open"
    ON_BEFORE_CLOSE = "on_before_close"
    ON_CLOSE = "on_close"
    ON_DISPOSE = "on_dispose"


# Hooks whose truthy return cancels the pending action
VETO_HOOKS = frozenset({
    PluginHook.ON_BEFORE_TICK,
    PluginHook.ON_BEFORE_OPEN,
    PluginHook.ON_BEFORE_CLOSE,
})

SIDE_EFFECT_HOOKS = frozenset(PluginHook) - VETO_HOOKS
