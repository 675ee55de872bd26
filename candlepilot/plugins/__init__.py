"""
Plugin hook pipeline.

Plugins implement any subset of a fixed set of hooks. The driver calls them
strictly in registration order, either for side effects or with veto
semantics.
"""
from .driver import Plugin, PluginDriver
from .hooks import SIDE_EFFECT_HOOKS, VETO_HOOKS, PluginHook

__all__ = ["Plugin", "PluginDriver", "PluginHook", "SIDE_EFFECT_HOOKS", "VETO_HOOKS"]
