"""
Plugin registry and hook dispatch.

A plugin is a name plus a mapping from hook to handler. Handlers may be
plain functions or coroutines; each one is awaited before the next plugin
runs so a later plugin observes what an earlier one did on the same call.
Handler exceptions are not caught here.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Union

import structlog

from ..errors import ConfigurationError
from .hooks import VETO_HOOKS, PluginHook

logger = structlog.get_logger(__name__)

HookHandler = Callable[..., Any]


@dataclass(frozen=True)
class Plugin:
    """Named set of optional hook handlers."""

    name: str
    handlers: dict[PluginHook, HookHandler] = field(default_factory=dict)
    api: Any = None

    def handler(self, hook: PluginHook) -> Optional[HookHandler]:
        return self.handlers.get(hook)

    @property
    def hooks(self) -> frozenset[PluginHook]:
        return frozenset(self.handlers)

    @classmethod
    def from_object(cls, obj: Any, name: Optional[str] = None) -> "Plugin":
        """
        Build a plugin from any object exposing handlers named after hooks.

        The name defaults to the object's ``name`` attribute, then its class name.
        """
        handlers = {}
        for hook in PluginHook:
            candidate = getattr(obj, hook.value, None)
            if candidate is not None:
                if not callable(candidate):
                    raise ConfigurationError(
                        f"Hook {hook.value} of plugin {type(obj).__name__} is not callable"
                    )
                handlers[hook] = candidate

        plugin_name = name or getattr(obj, "name", None) or type(obj).__name__
        return cls(name=plugin_name, handlers=handlers, api=getattr(obj, "api", None))


class PluginDriver:
    """Runs registered plugins at hook points in registration order."""

    def __init__(self) -> None:
        self.logger = logger
        self._plugins: list[Plugin] = []

    @property
    def plugins(self) -> tuple[Plugin, ...]:
        return tuple(self._plugins)

    def register(self, plugins: Iterable[Union[Plugin, Any]]) -> None:
        """
        Append plugins after the already registered ones.

        Raises:
            ConfigurationError: If a plugin name is already taken
        """
        for candidate in plugins:
            plugin = candidate if isinstance(candidate, Plugin) else Plugin.from_object(candidate)

            if any(existing.name == plugin.name for existing in self._plugins):
                raise ConfigurationError(
                    f"Plugin with name {plugin.name!r} is already registered",
                    context={"plugin": plugin.name}
                )

            self._plugins.append(plugin)
            self.logger.debug(
                "Registered plugin",
                plugin=plugin.name,
                hooks=sorted(hook.value for hook in plugin.hooks),
                position=len(self._plugins) - 1
            )

    def public_api(self) -> dict[str, Any]:
        """Public APIs exposed by plugins, keyed by plugin name."""
        return {plugin.name: plugin.api for plugin in self._plugins if plugin.api is not None}

    async def reduce(self, hook: PluginHook, *args: Any) -> None:
        """Invoke every plugin's handler for a side-effect hook."""
        if hook in VETO_HOOKS:
            raise ValueError(f"{hook.value} is a veto hook, use skip_reduce")

        for plugin in self._plugins:
            handler = plugin.handler(hook)
            if handler is None:
                continue
            await _call(handler, *args)

    async def skip_reduce(self, hook: PluginHook, *args: Any) -> bool:
        """
        Invoke handlers of a veto hook until one asks to skip.

        Returns:
            True if a plugin vetoed the action
        """
        if hook not in VETO_HOOKS:
            raise ValueError(f"{hook.value} is not a veto hook, use reduce")

        for plugin in self._plugins:
            handler = plugin.handler(hook)
            if handler is None:
                continue
            if await _call(handler, *args):
                self.logger.debug("Plugin vetoed action", plugin=plugin.name, hook=hook.value)
                return True

        return False


async def _call(handler: HookHandler, *args: Any) -> Any:
    result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
