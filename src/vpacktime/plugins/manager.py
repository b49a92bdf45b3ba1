"""Codec module discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints in
the ``vpacktime.modules`` group. The built-in :class:`TemporalModule` is
always registered first and cannot be blocked.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable
from datetime import tzinfo

import pluggy

from vpacktime.codecs.registry import CodecRegistry
from vpacktime.plugins.builtins.temporal import TemporalModule
from vpacktime.plugins.hookspecs import VpacktimeHookSpec

PROJECT_NAME = "vpacktime"
ENTRY_POINT_GROUP = "vpacktime.modules"
TEMPORAL_MODULE_NAME = "temporal"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages codec module discovery, loading, and codec registration."""

    def __init__(self, *, builtins: bool = True) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(VpacktimeHookSpec)
        self._builtin: set[str] = set()
        self._loaded: bool = False
        if builtins:
            self.register_plugin(TemporalModule(), name=TEMPORAL_MODULE_NAME, builtin=True)

    def discover_and_load(self, *, disabled: Iterable[str] = ()) -> list[str]:
        """Discover codec modules from entry points.

        Names in *disabled* are blocked before loading. Built-in modules
        cannot be disabled.

        Returns a list of loaded module names.
        """
        for name in disabled:
            if name in self._builtin:
                logger.warning("Built-in module %s cannot be disabled", name)
                continue
            self._pm.set_blocked(name)
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(
        self,
        plugin: object,
        name: str | None = None,
        *,
        builtin: bool = False,
    ) -> None:
        """Register a module instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if builtin:
            self._builtin.add(resolved_name)
        logger.debug("Registered module: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a module instance."""
        name = self._pm.get_name(plugin)
        self._pm.unregister(plugin)
        self._builtin.discard(name or "")

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered modules."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered modules."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Codec registration
    # ------------------------------------------------------------------

    def register_codecs(self, registry: CodecRegistry, default_zone: tzinfo) -> None:
        """Run every module's ``register_codecs`` hook against *registry*.

        Built-in modules run first and their errors propagate. A failing
        third-party module is logged and skipped; codecs it registered before
        failing stay registered.
        """
        plugins = sorted(
            self._pm.get_plugins(),
            key=lambda p: (self._pm.get_name(p) not in self._builtin, self._pm.get_name(p) or ""),
        )
        for plugin in plugins:
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            hook = getattr(plugin, "register_codecs", None)
            if hook is None:
                continue
            if plugin_name in self._builtin:
                hook(registry=registry, default_zone=default_zone)
                continue
            try:
                hook(registry=registry, default_zone=default_zone)
            except Exception:
                logger.warning(
                    "Failed to register codecs from module %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            logger.debug("Registered codecs from module %s", plugin_name)

    # ------------------------------------------------------------------
    # Entry-point normalisation
    # ------------------------------------------------------------------

    def _normalize_plugin_instances(self) -> None:
        """Replace registered module classes with instantiated objects.

        Entry-point loading may register a module class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point module %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point module: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("vpacktime")`` sets a ``vpacktime_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "vpacktime_impl", None):
                return True
        return False
