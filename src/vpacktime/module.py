"""One-call wiring of codec modules into a registry.

Resolves the default projection zone once, loads codec modules, and runs
their registration hooks. The resulting registry is read-only in practice
and safe to share across threads.
"""

from __future__ import annotations

import logging

from vpacktime.codecs.registry import CodecRegistry
from vpacktime.config.logging import configure_logging
from vpacktime.config.settings import CodecSettings
from vpacktime.domain.zones import resolve_zone
from vpacktime.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


def create_registry(
    settings: CodecSettings | None = None,
    *,
    plugin_manager: PluginManager | None = None,
) -> CodecRegistry:
    """Build a registry holding every temporal codec.

    When *settings* enable ``verbose`` or ``log_json``, vpacktime log output is
    set up first with :func:`configure_logging`; otherwise logging is left to
    the host application.

    Args:
        settings: Loaded settings; discovered via :meth:`CodecSettings.load`
            when omitted.
        plugin_manager: Manager to register through. A fresh one with the
            built-in temporal module is used when omitted.
    """
    settings = settings or CodecSettings.load()
    if settings.verbose or settings.log_json:
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    default_zone = resolve_zone(settings.temporal.default_zone)

    pm = plugin_manager or PluginManager()
    if settings.plugins.discover and not pm.is_loaded:
        pm.discover_and_load(disabled=settings.plugins.disabled)

    registry = CodecRegistry()
    pm.register_codecs(registry, default_zone)
    logger.debug(
        "Codec registry ready: %d kinds, modules=%s",
        len(registry.kinds),
        pm.list_plugin_names(),
    )
    return registry
