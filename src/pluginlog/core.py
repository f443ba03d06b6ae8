"""
Outer factory: reads ``LoggingSettings`` once and builds a plugin logger.
"""

from __future__ import annotations

from typing import Any, Optional

from .config import LogFormat, LoggingSettings
from .formatters import DEFAULT_COLOR_MAP, JsonFormatter
from .host import PluginLogger, create_console_logger, wrap
from .sinks import JsonSink


def create_logger(
    host: Any = None,
    scope: Optional[str] = None,
    *,
    settings: Optional[LoggingSettings] = None,
    **overrides: Any,
) -> PluginLogger:
    """
    Build a logger from environment settings.

    Args:
        host: Host object to wrap; a stdout console logger is built when None.
        scope: Optional label, usually the plugin name.
        settings: Pre-loaded settings; loaded from the environment when None.
        **overrides: Forwarded to ``wrap`` / ``create_console_logger``; they
            win over the settings.
    """
    settings = settings or LoggingSettings()

    options: dict[str, Any] = {
        "verbose": settings.verbose,
        "colors": DEFAULT_COLOR_MAP if settings.colors else {},
    }
    if settings.level is not None:
        options["level"] = settings.level
    if settings.format == LogFormat.JSON:
        options["formatter"] = JsonFormatter()
        if scope:
            options["context"] = {"scope": scope}
        if host is None:
            options["sink"] = JsonSink()
    options.update(overrides)

    if host is None:
        return create_console_logger(scope, **options)
    return wrap(host, scope, **options)
