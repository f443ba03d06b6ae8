"""
Host adapter.

Validates that a host object satisfies the structural contract (a callable
logging hook and an exception class) and builds a ``PluginLogger`` that writes
through the hook and raises the host's error class from ``throw``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .exceptions import InvalidHost, InvalidScope, MissingCapability, PluginError
from .formatters import DEFAULT_COLOR_MAP, TextFormatter
from .levels import LevelLike, LogLevel
from .logger import Formatter, Logger
from .records import build_record
from .sinks import HostSink, Sink, StdioSink, orjson_dumps, resolve_attribute

DEFAULT_LOG_HOOK = "cli.log"
DEFAULT_ERROR_CLASS = "classes.Error"


class PluginLogger(Logger):
    """Logger with a log-and-abort ``throw`` primitive."""

    def __init__(self, *, error_type: type[BaseException] = PluginError, **options: Any) -> None:
        super().__init__(**options)
        self._error_type = error_type

    @property
    def error_type(self) -> type[BaseException]:
        return self._error_type

    def throw(self, message: Any, params: Any = None) -> None:
        """Raise ``error_type`` carrying the formatted ERROR line.

        Never gated: neither the threshold nor the verbose flag applies. The
        line is rendered without color.
        """
        record = build_record(LogLevel.ERROR, message, params, None, self._context)
        render = getattr(self._formatter, "render", self._formatter)
        text = render(record)
        if isinstance(text, Mapping):
            text = orjson_dumps(text)
        raise self._error_type(text)

    def _clone_kwargs(self, context: Mapping[str, Any]) -> dict[str, Any]:
        kwargs = super()._clone_kwargs(context)
        kwargs["error_type"] = self._error_type
        return kwargs


def _check_scope(scope: Any) -> None:
    if scope is not None and (not isinstance(scope, str) or scope == ""):
        raise InvalidScope(scope=scope)


def ensure_valid_host(
    host: Any,
    *,
    log_hook: str = DEFAULT_LOG_HOOK,
    error_class: str = DEFAULT_ERROR_CLASS,
) -> type[BaseException]:
    """Check the host contract once; return the host's error class."""
    if host is None:
        raise InvalidHost()

    try:
        hook = resolve_attribute(host, log_hook)
    except AttributeError:
        hook = None
    if hook is None or not callable(hook):
        raise MissingCapability(capability=log_hook, expected="a callable logging hook")

    try:
        error_type = resolve_attribute(host, error_class)
    except AttributeError:
        error_type = None
    if not isinstance(error_type, type) or not issubclass(error_type, BaseException):
        raise MissingCapability(capability=error_class, expected="an exception class")

    return error_type


def wrap(
    host: Any,
    scope: Optional[str] = None,
    *,
    level: LevelLike = LogLevel.TRACE,
    verbose: bool = False,
    context: Optional[Mapping[str, Any]] = None,
    colors: Mapping[str, str] = DEFAULT_COLOR_MAP,
    formatter: Optional[Formatter] = None,
    sink: Optional[Sink] = None,
    log_hook: str = DEFAULT_LOG_HOOK,
    error_class: str = DEFAULT_ERROR_CLASS,
) -> PluginLogger:
    """Validate ``host`` and return a logger bound to it.

    Args:
        host: Object exposing ``log_hook`` and ``error_class`` attribute paths.
        scope: Optional label prefixed to every line, usually the plugin name.
        level: Initial threshold. Defaults to TRACE so ``verbose`` alone
            decides whether TRACE/DEBUG output appears.
        verbose: Explicit debug flag; both it and the threshold must allow
            TRACE/DEBUG emission.
        colors: Level name to hex color map for the default text formatter.
        formatter: Replaces the default ``TextFormatter``.
        sink: Replaces the default ``HostSink``.
    """
    error_type = ensure_valid_host(host, log_hook=log_hook, error_class=error_class)
    _check_scope(scope)

    return PluginLogger(
        level=level,
        context=context,
        formatter=formatter if formatter is not None else TextFormatter(scope, colors),
        sink=sink if sink is not None else HostSink(host, log_hook),
        verbose=verbose,
        error_type=error_type,
    )


def create_console_logger(
    scope: Optional[str] = None,
    *,
    level: LevelLike = LogLevel.DEBUG,
    verbose: bool = False,
    context: Optional[Mapping[str, Any]] = None,
    colors: Mapping[str, str] = DEFAULT_COLOR_MAP,
    formatter: Optional[Formatter] = None,
    sink: Optional[Sink] = None,
    error_type: type[BaseException] = PluginError,
) -> PluginLogger:
    """Host-less logger printing text lines to stdout."""
    _check_scope(scope)
    return PluginLogger(
        level=level,
        context=context,
        formatter=formatter if formatter is not None else TextFormatter(scope, colors),
        sink=sink if sink is not None else StdioSink(),
        verbose=verbose,
        error_type=error_type,
    )
