"""
Leveled logging core.

``Logger`` gates calls by rank, builds the record, formats it and hands the
result to the sink. It performs no I/O of its own; every side effect happens
inside the sink.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from .exceptions import ConfigurationError
from .formatters import JsonFormatter
from .levels import VERBOSE_LEVELS, LevelLike, LogLevel, is_at_least, parse_level
from .records import ErrorValue, LogRecord, build_record
from .sinks import JsonSink, Sink

Formatter = Callable[[LogRecord], Any]


class Logger:
    """Leveled logger with a runtime-adjustable threshold.

    Args:
        level: Minimum severity emitted (default INFO).
        context: Static fields attached to every record.
        formatter: ``record -> output``; defaults to ``JsonFormatter``.
        sink: ``output -> None``; defaults to a stdout ``JsonSink``.
        verbose: When false, TRACE and DEBUG calls are dropped regardless of
            the threshold.
    """

    def __init__(
        self,
        *,
        level: LevelLike = LogLevel.INFO,
        context: Optional[Mapping[str, Any]] = None,
        formatter: Optional[Formatter] = None,
        sink: Optional[Sink] = None,
        verbose: bool = True,
    ) -> None:
        formatter = JsonFormatter() if formatter is None else formatter
        sink = JsonSink() if sink is None else sink
        if not callable(formatter):
            raise ConfigurationError(field="formatter", reason="expected a callable")
        if not callable(sink):
            raise ConfigurationError(field="sink", reason="expected a callable")

        self._level = parse_level(level)
        self._context: dict[str, Any] = dict(context or {})
        self._formatter = formatter
        self._sink = sink
        self._verbose = bool(verbose)

    @property
    def context(self) -> Mapping[str, Any]:
        return dict(self._context)

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def verbose(self) -> bool:
        return self._verbose

    def get_level(self) -> LogLevel:
        return self._level

    def set_level(self, level: LevelLike) -> None:
        self._level = parse_level(level)

    def is_enabled_for(self, level: LevelLike) -> bool:
        level = parse_level(level)
        if level in VERBOSE_LEVELS and not self._verbose:
            return False
        return is_at_least(level, self._level)

    def log(
        self,
        level: LevelLike,
        message: Any,
        params: Any = None,
        error: Optional[ErrorValue] = None,
    ) -> None:
        # Suppressed calls must not pay for formatting.
        if not self.is_enabled_for(level):
            return
        record = build_record(level, message, params, error, self._context)
        self._sink(self._formatter(record))

    def trace(self, message: Any, params: Any = None, error: Optional[ErrorValue] = None) -> None:
        self.log(LogLevel.TRACE, message, params, error)

    def debug(self, message: Any, params: Any = None, error: Optional[ErrorValue] = None) -> None:
        self.log(LogLevel.DEBUG, message, params, error)

    def info(self, message: Any, params: Any = None, error: Optional[ErrorValue] = None) -> None:
        self.log(LogLevel.INFO, message, params, error)

    def warn(self, message: Any, params: Any = None, error: Optional[ErrorValue] = None) -> None:
        self.log(LogLevel.WARN, message, params, error)

    warning = warn

    def error(self, message: Any, params: Any = None, error: Optional[ErrorValue] = None) -> None:
        self.log(LogLevel.ERROR, message, params, error)

    def _clone_kwargs(self, context: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "level": self._level,
            "context": context,
            "formatter": self._formatter,
            "sink": self._sink,
            "verbose": self._verbose,
        }

    def bind(self, **context: Any) -> "Logger":
        """Return an independent logger with ``context`` merged in."""
        merged = {**self._context, **context}
        return type(self)(**self._clone_kwargs(merged))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self._level.name}, verbose={self._verbose})"
