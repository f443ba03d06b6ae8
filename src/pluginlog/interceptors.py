"""
Interceptors routing structlog and standard library logging into a pluginlog
``Logger``, so a plugin's third-party output goes through the same gate,
formatter and sink as its own calls.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from .levels import LogLevel, from_stdlib
from .logger import Logger

# structlog method name -> level
_METHOD_LEVELS = {
    "trace": LogLevel.TRACE,
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "msg": LogLevel.INFO,
    "warn": LogLevel.WARN,
    "warning": LogLevel.WARN,
    "error": LogLevel.ERROR,
    "err": LogLevel.ERROR,
    "exception": LogLevel.ERROR,
    "critical": LogLevel.ERROR,
    "fatal": LogLevel.ERROR,
    "failure": LogLevel.ERROR,
}


def _exc_from_info(exc_info: Any) -> BaseException | None:
    if isinstance(exc_info, BaseException):
        return exc_info
    if isinstance(exc_info, tuple) and len(exc_info) == 3:
        return exc_info[1]
    if exc_info:
        return sys.exc_info()[1]
    return None


class LoggerRenderer:
    """Final structlog processor forwarding the event to ``target``.

    ``event`` becomes the message, ``exc_info`` the error and every other key
    the params. Raises ``DropEvent`` so the wrapped logger prints nothing.
    """

    def __init__(self, target: Logger) -> None:
        self.target = target

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        level = _METHOD_LEVELS.get(method_name, LogLevel.INFO)
        if "level" in event_dict:
            level = _METHOD_LEVELS.get(str(event_dict.pop("level")).lower(), level)

        message = event_dict.pop("event", "")
        exc_info = event_dict.pop("exc_info", None)
        if exc_info is None and method_name == "exception":
            exc_info = True
        error = _exc_from_info(exc_info)

        params = {k: v for k, v in event_dict.items() if not k.startswith("_")}
        self.target.log(level, message, params or None, error)
        raise structlog.DropEvent


def configure_structlog(target: Logger) -> None:
    """Route every structlog logger into ``target``."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            LoggerRenderer(target),
        ],
        wrapper_class=structlog.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


class ForwardingHandler(logging.Handler):
    """
    Redirect standard library logging records to a pluginlog ``Logger``.
    Level filtering is left to the target's own threshold.
    """

    def __init__(self, target: Logger) -> None:
        super().__init__(level=logging.NOTSET)
        self.target = target
        # logger name -> (level, propagate) before interception
        self.previous: dict[str | None, tuple[int, bool]] = {}

    def emit(self, record: logging.LogRecord) -> None:
        try:
            error = record.exc_info[1] if record.exc_info else None
            self.target.log(
                from_stdlib(record.levelno),
                record.getMessage(),
                {"logger": record.name},
                error,
            )
        except Exception:
            self.handleError(record)


def intercept_stdlib_loggers(target: Logger, *names: str) -> ForwardingHandler:
    """Attach a ``ForwardingHandler`` to the named loggers (root when none).

    Each logger's level is lowered to 1 and named loggers stop propagating.
    This mutates process-wide ``logging`` state; the previous level and
    propagate flag are kept on the handler and ``release_stdlib_loggers``
    puts them back.
    """
    handler = ForwardingHandler(target)
    for name in names or (None,):
        lg = logging.getLogger(name)
        handler.previous[name] = (lg.level, lg.propagate)
        lg.handlers = [h for h in lg.handlers if not isinstance(h, ForwardingHandler)]
        lg.addHandler(handler)
        # Let every record through; the target's threshold does the gating.
        lg.setLevel(1)
        if name:
            lg.propagate = False
    return handler


def release_stdlib_loggers(handler: ForwardingHandler) -> None:
    """Detach ``handler`` and restore the loggers it intercepted."""
    for name, (level, propagate) in handler.previous.items():
        lg = logging.getLogger(name)
        lg.removeHandler(handler)
        lg.setLevel(level)
        lg.propagate = propagate
    handler.previous.clear()
