"""
Log record construction and the error capability.

A logging call's second positional argument is either structured params or an
attached error. ``build_record`` resolves that ambiguity with an explicit
runtime check against the error capability.

Caveat: any object exposing ``name``, ``message`` and ``stack`` attributes
satisfies ``ErrorLike`` and is treated as an error, even if it was meant as
params. Pass such objects through the explicit ``error`` argument or wrap
them in a mapping.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from .levels import LevelLike, LogLevel, parse_level


@runtime_checkable
class ErrorLike(Protocol):
    """Structural error shape for objects that are not Python exceptions."""

    name: str
    message: str
    stack: str


ErrorValue = Union[BaseException, ErrorLike]


def is_error(value: Any) -> bool:
    return isinstance(value, BaseException) or isinstance(value, ErrorLike)


def error_name(error: ErrorValue) -> str:
    if isinstance(error, BaseException):
        return type(error).__name__
    return str(error.name)


def error_message(error: ErrorValue) -> str:
    if isinstance(error, BaseException):
        return str(error)
    return str(error.message)


def error_stack(error: ErrorValue) -> str:
    if isinstance(error, BaseException):
        return "".join(traceback.format_exception(error)).rstrip()
    return str(error.stack)


def error_to_string(error: ErrorValue) -> str:
    """Render ``<Name>: <message>``, or just the name when there is no message."""
    name = error_name(error)
    message = error_message(error)
    return f"{name}: {message}" if message else name


@dataclass(frozen=True)
class LogRecord:
    """Normalized unit produced per logging call."""

    level: LogLevel
    message: str
    params: Any = None
    error: Optional[ErrorValue] = None
    context: Mapping[str, Any] = field(default_factory=dict)


def build_record(
    level: LevelLike,
    message: Any,
    params: Any = None,
    error: Optional[ErrorValue] = None,
    context: Optional[Mapping[str, Any]] = None,
) -> LogRecord:
    """Build a record, moving an error passed as ``params`` into ``error``.

    An explicit ``error`` always wins and leaves ``params`` untouched.
    """
    if error is None and is_error(params):
        params, error = None, params

    return LogRecord(
        level=parse_level(level),
        message=str(message),
        params=params,
        error=error,
        context=dict(context or {}),
    )
