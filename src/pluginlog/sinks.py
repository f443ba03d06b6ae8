"""
Log sink abstractions and concrete implementations.

A sink is any callable taking one formatted unit (a string from a text
formatter, a mapping from a structured one). ``BaseSink`` gives the reference
sinks a common shape; plain functions work just as well.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Callable, TextIO

import orjson

from .exceptions import ConfigurationError

Sink = Callable[[Any], None]


def orjson_dumps(v: Any, *, default: Any = str) -> str:
    """Fast JSON serialization using orjson; unknown values are stringified."""
    option = orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC | orjson.OPT_NON_STR_KEYS
    return orjson.dumps(v, default=default, option=option).decode()


def resolve_attribute(obj: Any, path: str) -> Any:
    """Follow a dotted attribute path, raising ``AttributeError`` on a gap."""
    for part in path.split("."):
        obj = getattr(obj, part)
    return obj


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def emit(self, output: Any) -> None:
        """Write one formatted unit."""
        ...

    def close(self) -> None:
        pass

    def __call__(self, output: Any) -> None:
        self.emit(output)


class StdioSink(BaseSink):
    """Line-oriented stream sink (default: stdout).

    Mappings are serialized to JSON so the sink accepts either formatter.
    """

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys and redirected stdout are honored.
        return self._stream or sys.stdout

    def emit(self, output: Any) -> None:
        text = orjson_dumps(output) if isinstance(output, Mapping) else str(output)
        self.stream.write(text + "\n")
        self.stream.flush()


class JsonSink(StdioSink):
    """Writes each formatted unit as a single JSON line. No coloring."""

    def emit(self, output: Any) -> None:
        self.stream.write(orjson_dumps(output) + "\n")
        self.stream.flush()


class CallbackSink(BaseSink):
    """Forwards the formatted unit to an arbitrary callable."""

    def __init__(self, callback: Callable[[Any], Any]):
        if not callable(callback):
            raise ConfigurationError(field="sink", reason="expected a callable")
        self._callback = callback

    def emit(self, output: Any) -> None:
        self._callback(output)


class HostSink(BaseSink):
    """Writes to a host's logging hook.

    The hook is looked up on every write, so replacing it on the host after
    the logger was built takes effect immediately. Host hooks take strings,
    so mappings are serialized to JSON first.
    """

    def __init__(self, host: Any, hook_path: str = "cli.log"):
        self._host = host
        self._hook_path = hook_path

    def emit(self, output: Any) -> None:
        hook = resolve_attribute(self._host, self._hook_path)
        hook(orjson_dumps(output) if isinstance(output, Mapping) else output)
