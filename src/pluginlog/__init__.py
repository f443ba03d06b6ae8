"""
Pluggable structured logging for host-tool plugins.

Provides a leveled logger with a pluggable output pipeline:
- formatters: colorized text lines or JSON-ready mappings
- sinks: stdout, JSON lines, callbacks, or a host's logging hook
- host adapter: validates a host's logging hook and error class, adds ``throw``

Design Pattern: Strategy Pattern for formatter and sink abstraction.
Library: structlog + orjson for timestamps, interop and JSON serialization.
"""

from .core import create_logger
from .exceptions import (
    ConfigurationError,
    HostError,
    InvalidHost,
    InvalidLevel,
    InvalidScope,
    LoggingError,
    MissingCapability,
    PluginError,
)
from .formatters import DEFAULT_COLOR_MAP, JsonFormatter, TextFormatter
from .host import PluginLogger, create_console_logger, ensure_valid_host, wrap
from .levels import LogLevel
from .logger import Logger
from .records import LogRecord, build_record

__all__ = [
    "DEFAULT_COLOR_MAP",
    "ConfigurationError",
    "HostError",
    "InvalidHost",
    "InvalidLevel",
    "InvalidScope",
    "JsonFormatter",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LoggingError",
    "MissingCapability",
    "PluginError",
    "PluginLogger",
    "TextFormatter",
    "build_record",
    "create_console_logger",
    "create_logger",
    "ensure_valid_host",
    "wrap",
]
