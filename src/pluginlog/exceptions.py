"""
Unified exception hierarchy for pluginlog.

Validation failures are split by what they validate: levels, hosts, scopes
and pipeline configuration. All of them are raised synchronously at
construction time or at the first offending call, never retried.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LoggingError(Exception):
    """Base class for every pluginlog validation error.

    Carries a stable ``code`` and a ``details`` mapping so callers can catch
    the whole family at once and still branch on the precise failure.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class InvalidLevel(LoggingError):
    """Raised for a severity name outside the level registry."""

    def __init__(self, *, level: Any, valid: tuple[str, ...]) -> None:
        message = f"Invalid log level '{level}', expected one of {', '.join(valid)}"
        super().__init__(
            message,
            code="INVALID_LEVEL",
            details={"level": str(level), "valid": list(valid)},
        )


class ConfigurationError(LoggingError):
    """Raised when a formatter, color map or sink is malformed."""

    def __init__(self, *, field: str, reason: str) -> None:
        message = f"Invalid {field} configuration: {reason}"
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details={"field": field, "reason": reason},
        )


class InvalidScope(LoggingError):
    """Raised when a scope label is present but not a non-empty string."""

    def __init__(self, *, scope: Any) -> None:
        message = f"Scope expected to be a non-empty string, got {scope!r}."
        super().__init__(message, code="INVALID_SCOPE", details={"scope": repr(scope)})


# ================================
# Host errors
# ================================


class HostError(LoggingError):
    """Base class for host contract violations."""

    pass


class InvalidHost(HostError):
    """Raised when no host object is given at all."""

    def __init__(self) -> None:
        super().__init__("No host specified.", code="INVALID_HOST")


class MissingCapability(HostError):
    """Raised when the host lacks a required hook or error class.

    ``capability`` is the dotted attribute path that failed, e.g. ``cli.log``.
    """

    def __init__(self, *, capability: str, expected: str) -> None:
        message = f"Host is missing capability '{capability}': expected {expected}."
        super().__init__(
            message,
            code="MISSING_CAPABILITY",
            details={"capability": capability, "expected": expected},
        )
        self.capability = capability


class PluginError(Exception):
    """Raised by ``throw`` on loggers that are not bound to a host error class."""

    pass
