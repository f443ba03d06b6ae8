"""
Record formatters and color utilities.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional

import structlog

from .exceptions import ConfigurationError, InvalidLevel, InvalidScope
from .levels import LogLevel, parse_level
from .records import LogRecord, error_message, error_name, error_stack, error_to_string
from .sinks import orjson_dumps

Interpolator = Callable[[str, Any], str]

# =============================================================================
# Colors
# =============================================================================

DEFAULT_COLOR_MAP: dict[str, str] = {
    LogLevel.TRACE.name: "#636363",
    LogLevel.DEBUG.name: "#636363",
    LogLevel.WARN.name: "#fff200",
    LogLevel.ERROR.name: "#ff2414",
}

ANSI_RESET = "\033[0m"

_HEX_COLOR = re.compile(r"^#?(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def hex_to_ansi(token: str) -> str:
    """Convert ``#rgb`` / ``#rrggbb`` into a 24-bit foreground escape."""
    if not isinstance(token, str) or not _HEX_COLOR.match(token):
        raise ValueError(f"not a hex color: {token!r}")
    digits = token.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return f"\033[38;2;{r};{g};{b}m"


def colorize(text: str, token: str) -> str:
    """Wrap text in the escape for a hex color token."""
    return f"{hex_to_ansi(token)}{text}{ANSI_RESET}"


def _compile_colors(colors: Any) -> dict[str, str]:
    if colors is None:
        raise ConfigurationError(field="colors", reason="no color map provided")
    if not isinstance(colors, Mapping):
        raise ConfigurationError(field="colors", reason="expected a mapping of level name to hex color")
    compiled: dict[str, str] = {}
    for level, token in colors.items():
        try:
            name = parse_level(level).name
        except InvalidLevel as exc:
            raise ConfigurationError(field="colors", reason=str(exc)) from exc
        try:
            compiled[name] = hex_to_ansi(token)
        except ValueError as exc:
            raise ConfigurationError(field="colors", reason=f"{name}: {exc}") from exc
    return compiled


# =============================================================================
# Interpolation strategies
# =============================================================================


_PLACEHOLDER = re.compile(r"%([sdifjoO%])")


def _as_number(value: Any, cast: Callable[[Any], Any]) -> str:
    try:
        return str(cast(value))
    except (TypeError, ValueError, OverflowError):
        return "NaN"


def _convert(spec: str, arg: Any) -> str:
    if spec in "di":
        return _as_number(arg, int)
    if spec == "f":
        return _as_number(arg, float)
    if spec == "j":
        return orjson_dumps(arg)
    if spec in "oO":
        return repr(arg)
    return str(arg)


def interpolate_positional(message: str, params: Any) -> str:
    """Positional ``%s``/``%d``/``%i``/``%f``/``%j``/``%o`` substitution.

    Placeholders consume arguments left to right; ``%%`` collapses to ``%``;
    any other ``%`` is literal. Placeholders left without an argument stay
    as written and surplus arguments are appended space-separated. Mapping
    params only fill ``%(name)s`` placeholders.
    """
    if params is None:
        return message
    if isinstance(params, Mapping):
        if not params or "%(" not in message:
            return message
        try:
            return message % params
        except (KeyError, TypeError, ValueError):
            return message
    if isinstance(params, Sequence) and not isinstance(params, (str, bytes)):
        args = list(params)
    else:
        args = [params]
    if not args:
        return message

    remaining = iter(args)
    used = 0

    def substitute(match: re.Match[str]) -> str:
        nonlocal used
        spec = match.group(1)
        if spec == "%":
            return "%"
        if used == len(args):
            return match.group(0)
        used += 1
        return _convert(spec, next(remaining))

    text = _PLACEHOLDER.sub(substitute, message)
    return " ".join([text, *(str(arg) for arg in remaining)])


def append_key_values(message: str, params: Any) -> str:
    """Append mapping params as ``key=value`` pairs."""
    if isinstance(params, Mapping) and params:
        pairs = " ".join(f"{key}={value}" for key, value in params.items())
        return f"{message} {pairs}"
    return interpolate_positional(message, params)


# =============================================================================
# Text Formatter
# =============================================================================


class TextFormatter:
    """Human-readable line: ``[<scope>: ]<LEVEL>: <message>[ <Name>: <error>]``.

    ``render`` produces the plain line; calling the formatter also applies the
    level color, when the color map has one for the record's level name.
    """

    def __init__(
        self,
        scope: Optional[str] = None,
        colors: Mapping[str, str] = DEFAULT_COLOR_MAP,
        interpolate: Interpolator = interpolate_positional,
    ) -> None:
        if scope is not None and (not isinstance(scope, str) or scope == ""):
            raise InvalidScope(scope=scope)
        if not callable(interpolate):
            raise ConfigurationError(field="interpolate", reason="expected a callable")

        self.scope = scope
        self.interpolate = interpolate
        self._colors = _compile_colors(colors)

    def render(self, record: LogRecord) -> str:
        msg = self.interpolate(record.message, record.params)
        error_text = f" {error_to_string(record.error)}" if record.error is not None else ""
        line = f"{record.level.name}: {msg}{error_text}"
        return f"{self.scope}: {line}" if self.scope else line

    def __call__(self, record: LogRecord) -> str:
        line = self.render(record)
        escape = self._colors.get(record.level.name)
        if escape is None:
            return line
        return f"{escape}{line}{ANSI_RESET}"


# =============================================================================
# JSON Formatter
# =============================================================================


class JsonFormatter:
    """Structured mapping, ready for a JSON sink.

    Key groups are applied in order and later groups override earlier ones:
    level/timestamp/message, params, error fields, context.
    """

    def __init__(self) -> None:
        self._stamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    def __call__(self, record: LogRecord) -> dict[str, Any]:
        data: dict[str, Any] = {"level": record.level.name}
        data = self._stamper(None, record.level.name.lower(), data)
        data["message"] = record.message

        if isinstance(record.params, Mapping):
            data.update(record.params)
        elif record.params is not None:
            data["params"] = record.params

        if record.error is not None:
            data.update(
                {
                    "errorName": error_name(record.error),
                    "errorMessage": error_message(record.error),
                    "stackTrace": error_stack(record.error),
                }
            )

        data.update(record.context)
        return data
