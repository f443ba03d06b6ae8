"""
Logging Configuration.

Read once by the outer layer (``pluginlog.core.create_logger``); the logging
core itself never touches the process environment.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InvalidLevel
from .levels import LogLevel, parse_level

_FALSY = {"", "0", "false", "no", "off", "undefined"}


class LogFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


class LoggingSettings(BaseSettings):
    """Logging configuration sourced from ``PLUGINLOG_*`` and ``SLS_DEBUG``."""

    model_config = SettingsConfigDict(
        env_prefix="PLUGINLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    level: Optional[LogLevel] = Field(default=None, description="Minimum severity; None keeps the logger default")
    format: LogFormat = Field(default=LogFormat.TEXT, description="Output format")
    colors: bool = Field(default=True, description="Colorize text output")
    debug: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SLS_DEBUG", "PLUGINLOG_DEBUG"),
        description="Raw debug flag; any non-falsy value enables TRACE/DEBUG output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Optional[LogLevel]:
        if value is None or value == "":
            return None
        try:
            return parse_level(value)
        except InvalidLevel as exc:
            raise ValueError(str(exc)) from exc

    @property
    def verbose(self) -> bool:
        return self.debug is not None and self.debug.strip().lower() not in _FALSY
