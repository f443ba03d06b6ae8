"""
Severity registry.

The ordering table below is the single source of truth for gating. Levels are
compared by rank only, never by name.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Union

from .exceptions import InvalidLevel


class LogLevel(IntEnum):
    """Closed set of severities; the member value is the rank."""

    TRACE = 10
    DEBUG = 20
    INFO = 30
    WARN = 40
    ERROR = 50

    def __str__(self) -> str:
        return self.name


LevelLike = Union[LogLevel, str]

LEVEL_NAMES: tuple[str, ...] = tuple(level.name for level in LogLevel)

# Silenced unless the verbose flag is set, whatever the threshold says.
VERBOSE_LEVELS = frozenset({LogLevel.TRACE, LogLevel.DEBUG})


def parse_level(level: LevelLike) -> LogLevel:
    """Resolve a member or a (case-insensitive) level name."""
    if isinstance(level, LogLevel):
        return level
    if isinstance(level, str):
        member = LogLevel.__members__.get(level.strip().upper())
        if member is not None:
            return member
    raise InvalidLevel(level=level, valid=LEVEL_NAMES)


def rank_of(level: LevelLike) -> int:
    return int(parse_level(level))


def is_at_least(candidate: LevelLike, threshold: LevelLike) -> bool:
    return rank_of(candidate) >= rank_of(threshold)


def from_stdlib(levelno: int) -> LogLevel:
    """Map a stdlib ``logging`` level number onto the registry."""
    if levelno < logging.DEBUG:
        return LogLevel.TRACE
    if levelno < logging.INFO:
        return LogLevel.DEBUG
    if levelno < logging.WARNING:
        return LogLevel.INFO
    if levelno < logging.ERROR:
        return LogLevel.WARN
    return LogLevel.ERROR
