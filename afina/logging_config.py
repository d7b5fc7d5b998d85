"""Configuration of log appenders and loggers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class AppenderType(Enum):
    """Kind of outbound channel for log messages."""

    STDOUT = "stdout"
    STDERR = "stderr"
    FILE = "file"
    DAILY = "daily"
    SIZED = "sized"
    SYSLOG = "syslog"


class Level(IntEnum):
    """Log levels, from most to least severe."""

    CRITICAL = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


@dataclass
class Appender:
    """Outbound channel for log messages.

    Which fields matter depends on ``type``: ``color`` for console output,
    ``file`` for file-based appenders, ``suffix`` and rotation settings for
    rotating appenders, ``ident``/``option``/``facility`` for syslog.
    """

    type: AppenderType
    color: bool = False
    file: str = ""
    suffix: str = ""
    rotate_at_hours: int = -1
    rotate_at_mins: int = -1
    rotate_at_size: int = 0
    history_to_keep: int = 0
    ident: str = ""
    option: int = 0
    facility: int = 0


@dataclass
class LoggerConfig:
    """A logger: its threshold level, record format and target appenders."""

    level: Level = Level.INFO
    format: str = ""
    appenders: list[str] = field(default_factory=list)


@dataclass
class Config:
    """Logging layer configuration: appenders and loggers by name."""

    appenders: dict[str, Appender] = field(default_factory=dict)
    loggers: dict[str, LoggerConfig] = field(default_factory=dict)