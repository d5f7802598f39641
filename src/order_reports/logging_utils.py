"""
Logging helpers for report discovery and streaming.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Union

LOGGER_NAMESPACE = "order_reports"


class LogLevel(str, Enum):
    """Levels a pipeline can be asked to log at. `NONE` silences it."""
    NONE = "NONE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @classmethod
    def parse(cls, raw: str | LogLevel) -> LogLevel:
        if isinstance(raw, LogLevel):
            return raw
        try:
            return cls(raw.strip().upper())
        except ValueError:
            raise ValueError(f"Unknown log level {raw!r}. Allowed values: {[lv.value for lv in cls]}.")

    def to_logging(self) -> int:
        if self is LogLevel.NONE:
            return logging.CRITICAL + 1
        return getattr(logging, self.value)


class LevelAdapter(logging.LoggerAdapter):
    """
    A view of a shared logger with a level of its own.

    Records below `level` are dropped here, so two adapters over the same logger never
    change each other's output.
    """

    def __init__(self, logger: logging.Logger, level: int) -> None:
        super().__init__(logger, {})
        self.level = level

    def isEnabledFor(self, level: int) -> bool:
        return level >= self.level and self.logger.isEnabledFor(level)

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        return msg, kwargs


LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


def create_logger(level: LogLevel | str = LogLevel.NONE, *, name: str = "pipeline") -> LevelAdapter:
    """
    Return a logger under the `order_reports` namespace that only emits at `level` and above.

    The level lives on the returned adapter, not on the shared named logger, which is left
    open at DEBUG. A `NullHandler` is attached so nothing is printed unless the application
    configures handlers of its own.
    """
    logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
    if logger.level == logging.NOTSET:
        logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    return LevelAdapter(logger, LogLevel.parse(level).to_logging())


def log_event(
    logger: LoggerLike,
    level: int,
    event: str,
    *,
    exc_info: bool = False,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True), exc_info=exc_info)
