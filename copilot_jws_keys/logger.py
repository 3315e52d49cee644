# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Structured logging for key operations.

Key modules log rejected keys at WARNING and routine events (generation,
failed verification) at DEBUG, each with keyword fields. Private key material
and signature bytes are never passed to a logger.
"""

import json
import logging
import sys
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class Logger(ABC):
    """Logger taking a message plus keyword fields."""

    @abstractmethod
    def _log(self, level: str, message: str, **fields: Any) -> None:
        pass

    def warning(self, message: str, **fields: Any) -> None:
        self._log("WARNING", message, **fields)

    def debug(self, message: str, **fields: Any) -> None:
        self._log("DEBUG", message, **fields)


class StdoutLogger(Logger):
    """Writes one JSON object per record to stdout.

    Records that pass the level are also handed to the stdlib logger of the
    same name, so handlers configured by the host application see them.
    """

    def __init__(self, level: str = "INFO", name: str = "copilot_jws_keys"):
        """
        Raises:
            ValueError: If level is not DEBUG, INFO, WARNING or ERROR
        """
        self.level = level.upper()
        self.name = name

        if self.level not in _LEVELS:
            raise ValueError(f"Invalid log level: {level}. Must be one of {list(_LEVELS)}")

        self._stdlib_logger = logging.getLogger(name)

    def _log(self, level: str, message: str, **fields: Any) -> None:
        if _LEVELS[level] < _LEVELS[self.level]:
            return

        record: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "logger": self.name,
            "message": message,
        }
        if fields:
            record["extra"] = fields

        print(json.dumps(record, default=str), file=sys.stdout, flush=True)
        self._stdlib_logger.log(_LEVELS[level], message, extra={"extra": fields} if fields else None)


class SilentLogger(Logger):
    """Keeps every record in ``logs`` regardless of level."""

    def __init__(self, level: str = "INFO", name: str = "copilot_jws_keys"):
        self.level = level.upper()
        self.name = name
        self.logs: list[dict[str, Any]] = []

    def _log(self, level: str, message: str, **fields: Any) -> None:
        self.logs.append({"level": level, "message": message, "extra": fields})

    def has_log(self, message: str, level: str | None = None) -> bool:
        """Check whether a message (substring match) was logged at ``level``."""
        return any(
            message in log["message"] and level in (None, log["level"])
            for log in self.logs
        )


def create_logger(
    logger_type: str = "stdout",
    level: str = "INFO",
    name: str = "copilot_jws_keys",
) -> Logger:
    """Create a logger instance.

    Args:
        logger_type: "stdout" or "silent"
        level: DEBUG, INFO, WARNING or ERROR
        name: Logger name, also used for the mirrored stdlib logger

    Raises:
        ValueError: If logger_type or level is not recognized
    """
    logger_type = logger_type.lower()
    if logger_type == "stdout":
        return StdoutLogger(level=level, name=name)
    if logger_type == "silent":
        return SilentLogger(level=level, name=name)
    raise ValueError(f"Unknown logger_type: {logger_type}. Must be one of: stdout, silent")
