"""
ATOL Online — Logging sink
Wraps an optional stdlib logger; without one every event is dropped.
"""

import logging
from typing import Optional, Union

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


class EventLogger:
    """
    Leveled log sink used by the client.

    Messages are prefixed "Atol Online" and use %-style arguments so the
    formatting is deferred to the logging framework.
    """

    PREFIX = "Atol Online"

    def __init__(self, logger: Optional[LoggerLike] = None):
        self.logger = logger

    def log(self, level: int, message: str, *args) -> None:
        if self.logger is None:
            return
        self.logger.log(level, f"{self.PREFIX} {message}", *args)

    def debug(self, message: str, *args) -> None:
        self.log(logging.DEBUG, message, *args)

    def warning(self, message: str, *args) -> None:
        self.log(logging.WARNING, message, *args)
