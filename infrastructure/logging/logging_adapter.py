"""
Logging adapter that implements the LoggingPort protocol on top of structlog.
"""
from typing import Any
from infrastructure.logging.structlog_logs import logger as structlog_logger


class StructlogBoundLogger:
    """Thin wrapper exposing a structlog bound logger as a BoundLogger."""

    def __init__(self, bound_logger):
        self._logger = bound_logger

    def debug(self, event: str, **kwargs: Any) -> None:
        self._logger.debug(event, **kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        self._logger.info(event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._logger.warning(event, **kwargs)

    def error(self, event: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._logger.error(event, exc_info=exc_info, **kwargs)

    def bind(self, **kwargs: Any) -> "StructlogBoundLogger":
        return StructlogBoundLogger(self._logger.bind(**kwargs))


class LoggingAdapter:
    """
    Adapter that implements LoggingPort for structured JSON logging.

    Every logger it hands out is bound to the given context, so adapters
    can tag all their events with the bank they talk to.
    """

    def bind(self, **kwargs: Any) -> StructlogBoundLogger:
        return StructlogBoundLogger(structlog_logger.bind(**kwargs))
