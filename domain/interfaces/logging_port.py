from typing_extensions import Protocol
from typing import Any


class BoundLogger(Protocol):
    """Logger carrying bank/step context on every event."""

    def debug(self, event: str, **kwargs: Any) -> None: ...

    def info(self, event: str, **kwargs: Any) -> None: ...

    def warning(self, event: str, **kwargs: Any) -> None: ...

    def error(self, event: str, exc_info: bool = False, **kwargs: Any) -> None:
        """
        Log an error event.

        Args:
            event: Snake case event name (e.g. "movements_fetch_failed")
            exc_info: Whether to attach the active exception
            **kwargs: Additional context fields
        """
        ...

    def bind(self, **kwargs: Any) -> "BoundLogger":
        """Return a child logger with extra context fields."""
        ...


class LoggingPort(Protocol):
    """Factory for context-bound loggers."""

    def bind(self, **kwargs: Any) -> BoundLogger:
        """
        Create a bound logger with context.

        Args:
            **kwargs: Context fields to attach (e.g. bank="bbva")

        Returns:
            A bound logger with the specified context
        """
        ...
