"""Structured logging for tree construction.

Records are emitted through the standard ``logging`` module under the
``markup_tree`` hierarchy. Each record carries the emitting component and the
correlation ID of the rendering context it concerns, so the mutations of one
tree can be told apart from those of another built concurrently.
"""

import logging
from typing import Any, Dict, Optional

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CorrelationLogger:
    """Logger tagging records with a component and a correlation ID.

    The correlation ID is fixed at construction for loggers owned by a single
    operation (an adapter, a build call). Module level loggers shared by every
    tree pass ``context=`` instead, and the ID is read from that context.
    """

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _log(
        self,
        level: int,
        message: str,
        context: Any,
        extra: Optional[Dict[str, Any]],
        exc_info: bool,
    ) -> None:
        # Skip building the extra dict for records nobody will see
        if not self.logger.isEnabledFor(level):
            return

        correlation_id = self.correlation_id
        if context is not None:
            correlation_id = getattr(context, "correlation_id", correlation_id)

        fields = {"component": self.component, "correlation_id": correlation_id}
        if extra:
            fields.update(extra)
        self.logger.log(level, message, extra=fields, exc_info=exc_info)

    def debug(
        self,
        message: str,
        context: Any = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log a tree construction detail, such as a move or a resolution."""
        self._log(logging.DEBUG, message, context, extra, False)

    def info(
        self,
        message: str,
        context: Any = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log a completed operation, such as an export."""
        self._log(logging.INFO, message, context, extra, False)

    def error(
        self,
        message: str,
        context: Any = None,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = True,
    ) -> None:
        """Log a failure, with the active traceback by default."""
        self._log(logging.ERROR, message, context, extra, exc_info)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Fixed correlation ID, for loggers owned by one operation
        component: Component name, defaults to the last segment of ``name``
    """
    return CorrelationLogger(name, correlation_id, component)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Set the level of the package logger hierarchy.

    Handlers are left to the application; this only adjusts how much the
    ``markup_tree`` loggers emit.

    Args:
        level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL

    Returns:
        The ``markup_tree`` package logger
    """
    if level not in _VALID_LEVELS:
        raise ValueError(f"logging level must be one of {list(_VALID_LEVELS)}")

    package_logger = logging.getLogger("markup_tree")
    package_logger.setLevel(getattr(logging, level))
    return package_logger
