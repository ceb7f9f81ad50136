"""Diagnostic sink backed by the standard `logging` module."""

from __future__ import annotations

import logging


class LoggerSink:
    """Emit store diagnostics through a `logging.Logger`.

    Traces are logged at `DEBUG`, failures at `ERROR` with their traceback.
    Messages emitted inside a group are indented one level per open group.
    """

    def __init__(self: LoggerSink, logger: logging.Logger | None = None) -> None:
        """Create a sink writing to `logger`, or to the `keyed_store` logger."""
        self.logger = logger or logging.getLogger('keyed_store')
        self._depth = 0

    def _indent(self: LoggerSink, message: str) -> str:
        return '  ' * self._depth + message

    def trace(self: LoggerSink, message: str, *args: object) -> None:
        """Log a trace message."""
        self.logger.debug(self._indent(message), *args)

    def error(
        self: LoggerSink,
        message: str,
        *args: object,
        exc_info: BaseException | None = None,
    ) -> None:
        """Log a failure, with the traceback of `exc_info` when given."""
        self.logger.error(self._indent(message), *args, exc_info=exc_info)

    def group(self: LoggerSink, label: str) -> None:
        """Open a group, following messages are nested under `label`."""
        self.logger.debug(self._indent('%s'), label)
        self._depth += 1

    def group_end(self: LoggerSink) -> None:
        """Close the innermost group."""
        self._depth = max(self._depth - 1, 0)
