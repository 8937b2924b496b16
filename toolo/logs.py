"""
Package-level logger shim.

Toolo reports muted errors (loose API, retries, recovered jobs) through a single
:class:`ToolLogger`. By default it writes to the standard ``logging`` logger named
``"toolo"``, which has a ``NullHandler`` attached so nothing is printed until the
application configures logging. Any object exposing ``println``/``printf``/``print``/``panicln``
can be plugged in instead via :func:`set_logger`, and ``set_logger(None)`` silences the package.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import sys
from typing import Any, Protocol, runtime_checkable

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["StdLogger", "LoggingStdLogger", "ToolLogger", "console", "get_logger", "set_logger"]

LOGGER_NAME = "toolo"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


# Classes --------------------------------------------------------------------------------------------------------------

@runtime_checkable
class StdLogger(Protocol):
    """Minimal print-style logger interface."""

    def println(self, *args: Any) -> None: ...

    def printf(self, fmt: str, *args: Any) -> None: ...

    def print(self, *args: Any) -> None: ...

    def panicln(self, *args: Any) -> None: ...


class LoggingStdLogger:
    """:class:`StdLogger` on top of a ``logging.Logger``; every line is emitted at ``level``."""

    def __init__(self, logger: logging.Logger, level: int = logging.INFO) -> None:
        self.logger = logger
        self.level = level

    def println(self, *args: Any) -> None:
        self.logger.log(self.level, " ".join(str(a) for a in args))

    def printf(self, fmt: str, *args: Any) -> None:
        self.logger.log(self.level, fmt, *args)

    def print(self, *args: Any) -> None:
        self.logger.log(self.level, "".join(str(a) for a in args))

    def panicln(self, *args: Any) -> None:
        message = " ".join(str(a) for a in args)
        self.logger.critical(message)
        raise RuntimeError(message)


class ToolLogger:
    """
    Wraps the active logger target and formats messages the same way for every backend.

    Args:
        target: A ``logging.Logger``, a :class:`StdLogger` implementation, or None to disable output.
    """

    def __init__(self, target: "logging.Logger | StdLogger | None") -> None:
        self.logger: logging.Logger | None = None
        if isinstance(target, logging.Logger):
            self.logger = target
            target = LoggingStdLogger(target)
        elif target is not None and not isinstance(target, StdLogger):
            raise TypeError(
                f"logger must be a logging.Logger or implement println/printf/print/panicln, "
                f"got {type(target).__name__}"
            )
        self.std: StdLogger | None = target

    @property
    def enabled(self) -> bool:
        return self.std is not None

    def log(self, *msgs: Any) -> None:
        """Log anything, space separated."""
        if self.std is None:
            return
        self.std.println(*msgs)

    def log_deep(self, *objs: Any) -> None:
        """
        Log objects in full on one line.

        Strings are written as-is, other objects by ``repr``; CR and LF are escaped so
        the record never spans several lines.
        """
        if self.std is None:
            return
        line = " ".join(o if isinstance(o, str) else repr(o) for o in objs)
        line = line.replace("\r", "\\r").replace("\n", "\\n")
        self.std.println(line)

    def log_error(self, err: BaseException, *msgs: str) -> None:
        """Log ``err`` prefixed by ``msgs`` joined as ``"msg1: msg2: <err>"``."""
        if self.std is None:
            return
        message = ": ".join([*msgs, str(err)])
        if self.logger is not None:
            exc_info = (type(err), err, err.__traceback__) if err.__traceback__ else None
            self.logger.error(message, exc_info=exc_info)
            return
        self.std.println(message)

    def panic_on_error(self, err: BaseException, *msgs: str) -> None:
        """
        Log ``err`` like :meth:`log_error`, then raise it.

        The error is raised even when logging is disabled; a disabled logger only skips the log line.
        """
        self.log_error(err, *msgs)
        raise err


# Methods --------------------------------------------------------------------------------------------------------------

_tool_log = ToolLogger(logging.getLogger(LOGGER_NAME))


def get_logger() -> ToolLogger:
    """Return the package-level :class:`ToolLogger`."""
    return _tool_log


def set_logger(target: "logging.Logger | StdLogger | None") -> ToolLogger:
    """
    Replace the package-level logger target; pass None to disable logging.

    Returns:
        The new :class:`ToolLogger`.
    """
    global _tool_log
    _tool_log = ToolLogger(target)
    return _tool_log


def console(*objs: Any) -> None:
    """
    Debug helper: log ``objs`` in full, prefixed with the caller location ``[module:line]>``.

    Examples:
        >>> console("user", {"id": 1})   # logs "[myapp.views:42]> user {'id': 1}"
    """
    frame = sys._getframe(1)
    prefix = f"[{frame.f_globals.get('__name__', '?')}:{frame.f_lineno}]>"
    _tool_log.log_deep(prefix, *objs)
