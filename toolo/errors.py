"""
Error bridging between the safe API (exceptions you handle) and the loose API
(failures escalated as :class:`CatchableError`, or muted).

Typical use couples :func:`must` / :func:`must_return` deep in a call chain with a
single :func:`catch` boundary above it:

    >>> def load(path):
    ...     with catch(lambda e: print("load failed:", e)):
    ...         data = must_return(read_bytes, path)
    ...         return must_return(objectify, data)
"""

# Standard library -----------------------------------------------------------------------------------------------------
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .logs import get_logger

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["CatchableError", "attempt", "catch", "err", "must", "must_return", "mute", "returns"]

T = TypeVar("T")


# Classes --------------------------------------------------------------------------------------------------------------

class CatchableError(Exception):
    """
    Escalated failure raised by :func:`must` and the loose API.

    Attributes:
        error: The wrapped original exception (also chained as ``__cause__`` when raised by toolo).
    """

    def __init__(self, error: BaseException | str, message: str | None = None):
        if isinstance(error, str):
            error = RuntimeError(error)
        self.error = error
        super().__init__(str(error) if message is None else message)

    def unwrap(self) -> BaseException:
        return self.error


# Methods --------------------------------------------------------------------------------------------------------------

def attempt(error: BaseException | None, verbose: bool = False) -> bool:
    """
    Probe an error value: True when ``error`` is set, optionally logging it.

    Examples:
        >>> attempt(None)
        False
        >>> attempt(ValueError("boom"))
        True
    """
    if error is None:
        return False
    if verbose:
        get_logger().log_error(error)
    return True


def must(error: BaseException | None, verbose: bool = False) -> None:
    """
    Tolerate no errors: raise :class:`CatchableError` wrapping ``error`` unless it is None.

    A :class:`CatchableError` is re-raised as is.
    """
    if error is None:
        return
    if verbose:
        get_logger().log_error(error)
    if isinstance(error, CatchableError):
        raise error
    raise CatchableError(error) from error


def must_return(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Call ``fn`` and return its result; any exception it raises is escalated via :func:`must`."""
    try:
        return fn(*args, **kwargs)
    except CatchableError:
        raise
    except Exception as exc:
        raise CatchableError(exc) from exc


def returns(fn: Callable[..., T], *args: Any, default: Any = None, **kwargs: Any) -> T | Any:
    """Call ``fn`` and return its result, or ``default`` if it raises."""
    try:
        return fn(*args, **kwargs)
    except Exception:
        return default


def mute(*values: Any) -> list[Any] | None:
    """
    Drop a trailing exception from ``values``.

    Returns:
        The remaining values as a list, or None when nothing remains.

    Examples:
        >>> mute(1, 2, ValueError("x"))
        [1, 2]
        >>> mute(ValueError("x")) is None
        True
    """
    if values and isinstance(values[-1], BaseException):
        values = values[:-1]
    if not values:
        return None
    return list(values)


def err(*args: Any) -> BaseException | None:
    """Return the last argument if it is an exception, otherwise None."""
    if args and isinstance(args[-1], BaseException):
        return args[-1]
    return None


@contextmanager
def catch(handler: Callable[[BaseException], Any]) -> Iterator[None]:
    """
    Recovery boundary for :class:`CatchableError`.

    A :class:`CatchableError` escaping the block is suppressed and ``handler`` is called
    with the original wrapped error. Any other exception propagates unchanged.
    Works as a context manager and as a decorator.

    Examples:
        >>> caught = []
        >>> with catch(caught.append):
        ...     must(ValueError("bad"))
        >>> caught
        [ValueError('bad')]
    """
    try:
        yield
    except CatchableError as exc:
        handler(exc.error)
