"""
Loose toolo API.

Same helpers as the topical modules, tuned for ergonomic call sites: failures are either
muted (logged through the package logger and replaced by a fallback value) or escalated
as :class:`~toolo.errors.CatchableError`, to be handled by an enclosing
:func:`~toolo.errors.catch` boundary.

    >>> from toolo import tool
    >>> tool.jsonify(object())          # logs the error
    ''
    >>> tool.convert_slice([1, 2], 0.0)
    [1.0, 2.0]
"""

# Standard library -----------------------------------------------------------------------------------------------------
import os
from typing import Any, Callable, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from . import convert as _convert
from . import json as _json
from . import paths as _paths
from . import random as _random
from . import retry as _retry
from . import strings as _strings
from .errors import CatchableError, attempt, catch, err, must, must_return, mute, returns
from .logs import console, get_logger, set_logger
from .retry import recoverer
from .strings import Varchar, strtr
from .values import is_in, non_zero, ptr

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = [
    "CatchableError",
    "Varchar",
    "attempt",
    "catch",
    "console",
    "convert_slice",
    "err",
    "exec_template",
    "get_relative_path",
    "is_in",
    "jsonify",
    "must",
    "must_return",
    "mute",
    "non_zero",
    "objectify",
    "ptr",
    "rand_int",
    "recoverer",
    "retry_func",
    "returns",
    "set_logger",
    "strtr",
]


# Methods --------------------------------------------------------------------------------------------------------------

def convert_slice(source: Sequence[Any] | None, sample: Any) -> list[Any]:
    """
    :func:`toolo.convert.convert_slice` that escalates failures.

    Raises:
        CatchableError: Message ``"ConvertSlice failed: <reason>"``, wrapping the original
            :class:`~toolo.convert.ConvertError`.
    """
    try:
        return _convert.convert_slice(source, sample)
    except _convert.ConvertError as exc:
        raise CatchableError(exc, f"ConvertSlice failed: {exc}") from exc


def rand_int(start: int, end: int) -> int:
    """Random integer in [start, end); invalid bounds raise :class:`CatchableError`."""
    return must_return(_random.rand_int, start, end)


def jsonify(obj: Any) -> Varchar:
    """Compact JSON of ``obj``, or an empty :class:`Varchar` when it cannot be serialized."""
    try:
        return _json.jsonify(obj)
    except _json.JSONError as exc:
        get_logger().log_error(exc)
        return Varchar("")


def objectify(data: str | bytes | bytearray, target: Any) -> bool:
    """Fill ``target`` (a mutable mapping, list or dataclass) from JSON ``data``; False when that fails."""
    try:
        _json.objectify(data, target)
    except _json.JSONError as exc:
        get_logger().log_error(exc)
        return False
    return True


def exec_template(template_text: str, template_vars: Any) -> str:
    """Render a template, or return ``""`` when it cannot be parsed or rendered."""
    try:
        return _strings.exec_template(template_text, template_vars)
    except _strings.TemplateError as exc:
        get_logger().log_error(exc)
        return ""


def get_relative_path(file_path: str | os.PathLike[str]) -> str:
    """Path relative to the calling file, or ``file_path`` unchanged when none can be computed."""
    try:
        return _paths.get_relative_path(file_path)
    except (RuntimeError, ValueError):
        return os.fspath(file_path)


def retry_func(attempts: int, sleep: float, fn: Callable[[], Any]) -> Exception | None:
    """
    Call ``fn`` until it stops raising, retrying at most ``attempts`` times (negative: forever).

    Each retried error is logged as ``"retrying after error: <error>"``.

    Returns:
        None on success, otherwise the exception of the last call.
    """

    def log_retry(exc: BaseException) -> None:
        get_logger().log_error(exc, "retrying after error")

    try:
        _retry.retry_func(attempts, sleep, fn, on_retry=log_retry)
    except Exception as exc:
        return exc
    return None
