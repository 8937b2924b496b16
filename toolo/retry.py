"""
Retry loops and crash recovery for callables.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import time
from typing import Any, Callable, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .logs import get_logger

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["RecoveredError", "recoverer", "retry_func"]

T = TypeVar("T")


# Classes --------------------------------------------------------------------------------------------------------------

class RecoveredError(RuntimeError):
    """
    A job raised and was recovered by :func:`recoverer`.

    Attributes:
        job_id: The job identifiers as one space-joined string (may be empty).
        location: ``module.function:line`` where the job raised.
    """

    def __init__(self, job_id: str, error: BaseException, location: str):
        self.job_id = job_id
        self.error = error
        self.location = location
        job = f"job {job_id} " if job_id else "job "
        super().__init__(f"{job}panics with message: {error}, {location}")


# Methods --------------------------------------------------------------------------------------------------------------

def retry_func(
        attempts: int,
        sleep: float,
        fn: Callable[[], T],
        *,
        exceptions: tuple[type[BaseException], ...] = (Exception,),
        on_retry: Callable[[BaseException], Any] | None = None,
) -> T:
    """
    Call ``fn`` until it succeeds, retrying at most ``attempts`` times.

    Args:
        attempts: Number of retries after the first call; negative retries forever.
        sleep: Seconds to wait between calls.
        fn: Zero-argument callable; raising one of ``exceptions`` counts as a failure.
        exceptions: Exception types that trigger a retry. Others propagate at once.
        on_retry: Called with the error before every retry.

    Returns:
        The result of the first successful call.

    Raises:
        The error of the last call when every attempt failed.
    """
    remaining = attempts
    while True:
        try:
            return fn()
        except exceptions as exc:
            if remaining == 0:
                raise
            remaining -= 1
            if on_retry is not None:
                on_retry(exc)
            if sleep > 0:
                time.sleep(sleep)


def recoverer(max_panics: int, fn: Callable[[], Any], *job_id: str) -> RecoveredError | None:
    """
    Run ``fn``, re-running it after it raises, up to ``max_panics`` more times.

    Every failure is logged through the package logger as a :class:`RecoveredError`.

    Args:
        max_panics: How many times ``fn`` may be restarted; negative restarts forever.
        fn: The job.
        job_id: Optional identifiers included in the error message.

    Returns:
        None once a run completes without raising, otherwise the error of the last run.
    """
    job = " ".join(job_id)
    remaining = max_panics
    while True:
        try:
            fn()
            return None
        except Exception as exc:
            recovered = RecoveredError(job, exc, _raise_location(exc))
            recovered.__cause__ = exc
            get_logger().log_error(recovered)
            if remaining == 0:
                return recovered
            remaining -= 1


def _raise_location(exc: BaseException) -> str:
    tb = exc.__traceback__
    if tb is None:
        return "<unknown>"
    while tb.tb_next:
        tb = tb.tb_next
    frame = tb.tb_frame
    return f"{frame.f_globals.get('__name__', '?')}.{frame.f_code.co_name}:{tb.tb_lineno}"
