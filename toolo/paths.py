"""
Caller-relative path helpers.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import os
import sys

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["find_root_caller", "get_relative_path"]

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


# Methods --------------------------------------------------------------------------------------------------------------

def find_root_caller(max_depth: int = 32) -> str:
    """
    Source file of the nearest caller outside the toolo package.

    Frames of toolo itself and synthetic frames (``<frozen ...>``, ``<string>``) are skipped.

    Returns:
        Absolute path of the calling file, or ``""`` when none is found within ``max_depth`` frames.
    """
    frame = sys._getframe(1)
    depth = 0
    while frame is not None and depth < max_depth:
        filename = frame.f_code.co_filename
        if not filename.startswith("<"):
            filename = os.path.abspath(filename)
            if os.path.dirname(filename) != _PACKAGE_DIR:
                return filename
        frame = frame.f_back
        depth += 1
    return ""


def get_relative_path(file_path: str | os.PathLike[str]) -> str:
    """
    Path of ``file_path`` relative to the directory of the calling source file.

    Raises:
        RuntimeError: If the caller's file cannot be determined.
        ValueError: If no relative path exists (e.g. different drives on Windows).

    Examples:
        >>> # called from /app/src/main.py
        >>> get_relative_path("/app/data/x.csv")
        '../data/x.csv'
    """
    caller_path = find_root_caller()
    if not caller_path:
        raise RuntimeError("could not determine caller path")

    caller_dir = os.path.dirname(caller_path)
    try:
        return os.path.relpath(os.fspath(file_path), caller_dir)
    except ValueError as exc:
        raise ValueError(f"failed to get relative path from {caller_dir} to {file_path}: {exc}") from exc
