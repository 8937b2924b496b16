"""
Toolo utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import types
import typing
from typing import Any

# Python 3.10+ has types.UnionType for X | Y syntax
UNION_TYPES = (typing.Union, types.UnionType)


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for user objects or classes.
            Builtins are never qualified.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class C: ...
        >>> class_name(C())
        'C'
    """
    cls = obj if isinstance(obj, type) else obj.__class__
    if fully_qualified and cls.__module__ != "builtins":
        return cls.__module__ + "." + cls.__qualname__
    return cls.__name__


def type_name(tp: Any) -> str:
    """
    Readable name of a type annotation for error messages.

    Plain classes give their bare name, typing constructs (``list[int]``, ``int | None``,
    ``Any``) give their repr with the ``typing.`` prefix removed.

    Examples:
        >>> type_name(int)
        'int'
        >>> type_name(int | None)
        'int | None'
        >>> type_name(typing.Optional[str])
        'Optional[str]'
    """
    if tp is None or tp is type(None):
        return "None"
    if isinstance(tp, type) and not typing.get_args(tp):
        return tp.__name__
    return repr(tp).replace("typing.", "")


def is_union(tp: Any) -> bool:
    """True for ``Union[...]``, ``Optional[...]`` and ``X | Y`` annotations."""
    return typing.get_origin(tp) in UNION_TYPES
