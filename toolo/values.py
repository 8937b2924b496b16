"""
Toolo value helpers: reference cells, zero values and first-non-zero selection.

Python has no pointers, so a :class:`Ref` plays that part wherever a value must be held
indirectly (a "reference to a value") and may be empty.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Generic, TypeVar
from typing import get_args, get_origin

# Local ----------------------------------------------------------------------------------------------------------------
from .records import build_record, is_record_type
from .utils import is_union

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["Ref", "ptr", "val", "nil_ptr", "zero_value", "zero_val", "is_zero", "non_zero", "is_in"]

T = TypeVar("T")


# Classes --------------------------------------------------------------------------------------------------------------

class Ref(Generic[T]):
    """
    A mutable single-value reference cell.

    Two references compare equal when their pointees do. A reference whose pointee is
    ``None`` is an empty reference.

    Examples:
        >>> r = Ref(1)
        >>> r.value
        1
        >>> r == Ref(1)
        True
    """
    __slots__ = ("value",)

    def __init__(self, value: T | None = None) -> None:
        self.value = value

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Ref):
            return NotImplemented
        return self.value == other.value

    __hash__ = None

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"

    @property
    def is_empty(self) -> bool:
        return self.value is None


# Methods --------------------------------------------------------------------------------------------------------------

def ptr(value: T) -> Ref[T]:
    """Return a new reference holding ``value``."""
    return Ref(value)


def val(ref: Ref[T] | None, default: Any = None) -> T | Any:
    """Return the pointee of ``ref``, or ``default`` when ``ref`` is None or empty."""
    if ref is None or ref.value is None:
        return default
    return ref.value


def nil_ptr(value: T) -> Ref[T] | None:
    """Return a reference to ``value``, or None when ``value`` is a zero value."""
    if is_zero(value):
        return None
    return Ref(value)


def zero_value(tp: Any, *, in_progress: frozenset[type] = frozenset()) -> Any:
    """
    Zero value of a type or type annotation.

    Rules:
        - ``None``, ``Any``, ``object`` and :class:`Ref` types → None
        - ``Optional[X]`` / ``X | None`` → None; any other union → zero of its first member
        - Generic aliases (``list[int]``, ``dict[str, int]``) → zero of their origin
        - Records (dataclass, NamedTuple) → instance built from declared defaults, other
          fields set to the zero of their annotation; a field typed with a record class
          already in ``in_progress`` (a self-referencing record) gets None
        - Other classes → ``tp()`` when the class can be built without arguments
          (``0``, ``0.0``, ``0j``, ``False``, ``''``, ``b''``, ``[]``, ``Decimal('0')`` ...),
          otherwise None

    Examples:
        >>> zero_value(int), zero_value(str), zero_value(int | None)
        (0, '', None)
    """
    if tp is None or tp is type(None) or tp is Any or tp is object:
        return None

    if is_union(tp):
        args = get_args(tp)
        if type(None) in args:
            return None
        return zero_value(args[0], in_progress=in_progress)

    origin = get_origin(tp)
    if origin is not None:
        if not isinstance(origin, type):
            return None
        tp = origin

    if not isinstance(tp, type) or issubclass(tp, Ref):
        return None
    if is_record_type(tp):
        if tp in in_progress:
            return None
        return build_record(tp, {}, in_progress=in_progress)
    try:
        return tp()
    except (TypeError, ValueError):
        return None


def zero_val(sample: Any) -> Any:
    """Zero value of the type of ``sample``; the value of ``sample`` itself is ignored."""
    return zero_value(type(sample))


def is_zero(value: Any) -> bool:
    """True when ``value`` is None or equals the zero value of its own type."""
    if value is None:
        return True
    zero = zero_value(type(value))
    if zero is None:
        return False
    try:
        return bool(value == zero)
    except (TypeError, ValueError):
        return False


def non_zero(*values: T) -> T | None:
    """
    Return the first value that is not a zero value.

    When every value is zero the first one is returned, None when called without values.

    Examples:
        >>> non_zero("", "there")
        'there'
        >>> non_zero(0, 0)
        0
    """
    if not values:
        return None
    for v in values:
        if not is_zero(v):
            return v
    return values[0]


def is_in(needle: Any, *haystack: Any) -> bool:
    """Check whether ``needle`` equals any of the remaining arguments."""
    return needle in haystack
