"""
Runtime type-directed conversion of sequences.

:func:`convert_slice` builds a new list whose elements are the source elements converted,
one by one, to the type of a destination sample. Per element it tries, in order:

    1. None or an empty :class:`~toolo.values.Ref` → zero value of the destination type
    2. a :class:`~toolo.values.Ref` is dereferenced one level
    3. numeric/bool → str is refused, and so is bool → any other number kind
    4. conversion between related scalar kinds (``int`` → ``float``, ``Celsius(float)`` → ``float``,
       ``str`` → ``bytes`` ...)
    5. assignment of instances of the destination type (records are shallow-copied)
    6. field-by-field copy between records (dataclasses, NamedTuples), matched by name

The first element that cannot be converted aborts the whole call.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import copy
import numbers
from collections import abc
from decimal import Decimal
from fractions import Fraction
from typing import Any, Sequence, TypeVar, overload
from typing import get_args, get_origin

# Local ----------------------------------------------------------------------------------------------------------------
from .records import build_record, is_record, is_record_type, record_fields, record_values
from .utils import class_name, is_union, type_name
from .values import Ref, zero_value

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = [
    "ConvertError",
    "NilSourceError",
    "NotASliceError",
    "InvalidSampleError",
    "ElementConversionError",
    "FieldTypeMismatchError",
    "convert_slice",
    "is_assignable",
    "is_convertible",
]

Y = TypeVar("Y")

# Underlying scalar kinds; bool first since it subclasses int
_SCALAR_BASES = (bool, int, float, complex, Decimal, Fraction, str, bytes, bytearray)

_KIND_FAMILY = {
    bool: "bool",
    int: "real",
    float: "real",
    Decimal: "real",
    Fraction: "real",
    complex: "complex",
    str: "text",
    bytes: "text",
    bytearray: "text",
}

_NOT_SEQUENCES = (str, bytes, bytearray, memoryview)


# Exceptions -----------------------------------------------------------------------------------------------------------

class ConvertError(Exception):
    """Base class for :func:`convert_slice` failures."""


class NilSourceError(ConvertError, ValueError):
    """The source sequence is None (as opposed to empty)."""

    def __init__(self, message: str = "source sequence is None"):
        super().__init__(message)


class NotASliceError(ConvertError, TypeError):
    """The source is not sequence-shaped."""


class InvalidSampleError(ConvertError, TypeError):
    """The destination sample does not name a single type (e.g. a union annotation)."""


class ElementConversionError(ConvertError, TypeError):
    """
    A source element could not be converted to the destination type.

    Attributes:
        index: Position of the failing element in the source sequence.
        source_type: Runtime type of the (dereferenced) source element.
        dest_type: Destination element type.
    """

    def __init__(self, index: int, source_type: type, dest_type: type, message: str | None = None):
        self.index = index
        self.source_type = source_type
        self.dest_type = dest_type
        if message is None:
            message = (f"cannot convert element at index {index} from type {type_name(source_type)} "
                       f"to {type_name(dest_type)}: no direct conversion, assignability, "
                       f"or compatible record field copy found")
        super().__init__(message)


class FieldTypeMismatchError(ElementConversionError):
    """
    Two records share a field name whose declared types are not assignable.

    Attributes:
        field: The shared field name.
        source_field_type: Annotation of the field on the source record.
        dest_field_type: Annotation of the field on the destination record.
    """

    def __init__(self, index: int, source_type: type, dest_type: type,
                 field: str, source_field_type: Any, dest_field_type: Any):
        self.field = field
        self.source_field_type = source_field_type
        self.dest_field_type = dest_field_type
        super().__init__(
            index, source_type, dest_type,
            f"cannot convert element at index {index}: record field '{field}' type mismatch, "
            f"source type {type_name(source_field_type)}, "
            f"destination type {type_name(dest_field_type)}, not assignable",
        )


# Methods --------------------------------------------------------------------------------------------------------------

@overload
def convert_slice(source: Sequence[Any] | None, sample: type[Y]) -> list[Y]: ...


@overload
def convert_slice(source: Sequence[Any] | None, sample: Y) -> list[Y]: ...


def convert_slice(source, sample):
    """
    Return a new list with every element of ``source`` converted to the type of ``sample``.

    Only the type of ``sample`` matters, so ``convert_slice(xs, 0.0)`` and ``convert_slice(xs, 9.5)``
    are the same call. A class may be passed instead of a sample instance.

    Args:
        source: The sequence to convert. Text-like objects (str, bytes) are not element sequences.
        sample: A destination sample value, or the destination class itself.

    Returns:
        A new list of the same length and order as ``source``.

    Raises:
        NilSourceError: If ``source`` is None. An empty sequence is not an error.
        NotASliceError: If ``source`` is not a sequence.
        InvalidSampleError: If ``sample`` is a union annotation such as ``int | None``.
        ElementConversionError: For the first element that cannot be converted.
        FieldTypeMismatchError: If records share a field name whose types are not assignable.

    Examples:
        >>> convert_slice([1, 2, 3], 0.0)
        [1.0, 2.0, 3.0]
        >>> convert_slice([ptr(1), None], float)
        [1.0, 0.0]
        >>> convert_slice([1], "")
        Traceback (most recent call last):
        ...
        ElementConversionError: cannot convert element at index 0: ...
    """
    if source is None:
        raise NilSourceError()
    if isinstance(source, _NOT_SEQUENCES) or not isinstance(source, abc.Sequence):
        raise NotASliceError(f"source must be a sequence, got {class_name(source)}")

    dest_type = _dest_type(sample)
    return [_convert_element(i, item, dest_type) for i, item in enumerate(source)]


def is_convertible(source_type: Any, dest_type: Any) -> bool:
    """
    True when instances of ``source_type`` can be converted to ``dest_type`` by calling it.

    Both types must derive from a builtin scalar kind of the same family: real numbers
    (int, float, Decimal, Fraction), complex, bool or text (str, bytes, bytearray).
    Subclasses count as their builtin base, so ``IntEnum`` members convert to float and
    a ``Celsius(float)`` converts to ``float`` and back.
    """
    source_base = _underlying(source_type)
    dest_base = _underlying(dest_type)
    if source_base is None or dest_base is None:
        return False
    return _KIND_FAMILY[source_base] == _KIND_FAMILY[dest_base]


def is_assignable(source_type: Any, dest_type: Any) -> bool:
    """
    True when a value declared as ``source_type`` may be stored where ``dest_type`` is declared.

    Rules:
        - identical annotations, or a destination of ``Any`` / ``object``
        - a union source needs every member assignable; a union destination needs one member
        - plain classes follow ``issubclass``
        - parametrized generics must match exactly; a parametrized source is assignable
          to its bare origin (``list[int]`` → ``list``)

    Examples:
        >>> is_assignable(int, int | None)
        True
        >>> is_assignable(int, float)
        False
    """
    if source_type is None:
        source_type = type(None)
    if dest_type is None:
        dest_type = type(None)

    if source_type == dest_type or dest_type is Any or dest_type is object:
        return True
    if source_type is Any:
        return False
    if is_union(source_type):
        return all(is_assignable(arg, dest_type) for arg in get_args(source_type))
    if is_union(dest_type):
        return any(is_assignable(source_type, arg) for arg in get_args(dest_type))
    if get_args(dest_type):
        return False

    source_type = get_origin(source_type) or source_type
    if isinstance(source_type, type) and isinstance(dest_type, type):
        try:
            return issubclass(source_type, dest_type)
        except TypeError:
            return False
    return False


def _dest_type(sample: Any) -> type:
    if is_union(sample):
        raise InvalidSampleError(f"sample must be a value or a single class, got union {type_name(sample)}")
    origin = get_origin(sample)
    if isinstance(origin, type):
        return origin
    if isinstance(sample, type):
        return sample
    return type(sample)


def _underlying(tp: Any) -> type | None:
    if not isinstance(tp, type):
        return None
    for base in _SCALAR_BASES:
        if issubclass(tp, base):
            return base
    return None


def _convert_element(index: int, item: Any, dest_type: type) -> Any:
    if isinstance(item, Ref):
        item = item.value
    if item is None:
        return zero_value(dest_type)

    source_type = type(item)

    if isinstance(item, numbers.Number) and issubclass(dest_type, str):
        raise ElementConversionError(
            index, source_type, dest_type,
            f"cannot convert element at index {index}: direct conversion from numeric/bool "
            f"type {type_name(source_type)} to {type_name(dest_type)} is not supported",
        )

    # bool is neither convertible nor assignable to the number kinds
    if isinstance(item, bool) and _underlying(dest_type) not in (None, bool):
        raise ElementConversionError(index, source_type, dest_type)

    if is_convertible(source_type, dest_type):
        try:
            return _convert_scalar(item, dest_type)
        except (TypeError, ValueError, ArithmeticError) as exc:
            raise ElementConversionError(
                index, source_type, dest_type,
                f"cannot convert element at index {index} from type {type_name(source_type)} "
                f"to {type_name(dest_type)}: {exc}",
            ) from exc

    if isinstance(item, dest_type):
        return copy.copy(item) if is_record(item) else item

    if is_record(item) and is_record_type(dest_type):
        return _copy_record_fields(index, item, dest_type)

    raise ElementConversionError(index, source_type, dest_type)


def _convert_scalar(value: Any, dest_type: type) -> Any:
    source_base = _underlying(type(value))
    dest_base = _underlying(dest_type)

    # Text family: str <-> bytes go through UTF-8
    if source_base is not str and dest_base is str:
        value = bytes(value).decode("utf-8")
    elif source_base is str and dest_base is not str:
        value = value.encode("utf-8")
    elif source_base is Fraction and dest_base is Decimal:
        value = Decimal(value.numerator) / Decimal(value.denominator)
    return dest_type(value)


def _copy_record_fields(index: int, item: Any, dest_type: type) -> Any:
    source_type = type(item)
    dest_fields = record_fields(dest_type)
    values = record_values(item)

    copied: dict[str, Any] = {}
    for name, field in record_fields(source_type).items():
        dest_field = dest_fields.get(name)
        if dest_field is None or not dest_field.settable:
            continue
        if not is_assignable(field.type, dest_field.type):
            raise FieldTypeMismatchError(index, source_type, dest_type,
                                         name, field.type, dest_field.type)
        copied[name] = values[name]
    return build_record(dest_type, copied)
