"""
Record introspection: dataclasses and NamedTuples treated as name-addressable field sets.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
from dataclasses import dataclass, fields as dc_fields, is_dataclass
from typing import Any, Mapping
from typing import get_type_hints

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["RecordField", "build_record", "is_record", "is_record_type", "record_fields", "record_values"]


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class RecordField:
    """
    Declared shape of a single record field.

    Attributes:
        name: Field name.
        type: Resolved annotation, or ``Any`` when the record carries no annotation for it.
        settable: False for dataclass fields declared with ``init=False``; those are never
            populated from outside and keep whatever ``__init__`` gives them.
        has_default: True when the record declares a default (or default factory) for the field.
    """
    name: str
    type: Any
    settable: bool = True
    has_default: bool = False


# Methods --------------------------------------------------------------------------------------------------------------

def is_namedtuple_type(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, tuple) and hasattr(tp, "_fields")


def is_record_type(tp: Any) -> bool:
    """True for dataclass classes and NamedTuple classes."""
    return isinstance(tp, type) and (is_dataclass(tp) or is_namedtuple_type(tp))


def is_record(obj: Any) -> bool:
    """True for dataclass and NamedTuple instances (not the classes themselves)."""
    return not isinstance(obj, type) and is_record_type(type(obj))


def record_fields(tp: type) -> dict[str, RecordField]:
    """
    Ordered mapping of field name to :class:`RecordField` for a record class.

    Annotations are resolved with ``typing.get_type_hints``; string annotations that cannot
    be resolved are kept as declared.

    Raises:
        TypeError: If ``tp`` is not a record class.
    """
    if not is_record_type(tp):
        raise TypeError(f"record class expected, got {tp!r}")

    try:
        hints = get_type_hints(tp)
    except (NameError, TypeError):
        hints = dict(getattr(tp, "__annotations__", {}))

    result: dict[str, RecordField] = {}
    if is_dataclass(tp):
        for f in dc_fields(tp):
            has_default = (f.default is not dataclasses.MISSING
                           or f.default_factory is not dataclasses.MISSING)
            result[f.name] = RecordField(
                name=f.name,
                type=hints.get(f.name, f.type),
                settable=f.init,
                has_default=has_default,
            )
    else:
        defaults = getattr(tp, "_field_defaults", {})
        for name in tp._fields:
            result[name] = RecordField(
                name=name,
                type=hints.get(name, Any),
                has_default=name in defaults,
            )
    return result


def record_values(obj: Any) -> dict[str, Any]:
    """Current field values of a record instance, in declaration order."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dc_fields(obj)}
    if is_namedtuple_type(type(obj)):
        return dict(obj._asdict())
    raise TypeError(f"record instance expected, got {type(obj).__name__}")


def build_record(tp: type, values: Mapping[str, Any], *, in_progress: frozenset[type] = frozenset()) -> Any:
    """
    Construct a record of class ``tp`` from a name → value mapping.

    Settable fields present in ``values`` are passed to the constructor; the remaining
    settable fields fall back to their declared default, or to the zero value of their
    annotation when no default exists. Names in ``values`` that ``tp`` does not declare
    as settable fields are ignored.

    Fields whose type is ``tp`` itself, or a record class listed in ``in_progress``, are
    left None instead of being built again.
    """
    from .values import zero_value

    in_progress = in_progress | {tp}

    kwargs: dict[str, Any] = {}
    for name, field in record_fields(tp).items():
        if not field.settable:
            continue
        if name in values:
            kwargs[name] = values[name]
        elif not field.has_default:
            kwargs[name] = zero_value(field.type, in_progress=in_progress)
    return tp(**kwargs)
