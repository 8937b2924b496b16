"""
Compact JSON wrap/unwrap on top of the standard library ``json`` module.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import base64
import dataclasses
import json
from collections import abc
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .records import record_fields
from .strings import Varchar
from .values import Ref

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["JSONError", "jsonify", "objectify"]


# Classes --------------------------------------------------------------------------------------------------------------

class JSONError(ValueError):
    """Serialization to or from JSON failed."""


# Methods --------------------------------------------------------------------------------------------------------------

def jsonify(obj: Any) -> Varchar:
    """
    Serialize ``obj`` to compact JSON.

    Beyond what ``json`` handles natively, any Mapping (e.g. ``frozendict``) is written as an
    object, dataclass instances as objects of their fields, a :class:`~toolo.values.Ref` as its
    pointee, and bytes as base64 text. NaN and infinities are rejected.

    Raises:
        JSONError: If ``obj`` holds something that cannot be serialized.

    Examples:
        >>> jsonify(["oh", "hi"])
        '["oh","hi"]'
    """
    try:
        return Varchar(json.dumps(obj, separators=(",", ":"), ensure_ascii=False,
                                  allow_nan=False, default=_to_json_default))
    except (TypeError, ValueError, RecursionError) as exc:
        raise JSONError(f"failed to marshal to JSON: {exc}") from exc


def objectify(data: str | bytes | bytearray, target: Any = None) -> Any:
    """
    Parse JSON ``data``.

    Args:
        data: JSON text or UTF-8 encoded bytes.
        target: Optional mutable mapping, list or dataclass instance to fill in place with the
            parsed object/array. A dataclass gets the settable fields whose names appear in
            the object; other keys are ignored.

    Returns:
        ``target`` when given, otherwise the parsed value.

    Raises:
        JSONError: If ``data`` is not valid JSON, or its top-level value does not fit ``target``.
    """
    if not isinstance(data, (str, bytes, bytearray)):
        raise JSONError(f"failed to unmarshal JSON: str or bytes expected, got {type(data).__name__}")
    try:
        value = json.loads(data)
    except ValueError as exc:
        raise JSONError(f"failed to unmarshal JSON: {exc}") from exc

    if target is None:
        return value
    if isinstance(target, abc.MutableMapping) and isinstance(value, dict):
        target.update(value)
    elif isinstance(target, abc.MutableSequence) and isinstance(value, list):
        target[:] = value
    elif dataclasses.is_dataclass(target) and not isinstance(target, type) and isinstance(value, dict):
        _fill_dataclass(target, value)
    else:
        raise JSONError(
            f"failed to unmarshal JSON: cannot unmarshal {type(value).__name__} into {type(target).__name__}"
        )
    return target


def _fill_dataclass(target: Any, value: dict[str, Any]) -> None:
    for name, field in record_fields(type(target)).items():
        if not field.settable or name not in value:
            continue
        try:
            setattr(target, name, value[name])
        except dataclasses.FrozenInstanceError as exc:
            raise JSONError(
                f"failed to unmarshal JSON: cannot unmarshal into frozen {type(target).__name__}"
            ) from exc


def _to_json_default(o: Any) -> Any:
    if isinstance(o, abc.Mapping):
        return dict(o)
    if dataclasses.is_dataclass(o) and not isinstance(o, type):
        return dataclasses.asdict(o)
    if isinstance(o, Ref):
        return o.value
    if isinstance(o, (bytes, bytearray)):
        return base64.b64encode(o).decode("ascii")
    raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")
