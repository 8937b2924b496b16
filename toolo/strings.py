"""
String helpers: the ``Varchar`` text type, multi-replacement and template execution.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import json
from collections import abc
from string import Formatter
from typing import Any, Mapping

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["TemplateError", "Varchar", "exec_template", "strtr"]


# Classes --------------------------------------------------------------------------------------------------------------

class TemplateError(ValueError):
    """Template could not be parsed or rendered."""


class Varchar(str):
    """
    Text that converts easily to bytes and JSON.

    Examples:
        >>> Varchar("hi").bytes()
        b'hi'
        >>> Varchar("hi").to_json()
        '"hi"'
    """

    def bytes(self) -> bytes:
        return self.encode("utf-8")

    def to_json(self) -> str:
        """JSON string literal for this text; empty text gives ``'""'``."""
        return json.dumps(str(self), ensure_ascii=False)


class _TemplateFormatter(Formatter):
    """
    ``str.format`` semantics over a single data object.

    Auto-numbered ``{}`` is the data itself. Named fields resolve against a mapping, where a
    missing key renders as the empty string, or against attributes of any other object.
    """

    def get_value(self, key: int | str, args: Any, kwargs: Any) -> Any:
        if isinstance(key, int):
            return args[key]
        data = args[0]
        if isinstance(data, abc.Mapping):
            return data.get(key, "")
        return getattr(data, key)


_formatter = _TemplateFormatter()


# Methods --------------------------------------------------------------------------------------------------------------

def strtr(subject: str, old_to_new: Mapping[str, str]) -> str:
    """
    Replace every occurrence of each key of ``old_to_new`` with its value, in mapping order.

    Empty keys and keys mapped to themselves are skipped.

    Examples:
        >>> strtr("abcdef", {"a": "r", "def": "xyz"})
        'rbcxyz'
    """
    if not old_to_new or not subject:
        return subject
    for old, new in old_to_new.items():
        if old == "" or old == new:
            continue
        subject = subject.replace(old, new)
    return subject


def exec_template(template_text: str, template_vars: Any) -> str:
    """
    Render ``template_text`` with ``str.format`` syntax against ``template_vars``.

    Args:
        template_text: Template such as ``"hello {}"`` or ``"hello {name}"``.
        template_vars: The data. ``{}`` is the data itself; ``{name}`` is a mapping key
            (missing keys render as ``""``) or an attribute of any other object.

    Returns:
        The rendered text.

    Raises:
        TemplateError: If the template is malformed or refers to an attribute or index
            that does not exist.

    Examples:
        >>> exec_template("hello {}", "world")
        'hello world'
        >>> exec_template("hello {name}", {})
        'hello '
    """
    try:
        list(_formatter.parse(template_text))
    except ValueError as exc:
        raise TemplateError(f"failed to parse template: {exc}") from exc

    try:
        return _formatter.vformat(template_text, (template_vars,), {})
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
        raise TemplateError(f"failed to execute template: {exc}") from exc
