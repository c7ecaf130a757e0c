"""
Value formatting for comparison reports.

Provides the structural pretty-printer used by default for composite values,
the type descriptors shown in reports, and the formatter factories behind
the `format_verb` and `format_json` options.
"""

import json
import types
from collections.abc import Callable
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from .constants import NUMERIC_KINDS, ValueKind
from .values import fields_of, kind_of, qualified_name, type_of


class _PrettyPrinter:
    """
    Recursive pretty-printer producing a fully qualified, structural form.

    Builtin containers print like their literals; other containers and
    objects are prefixed with their qualified type name, and objects list
    their fields: `tests.models.Thing(integer=42, tags=['a'])`. A container
    that is already being printed further up is shown as `<cycle TypeName>`.
    """

    def __init__(self):
        self._active: set[int] = set()

    def format(self, value: Any) -> str:  # noqa: ANN401, PLR0911
        kind = kind_of(value)
        match kind:
            case ValueKind.ABSENT:
                return 'ABSENT'
            case ValueKind.CALLABLE:
                return _format_callable(value)
            case (ValueKind.SEQUENCE | ValueKind.SET | ValueKind.MAPPING
                  | ValueKind.COMPOSITE):
                pass
            case _:
                return repr(value)

        if id(value) in self._active:
            return f"<cycle {qualified_name(type(value))}>"
        self._active.add(id(value))
        try:
            match kind:
                case ValueKind.SEQUENCE:
                    return self._format_sequence(value)
                case ValueKind.SET:
                    return self._format_set(value)
                case ValueKind.MAPPING:
                    return self._format_mapping(value)
                case _:
                    return self._format_fields(value, fields_of(value))
        finally:
            self._active.discard(id(value))

    def _format_sequence(self, value: Any) -> str:  # noqa: ANN401
        if isinstance(value, bytearray):
            return repr(value)
        if isinstance(value, tuple) and hasattr(value, '_fields'):
            return self._format_fields(value, value._asdict())

        items = [self.format(item) for item in value]
        if type(value) is list:
            return f"[{', '.join(items)}]"
        if type(value) is tuple:
            if len(items) == 1:
                return f"({items[0]},)"
            return f"({', '.join(items)})"
        return f"{qualified_name(type(value))}([{', '.join(items)}])"

    def _format_set(self, value: Any) -> str:  # noqa: ANN401
        # sorted so the same set always renders the same way
        items = sorted(self.format(item) for item in value)
        if type(value) is set:
            return f"{{{', '.join(items)}}}" if items else 'set()'
        return f"{qualified_name(type(value))}({{{', '.join(items)}}})"

    def _format_mapping(self, value: Any) -> str:  # noqa: ANN401
        entries = ', '.join(
            f"{self.format(key)}: {self.format(item)}" for key, item in value.items()
        )
        if type(value) is dict:
            return f"{{{entries}}}"
        return f"{qualified_name(type(value))}({{{entries}}})"

    def _format_fields(self, value: Any, fields: dict[str, Any]) -> str:  # noqa: ANN401
        rendered = ', '.join(f"{name}={self.format(item)}" for name, item in fields.items())
        return f"{qualified_name(type(value))}({rendered})"


def _format_callable(value: Any) -> str:  # noqa: ANN401
    if isinstance(value, types.FunctionType):
        return f"<function {value.__module__}.{value.__qualname__}>"
    return repr(value)


def format_structure(value: Any) -> str:  # noqa: ANN401
    """Render a value in its fully qualified structural form."""
    return _PrettyPrinter().format(value)


def format_plain(value: Any) -> str:  # noqa: ANN401
    """Render a value with `str()`."""
    return str(value)


def type_descriptor(value: Any) -> str:  # noqa: ANN401
    """Return the type column shown in reports, e.g. `<int>` or `<tests.models.Thing>`."""
    return f"<{qualified_name(type_of(value))}>"


def default_formatter_for(expected: Any) -> Callable[[Any], str]:  # noqa: ANN401
    """
    Pick the report formatter from the expected value.

    Numbers and datetimes read best in their plain textual form; everything
    else is rendered structurally so types and fields are visible.
    """
    kind = kind_of(expected)
    if kind in NUMERIC_KINDS or kind == ValueKind.INSTANT:
        return format_plain
    return format_structure


def verb_formatter(pattern: str) -> Callable[[Any], str]:
    """
    Build a formatter from a printf-style pattern such as `'%r'` or `'%s'`.

    Args:
        pattern: A pattern with exactly one conversion, applied to the value
    """
    def formatter(value: Any) -> str:  # noqa: ANN401
        return pattern % (value,)

    return formatter


def json_formatter(indent: int | None = None) -> Callable[[Any], str]:
    """
    Build a formatter that serializes values to JSON.

    Values the standard `json` module cannot handle (dataclasses, datetimes,
    Pydantic models, sets, ...) are converted with pydantic's
    `to_jsonable_python`. If a value still cannot be serialized, the error
    message is returned as the rendered value so a report can always be
    produced.

    Args:
        indent: Indentation passed to `json.dumps`; None renders on one line
    """
    def formatter(value: Any) -> str:  # noqa: ANN401
        try:
            return json.dumps(value, indent=indent, default=to_jsonable_python)
        except (TypeError, ValueError, PydanticSerializationError) as e:
            return str(e)

    return formatter
