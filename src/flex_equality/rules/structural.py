"""
Structural rule implementation.

Compares two values of the same type by recursively comparing their
contents: sequence elements, mapping entries and object fields.
"""

import types
from datetime import datetime
from typing import Any

from .base import BaseRule
from ..constants import RuleType, ValueKind
from ..registry import register
from ..values import fields_of, kind_of, type_of


def same_declared_type(expected: Any, actual: Any) -> bool:  # noqa: ANN401
    """Return True when both values carry a type and it is the same type."""
    expected_type = type_of(expected)
    return expected_type is not None and expected_type is type_of(actual)


def same_instant_and_zone(a: datetime, b: datetime) -> bool:
    """Return True for datetimes denoting the same instant in an equal time zone."""
    # the same instant in another zone is a different structure
    return a == b and a.tzinfo == b.tzinfo


def _same_callable(a: Any, b: Any) -> bool:  # noqa: ANN401
    if a is b:
        return True
    # bound methods are created on every attribute access
    if isinstance(a, types.MethodType):
        return a.__func__ is b.__func__ and a.__self__ is b.__self__
    return False


class _StructuralComparison:
    """
    One recursive walk over a pair of values.

    Containers and composites already under comparison are remembered by the
    identities of both sides, so a cycle is treated as equal on revisit
    instead of recursing forever.
    """

    def __init__(self):
        self._visited: set[tuple[int, int]] = set()

    def equal(self, a: Any, b: Any) -> bool:  # noqa: ANN401, PLR0911
        if type(a) is not type(b):
            return False

        kind = kind_of(a)
        match kind:
            case ValueKind.ABSENT | ValueKind.NONE:
                return True
            case (ValueKind.BOOLEAN | ValueKind.INTEGER | ValueKind.REAL | ValueKind.COMPLEX
                  | ValueKind.TEXT):
                return bool(a == b)
            case ValueKind.INSTANT:
                return same_instant_and_zone(a, b)
            case ValueKind.CALLABLE:
                return _same_callable(a, b)
            case ValueKind.HANDLE:
                return a is b
            case ValueKind.OPAQUE:
                return a is b or bool(a == b)

        if a is b:
            return True
        key = (id(a), id(b))
        if key in self._visited:
            return True
        self._visited.add(key)

        match kind:
            case ValueKind.SEQUENCE:
                return self._equal_sequences(a, b)
            case ValueKind.SET:
                return len(a) == len(b) and bool(a == b)
            case ValueKind.MAPPING:
                return self._equal_mappings(a, b)
            case _:
                return self._equal_mappings(fields_of(a), fields_of(b))

    def _equal_sequences(self, a: Any, b: Any) -> bool:  # noqa: ANN401
        if len(a) != len(b):
            return False
        return all(self.equal(x, y) for x, y in zip(a, b, strict=True))

    def _equal_mappings(self, a: Any, b: Any) -> bool:  # noqa: ANN401
        if len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b:
                return False
            if not self.equal(value, b[key]):
                return False
        return True


def structurally_equal(expected: Any, actual: Any) -> bool:  # noqa: ANN401
    """Deep, type-strict comparison of two values with cycle detection."""
    return _StructuralComparison().equal(expected, actual)


@register(RuleType.STRUCTURAL, version="1.0.0")
class StructuralRule(BaseRule):
    """
    Deep equality for two values of the same type.

    Every reachable element, entry and field must be equal, and nested values
    must also share their types: `[1]` does not equal `[1.0]`. Distinct
    instances with equal contents are equal. Functions are equal only to
    themselves; handles such as queues, locks and files only to themselves.
    Self-referential structures terminate.
    """

    def applies(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, D102
        return same_declared_type(expected, actual)

    def are_equal(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, D102
        return structurally_equal(expected, actual)
