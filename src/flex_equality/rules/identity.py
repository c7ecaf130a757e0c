"""
Identity rule implementation.

Opt-in rule for callers who want stricter checks than structural equality.
"""

from decimal import Decimal
from typing import Any

from .base import BaseRule
from .structural import same_declared_type, same_instant_and_zone
from ..constants import SCALAR_KINDS, RuleType, ValueKind
from ..registry import register
from ..values import kind_of


def _same_bits(a: Any, b: Any) -> bool:  # noqa: ANN401
    """Value equality that also requires the same bits for floats and complex numbers."""
    if a != b:
        return False
    if isinstance(a, float):
        # distinguishes 0.0 from -0.0
        return a.hex() == b.hex()
    if isinstance(a, complex):
        return a.real.hex() == b.real.hex() and a.imag.hex() == b.imag.hex()
    if isinstance(a, Decimal):
        return a.as_tuple() == b.as_tuple()
    return True


@register(RuleType.IDENTITY, version="1.0.0")
class IdentityRule(BaseRule):
    """
    Primitive equality for two values of the same type.

    Immutable scalars (numbers, strings, bytes, booleans, None) are compared
    by value, with floats, complex numbers and decimals compared on their
    exact representation: `0.0` does not equal `-0.0`, nor `Decimal('1.0')`
    `Decimal('1.00')`. Datetimes must denote the same instant in an equal
    time zone. Every other value is compared by identity, so two distinct
    lists with the same contents are NOT equal. No coercion and no
    structural walk takes place.
    """

    def applies(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, D102
        return same_declared_type(expected, actual)

    def are_equal(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, D102
        kind = kind_of(expected)
        if kind == ValueKind.INSTANT:
            return same_instant_and_zone(expected, actual)
        if kind in SCALAR_KINDS:
            return _same_bits(expected, actual)
        return expected is actual
