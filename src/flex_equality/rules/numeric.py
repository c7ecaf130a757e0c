"""
Numeric rule implementation.

Compares numbers of differing types by converting each operand into the
other's type and requiring both conversions to agree.
"""

import logging
from typing import Any

from .base import BaseRule
from ..constants import NUMERIC_KINDS, RuleType
from ..registry import register
from ..values import kind_of

logger = logging.getLogger(__name__)

_CONVERSION_ERRORS = (TypeError, ValueError, OverflowError, ArithmeticError)

_UNCONVERTIBLE = object()


def is_numeric(value: Any) -> bool:  # noqa: ANN401
    """Return True for integers and reals; bool and complex are not numeric here."""
    return kind_of(value) in NUMERIC_KINDS


def _convert(value: Any, target: type) -> Any:  # noqa: ANN401
    try:
        return target(value)
    except _CONVERSION_ERRORS as e:
        logger.debug("Cannot convert %r to %s: %s", value, target.__name__, e)
        return _UNCONVERTIBLE


@register(RuleType.NUMERIC, version="1.0.0")
class NumericRule(BaseRule):
    """
    Equality for numbers of any integer or real type.

    Values of the same type are compared with `==`. Values of differing types
    are each converted to the type of the other and compared with `==` in both
    directions; the pair is equal only if both directions agree. This accepts
    `4` against `4.0` while rejecting `4` against `4.5` (which truncates to
    `4` in one direction only).

    Booleans and complex numbers are not numeric for this rule. A conversion
    that fails (e.g. `int(float('inf'))`) makes the pair unequal.
    """

    def applies(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, D102
        return is_numeric(expected) and is_numeric(actual)

    def are_equal(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, D102
        if type(expected) is type(actual):
            return bool(expected == actual)

        expected_as_actual = _convert(expected, type(actual))
        actual_as_expected = _convert(actual, type(expected))
        if expected_as_actual is _UNCONVERTIBLE or actual_as_expected is _UNCONVERTIBLE:
            return False

        return bool(expected == actual_as_expected and actual == expected_as_actual)
