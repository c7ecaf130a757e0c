"""
Tests for NumericRule.

Covers applicability (which values count as numbers), cross-type equality
through bidirectional conversion, and conversions that fail.
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from flex_equality import NumericRule, check
from flex_equality.rules.numeric import is_numeric

NUMBERS = [0, 4, -7, 4.0, 4.5, float('inf'), Fraction(1, 3), Fraction(4), Decimal('4'),
           Decimal('0.1'), 2**64]


class TestNumericApplicability:
    """Test which pairs the numeric rule applies to."""

    @pytest.mark.parametrize('value', [0, -1, 2**70, 1.5, Fraction(1, 2), Decimal('1.1')])
    def test_numbers_are_numeric(self, value):
        """Integers, floats, fractions and decimals are numeric."""
        assert is_numeric(value)

    @pytest.mark.parametrize('value', [True, False, complex(4), 4j, '4', None, [4]])
    def test_non_numbers(self, value):
        """Booleans, complex numbers and non-numbers are not numeric."""
        assert not is_numeric(value)

    def test_both_operands_must_be_numeric(self):
        """A mixed pair does not satisfy the rule."""
        rule = NumericRule()
        assert rule.applies(4, 4.0)
        assert not rule.applies(4, '4')
        assert not rule.applies('4', 4)
        assert not rule.applies(complex(4), 4.0)

    def test_call_returns_none_when_not_applicable(self):
        """Calling the rule directly reports None for pairs it does not judge."""
        assert NumericRule()(4, 'x') is None
        assert NumericRule()(4, 4.0) is True


class TestNumericEquality:
    """Test cross-type numeric equality."""

    def test_same_type(self):
        """Values of the same type compare with ==."""
        rule = NumericRule()
        assert rule.are_equal(0, 0)
        assert not rule.are_equal(0, 1)
        assert rule.are_equal(0.0, 0.0)

    def test_int_and_float(self):
        """An integer equals a float with the same value."""
        assert NumericRule().are_equal(4, 4.0)
        assert NumericRule().are_equal(4.0, 4)

    def test_truncation_in_one_direction_only_is_unequal(self):
        """4 converts to 4.0 != 4.5 even though int(4.5) == 4."""
        assert not NumericRule().are_equal(4, 4.5)
        assert not NumericRule().are_equal(4.5, 4)

    def test_fraction_and_decimal(self):
        """Fractions and decimals compare against ints and floats."""
        rule = NumericRule()
        assert rule.are_equal(Fraction(8, 2), 4)
        assert rule.are_equal(Decimal('4.0'), 4)
        assert rule.are_equal(Fraction(1, 2), 0.5)
        assert not rule.are_equal(Fraction(1, 3), 0.3333333333333333)

    def test_decimal_and_inexact_float(self):
        """Decimal('0.1') is not the float 0.1, whose exact value differs."""
        assert not NumericRule().are_equal(Decimal('0.1'), 0.1)

    def test_large_integer_and_float(self):
        """Integers beyond float precision do not equal the rounded float."""
        assert not NumericRule().are_equal(2**53 + 1, float(2**53))
        assert NumericRule().are_equal(2**53, float(2**53))

    def test_failed_conversion_is_unequal(self):
        """Conversions that raise degrade to not equal instead of raising."""
        rule = NumericRule()
        assert not rule.are_equal(float('inf'), 10)
        assert not rule.are_equal(10, float('nan'))
        assert not rule.are_equal(10**400, 1e308)

    def test_nan_is_not_equal_to_itself(self):
        """NaN follows IEEE semantics."""
        assert not NumericRule().are_equal(float('nan'), float('nan'))

    @pytest.mark.parametrize('a', NUMBERS)
    @pytest.mark.parametrize('b', NUMBERS)
    def test_symmetry(self, a, b):
        """equal(a, b) == equal(b, a) for every pair of numbers."""
        rule = NumericRule()
        assert rule.are_equal(a, b) == rule.are_equal(b, a)

    @pytest.mark.parametrize('a', NUMBERS)
    def test_reflexivity(self, a):
        """Every non-NaN number equals itself."""
        assert NumericRule().are_equal(a, a)


class TestNumericThroughEngine:
    """Test the numeric rule as part of the default rule set."""

    def test_cross_type_check(self):
        """The default rules accept 4 against 4.0."""
        assert check(4, 4.0)
        assert check(0, 0.0)

    def test_complex_falls_through_to_unequal(self):
        """complex(4) vs 4.0 is not numeric and the types differ."""
        assert not check(complex(4), 4.0)

    def test_bool_is_not_numeric(self):
        """True does not equal 1: booleans fall through to the structural rule."""
        assert not check(True, 1)
        assert check(True, True)
