"""
Tests for the equality decision engine.

Covers rule dispatch (first applicable rule is final), the public
check/compare/report functions, the Comparer, and a table of comparison
cases across value kinds.
"""

import logging
import queue
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone
from typing import Any

import pytest

from flex_equality import (
    ABSENT,
    BaseRule,
    Comparer,
    Comparison,
    NumericRule,
    StructuralRule,
    check,
    compare,
    compare_numerics,
    compare_structure,
    compare_with,
    decide,
    new_comparer,
    report,
)
from tests.values_for_tests import Thing

NOW = datetime.now(UTC)
NOT_UTC = timezone(timedelta(hours=-6), "MDT")


class AlwaysEqualRule(BaseRule):
    """Applies to everything and says equal."""

    def applies(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, ARG002
        return True

    def are_equal(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, ARG002
        return True


class NeverAppliesRule(BaseRule):
    """Applies to nothing."""

    def applies(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, ARG002
        return False

    def are_equal(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, ARG002
        raise AssertionError("must not be called")


class BrokenPredicateRule(BaseRule):
    """Raises while deciding applicability."""

    def applies(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, ARG002
        raise RuntimeError("predicate exploded")

    def are_equal(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, ARG002
        return True


class BrokenEqualityRule(BaseRule):
    """Applies to everything, then raises while comparing."""

    def applies(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, ARG002
        return True

    def are_equal(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, ARG002
        raise RuntimeError("comparison exploded")


@dataclass
class Case:
    """One row of the comparison table."""

    expected: Any
    actual: Any
    are_equal: bool
    options: tuple = ()


CASES = [
    Case(0, 0, True),
    Case(0, 1, False),
    Case(0.0, 0.0, True),
    Case(Thing(), Thing(), True),
    Case(Thing(), Thing(integer=1), False),
    Case([1, 2, 3], [1, 2, 3], True),
    Case([1, 2, 3], [1, 2, 4], False),
    Case((1, 2, 3), (1, 2, 3), True),
    Case({1: 2}, {1: 2}, True),
    Case(True, True, True),
    Case("hi", "hi", True),
    Case(b"hi", b"hi", True),
    Case(None, None, True),
    Case(NOW.astimezone(NOT_UTC), NOW, True),
    Case(NOW.astimezone(NOT_UTC), NOW + timedelta(microseconds=1), False),
    Case(4, 4.0, True),
    Case(4.0, 4, True),
    Case(complex(4), 4.0, False),
    Case(complex(4), complex(4), True),
    Case(1, "1", False),
    Case(Thing(), None, False),
    Case(queue.Queue(), queue.Queue(), False),
    Case(ABSENT, ABSENT, False),
    Case(ABSENT, None, False),
    Case(1, 1, False, (compare_with(NeverAppliesRule()),)),
    Case(1, 2, True, (compare_with(AlwaysEqualRule()),)),
]


class TestComparisonTable:
    """Table of comparisons across value kinds with the default rules."""

    @pytest.mark.parametrize(
        'case', CASES, ids=[f"{i}-{type(c.expected).__name__}" for i, c in enumerate(CASES)],
    )
    def test_case(self, case):
        """Each case yields the expected verdict from every entry point."""
        assert check(case.expected, case.actual, *case.options) is case.are_equal

        ok, text = compare(case.expected, case.actual, *case.options)
        assert ok is case.are_equal
        assert (text == '') is case.are_equal
        assert (report(case.expected, case.actual, *case.options) == '') is case.are_equal


class TestDispatch:
    """Test the rule dispatch algorithm."""

    def test_first_applicable_rule_is_final_even_when_unequal(self):
        """A later rule that would say equal is never consulted."""
        rules = [NumericRule(), AlwaysEqualRule()]
        assert not decide(4, 5, rules)

    def test_inapplicable_rules_are_skipped(self):
        """Rules whose predicate fails do not decide."""
        assert decide('a', 'b', [NeverAppliesRule(), AlwaysEqualRule()])

    def test_no_applicable_rule_means_unequal(self):
        """Falling off the end of the rule set is a False verdict."""
        assert not decide(1, 1, [NeverAppliesRule()])
        assert not decide(1, 1, [])

    def test_mixed_pair_falls_through_numeric_rule(self):
        """A number against a non-number goes on to the next rule."""
        assert decide(1, 'x', [NumericRule(), AlwaysEqualRule()])

    def test_incompatible_types_end_unequal(self):
        """With the default rules, differing types are unequal."""
        assert not check([1], (1,))

    def test_broken_predicate_is_skipped(self, caplog):
        """An exception in applies() skips the rule and is logged."""
        with caplog.at_level(logging.WARNING, logger='flex_equality.engine'):
            assert decide(1, 2, [BrokenPredicateRule(), AlwaysEqualRule()])
        assert "failed to check applicability" in caplog.text

    def test_broken_comparison_is_unequal_and_final(self, caplog):
        """An exception in are_equal() yields a final False verdict."""
        with caplog.at_level(logging.WARNING, logger='flex_equality.engine'):
            assert not decide(1, 1, [BrokenEqualityRule(), AlwaysEqualRule()])
        assert "treating as not equal" in caplog.text
        assert "comparison exploded" in caplog.text

    def test_decision_is_logged(self, caplog):
        """The deciding rule is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger='flex_equality.engine'):
            check(4, 4.0)
        assert "Rule 'numeric' decided equal" in caplog.text

    def test_unregistered_rule_logs_class_name(self, caplog):
        """Custom rules without registration are logged by class name."""
        with caplog.at_level(logging.DEBUG, logger='flex_equality.engine'):
            check(1, 2, compare_with(AlwaysEqualRule()))
        assert "Rule 'AlwaysEqualRule' decided equal" in caplog.text


class TestRuleOrdering:
    """Test how configured rules replace and extend the defaults."""

    def test_custom_rules_replace_defaults(self):
        """Adding any rule drops the default rule set."""
        assert check(4, 4.0)
        assert not check(4, 4.0, compare_structure())

    def test_rules_run_in_option_order(self):
        """Rules from earlier options run before rules from later ones."""
        assert check(4, 4.0, compare_numerics(), compare_structure())
        assert not check(4, 4.0, compare_structure(), compare_with(NeverAppliesRule()))

    def test_rule_ordering_matters(self):
        """The same rules in a different order may produce another verdict."""
        assert not check(1, 2, compare_numerics(), compare_with(AlwaysEqualRule()))
        assert check(1, 2, compare_with(AlwaysEqualRule()), compare_numerics())


class TestComparer:
    """Test the reusable Comparer."""

    def test_compare_returns_comparison(self):
        """Comparer.compare returns ok and report together."""
        comparer = new_comparer()
        equal = comparer.compare([1], [1])
        assert equal == Comparison(ok=True, report='')
        assert equal

        unequal = comparer.compare([1], [2])
        assert not unequal.ok
        assert not unequal
        assert "Expected:" in unequal.report

    def test_reuse_keeps_configuration(self):
        """The same configuration applies to every comparison."""
        comparer = new_comparer(compare_structure())
        assert not comparer.check(4, 4.0)
        assert not comparer.check(1, 1.0)
        assert comparer.check([1], [1])

    def test_comparisons_do_not_mutate_config(self):
        """Default rules and formatting are resolved without being stored."""
        comparer = Comparer()
        comparer.report(0, 1)
        assert comparer.config.rules == []
        assert comparer.config.formatter is None

    def test_with_options_copies(self):
        """Extending a comparer leaves the original untouched."""
        base = new_comparer(compare_numerics())
        extended = base.with_options(compare_with(StructuralRule()))
        assert len(base.config.rules) == 1
        assert len(extended.config.rules) == 2
        assert not base.check([1], [1])
        assert extended.check([1], [1])

    def test_report_empty_when_equal(self):
        """Comparer.report is empty for equal values."""
        assert Comparer().report(0, 0) == ''
        assert Comparer().report(0, 1) != ''
