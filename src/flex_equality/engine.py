"""
Equality decision engine for flex-equality.

Evaluates the configured rules against a pair of values and renders a
report when they are not equal.

Values are deemed equal when the FIRST rule that applies to them says so:

1. Numbers of differing types are converted into each other's type and
   compared in both directions (NumericRule).
2. Datetimes are compared by the instant they denote (TimeRule).
3. Everything else of identical type is compared structurally
   (StructuralRule).

A pair no rule applies to is not equal.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .config import Config, Option
from .reporter import render
from .rules import BaseRule
from .values import qualified_name, type_of

logger = logging.getLogger(__name__)


def decide(expected: Any, actual: Any, rules: Sequence[BaseRule]) -> bool:  # noqa: ANN401
    """
    Return the verdict of the first rule that applies to the pair.

    The first applicable rule is final even when it reports the values as not
    equal; later rules are not consulted. If no rule applies, the values are
    not equal. A rule that raises never propagates: failing to decide
    applicability skips the rule, failing to decide equality counts as not
    equal.

    Args:
        expected: The expected value
        actual: The actual value
        rules: Rules in evaluation order

    Returns:
        True if the deciding rule judged the values equal
    """
    for rule in rules:
        try:
            applies = rule.applies(expected, actual)
        except Exception:
            logger.warning("Rule '%s' failed to check applicability; skipping", rule.name,
                           exc_info=True)
            continue
        if not applies:
            continue

        try:
            equal = bool(rule.are_equal(expected, actual))
        except Exception:
            logger.warning("Rule '%s' failed to compare values; treating as not equal",
                           rule.name, exc_info=True)
            equal = False

        logger.debug("Rule '%s' decided %s", rule.name, "equal" if equal else "not equal")
        return equal

    logger.debug(
        "No rule applies to <%s> and <%s>; treating as not equal",
        qualified_name(type_of(expected)), qualified_name(type_of(actual)),
    )
    return False


@dataclass
class Comparison:
    """Outcome of one comparison: the verdict and, when not equal, the report."""

    ok: bool
    report: str = ''

    def __bool__(self) -> bool:
        return self.ok


class Comparer:
    """
    Reusable comparer holding one configuration.

    Useful when a whole test should compare with the same rules and
    formatting. The configuration is read, never mutated, by comparisons, so
    a comparer may be shared as long as nobody changes its config meanwhile.
    """

    def __init__(self, config: Config | None = None):
        self.config = config if config is not None else Config()

    def with_options(self, *options: Option) -> 'Comparer':
        """Return a new comparer with further options applied to a copy of the config."""
        return Comparer(self.config.extended(*options))

    def check(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401
        """Return True if the values are equal under the configured rules."""
        return decide(expected, actual, self.config.effective_rules())

    def compare(self, expected: Any, actual: Any) -> Comparison:  # noqa: ANN401
        """Return the verdict together with a report when the values are not equal."""
        if self.check(expected, actual):
            return Comparison(ok=True)

        report = render(
            expected,
            actual,
            self.config.effective_formatter(expected),
            filter_stack=self.config.filter_stack,
        )
        return Comparison(ok=False, report=str(report))

    def report(self, expected: Any, actual: Any) -> str:  # noqa: ANN401
        """Return the report for the values, or an empty string when they are equal."""
        return self.compare(expected, actual).report


def new_comparer(*options: Option) -> Comparer:
    """Create a Comparer configured by the given options."""
    return Comparer(Config().apply(*options))


def check(expected: Any, actual: Any, *options: Option) -> bool:  # noqa: ANN401
    """Return True if expected and actual are equal under the configured rules."""
    return new_comparer(*options).check(expected, actual)


def compare(expected: Any, actual: Any, *options: Option) -> tuple[bool, str]:  # noqa: ANN401
    """Return the verdict and a full report of any discrepancy (empty when equal)."""
    comparison = new_comparer(*options).compare(expected, actual)
    return comparison.ok, comparison.report


def report(expected: Any, actual: Any, *options: Option) -> str:  # noqa: ANN401
    """Return a full report of any discrepancy, or an empty string when equal."""
    return new_comparer(*options).report(expected, actual)
