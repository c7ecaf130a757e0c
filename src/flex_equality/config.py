"""
Comparison configuration.

A `Config` accumulates the effect of a sequence of options: the ordered rule
set, the formatter used in reports, and how the stack snapshot is captured.
Defaults are substituted lazily, when the configuration is consumed, so the
order in which options are applied never matters for them.
"""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field

from .formatting import default_formatter_for
from .rules import BaseRule, NumericRule, StructuralRule, TimeRule

Option = Callable[['Config'], None]

# Read-only template; rules are frozen and stateless so the instances are shared.
DEFAULT_RULES: tuple[BaseRule, ...] = (NumericRule(), TimeRule(), StructuralRule())


class Config(BaseModel):
    """Mutable accumulator populated by options."""

    rules: list[BaseRule] = Field(
        default_factory=list,
        description="Rules in evaluation order; empty means the default rule set",
    )
    formatter: Callable[[Any], str] | None = Field(
        None,
        description="Value formatter for reports; None picks one from the expected value",
    )
    filter_stack: bool = Field(
        True,
        description="Drop frames from flex-equality and the test runner from report stacks",
    )

    def apply(self, *options: Option) -> 'Config':
        """Apply options in order, mutating this configuration. Returns self."""
        for option in options:
            option(self)
        return self

    def extended(self, *options: Option) -> 'Config':
        """Return a copy of this configuration with further options applied."""
        copy = self.model_copy(update={'rules': list(self.rules)})
        return copy.apply(*options)

    def effective_rules(self) -> list[BaseRule]:
        """Configured rules, or the default rule set when none were added."""
        if self.rules:
            return list(self.rules)
        return list(DEFAULT_RULES)

    def effective_formatter(self, expected: Any) -> Callable[[Any], str]:  # noqa: ANN401
        """Configured formatter, or the default formatter for the expected value."""
        if self.formatter is not None:
            return self.formatter
        return default_formatter_for(expected)
