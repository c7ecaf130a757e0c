"""
Option constructors.

Each function returns an option: a callable that mutates a `Config` in
place. Options are applied in the order given, so rules added by later
options run after rules added by earlier ones.

Example:
    check(expected, actual, compare_with(CaseInsensitiveRule()), format_json(indent=2))
"""

from collections.abc import Callable
from typing import Any

from .config import Config, Option
from .constants import RuleType
from .exceptions import ConfigurationError
from .formatting import json_formatter, verb_formatter
from .registry import create_rule
from .rules import BaseRule


def _resolve_rule(rule: Any) -> BaseRule:  # noqa: ANN401
    if isinstance(rule, BaseRule):
        return rule
    if isinstance(rule, type) and issubclass(rule, BaseRule):
        return rule()
    if isinstance(rule, str):
        # "numeric" picks the latest version, "numeric==1.0.0" a specific one
        rule_type, _, rule_version = str(rule).partition("==")
        try:
            return create_rule(rule_type.strip(), rule_version.strip() or None)
        except ValueError as e:
            raise ConfigurationError(str(e), option='compare_with') from e
    raise ConfigurationError(
        f"compare_with expects rule instances, rule classes or registered rule types, "
        f"got: {type(rule).__name__}",
        option='compare_with',
    )


def compare_with(*rules: BaseRule | type[BaseRule] | str | RuleType) -> Option:
    """
    Append rules to the rule set.

    Once any rule is added the default rule set is no longer used, so
    callers who want to keep the defaults must add them explicitly.

    Args:
        *rules: Rule instances, rule classes (instantiated without
            arguments), or registered rule type names. A name may pin a
            version as `"type==1.2.0"`; otherwise the latest version is used

    Raises:
        ConfigurationError: If an item cannot be resolved to a rule
    """
    resolved = [_resolve_rule(rule) for rule in rules]

    def option(config: Config) -> None:
        config.rules.extend(resolved)

    return option


def compare_numerics() -> Option:
    """Append the numeric rule."""
    return compare_with(RuleType.NUMERIC)


def compare_times() -> Option:
    """Append the time rule."""
    return compare_with(RuleType.TIME)


def compare_structure() -> Option:
    """Append the structural rule."""
    return compare_with(RuleType.STRUCTURAL)


def compare_identity() -> Option:
    """Append the identity rule."""
    return compare_with(RuleType.IDENTITY)


def format_with(formatter: Callable[[Any], str]) -> Option:
    """
    Render report values with a custom function.

    Raises:
        ConfigurationError: If `formatter` is not callable
    """
    if not callable(formatter):
        raise ConfigurationError(
            f"format_with expects a callable, got: {type(formatter).__name__}",
            option='format_with',
        )

    def option(config: Config) -> None:
        config.formatter = formatter

    return option


def format_verb(pattern: str) -> Option:
    """
    Render report values with a printf-style pattern, e.g. `'%r'` or `'%s'`.

    Raises:
        ConfigurationError: If `pattern` is not a string
    """
    if not isinstance(pattern, str):
        raise ConfigurationError(
            f"format_verb expects a string pattern, got: {type(pattern).__name__}",
            option='format_verb',
        )
    return format_with(verb_formatter(pattern))


def format_json(indent: int | None = None) -> Option:
    """
    Render report values as JSON.

    A value that cannot be serialized is shown as the serialization error's
    message.

    Args:
        indent: Indentation for pretty-printed output; None for a single line
    """
    if indent is not None and (not isinstance(indent, int) or indent < 0):
        raise ConfigurationError(
            f"format_json indent must be a non-negative integer, got: {indent!r}",
            option='format_json',
        )
    return format_with(json_formatter(indent))


def full_stack() -> Option:
    """Keep every frame in report stack snapshots, including runner internals."""
    def option(config: Config) -> None:
        config.filter_stack = False

    return option
