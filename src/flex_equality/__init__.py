"""
flex-equality - value comparison and failure reporting for test suites.

Decides whether an expected and an actual value are equal under a small set
of semantic rules (cross-type numeric equality, time-zone independent
datetime equality, structural equality for everything else) and renders a
diff report when they are not.
"""

from .engine import Comparer, Comparison, check, compare, decide, new_comparer, report
from .constants import RuleType, ValueKind
from .config import Config, Option
from .options import (
    compare_identity,
    compare_numerics,
    compare_structure,
    compare_times,
    compare_with,
    format_json,
    format_verb,
    format_with,
    full_stack,
)
from .rules import BaseRule, IdentityRule, NumericRule, StructuralRule, TimeRule
from .registry import get_rule_class, list_registered_rules, register
from .reporter import Report, capture_stack, render
from .testing import Asserter, DeferredFailures, FailureHandle, bind
from .values import ABSENT, kind_of
from .exceptions import ConfigurationError, EqualityError

__version__ = "0.1.0"
__all__ = [
    "ABSENT",
    "Asserter",
    "BaseRule",
    "Comparer",
    "Comparison",
    "Config",
    "ConfigurationError",
    "DeferredFailures",
    "EqualityError",
    "FailureHandle",
    "IdentityRule",
    "NumericRule",
    "Option",
    "Report",
    "RuleType",
    "StructuralRule",
    "TimeRule",
    "ValueKind",
    "bind",
    "capture_stack",
    "check",
    "compare",
    "compare_identity",
    "compare_numerics",
    "compare_structure",
    "compare_times",
    "compare_with",
    "decide",
    "format_json",
    "format_verb",
    "format_with",
    "full_stack",
    "get_rule_class",
    "kind_of",
    "list_registered_rules",
    "new_comparer",
    "register",
    "render",
    "report",
]
