"""
Equality rule implementations.

Imports all built-in rules to trigger their registration.
"""

from .base import BaseRule
from .identity import IdentityRule
from .numeric import NumericRule
from .structural import StructuralRule, structurally_equal
from .time import TimeRule

__all__ = [
    "BaseRule",
    "IdentityRule",
    "NumericRule",
    "StructuralRule",
    "TimeRule",
    "structurally_equal",
]
