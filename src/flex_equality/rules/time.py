"""
Time rule implementation.

Compares two datetimes by the instant they denote, ignoring the time zone
they are displayed in.
"""

from datetime import datetime
from typing import Any

from .base import BaseRule
from ..constants import RuleType
from ..registry import register


def is_instant(value: Any) -> bool:  # noqa: ANN401
    """Return True for `datetime` values (not plain dates, times or durations)."""
    return isinstance(value, datetime)


@register(RuleType.TIME, version="1.0.0")
class TimeRule(BaseRule):
    """
    Equality for datetimes, judged on the absolute instant.

    `datetime(2020, 1, 1, 12, tzinfo=UTC)` equals the same moment expressed in
    any other zone. Naive datetimes equal only naive datetimes with the same
    wall clock; a naive and an aware datetime are never equal.
    """

    def applies(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401, D102
        return is_instant(expected) and is_instant(actual)

    def are_equal(self, expected: datetime, actual: datetime) -> bool:  # noqa: D102
        # aware datetimes compare by UTC instant; naive vs aware is simply False
        return expected == actual
