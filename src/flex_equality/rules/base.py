"""
Base class for equality rules.

A rule encapsulates one equality policy plus the predicate that decides
whether the policy applies to a pair of values at all.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel


class BaseRule(BaseModel, ABC):
    """
    Base class for equality rules.

    Rules are frozen Pydantic models: built-in rules have no fields, custom
    rules may declare validated parameters. A rule holds no state about any
    single comparison; both operations receive the pair directly.

    Subclasses implement `applies()` and `are_equal()`. The dispatcher only
    calls `are_equal()` after `applies()` returned True.
    """

    model_config: ClassVar[dict[str, Any]] = {'extra': 'forbid', 'frozen': True}

    @property
    def name(self) -> str:
        """Registered rule type, or the class name for unregistered rules."""
        # Import here to avoid circular import
        from ..registry import get_rule_type_for_class  # noqa: PLC0415
        try:
            return get_rule_type_for_class(self.__class__)
        except ValueError:
            return self.__class__.__name__

    @abstractmethod
    def applies(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401
        """Return True if this rule is able to judge the pair."""
        raise NotImplementedError

    @abstractmethod
    def are_equal(self, expected: Any, actual: Any) -> bool:  # noqa: ANN401
        """Return the verdict for a pair this rule applies to."""
        raise NotImplementedError

    def __call__(self, expected: Any, actual: Any) -> bool | None:  # noqa: ANN401
        """
        Judge a pair in one step.

        Returns:
            None if the rule does not apply, otherwise the verdict.
        """
        if not self.applies(expected, actual):
            return None
        return self.are_equal(expected, actual)
