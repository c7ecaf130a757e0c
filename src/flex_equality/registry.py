"""
Rule registration system for flex-equality.

Provides decorator-based registration for rule implementations and handles
rule discovery by type string, so options can refer to rules by name.
"""

from typing import TYPE_CHECKING

from packaging import version

from .constants import RuleType

if TYPE_CHECKING:
    from .rules.base import BaseRule


class RuleRegistry:
    """
    Registry for rule implementations.

    Manages registration and lookup of rule classes by type string.
    Several versions of a rule type may be registered; lookups without an
    explicit version resolve to the latest one by semantic versioning.
    """

    def __init__(self):
        self._rules: dict[str, dict[str, type['BaseRule']]] = {}
        # Reverse mapping: class -> rule_type
        self._class_to_type: dict[type, str] = {}

    def register(
        self,
        rule_type: str | RuleType,
        rule_class: type['BaseRule'],
        version: str = "1.0.0",
    ) -> None:
        """
        Register a rule implementation.

        Args:
            rule_type: String or RuleType enum identifier for the rule type
            rule_class: Rule implementation class
            version: Semantic version of the rule implementation
        """
        rule_type_str = str(rule_type)

        if rule_type_str not in self._rules:
            self._rules[rule_type_str] = {}

        # Re-registration of the same version replaces the previous class
        self._rules[rule_type_str][version] = rule_class
        self._class_to_type[rule_class] = rule_type_str

    def get_rule_class(self, rule_type: str, version: str | None = None) -> type['BaseRule']:
        """
        Get the registered rule class for a rule type and version.

        Args:
            rule_type: String identifier for the rule type
            version: Specific version to retrieve, or None for latest

        Returns:
            The registered rule class

        Raises:
            ValueError: If rule type or version is not registered
        """
        rule_type = str(rule_type)
        latest = self.get_latest_version(rule_type)
        if version is None:
            version = latest

        versions = self._rules[rule_type]
        if version not in versions:
            available_versions = self._sorted_versions(rule_type)
            raise ValueError(
                f"Version '{version}' not found for rule type '{rule_type}'. "
                f"Available versions: {available_versions}",
            )
        return versions[version]

    def get_latest_version(self, rule_type: str) -> str:
        """
        Get the latest version for a rule type using semantic versioning.

        Raises:
            ValueError: If rule type is not registered
        """
        rule_type = str(rule_type)
        if not self._rules.get(rule_type):
            raise ValueError(f"Rule type '{rule_type}' is not registered")
        return max(self._rules[rule_type], key=version.parse)

    def _sorted_versions(self, rule_type: str) -> list[str]:
        return sorted(self._rules[rule_type], key=version.parse)

    def list_registered_rules(self) -> dict[str, dict[str, type['BaseRule']]]:
        """Get all registered rules as {rule_type: {version: class}}."""
        return {rule_type: dict(versions) for rule_type, versions in self._rules.items()}

    def get_rule_type_for_class(self, cls: type) -> str:
        """
        Get the rule type for a registered rule class.

        Raises:
            ValueError: If class is not registered
        """
        if cls not in self._class_to_type:
            raise ValueError(f"Class {cls} is not registered")
        return self._class_to_type[cls]

    def clear(self) -> None:
        """Clear all registered rules."""
        self._rules.clear()
        self._class_to_type.clear()


# Global registry instance
_global_registry = RuleRegistry()


def register(rule_type: str | RuleType, version: str = "1.0.0") -> callable:
    """
    Decorator for registering rule implementations.

    Args:
        rule_type: String or RuleType enum identifier for the rule type
        version: Semantic version of the rule implementation

    Returns:
        Decorator function

    Example:
        @register('case_insensitive', version="1.0.0")
        class CaseInsensitiveRule(BaseRule):
            def applies(self, expected, actual):
                return isinstance(expected, str) and isinstance(actual, str)

            def are_equal(self, expected, actual):
                return expected.casefold() == actual.casefold()
    """
    def decorator(cls: type['BaseRule']) -> type['BaseRule']:
        _global_registry.register(rule_type, cls, version)
        return cls

    return decorator


def get_rule_class(rule_type: str, version: str | None = None) -> type['BaseRule']:
    """
    Get the registered rule class for a rule type and version.

    Raises:
        ValueError: If rule type or version is not registered
    """
    return _global_registry.get_rule_class(rule_type, version)


def create_rule(rule_type: str, version: str | None = None) -> 'BaseRule':
    """
    Instantiate the registered rule for a rule type and version.

    Raises:
        ValueError: If rule type or version is not registered
    """
    return get_rule_class(rule_type, version)()


def list_registered_rules() -> dict[str, dict[str, type['BaseRule']]]:
    """Get all registered rules with their versions."""
    return _global_registry.list_registered_rules()


def get_rule_type_for_class(cls: type) -> str:
    """Get the rule type for a registered rule class."""
    return _global_registry.get_rule_type_for_class(cls)


def get_registry_state() -> dict[str, dict[str, type['BaseRule']]]:
    """Get the current state of the registry so it can be restored later."""
    return _global_registry.list_registered_rules()


def restore_registry_state(registry_state: dict[str, dict[str, type['BaseRule']]]) -> None:
    """
    Restore the registry state captured by `get_registry_state()`.

    Args:
        registry_state: Rule registrations to restore
    """
    _global_registry.clear()

    for rule_type, versions in registry_state.items():
        for rule_version, rule_class in versions.items():
            _global_registry.register(rule_type, rule_class, rule_version)
