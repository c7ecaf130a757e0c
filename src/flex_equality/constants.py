"""
Constants and enums for flex-equality.

This module defines enums for commonly used string constants throughout the
codebase. All enums inherit from str so they can be used interchangeably with
their string values (e.g. when registering or looking up rules).
"""

from enum import Enum


class RuleType(str, Enum):
    """
    Built-in equality rule types available in flex-equality.

    These enums can be used interchangeably with their string values.
    Custom rule types can still be registered using arbitrary strings.
    """

    NUMERIC = 'numeric'
    TIME = 'time'
    STRUCTURAL = 'structural'
    IDENTITY = 'identity'

    def __str__(self) -> str:
        """Return the enum value as string."""
        return str(self.value)


class ValueKind(str, Enum):
    """
    Kinds of values the equality rules distinguish between.

    Every Python object is classified into exactly one kind by
    `flex_equality.values.kind_of`.
    """

    ABSENT = 'absent'
    NONE = 'none'
    BOOLEAN = 'boolean'
    INTEGER = 'integer'
    REAL = 'real'
    COMPLEX = 'complex'
    TEXT = 'text'
    INSTANT = 'instant'
    SEQUENCE = 'sequence'
    SET = 'set'
    MAPPING = 'mapping'
    COMPOSITE = 'composite'
    CALLABLE = 'callable'
    HANDLE = 'handle'
    OPAQUE = 'opaque'

    def __str__(self) -> str:
        """Return the enum value as string."""
        return str(self.value)


NUMERIC_KINDS = frozenset({ValueKind.INTEGER, ValueKind.REAL})

# Kinds whose values are immutable scalars and therefore compared by value
# even under identity semantics.
SCALAR_KINDS = frozenset({
    ValueKind.NONE,
    ValueKind.BOOLEAN,
    ValueKind.INTEGER,
    ValueKind.REAL,
    ValueKind.COMPLEX,
    ValueKind.TEXT,
    ValueKind.INSTANT,
})
