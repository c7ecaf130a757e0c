"""
Custom exception hierarchy for flex-equality.

Comparisons themselves never raise: every pair of values yields a verdict.
These exceptions cover misuse of the configuration surface.
"""


class EqualityError(Exception):
    """Base exception for flex-equality package."""

    pass


class ConfigurationError(EqualityError):
    """
    Invalid option or rule configuration.

    Raised when an option is constructed with arguments it cannot use, e.g. a
    non-callable formatter or something that is not a rule.
    """

    def __init__(self, message: str, option: str | None = None):
        super().__init__(message)
        self.option = option
