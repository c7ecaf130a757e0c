"""
Test-runner binding.

`bind()` wraps anything with a `fail(message)` method (a pytest fixture
handle, a `unittest.TestCase`, a custom collector) in an `Asserter` whose
`assert_equal()` forwards reports of unequal values to that method.
"""

from typing import Any, Protocol, runtime_checkable

from .config import Config, Option
from .engine import Comparer
from .exceptions import ConfigurationError


@runtime_checkable
class FailureHandle(Protocol):
    """Anything that can mark the running test as failed."""

    def fail(self, message: str) -> Any:  # noqa: ANN401, D102
        ...


class DeferredFailures:
    """
    Failure handle that records messages without stopping the test.

    The pytest plugin uses it to keep a test running after an unequal
    comparison and to mark the test failed once its body has finished.
    """

    def __init__(self):
        self.messages: list[str] = []

    def fail(self, message: str) -> None:
        """Record a failure message."""
        self.messages.append(message)

    @property
    def failed(self) -> bool:
        """True if any failure was recorded."""
        return bool(self.messages)

    def summary(self) -> str:
        """All recorded messages, numbered in the order they were recorded."""
        total = len(self.messages)
        return '\n'.join(
            f"Comparison {index} of {total} failed:\n{message.strip()}\n"
            for index, message in enumerate(self.messages, start=1)
        )


class Asserter:
    """
    Compares values and reports inequality to a test handle.

    The asserter holds the handle rather than extending it, so it works with
    any runner that can express a failure as `fail(message)`.
    """

    def __init__(self, handle: FailureHandle, config: Config | None = None):
        self.handle = handle
        self.comparer = Comparer(config)

    def assert_equal(self, expected: Any, actual: Any, *options: Option) -> bool:  # noqa: ANN401
        """
        Compare expected and actual and report any discrepancy to the handle.

        Args:
            expected: The expected value
            actual: The actual value
            *options: Options applied on top of the bound ones for this call only

        Returns:
            True if the values are equal; False after the report was forwarded
        """
        __tracebackhide__ = True
        comparer = self.comparer.with_options(*options) if options else self.comparer
        comparison = comparer.compare(expected, actual)
        if not comparison.ok:
            self.handle.fail('\n' + comparison.report)
        return comparison.ok


def bind(handle: FailureHandle, *options: Option) -> Asserter:
    """
    Bind an Asserter to a test handle.

    Args:
        handle: Object exposing `fail(message)`
        *options: Options used by every `assert_equal` call of the asserter

    Raises:
        ConfigurationError: If the handle has no callable `fail`
    """
    if not isinstance(handle, FailureHandle) or not callable(handle.fail):
        raise ConfigurationError(
            f"bind expects an object with a fail(message) method, got: {type(handle).__name__}",
            option='bind',
        )
    return Asserter(handle, Config().apply(*options))
