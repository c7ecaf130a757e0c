"""
pytest plugin providing the `equality` fixture.

Enable it from a conftest.py:

    pytest_plugins = ["flex_equality.pytest_plugin"]

Example:
    def test_totals(equality):
        equality.assert_equal(3, compute_total())
        equality.assert_equal([1, 2], compute_items())  # still runs if the first failed

Unequal comparisons do not stop the test; once its body has run, the test
is marked failed with every collected report.
"""

import pytest

from .testing import Asserter, DeferredFailures, bind

_deferred_key = pytest.StashKey[DeferredFailures]()


@pytest.fixture
def equality(request: pytest.FixtureRequest) -> Asserter:
    """Asserter whose failures are collected and reported after the test body."""
    deferred = DeferredFailures()
    request.node.stash[_deferred_key] = deferred
    return bind(deferred)


@pytest.hookimpl(wrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo) -> pytest.TestReport:  # noqa: ARG001
    """Turn a passing call phase into a failure when comparisons failed."""
    report = yield
    deferred = item.stash.get(_deferred_key, None)
    if report.when == "call" and deferred is not None and deferred.failed and report.passed:
        report.outcome = "failed"
        report.longrepr = deferred.summary()
    return report
