"""
Rendering of comparison reports.

A report shows both values side by side with their types, a line of `^`
markers under every differing character, and a snapshot of the call stack
pointing at the test code that made the comparison.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from types import FrameType
from typing import Any

from .formatting import type_descriptor

logger = logging.getLogger(__name__)

# Frames from these modules are plumbing, not the caller's test code.
INTERNAL_MODULES = ('flex_equality', '_pytest', 'pytest', 'pluggy', 'unittest', 'runpy')


@dataclass
class Report:
    """
    Human-readable description of a comparison.

    `type_diff` is exactly as wide as the padded type columns so that
    `value_diff` lines up under the values. `value_diff` is empty when either
    rendered value spans several lines.
    """

    expected_type: str
    actual_type: str
    expected_value: str
    actual_value: str
    type_diff: str
    value_diff: str
    stack: str = ''

    def __str__(self) -> str:
        lines = [
            f"Expected: {self.expected_type} {self.expected_value}",
            f"Actual:   {self.actual_type} {self.actual_value}",
            f"Diff:     {self.type_diff} {self.value_diff}".rstrip(),
            "Stack:",
        ]
        if self.stack:
            lines.append(self.stack.rstrip('\n'))
        return '\n'.join(lines) + '\n'


def diff_markers(expected: str, actual: str) -> str:
    """
    Mark each position where two strings differ.

    Returns a string as long as the longer input with `^` where the characters
    differ (or one string has already ended) and a space where they match.
    """
    markers = []
    for position in range(max(len(expected), len(actual))):
        if (position >= len(expected) or position >= len(actual)
                or expected[position] != actual[position]):
            markers.append('^')
        else:
            markers.append(' ')
    return ''.join(markers)


def _is_internal(frame: FrameType) -> bool:
    if frame.f_locals.get('__tracebackhide__'):
        return True
    module = frame.f_globals.get('__name__') or ''
    return any(module == name or module.startswith(name + '.') for name in INTERNAL_MODULES)


def capture_stack(filtered: bool = True) -> str:
    """
    Capture the current call stack, outermost frame first.

    Args:
        filtered: Drop frames from flex-equality itself, from the pytest,
            pluggy and unittest machinery, and frames that set
            `__tracebackhide__`, leaving the caller's test code.
    """
    frame = inspect.currentframe()
    frames = []
    while frame is not None:
        if not (filtered and _is_internal(frame)):
            frames.append((frame, frame.f_lineno))
        frame = frame.f_back
    frames.reverse()
    return ''.join(traceback.StackSummary.extract(frames).format())


def _render_value(formatter: Callable[[Any], str], value: Any) -> str:  # noqa: ANN401
    try:
        return str(formatter(value))
    except Exception as e:
        logger.warning("Formatter failed for %s value: %s", type(value).__name__, e)
        return str(e)


def render(
        expected: Any,  # noqa: ANN401
        actual: Any,  # noqa: ANN401
        formatter: Callable[[Any], str],
        filter_stack: bool = True,
    ) -> Report:
    """
    Build the report for a pair of values.

    Args:
        expected: The expected value
        actual: The actual value
        formatter: Function rendering a value for display
        filter_stack: Whether the stack snapshot keeps only caller frames

    Returns:
        The rendered Report; a formatter failure is shown as its message
    """
    expected_type = type_descriptor(expected)
    actual_type = type_descriptor(actual)
    width = max(len(expected_type), len(actual_type))
    expected_type = expected_type.ljust(width)
    actual_type = actual_type.ljust(width)

    expected_value = _render_value(formatter, expected)
    actual_value = _render_value(formatter, actual)
    if '\n' in expected_value or '\n' in actual_value:
        value_diff = ''
    else:
        value_diff = diff_markers(expected_value, actual_value)

    return Report(
        expected_type=expected_type,
        actual_type=actual_type,
        expected_value=expected_value,
        actual_value=actual_value,
        type_diff=diff_markers(expected_type, actual_type),
        value_diff=value_diff,
        stack=capture_stack(filtered=filter_stack),
    )
