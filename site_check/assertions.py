"""Assertion helpers used inside check bodies.

Every helper raises :class:`CheckFailedError` when its condition does not
hold, so a check body can stop at the first broken expectation and let
``TestResults.check`` record it.
"""

import re
from collections.abc import Container
from typing import Any


class CheckFailedError(AssertionError):
    """Raised when a check's expectation is not met."""


def is_true(condition: object, message: str | None = None) -> None:
    """Fail unless ``condition`` is truthy."""
    if not condition:
        raise CheckFailedError(message or "Expected condition to be true")


def is_false(condition: object, message: str | None = None) -> None:
    """Fail if ``condition`` is truthy."""
    if condition:
        raise CheckFailedError(message or "Expected condition to be false")


def equals(actual: Any, expected: Any, message: str | None = None) -> None:
    """Fail unless ``actual == expected``."""
    if actual != expected:
        raise CheckFailedError(message or f"Expected {expected!r} but got {actual!r}")


def greater_than(actual: Any, expected: Any, message: str | None = None) -> None:
    """Fail unless ``actual > expected``."""
    if not actual > expected:
        raise CheckFailedError(
            message or f"Expected {actual!r} to be greater than {expected!r}"
        )


def less_than(actual: Any, expected: Any, message: str | None = None) -> None:
    """Fail unless ``actual < expected``."""
    if not actual < expected:
        raise CheckFailedError(
            message or f"Expected {actual!r} to be less than {expected!r}"
        )


def contains(container: Container[Any], item: Any, message: str | None = None) -> None:
    """Fail unless ``item`` is a member of ``container``."""
    if item not in container:
        raise CheckFailedError(message or f"Expected collection to contain {item!r}")


def matches(
    value: str, pattern: str | re.Pattern[str], message: str | None = None
) -> None:
    """Fail unless ``pattern`` is found in ``value``."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    if compiled.search(value) is None:
        raise CheckFailedError(
            message or f"Expected {value!r} to match pattern {compiled.pattern!r}"
        )
