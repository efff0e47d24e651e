"""Assertion helpers for delegation matcher tests.

Mirror the expect(...) { ... }.to fail_with_message(...) style: run an
expectation and compare the raised failure message exactly.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from delegate_matcher import DelegationAssertionError


def assert_fails_with_message(action: Callable[[], Any], message: str) -> None:
    """Assert `action` raises DelegationAssertionError with exactly `message`.

    Args:
        action: Zero-argument callable running an expectation
        message: Expected failure message, lines joined with newlines

    Raises:
        AssertionError: If nothing was raised or the message differs
    """
    with pytest.raises(DelegationAssertionError) as exc_info:
        action()
    actual = str(exc_info.value)
    assert actual == message, f"Expected failure message:\n{message}\nGot:\n{actual}"


def assert_passes(action: Callable[[], Any]) -> None:
    """Assert `action` completes without a delegation assertion failure."""
    try:
        action()
    except DelegationAssertionError as e:
        pytest.fail(f"Expected expectation to pass, but it failed with:\n{e}")
