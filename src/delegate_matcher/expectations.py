"""Assertion entry point for delegation matchers.

Usage:
    expect(post_office).to(delegate_method("deliver_mail").to("mailman"))
    expect(post_office).not_to(delegate_method("deliver_mail").to("courier"))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import DelegationAssertionError
from .matcher import DelegateMethodMatcher


@dataclass
class Expectation:
    """Binds a subject to matchers and raises when they disagree."""

    subject: Any

    def to(self, matcher: DelegateMethodMatcher) -> None:
        """Assert the matcher matches the subject.

        Raises:
            DelegationAssertionError: With the matcher's failure_message
        """
        if not matcher.matches(self.subject):
            raise DelegationAssertionError(matcher.failure_message)

    def not_to(self, matcher: DelegateMethodMatcher) -> None:
        """Assert the matcher does not match the subject.

        Raises:
            DelegationAssertionError: With the matcher's failure_message_when_negated
        """
        if not matcher.does_not_match(self.subject):
            raise DelegationAssertionError(matcher.failure_message_when_negated)

    to_not = not_to


def expect(subject: Any) -> Expectation:
    return Expectation(subject)
