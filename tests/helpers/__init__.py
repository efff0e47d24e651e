"""Test helpers for delegate-matcher.

This package provides utilities for testing the delegation matcher:
- Delegation: exact failure-message assertions
- Messages: partial message matchers
- Mail: delegate classes used as collaborators
"""

from .delegation import assert_fails_with_message, assert_passes
from .mail import Company, Mailman
from .messages import NEGATED_MATCHER, NO_CALLS_MATCHER, MessageMatcher, regex_matcher

__all__ = [
    # Assertions
    "assert_fails_with_message",
    "assert_passes",
    # Matchers
    "MessageMatcher",
    "regex_matcher",
    "NO_CALLS_MATCHER",
    "NEGATED_MATCHER",
    # Collaborators
    "Mailman",
    "Company",
]
