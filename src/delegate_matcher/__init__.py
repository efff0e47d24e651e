"""delegate_matcher - assert that a method delegates to another object.

Usage:
    from delegate_matcher import delegate_method, expect

    expect(post_office).to(delegate_method("deliver_mail").to("mailman"))
"""

from .calls import Call, format_arguments
from .errors import (
    ConfigurationError,
    DelegateMatcherError,
    DelegateObjectNotSpecified,
    DelegationAssertionError,
    InterceptionError,
)
from .expectations import Expectation, expect
from .matcher import DelegateMethodMatcher, DelegationSpec, MatchResult, delegate_method
from .spy import CallLog, DelegateSpy
from .subject import SubjectKind

__version__ = "0.1.0"

__all__ = [
    # DSL
    "delegate_method",
    "expect",
    "Expectation",
    # Matcher
    "DelegateMethodMatcher",
    "DelegationSpec",
    "MatchResult",
    "SubjectKind",
    # Spy
    "DelegateSpy",
    "CallLog",
    "Call",
    "format_arguments",
    # Errors
    "DelegateMatcherError",
    "ConfigurationError",
    "DelegateObjectNotSpecified",
    "InterceptionError",
    "DelegationAssertionError",
]
