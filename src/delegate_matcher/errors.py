"""Exception types raised by delegate_matcher.

Assertion failures are not exceptions here: a matcher that does not match
returns False and exposes a failure message. Only misconfiguration and
interception problems raise.
"""


class DelegateMatcherError(Exception):
    """Base class for all delegate_matcher errors."""

    pass


class ConfigurationError(DelegateMatcherError):
    """Raised when a matcher or the config file is invalid."""

    pass


class DelegateObjectNotSpecified(ConfigurationError):
    """Raised when matching is attempted before `.to(accessor)` was called."""

    def __init__(self, method_name: str):
        self.method_name = method_name
        super().__init__(
            f"delegate object not specified for {method_name!r}; "
            f"call .to(<accessor name>) before matching"
        )


class InterceptionError(DelegateMatcherError):
    """Raised when the delegate accessor could not be overridden or restored."""

    pass


class DelegationAssertionError(AssertionError):
    """Raised by expect(...).to / .not_to when the matcher disagrees."""

    pass
