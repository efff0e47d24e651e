"""Delegation matcher.

Verifies that calling a method on a subject forwards the call to a delegate
object reached through one of the subject's accessors.

Usage:
    matcher = delegate_method("deliver_mail").to("mailman")
    if not matcher.matches(post_office):
        print(matcher.failure_message)

    # Delegate-side method under a different name, with exact arguments
    matcher = (
        delegate_method("deliver_mail")
        .to("mailman")
        .as_("deliver_mail_and_avoid_dogs")
        .with_arguments("221B Baker St.", hastily=True)
    )
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any

from .calls import Call, format_arguments
from .config import get_config, get_default_passthrough, get_max_repr_length
from .errors import DelegateObjectNotSpecified
from .interception import intercept_accessor, resolve_delegate
from .spy import CallLog, DelegateSpy
from .subject import SubjectInfo, SubjectKind

logger = logging.getLogger(__name__)


def _responds_to(subject: Any, name: str) -> bool:
    """Check that `subject.<name>` exists and is usable from the subject itself.

    On a class subject, a plain function in the class body is an instance
    method and needs an instance, so it does not count.
    """
    if inspect.isclass(subject):
        for klass in inspect.getmro(subject):
            if name in vars(klass):
                return not inspect.isfunction(vars(klass)[name])
    try:
        inspect.getattr_static(subject, name)
    except AttributeError:
        return hasattr(subject, name)
    return True


@dataclass(frozen=True)
class DelegationSpec:
    """What a DelegateMethodMatcher expects.

    Attributes:
        method_name: Method called on the subject
        delegate_accessor_name: Accessor on the subject returning the delegate
        expected_args: Positional arguments expected on the delegate call,
            None when arguments are not checked
        expected_kwargs: Keyword arguments expected on the delegate call
        alias_method_name: Delegate-side method name when it differs
        passthrough: Forward spied calls to the real delegate
    """

    method_name: str
    delegate_accessor_name: str | None = None
    expected_args: tuple[Any, ...] | None = None
    expected_kwargs: dict[str, Any] = field(default_factory=dict)
    alias_method_name: str | None = None
    passthrough: bool = False

    __hash__ = None  # type: ignore[assignment]

    @property
    def delegate_method_name(self) -> str:
        return self.alias_method_name or self.method_name

    @property
    def checks_arguments(self) -> bool:
        return self.expected_args is not None

    def is_satisfied_by(self, call: Call) -> bool:
        if call.name != self.delegate_method_name:
            return False
        if not self.checks_arguments:
            return True
        return call.has_arguments(self.expected_args, self.expected_kwargs)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one match attempt."""

    matched: bool
    calls: tuple[Call, ...] = ()


class DelegateMethodMatcher:
    """Matcher asserting that a subject's method delegates to another object.

    Configuration methods return a new matcher; the spec of an existing
    matcher never changes. Each call to matches() installs the spy, calls the
    method under test, restores the subject and stores the MatchResult used
    by the message properties.
    """

    def __init__(self, spec: DelegationSpec, max_repr_length: int | None = None):
        self.spec = spec
        self.max_repr_length = max_repr_length
        self.result: MatchResult | None = None
        self._subject_info: SubjectInfo | None = None

    def __repr__(self) -> str:
        return f"<DelegateMethodMatcher {self.describe()!r}>"

    # =========================================================================
    # Configuration
    # =========================================================================

    def _with_spec(self, **changes: Any) -> DelegateMethodMatcher:
        return DelegateMethodMatcher(
            dataclasses.replace(self.spec, **changes), self.max_repr_length
        )

    def to(self, accessor_name: str) -> DelegateMethodMatcher:
        """Name the accessor on the subject that returns the delegate."""
        return self._with_spec(delegate_accessor_name=accessor_name)

    def as_(self, alias_name: str) -> DelegateMethodMatcher:
        """Expect the delegate's `alias_name` method rather than the same name."""
        return self._with_spec(alias_method_name=alias_name)

    def with_arguments(self, *args: Any, **kwargs: Any) -> DelegateMethodMatcher:
        """Expect the delegate call to receive exactly these arguments.

        The same arguments are passed to the method under test. Calling this
        with no arguments leaves arguments unchecked.
        """
        if not args and not kwargs:
            return self._with_spec(expected_args=None, expected_kwargs={})
        return self._with_spec(expected_args=tuple(args), expected_kwargs=dict(kwargs))

    def passing_through(self, enabled: bool = True) -> DelegateMethodMatcher:
        """Let spied calls reach the real delegate and return its result."""
        return self._with_spec(passthrough=enabled)

    # =========================================================================
    # Matching
    # =========================================================================

    def matches(self, subject: Any) -> bool:
        """Call the method under test and check the delegate received the call.

        Args:
            subject: Instance, class or module owning the method under test

        Returns:
            True if at least one recorded delegate call satisfies the spec

        Raises:
            DelegateObjectNotSpecified: If .to() was never called
            InterceptionError: If the accessor could not be overridden or restored
        """
        spec = self.spec
        if spec.delegate_accessor_name is None:
            raise DelegateObjectNotSpecified(spec.method_name)

        self._subject_info = SubjectInfo.of(subject)
        self.result = None

        if not (
            _responds_to(subject, spec.method_name)
            and _responds_to(subject, spec.delegate_accessor_name)
        ):
            logger.debug(
                f"{self._subject_info.name} lacks {spec.method_name!r} or "
                f"{spec.delegate_accessor_name!r}; nothing to call"
            )
            self.result = MatchResult(matched=False)
            return False

        wrapped = None
        if spec.passthrough:
            wrapped = resolve_delegate(subject, spec.delegate_accessor_name)

        log = CallLog()
        spy = DelegateSpy(log, wrapped=wrapped, passthrough=spec.passthrough)
        with intercept_accessor(subject, spec.delegate_accessor_name, spy):
            self._call_method_under_test(subject)

        calls = tuple(log.calls)
        matched = any(spec.is_satisfied_by(call) for call in calls)
        self.result = MatchResult(matched=matched, calls=calls)
        logger.debug(
            f"{self._subject_info.name}: {self.describe()} -> "
            f"{'matched' if matched else 'no match'} ({len(calls)} call(s))"
        )
        return matched

    def does_not_match(self, subject: Any) -> bool:
        return not self.matches(subject)

    def _call_method_under_test(self, subject: Any) -> Any:
        method = getattr(subject, self.spec.method_name)
        if self.spec.checks_arguments:
            return method(*self.spec.expected_args, **self.spec.expected_kwargs)
        return method()

    # =========================================================================
    # Messages
    # =========================================================================

    def describe(self, subject: Any = None) -> str:
        """Describe the expectation.

        Args:
            subject: Subject used to pick "#" or "." notation. Defaults to
                the last matched subject, or instance notation before any match.
        """
        info = SubjectInfo.of(subject) if subject is not None else self._subject_info
        if info is None:
            info = SubjectInfo(kind=SubjectKind.INSTANCE, name="")

        spec = self.spec
        text = (
            f"delegate {info.qualify(spec.method_name)} "
            f"to {info.qualify(str(spec.delegate_accessor_name))} object"
        )
        if spec.alias_method_name and spec.alias_method_name != spec.method_name:
            text += f" as {info.qualify(spec.alias_method_name)}"
        if spec.checks_arguments:
            arguments = format_arguments(
                spec.expected_args, spec.expected_kwargs, self.max_repr_length
            )
            text += f" passing arguments {arguments}"
        return text

    @property
    def description(self) -> str:
        return self.describe()

    @property
    def failure_message(self) -> str:
        """Message for a positive expectation that did not match."""
        info = self._require_match_attempt()
        lines = [f"Expected {info.name} to {self.describe()}"]
        calls_header = (
            f"Method calls sent to "
            f"{info.name}{info.qualify(str(self.spec.delegate_accessor_name))}:"
        )
        calls = self.result.calls if self.result else ()
        if not calls:
            lines.append(f"{calls_header} (none)")
        else:
            lines.append(calls_header)
            lines.extend(
                f"{index}) {call.format(self.max_repr_length)}"
                for index, call in enumerate(calls, start=1)
            )
        return "\n".join(lines)

    @property
    def failure_message_when_negated(self) -> str:
        """Message for a negated expectation that matched anyway."""
        info = self._require_match_attempt()
        return f"Expected {info.name} not to {self.describe()}, but it did"

    def _require_match_attempt(self) -> SubjectInfo:
        if self._subject_info is None:
            raise RuntimeError("failure messages are only available after matches()")
        return self._subject_info


def delegate_method(method_name: str) -> DelegateMethodMatcher:
    """Start a delegation expectation for `method_name`.

    Passthrough and message truncation defaults come from the loaded
    configuration (see delegate_matcher.config).
    """
    config = get_config()
    spec = DelegationSpec(
        method_name=method_name,
        passthrough=get_default_passthrough(config),
    )
    return DelegateMethodMatcher(spec, max_repr_length=get_max_repr_length(config))
