"""Temporarily make a subject's delegate accessor return a spy.

The override is scoped to a `with` block and always undone on exit, including
when the block raises.

Instance subjects get the override on the instance only:
- if the accessor can be shadowed in the instance __dict__ (methods, plain
  attributes), the spy-returning replacement goes there;
- otherwise (properties, __slots__ classes) the instance's __class__ is swapped
  for a throwaway subclass that overrides the accessor.

Class and module subjects get the override set on the object itself, and the
original __dict__ entry is put back afterward.
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any

from .errors import InterceptionError
from .subject import SubjectKind

logger = logging.getLogger(__name__)

_MISSING = object()


class AccessorStyle(str, Enum):
    """How the subject reaches its delegate."""

    METHOD = "method"  # self.mailman().deliver_mail()
    ATTRIBUTE = "attribute"  # self.mailman.deliver_mail()


def _is_method_like(value: Any) -> bool:
    return (
        isinstance(value, (staticmethod, classmethod, functools.partial))
        or inspect.isroutine(value)
    )


def _is_data_descriptor(value: Any) -> bool:
    return hasattr(type(value), "__set__") or hasattr(type(value), "__delete__")


def accessor_style(subject: Any, accessor_name: str) -> AccessorStyle:
    """Classify the accessor without triggering descriptors.

    A missing accessor is treated as a method, the common case for a subject
    that was never written to delegate. So is an accessor holding a class
    (`mailman = Mailman`), which is called to build the delegate.
    """
    try:
        static_value = inspect.getattr_static(subject, accessor_name)
    except AttributeError:
        return AccessorStyle.METHOD
    if _is_method_like(static_value) or inspect.isclass(static_value):
        return AccessorStyle.METHOD
    return AccessorStyle.ATTRIBUTE


def resolve_delegate(subject: Any, accessor_name: str) -> Any:
    """Return the real delegate the accessor currently yields, or None if absent."""
    try:
        accessor = getattr(subject, accessor_name)
    except AttributeError:
        logger.debug(f"{accessor_name!r} not found on {subject!r}; no real delegate")
        return None
    if accessor_style(subject, accessor_name) is AccessorStyle.METHOD:
        return accessor()
    return accessor


def _returning(spy: Any) -> Callable[..., Any]:
    def accessor(*args: Any, **kwargs: Any) -> Any:
        return spy

    return accessor


@contextmanager
def intercept_accessor(subject: Any, accessor_name: str, spy: Any) -> Iterator[None]:
    """Make `subject.<accessor_name>` yield `spy` inside the block.

    Args:
        subject: Instance, class or module whose accessor is overridden
        accessor_name: Name of the accessor method or attribute
        spy: Object handed out in place of the real delegate

    Raises:
        InterceptionError: If the override cannot be installed or removed
    """
    style = accessor_style(subject, accessor_name)
    if SubjectKind.of(subject) is SubjectKind.CLASS:
        restore = _override_on_owner(subject, accessor_name, spy, style)
    elif _can_shadow_on_instance(subject, accessor_name):
        restore = _shadow_on_instance(subject, accessor_name, spy, style)
    else:
        restore = _swap_class(subject, accessor_name, spy, style)

    logger.debug(f"Intercepting {accessor_name!r} on {subject!r} ({style.value})")
    try:
        yield
    finally:
        try:
            restore()
        except Exception as e:
            logger.error(f"Failed to restore {accessor_name!r} on {subject!r}: {e}")
            raise InterceptionError(
                f"Could not restore {accessor_name!r} on {subject!r}: {e}"
            ) from e
        logger.debug(f"Restored {accessor_name!r} on {subject!r}")


def _override_on_owner(
    owner: Any, name: str, spy: Any, style: AccessorStyle
) -> Callable[[], None]:
    original = vars(owner).get(name, _MISSING)
    if style is AccessorStyle.METHOD:
        replacement = _returning(spy)
        if inspect.isclass(owner):
            replacement = staticmethod(replacement)
    else:
        replacement = spy

    try:
        setattr(owner, name, replacement)
    except (AttributeError, TypeError) as e:
        raise InterceptionError(f"Cannot override {name!r} on {owner!r}: {e}") from e

    def restore() -> None:
        if original is _MISSING:
            delattr(owner, name)
        else:
            setattr(owner, name, original)

    return restore


def _can_shadow_on_instance(subject: Any, name: str) -> bool:
    if not isinstance(getattr(subject, "__dict__", None), dict):
        return False
    class_value = inspect.getattr_static(type(subject), name, _MISSING)
    return class_value is _MISSING or not _is_data_descriptor(class_value)


def _shadow_on_instance(
    subject: Any, name: str, spy: Any, style: AccessorStyle
) -> Callable[[], None]:
    # Writes go straight to __dict__ so frozen dataclasses and custom
    # __setattr__ hooks are bypassed.
    namespace = vars(subject)
    original = namespace.get(name, _MISSING)
    namespace[name] = _returning(spy) if style is AccessorStyle.METHOD else spy

    def restore() -> None:
        if original is _MISSING:
            namespace.pop(name, None)
        else:
            namespace[name] = original

    return restore


def _swap_class(subject: Any, name: str, spy: Any, style: AccessorStyle) -> Callable[[], None]:
    original_class = type(subject)
    if style is AccessorStyle.METHOD:
        replacement: Any = staticmethod(_returning(spy))
    else:
        replacement = property(lambda self: spy)

    try:
        intercepting_class = type(
            original_class.__name__,
            (original_class,),
            {
                "__slots__": (),
                "__module__": original_class.__module__,
                "__qualname__": original_class.__qualname__,
                name: replacement,
            },
        )
        subject.__class__ = intercepting_class
    except TypeError as e:
        raise InterceptionError(
            f"Cannot override {name!r} on {original_class.__name__} instance: {e}"
        ) from e

    def restore() -> None:
        subject.__class__ = original_class

    return restore
