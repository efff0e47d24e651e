"""Recording stand-in for a delegate object.

While a match runs, the subject's accessor hands out a DelegateSpy instead of
the real delegate. Every method called on the spy is appended to a CallLog,
in order, so the matcher can look for the expected call afterward.

Usage:
    log = CallLog()
    spy = DelegateSpy(log)
    spy.deliver_mail("221B Baker St.", hastily=True)
    log.calls
    # [Call(name="deliver_mail", args=("221B Baker St.",), kwargs={"hastily": True})]
"""

from __future__ import annotations

import logging
from typing import Any

from .calls import Call

logger = logging.getLogger(__name__)

_MISSING = object()


class CallLog:
    """Ordered record of the calls a DelegateSpy received."""

    def __init__(self) -> None:
        self._calls: list[Call] = []

    def record(self, call: Call) -> None:
        self._calls.append(call)

    @property
    def calls(self) -> list[Call]:
        """All recorded calls, oldest first."""
        return list(self._calls)

    def calls_to(self, name: str) -> list[Call]:
        return [call for call in self._calls if call.name == name]

    def was_called(self, name: str) -> bool:
        return any(call.name == name for call in self._calls)

    def reset(self) -> None:
        self._calls.clear()

    def __len__(self) -> int:
        return len(self._calls)


class DelegateSpy:
    """Answers any public method call, records it, optionally forwards it.

    The spy keeps its own state under name-mangled attributes and exposes no
    public names, so every attribute the subject looks up on it is treated as
    a call aimed at the delegate.

    Args:
        log: CallLog receiving each call
        wrapped: The real delegate, or None when there is none
        passthrough: Forward each recorded call to `wrapped` and return its
            result. Without passthrough every call returns None.
    """

    def __init__(self, log: CallLog, wrapped: Any = None, passthrough: bool = False):
        object.__setattr__(self, "_DelegateSpy__log", log)
        object.__setattr__(self, "_DelegateSpy__wrapped", wrapped)
        object.__setattr__(self, "_DelegateSpy__passthrough", passthrough)

    def __getattr__(self, name: str) -> Any:
        # Dunder lookups (copy, pickle, repr helpers) are not delegate calls
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)

        def recorder(*args: Any, **kwargs: Any) -> Any:
            call = Call(name=name, args=args, kwargs=kwargs)
            self.__log.record(call)
            logger.debug(f"Spy received {call}")
            return self.__forward(name, args, kwargs)

        recorder.__name__ = name
        return recorder

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Cannot set {name!r} on a delegate spy")

    def __forward(self, name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        if not self.__passthrough or self.__wrapped is None:
            return None
        target = getattr(self.__wrapped, name, _MISSING)
        if target is _MISSING or not callable(target):
            return None
        return target(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<DelegateSpy for {self.__wrapped!r}: {len(self.__log)} call(s)>"
