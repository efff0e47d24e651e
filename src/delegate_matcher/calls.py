"""Recorded calls and their rendering in matcher messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _truncate(text: str, max_length: int | None) -> str:
    if max_length is None or len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def format_arguments(
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    max_repr_length: int | None = None,
) -> str:
    """Render arguments the way they would be written at a call site.

    Args:
        args: Positional arguments
        kwargs: Keyword arguments, rendered in insertion order
        max_repr_length: Truncate each argument repr to this many characters

    Returns:
        String like "('221B Baker St.', hastily=True)"
    """
    parts = [_truncate(repr(value), max_repr_length) for value in args]
    parts.extend(
        f"{key}={_truncate(repr(value), max_repr_length)}" for key, value in kwargs.items()
    )
    return "(" + ", ".join(parts) + ")"


@dataclass(frozen=True)
class Call:
    """One call received by a DelegateSpy.

    Attributes:
        name: Attribute name the call was made through
        args: Positional arguments, in order
        kwargs: Keyword arguments
    """

    name: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    # Holds a dict and arbitrary argument values
    __hash__ = None  # type: ignore[assignment]

    def has_arguments(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> bool:
        """Check positional args in order and keyword args by key and value."""
        return tuple(self.args) == tuple(args) and dict(self.kwargs) == dict(kwargs)

    def format(self, max_repr_length: int | None = None) -> str:
        return self.name + format_arguments(self.args, self.kwargs, max_repr_length)

    def __str__(self) -> str:
        return self.format()
