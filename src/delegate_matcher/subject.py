"""Subject classification: instance-level vs class-level matching."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SubjectKind(str, Enum):
    """How the subject's methods are addressed in messages."""

    INSTANCE = "#"  # post_office.deliver_mail -> #deliver_mail
    CLASS = "."  # PostOffice.deliver_mail, module.deliver_mail -> .deliver_mail

    @property
    def separator(self) -> str:
        return self.value

    @classmethod
    def of(cls, subject: Any) -> SubjectKind:
        if inspect.isclass(subject) or inspect.ismodule(subject):
            return cls.CLASS
        return cls.INSTANCE


@dataclass(frozen=True)
class SubjectInfo:
    """Naming details of a subject used when building messages."""

    kind: SubjectKind
    name: str

    @classmethod
    def of(cls, subject: Any) -> SubjectInfo:
        kind = SubjectKind.of(subject)
        if kind is SubjectKind.CLASS:
            name = subject.__name__
        else:
            name = type(subject).__name__
        return cls(kind=kind, name=name)

    def qualify(self, member_name: str) -> str:
        """Prefix a member name with the kind's separator: "#name" or ".name"."""
        return f"{self.kind.separator}{member_name}"
