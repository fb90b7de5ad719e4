"""ResolvedAttribute: outcome of one resolution strategy.

Strategies return either a resolved attribute (a deferred getter) or the
explicit NOT_RESOLVED marker, so the precedence chain can be composed as
"try the next strategy while nothing is resolved" without treating a resolved
``None`` value as a miss.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ResolutionStatus(str, Enum):
    """Status of a resolution attempt."""

    RESOLVED = "resolved"
    NOT_RESOLVED = "not_resolved"


class ResolutionStrategy(str, Enum):
    """Strategy that produced a resolved attribute."""

    DYNAMIC = "dynamic"
    MAPPING = "mapping"
    ARRAY = "array"
    LIST = "list"
    MEMBER = "member"


@dataclass(frozen=True)
class SourceLocation:
    """Where an expression sits in its template, for error reporting."""

    filename: str | None = None
    line_number: int | None = None


@dataclass(frozen=True)
class ResolvedAttribute:
    """
    Resolved attribute with a deferred getter.

    The getter runs only when ``get()`` is called, so a strategy can decide
    that it owns the attribute before any host code is invoked.

    Usage:
        resolved = resolver.resolve(value, "name", ())
        if resolved:
            return resolved.get()
    """

    status: ResolutionStatus
    strategy: ResolutionStrategy | None = None
    getter: Callable[[], Any] | None = None

    def __post_init__(self) -> None:
        if self.status == ResolutionStatus.RESOLVED and self.getter is None:
            raise ValueError("Resolved attribute must have a getter")

    @property
    def is_resolved(self) -> bool:
        return self.status == ResolutionStatus.RESOLVED

    @classmethod
    def found(cls, strategy: ResolutionStrategy, getter: Callable[[], Any]) -> "ResolvedAttribute":
        return cls(status=ResolutionStatus.RESOLVED, strategy=strategy, getter=getter)

    @classmethod
    def constant(cls, strategy: ResolutionStrategy, value: Any) -> "ResolvedAttribute":
        """Resolved attribute whose value is already known."""
        return cls.found(strategy, lambda: value)

    def get(self) -> Any:
        if self.getter is None:
            raise ValueError("Cannot get value of an unresolved attribute")
        return self.getter()

    def __bool__(self) -> bool:
        return self.is_resolved


NOT_RESOLVED = ResolvedAttribute(status=ResolutionStatus.NOT_RESOLVED)


__all__ = [
    "NOT_RESOLVED",
    "ResolutionStatus",
    "ResolutionStrategy",
    "ResolvedAttribute",
    "SourceLocation",
]
