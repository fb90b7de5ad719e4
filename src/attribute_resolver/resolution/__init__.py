"""
Attribute resolution strategies.

Public API:
    - AttributeResolver: Runs the strategies for one call site
    - MemberCache: Inline cache of resolved members per (type, name)
    - DynamicAttributeProvider: Base class for self-resolving values
    - MethodAccessor / FieldAccessor: Resolved member descriptors
    - ResolvedAttribute / NOT_RESOLVED: Strategy outcome
"""

from .cache import MemberCache
from .members import FieldAccessor, MethodAccessor, ResolvedMember, find_member
from .providers import DynamicAttributeProvider
from .resolver import AttributeResolver
from .result import (
    NOT_RESOLVED,
    ResolutionStatus,
    ResolutionStrategy,
    ResolvedAttribute,
    SourceLocation,
)

__all__ = [
    "AttributeResolver",
    "DynamicAttributeProvider",
    "FieldAccessor",
    "MemberCache",
    "MethodAccessor",
    "NOT_RESOLVED",
    "ResolutionStatus",
    "ResolutionStrategy",
    "ResolvedAttribute",
    "ResolvedMember",
    "SourceLocation",
    "find_member",
]
