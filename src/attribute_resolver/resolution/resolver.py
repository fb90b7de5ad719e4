"""
Attribute resolver: strategy precedence and member invocation.

Resolution order for a non-None value:
    1. Dynamic provider (DynamicAttributeProvider that can provide the name)
    2. Container indexing, only for plain access (no call arguments):
       mapping → tuple → mutable sequence
    3. Convention-based member (get/is/has accessor, method, field) through
       the MemberCache

The first strategy that resolves wins. Each strategy returns a
ResolvedAttribute or NOT_RESOLVED.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..exceptions import InvocationFailureError, TemplateError, shape_name
from .cache import MemberCache
from .containers import resolve_array, resolve_list, resolve_mapping
from .members import ResolvedMember, find_member
from .providers import DynamicAttributeProvider
from .result import NOT_RESOLVED, ResolutionStrategy, ResolvedAttribute, SourceLocation

logger = logging.getLogger(__name__)


class AttributeResolver:
    """
    Resolves attributes on arbitrary values for one call site.

    Owns the MemberCache of that site. Safe to share between threads: the
    cache is the only mutable state.

    Example:
        resolver = AttributeResolver(SourceLocation("page.html", 3))
        resolved = resolver.resolve(user, "name", (), strict=False)
        if resolved:
            print(resolved.get())
    """

    def __init__(
        self,
        location: SourceLocation | None = None,
        cache: MemberCache | None = None,
    ):
        self.location = location or SourceLocation()
        self.member_cache = cache if cache is not None else MemberCache()

    def resolve(
        self,
        value: Any,
        attribute_value: Any,
        args: Sequence[Any] = (),
        *,
        strict: bool = False,
        allow_indexing: bool = True,
    ) -> ResolvedAttribute:
        """
        Run the strategies in precedence order.

        Args:
            value: Target value (must not be None)
            attribute_value: Raw attribute value; its str() is the attribute name
            args: Evaluated call arguments
            strict: Strict variables mode (out-of-bounds indexes raise)
            allow_indexing: Whether container indexing may run; False when the
                attribute was written as a call

        Returns:
            ResolvedAttribute, or NOT_RESOLVED when no strategy matched

        Raises:
            AttributeNotFoundError: Strict mode and a sequence index is out of bounds
        """
        resolved = self.resolve_dynamic(value, attribute_value, args)

        if not resolved and allow_indexing:
            resolved = resolve_mapping(value, attribute_value, self.location)
            if not resolved:
                resolved = resolve_array(value, attribute_value, strict, self.location)
            if not resolved:
                resolved = resolve_list(value, attribute_value, strict, self.location)

        if not resolved:
            resolved = self.resolve_member(value, str(attribute_value), args)

        if resolved:
            logger.debug(
                f"Resolved '{attribute_value}' on {type(value).__qualname__} "
                f"via {resolved.strategy.value}"
            )
        return resolved

    def resolve_dynamic(
        self, value: Any, attribute_value: Any, args: Sequence[Any]
    ) -> ResolvedAttribute:
        """Dynamic provider strategy. Never touches the member cache."""
        if not isinstance(value, DynamicAttributeProvider):
            return NOT_RESOLVED
        if not value.can_provide_dynamic_attribute(attribute_value):
            return NOT_RESOLVED

        def get() -> Any:
            try:
                return value.get_dynamic_attribute(attribute_value, args)
            except TemplateError:
                raise
            except Exception as e:
                raise self._invocation_failure(value, str(attribute_value), e) from e

        return ResolvedAttribute.found(ResolutionStrategy.DYNAMIC, get)

    def resolve_member(
        self, value: Any, attribute_name: str, args: Sequence[Any]
    ) -> ResolvedAttribute:
        """Convention-based member strategy, memoized per (type, name)."""
        member = self.member_of(value, attribute_name, args)
        if member is None:
            return NOT_RESOLVED
        return ResolvedAttribute.found(
            ResolutionStrategy.MEMBER,
            lambda: self.invoke_member(value, member, args),
        )

    def member_of(
        self, value: Any, attribute_name: str, args: Sequence[Any]
    ) -> ResolvedMember | None:
        """Cached member lookup; runs the member search on a miss."""
        shape = type(value)
        member = self.member_cache.get(shape, attribute_name)
        if member is not None:
            return member

        logger.debug(f"Member cache miss for {shape.__qualname__}.{attribute_name}")
        member = find_member(value, attribute_name, args)
        if member is None or not member.cacheable:
            return member
        return self.member_cache.put_if_absent(shape, attribute_name, member)

    def invoke_member(self, value: Any, member: ResolvedMember, args: Sequence[Any]) -> Any:
        """
        Invoke a resolved member.

        Raises:
            InvocationFailureError: If the member raises; the original
                exception is chained as ``__cause__``
        """
        try:
            return member.invoke(value, args)
        except TemplateError:
            raise
        except Exception as e:
            raise self._invocation_failure(value, member.name, e) from e

    def _invocation_failure(
        self, value: Any, member_name: str, error: Exception
    ) -> InvocationFailureError:
        host = shape_name(type(value))
        return InvocationFailureError(
            f"Invocation of [{member_name}] on [{host}] failed: {type(error).__name__}: {error}",
            attribute_name=member_name,
            line_number=self.location.line_number,
            filename=self.location.filename,
            host_shape=host,
        )


__all__ = ["AttributeResolver"]
