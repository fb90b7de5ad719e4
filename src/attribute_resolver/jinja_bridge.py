"""
Jinja2 integration.

ResolvingEnvironment is a sandboxed Jinja2 environment that layers the
attribute resolution conventions on top of Jinja's own lookup:

1. Dynamic providers answer first (``{{ totals.total }}``)
2. Jinja's regular attribute/item lookup
3. If Jinja produced an undefined value, accessor conventions are tried:
   ``{{ user.name }}`` calls ``user.getName()`` / ``user.get_name()`` /
   ``user.isName()`` ... when ``user`` has no ``name`` attribute

Container indexing is left to Jinja. An attribute the sandbox refused is never
retried through the conventions, and resolved accessors and fields pass the
sandbox's safe-attribute (and, for methods, safe-callable) checks.

Example:
    env = ResolvingEnvironment(settings=EngineSettings(strict_variables=True))
    env.from_string("{{ user.name }}").render(user=user)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from jinja2 import StrictUndefined, Undefined
from jinja2.exceptions import SecurityError
from jinja2.sandbox import SandboxedEnvironment

from .config import EngineSettings
from .resolution import (
    AttributeResolver,
    DynamicAttributeProvider,
    FieldAccessor,
    MemberCache,
    MethodAccessor,
)

logger = logging.getLogger(__name__)


class ResolvingEnvironment(SandboxedEnvironment):
    """Sandboxed environment with accessor-convention attribute lookup."""

    def __init__(self, settings: EngineSettings | None = None, **options: Any):
        """
        Initialize environment.

        Args:
            settings: Engine settings; strict_variables selects StrictUndefined
            **options: Regular jinja2 Environment options
        """
        self.settings = settings or EngineSettings()
        if self.settings.strict_variables:
            options.setdefault("undefined", StrictUndefined)
        options.setdefault("autoescape", False)
        super().__init__(**options)
        # One resolver for every lookup; its cache is keyed by (type, name)
        self.attribute_resolver = AttributeResolver(
            cache=MemberCache(warn_size=self.settings.member_cache_warn_size)
        )

    def getattr(self, obj: Any, attribute: str) -> Any:
        return self._lookup(obj, attribute, super().getattr)

    def getitem(self, obj: Any, argument: Any) -> Any:
        return self._lookup(obj, argument, super().getitem)

    def _lookup(
        self, obj: Any, attribute: Any, jinja_lookup: Callable[[Any, Any], Any]
    ) -> Any:
        if isinstance(obj, DynamicAttributeProvider):
            resolved = self.attribute_resolver.resolve_dynamic(obj, attribute, ())
            if resolved:
                return resolved.get()

        value = jinja_lookup(obj, attribute)
        if not isinstance(value, Undefined) or obj is None or isinstance(obj, Undefined):
            return value
        if _is_refused(value):
            return value

        name = str(attribute)
        member = self.attribute_resolver.member_of(obj, name, ())
        if member is None:
            return value

        if isinstance(member, MethodAccessor):
            bound = getattr(obj, member.name)
            if not self.is_safe_attribute(obj, member.name, bound) or not self.is_safe_callable(
                bound
            ):
                logger.debug(f"Accessor '{member.name}' on {type(obj).__qualname__} is unsafe")
                return self.unsafe_undefined(obj, member.name)
            return self.attribute_resolver.invoke_member(obj, member, ())

        result = self.attribute_resolver.invoke_member(obj, member, ())
        if isinstance(member, FieldAccessor) and not self.is_safe_attribute(
            obj, member.name, result
        ):
            logger.debug(f"Field '{member.name}' on {type(obj).__qualname__} is unsafe")
            return self.unsafe_undefined(obj, member.name)
        return result


def _is_refused(value: Undefined) -> bool:
    """True for the undefined the sandbox returns when it blocks an attribute."""
    return getattr(value, "_undefined_exception", None) is SecurityError


__all__ = ["ResolvingEnvironment"]
