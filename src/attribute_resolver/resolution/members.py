"""
Convention-based member search.

Finds the accessor that satisfies ``value.name`` (or ``value.name(*args)``)
on an arbitrary Python object:

1. A public method named ``get<Name>`` / ``get_<name>``
2. A public method named ``is<Name>`` / ``is_<name>``
3. A public method named ``has<Name>`` / ``has_<name>``
4. A public method named ``name``
5. A public field named ``name`` (only when no arguments are supplied)

Method names are compared case-insensitively. A method matches when it can
take exactly the supplied arguments positionally (parameters with defaults may
be left out) and every argument is compatible with the declared annotation.
The first match in class enumeration order (MRO, then definition order)
wins; there is no most-specific-overload selection.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .coercion import is_compatible

logger = logging.getLogger(__name__)

ACCESSOR_PREFIXES = ("get", "is", "has")

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class MethodAccessor:
    """Callable member resolved by name and argument compatibility."""

    name: str
    parameter_types: tuple[Any, ...]
    cacheable: bool = True

    def invoke(self, value: Any, args: Sequence[Any]) -> Any:
        return getattr(value, self.name)(*args)


@dataclass(frozen=True)
class FieldAccessor:
    """Plain attribute read.

    Fields found in an instance ``__dict__`` belong to that instance rather
    than to its type and are marked not cacheable.
    """

    name: str
    cacheable: bool = True

    def invoke(self, value: Any, args: Sequence[Any]) -> Any:
        return getattr(value, self.name)


ResolvedMember = Union[MethodAccessor, FieldAccessor]


def _is_method(attr: Any) -> bool:
    if isinstance(attr, (staticmethod, classmethod)):
        return True
    if inspect.isfunction(attr) or inspect.isbuiltin(attr):
        return True
    return inspect.ismethoddescriptor(attr) and callable(attr)


def iter_public_methods(shape: type) -> Iterator[tuple[str, Any]]:
    """Yield ``(name, attribute)`` for public methods of a type.

    Walks the MRO most-derived first; a name defined on a subclass hides the
    same name on its bases even when the subclass attribute is not a method.
    """
    seen: set[str] = set()
    for klass in shape.__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if name.startswith("_") or not _is_method(attr):
                continue
            yield name, attr


def _signature(bound: Any) -> inspect.Signature | None:
    try:
        return inspect.signature(bound, eval_str=True)
    except ValueError:
        return None
    except (NameError, AttributeError, SyntaxError, TypeError):
        # unresolvable string annotations stay strings and accept anything
        pass
    try:
        return inspect.signature(bound)
    except (ValueError, TypeError):
        return None


def parameter_types(signature: inspect.Signature) -> tuple[tuple[Any, ...], int] | None:
    """Positional parameter annotations and the number of required ones.

    Returns None when the method cannot be called positionally (it has
    required keyword-only parameters).
    """
    types: list[Any] = []
    required = 0
    for parameter in signature.parameters.values():
        if parameter.kind in _POSITIONAL_KINDS:
            types.append(parameter.annotation)
            if parameter.default is inspect.Parameter.empty:
                required += 1
        elif (
            parameter.kind is inspect.Parameter.KEYWORD_ONLY
            and parameter.default is inspect.Parameter.empty
        ):
            return None
    return tuple(types), required


def find_method(value: Any, name: str, args: Sequence[Any]) -> MethodAccessor | None:
    """
    Find the first public method of ``value`` compatible with ``args``.

    Args:
        value: Host object
        name: Method name, compared case-insensitively
        args: Runtime argument values

    Returns:
        MethodAccessor for the first compatible candidate, or None
    """
    wanted = name.lower()
    for member_name, _attr in iter_public_methods(type(value)):
        if member_name.lower() != wanted:
            continue

        signature = _signature(getattr(value, member_name))
        if signature is None:
            continue
        parameters = parameter_types(signature)
        if parameters is None:
            continue
        declared, required = parameters
        if not required <= len(args) <= len(declared):
            continue

        if all(is_compatible(t, a) for t, a in zip(declared, args)):
            return MethodAccessor(name=member_name, parameter_types=declared)
    return None


def find_field(value: Any, name: str) -> FieldAccessor | None:
    """Find a public, non-method attribute named exactly ``name``."""
    if not name or name.startswith("_"):
        return None

    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, Mapping) and name in instance_dict:
        return FieldAccessor(name=name, cacheable=False)

    for klass in type(value).__mro__:
        namespace = vars(klass)
        if name in namespace:
            if _is_method(namespace[name]):
                return None
            return FieldAccessor(name=name)
    return None


def accessor_candidates(attribute_name: str) -> list[str]:
    """Method names tried for an attribute, in precedence order."""
    capitalized = attribute_name[:1].upper() + attribute_name[1:]
    candidates: list[str] = []
    for prefix in ACCESSOR_PREFIXES:
        candidates.append(f"{prefix}{capitalized}")
        candidates.append(f"{prefix}_{attribute_name}")
    candidates.append(attribute_name)
    return candidates


def find_member(value: Any, attribute_name: str, args: Sequence[Any]) -> ResolvedMember | None:
    """
    Run the full convention-based search for one attribute.

    Args:
        value: Host object (never None)
        attribute_name: Attribute name from the template
        args: Runtime argument values (empty for plain attribute access)

    Returns:
        The first matching member, or None when nothing matches
    """
    if not attribute_name:
        return None

    for candidate in accessor_candidates(attribute_name):
        method = find_method(value, candidate, args)
        if method is not None:
            logger.debug(
                f"Resolved '{attribute_name}' on {type(value).__qualname__} "
                f"to method '{method.name}'"
            )
            return method

    if not args:
        field_accessor = find_field(value, attribute_name)
        if field_accessor is not None:
            logger.debug(
                f"Resolved '{attribute_name}' on {type(value).__qualname__} to field"
            )
            return field_accessor

    return None


__all__ = [
    "FieldAccessor",
    "MethodAccessor",
    "ResolvedMember",
    "accessor_candidates",
    "find_field",
    "find_member",
    "find_method",
    "iter_public_methods",
    "parameter_types",
]
