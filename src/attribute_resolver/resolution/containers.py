"""
Container indexing strategies.

Only used when an attribute is accessed without call arguments:
    - Mapping: ``mapping.key`` / ``mapping[1]`` (numeric keys are coerced to
      the mapping's key type)
    - Tuple: ``items.0``
    - Mutable sequence (list and friends): ``items.0``

A sequence strategy declines (NOT_RESOLVED) when the attribute is not an
integer, letting member resolution run next. An integer outside
``[0, len)`` is None in lenient mode and AttributeNotFoundError in strict mode.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableSequence, Sequence
from typing import Any

from ..exceptions import AttributeNotFoundError, shape_name
from .coercion import as_index, coerce_numeric_key, is_numeric
from .result import NOT_RESOLVED, ResolutionStrategy, ResolvedAttribute, SourceLocation


def lookup_mapping(mapping: Mapping[Any, Any], key: Any, location: SourceLocation) -> Any:
    """
    Look a key up in a mapping, coercing numeric keys to the existing key type.

    Raises:
        UnsupportedKeyCoercionError: If the key is numeric and the mapping's
            keys are not a supported numeric type
    """
    if not mapping:
        return None
    if is_numeric(key):
        key_shape = type(next(iter(mapping)))
        key = coerce_numeric_key(
            key,
            key_shape,
            attribute_name=str(key),
            line_number=location.line_number,
            filename=location.filename,
        )
    return mapping.get(key)


def resolve_mapping(value: Any, attribute_value: Any, location: SourceLocation) -> ResolvedAttribute:
    """Every mapping resolves; a missing key yields None."""
    if not isinstance(value, Mapping):
        return NOT_RESOLVED
    return ResolvedAttribute.found(
        ResolutionStrategy.MAPPING,
        lambda: lookup_mapping(value, attribute_value, location),
    )


def _resolve_index(
    items: Sequence[Any],
    attribute_value: Any,
    strict: bool,
    location: SourceLocation,
    strategy: ResolutionStrategy,
) -> ResolvedAttribute:
    attribute_name = str(attribute_value)
    index = as_index(attribute_name)
    if index is None:
        return NOT_RESOLVED

    if index < 0 or index >= len(items):
        if strict:
            raise AttributeNotFoundError(
                "Index out of bounds while accessing sequence with strict variables on.",
                attribute_name=attribute_name,
                line_number=location.line_number,
                filename=location.filename,
                host_shape=shape_name(type(items)),
            )
        return ResolvedAttribute.constant(strategy, None)

    return ResolvedAttribute.found(strategy, lambda: items[index])


def resolve_array(
    value: Any, attribute_value: Any, strict: bool, location: SourceLocation
) -> ResolvedAttribute:
    """Index into a fixed-size sequence (tuple)."""
    if not isinstance(value, tuple):
        return NOT_RESOLVED
    return _resolve_index(value, attribute_value, strict, location, ResolutionStrategy.ARRAY)


def resolve_list(
    value: Any, attribute_value: Any, strict: bool, location: SourceLocation
) -> ResolvedAttribute:
    """Index into a variable-size sequence (list or any other MutableSequence)."""
    if not isinstance(value, MutableSequence):
        return NOT_RESOLVED
    return _resolve_index(value, attribute_value, strict, location, ResolutionStrategy.LIST)


__all__ = ["lookup_mapping", "resolve_array", "resolve_list", "resolve_mapping"]
