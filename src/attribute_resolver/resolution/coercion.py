"""Coercion and compatibility helpers.

- Numeric key coercion: cast a numeric lookup key to the key type already used
  by a mapping (``{1: "a"}[1.0]`` style lookups coming from template literals).
- Index parsing: strict base-10 integer parsing of attribute names.
- Parameter compatibility: decide whether an argument value fits a declared
  parameter annotation, with numeric promotion (``int`` fits ``float``).
"""

from __future__ import annotations

import inspect
import numbers
import re
import types
import typing
from collections.abc import Callable
from typing import Any

from ..exceptions import UnsupportedKeyCoercionError, shape_name

# int covers every fixed-width integer key shape, float covers double and float
KEY_COERCIONS: dict[type, Callable[[Any], Any]] = {
    int: int,
    float: float,
}

# Implicit numeric promotion, the Python counterpart of primitive/boxed equivalence
NUMERIC_PROMOTIONS: dict[type, tuple[type, ...]] = {
    float: (float, int),
    complex: (complex, float, int),
}

# bool subclasses int but is not accepted where a number is declared
_NUMERIC_PARAMETERS = (int, float, complex)

_INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")


def is_numeric(value: Any) -> bool:
    """True for real numbers; bool is excluded."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def coerce_numeric_key(
    number: Any,
    key_shape: type,
    attribute_name: str | None = None,
    line_number: int | None = None,
    filename: str | None = None,
) -> Any:
    """
    Cast a numeric lookup key to the given key shape.

    Args:
        number: Numeric key requested by the template
        key_shape: Type of an existing key in the mapping

    Returns:
        The key converted to ``key_shape``

    Raises:
        UnsupportedKeyCoercionError: If ``key_shape`` is not a supported numeric shape
            or the number has no value of that shape (NaN or infinity as int)
    """
    caster = KEY_COERCIONS.get(key_shape)
    if caster is None:
        raise UnsupportedKeyCoercionError(
            f"type {shape_name(key_shape)} not supported for key {number!r}",
            attribute_name=attribute_name,
            line_number=line_number,
            filename=filename,
            key_shape=shape_name(key_shape),
        )
    try:
        return caster(number)
    except (ValueError, OverflowError) as e:
        # NaN and infinities have no integer counterpart
        raise UnsupportedKeyCoercionError(
            f"key {number!r} cannot be converted to {shape_name(key_shape)}",
            attribute_name=attribute_name,
            line_number=line_number,
            filename=filename,
            key_shape=shape_name(key_shape),
        ) from e


def as_index(attribute_name: str) -> int | None:
    """Parse an attribute name as a base-10 index.

    Accepts an optional sign and ASCII digits only, so ``"1.0"``, ``" 2"`` and
    ``"1_000"`` are not indexes.
    """
    if _INDEX_PATTERN.fullmatch(attribute_name):
        return int(attribute_name)
    return None


def widen(annotation: Any) -> tuple[type, ...]:
    """Types accepted by a concrete class annotation, including numeric promotion."""
    return NUMERIC_PROMOTIONS.get(annotation, (annotation,))


def is_compatible(annotation: Any, argument: Any) -> bool:
    """
    Check whether an argument value may be passed to a parameter annotation.

    None is compatible with every parameter. Annotations that cannot be
    checked at runtime (missing, Any, object, TypeVar, Protocol, string
    forward references) accept anything. A bool argument does not fit an
    int, float or complex parameter.
    """
    if argument is None:
        return True
    if annotation is Any or annotation is object or annotation is inspect.Parameter.empty:
        return True

    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        return any(is_compatible(member, argument) for member in typing.get_args(annotation))
    if origin is typing.Annotated:
        return is_compatible(typing.get_args(annotation)[0], argument)
    if origin is typing.Literal:
        return argument in typing.get_args(annotation)
    if origin is not None:
        annotation = origin

    if annotation is type(None):
        return False
    if not isinstance(annotation, type):
        return True
    if isinstance(argument, bool) and annotation in _NUMERIC_PARAMETERS:
        return False

    try:
        return isinstance(argument, widen(annotation))
    except TypeError:
        # runtime-uncheckable classes (non-runtime Protocols and similar)
        return True


__all__ = [
    "KEY_COERCIONS",
    "NUMERIC_PROMOTIONS",
    "as_index",
    "coerce_numeric_key",
    "is_compatible",
    "is_numeric",
    "widen",
]
