"""Template evaluation exceptions for attribute resolution.

Exception Hierarchy:
    TemplateError (base)
    ├── AttributeNotFoundError (strict mode, nothing resolved or index out of bounds)
    │   └── RootAttributeNotFoundError (strict mode, target value is None)
    ├── UnsupportedKeyCoercionError (numeric key cannot be cast to the mapping key shape)
    └── InvocationFailureError (resolved accessor raised)

Every error carries the attribute name and the source location (filename and
line number) of the expression that produced it.

Example:
    >>> try:
    ...     expression.evaluate(context)
    ... except AttributeNotFoundError as e:
    ...     print(f"{e.attribute_name} missing on {e.host_shape} ({e.filename}:{e.line_number})")
"""

from __future__ import annotations


class TemplateError(Exception):
    """Base exception for all template evaluation errors.

    Attributes:
        attribute_name: Attribute or member name being resolved
        line_number: Line of the expression in the template source
        filename: Template identifier (may be None for inline templates)
    """

    def __init__(
        self,
        message: str,
        attribute_name: str | None = None,
        line_number: int | None = None,
        filename: str | None = None,
    ) -> None:
        """
        Initialize template error.

        Args:
            message: Human-readable description
            attribute_name: Attribute or member name being resolved
            line_number: Line of the expression in the template source
            filename: Template identifier
        """
        self.message = message
        self.attribute_name = attribute_name
        self.line_number = line_number
        self.filename = filename
        super().__init__(self._format())

    def _format(self) -> str:
        location = f"{self.filename or '<template>'}:{self.line_number}"
        return f"{self.message} ({location})"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return (
            f"{type(self).__name__}(attribute={self.attribute_name!r}, "
            f"filename={self.filename!r}, line={self.line_number})"
        )


class AttributeNotFoundError(TemplateError):
    """
    Attribute could not be resolved with strict variables enabled.

    Raised when a non-null target has no dynamic attribute, container entry,
    accessor method or field matching the requested name, or when a sequence
    index is out of bounds.

    Attributes:
        host_shape: Qualified name of the target value's type
    """

    def __init__(
        self,
        message: str,
        attribute_name: str | None = None,
        line_number: int | None = None,
        filename: str | None = None,
        host_shape: str | None = None,
    ) -> None:
        self.host_shape = host_shape
        super().__init__(message, attribute_name, line_number, filename)

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return (
            f"{type(self).__name__}(attribute={self.attribute_name!r}, "
            f"host_shape={self.host_shape!r}, filename={self.filename!r}, "
            f"line={self.line_number})"
        )


class RootAttributeNotFoundError(AttributeNotFoundError):
    """
    Attribute access on a None target with strict variables enabled.

    Two cases share this type and are told apart by ``attribute_name``:
    - bare root variable (``user.name`` where ``user`` is None): names ``user``
    - chained null (``a.b.name`` where ``a.b`` is None): names ``name``
    """

    def __init__(
        self,
        message: str,
        attribute_name: str | None = None,
        line_number: int | None = None,
        filename: str | None = None,
    ) -> None:
        super().__init__(message, attribute_name, line_number, filename, host_shape=None)


class UnsupportedKeyCoercionError(TemplateError):
    """Numeric lookup key cannot be cast to the mapping's key shape.

    Attributes:
        key_shape: Qualified name of the sampled mapping key type
    """

    def __init__(
        self,
        message: str,
        attribute_name: str | None = None,
        line_number: int | None = None,
        filename: str | None = None,
        key_shape: str | None = None,
    ) -> None:
        self.key_shape = key_shape
        super().__init__(message, attribute_name, line_number, filename)


class InvocationFailureError(TemplateError):
    """A resolved accessor raised while being invoked.

    The original exception is available as ``__cause__``. Invocation failures
    are never retried and never reinterpreted as "not found".

    Attributes:
        host_shape: Qualified name of the target value's type
    """

    def __init__(
        self,
        message: str,
        attribute_name: str | None = None,
        line_number: int | None = None,
        filename: str | None = None,
        host_shape: str | None = None,
    ) -> None:
        self.host_shape = host_shape
        super().__init__(message, attribute_name, line_number, filename)


def shape_name(shape: type) -> str:
    """Qualified name of a type for diagnostics (``module.QualName``)."""
    module = shape.__module__
    if module == "builtins":
        return shape.__qualname__
    return f"{module}.{shape.__qualname__}"
