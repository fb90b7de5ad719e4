"""
GetAttributeExpression: ``target.name`` and ``target.name(args)`` in templates.

Evaluation order:
    1. Evaluate the target, the attribute name and each argument (left to right)
    2. None target: lenient → None; strict → RootAttributeNotFoundError naming
       the root variable (``user.name``) or the attribute (chained null)
    3. Resolve through AttributeResolver: dynamic provider → container
       indexing (plain access only) → cached accessor/method/field
    4. Invoke the resolved attribute; accessor failures surface as
       InvocationFailureError
    5. Nothing resolved: strict → AttributeNotFoundError; lenient → None

A compiled node is evaluated by many renders, possibly at the same time on
different threads. Its only mutable state is the member cache.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .exceptions import AttributeNotFoundError, RootAttributeNotFoundError, shape_name
from .expressions import ArgumentsNode, ContextVariableExpression, Expression, Node
from .resolution import AttributeResolver, MemberCache, SourceLocation

if TYPE_CHECKING:
    from .config import EngineSettings
    from .context import EvaluationContext

logger = logging.getLogger(__name__)


class GetAttributeExpression(Expression):
    """
    Attribute access on a runtime value.

    Lookup order: dynamic attribute provider, mapping entry, tuple item, list
    item, ``get``/``is``/``has`` accessor, public method, public field.

    Example:
        expression = GetAttributeExpression(
            ContextVariableExpression("user"),
            LiteralExpression("name"),
            filename="profile.html",
            line_number=4,
        )
        expression.evaluate(EvaluationContext({"user": user}))
    """

    def __init__(
        self,
        node: Expression,
        attribute_name_expression: Expression,
        args: ArgumentsNode | None = None,
        filename: str | None = None,
        line_number: int = 0,
        settings: EngineSettings | None = None,
    ):
        """
        Initialize attribute expression.

        Args:
            node: Target expression
            attribute_name_expression: Expression producing the attribute name
            args: Call arguments; None for plain attribute access
            filename: Template identifier for error messages
            line_number: Line of the expression in the template
            settings: Engine settings (member cache warning size)
        """
        self._node = node
        self._attribute_name_expression = attribute_name_expression
        self._args = args
        self._filename = filename
        self._line_number = line_number

        warn_size = settings.member_cache_warn_size if settings is not None else 64
        self._resolver = AttributeResolver(
            SourceLocation(filename=filename, line_number=line_number),
            MemberCache(warn_size=warn_size),
        )

    @property
    def node(self) -> Expression:
        return self._node

    @property
    def attribute_name_expression(self) -> Expression:
        return self._attribute_name_expression

    @property
    def arguments_node(self) -> ArgumentsNode | None:
        return self._args

    @property
    def filename(self) -> str | None:
        return self._filename

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def member_cache(self) -> MemberCache:
        return self._resolver.member_cache

    def children(self) -> Sequence[Node]:
        if self._args is None:
            return (self._node, self._attribute_name_expression)
        return (self._node, self._attribute_name_expression, self._args)

    def evaluate(self, context: EvaluationContext) -> Any:
        value = self._node.evaluate(context)
        attribute_value = self._attribute_name_expression.evaluate(context)
        attribute_name = str(attribute_value)
        argument_values = self._argument_values(context)
        strict = context.is_strict_variables()

        if value is None:
            if not strict:
                return None
            if isinstance(self._node, ContextVariableExpression):
                root_name = self._node.name
                raise RootAttributeNotFoundError(
                    f"Root attribute [{root_name}] does not exist or can not be accessed "
                    "and strict variables is set to true.",
                    attribute_name=root_name,
                    line_number=self._line_number,
                    filename=self._filename,
                )
            raise RootAttributeNotFoundError(
                "Attempt to get attribute of null object and strict variables is set to true.",
                attribute_name=attribute_name,
                line_number=self._line_number,
                filename=self._filename,
            )

        resolved = self._resolver.resolve(
            value,
            attribute_value,
            argument_values,
            strict=strict,
            allow_indexing=self._args is None,
        )
        if resolved:
            return resolved.get()

        if strict:
            host = shape_name(type(value))
            raise AttributeNotFoundError(
                f"Attribute [{attribute_name}] of [{host}] does not exist or can not be "
                "accessed and strict variables is set to true.",
                attribute_name=attribute_name,
                line_number=self._line_number,
                filename=self._filename,
                host_shape=host,
            )

        logger.debug(
            f"Attribute '{attribute_name}' not found on {type(value).__qualname__}, "
            f"returning None ({self._filename}:{self._line_number})"
        )
        return None

    def _argument_values(self, context: EvaluationContext) -> tuple[Any, ...]:
        if self._args is None:
            return ()
        return self._args.evaluate_values(context)

    def __repr__(self) -> str:
        return (
            f"GetAttributeExpression(node={self._node!r}, "
            f"attribute={self._attribute_name_expression!r}, "
            f"filename={self._filename!r}, line={self._line_number})"
        )


__all__ = ["GetAttributeExpression"]
