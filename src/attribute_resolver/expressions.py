"""
Expression tree nodes used around attribute access.

Only the nodes an attribute expression needs as children are defined here:
literals, context variables and positional call arguments. Parsing and the
rest of the expression language live elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .exceptions import RootAttributeNotFoundError

if TYPE_CHECKING:
    from .context import EvaluationContext
    from .visitor import NodeVisitor


class Node(ABC):
    """Base class for all tree nodes."""

    line_number: int

    def accept(self, visitor: NodeVisitor) -> Any:
        return visitor.visit(self)

    def children(self) -> Sequence[Node]:
        """Direct child nodes, in evaluation order."""
        return ()


class Expression(Node):
    """Node that evaluates to a value."""

    @abstractmethod
    def evaluate(self, context: EvaluationContext) -> Any:
        """
        Evaluate the expression against a render context.

        Args:
            context: Variables and strictness for the current render

        Returns:
            Runtime value (None for null)
        """
        pass


class LiteralExpression(Expression):
    """Constant value."""

    def __init__(self, value: Any, line_number: int = 0):
        self.value = value
        self.line_number = line_number

    def evaluate(self, context: EvaluationContext) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"LiteralExpression({self.value!r})"


class ContextVariableExpression(Expression):
    """Bare top-level variable reference such as ``user`` in ``user.name``."""

    def __init__(self, name: str, line_number: int = 0, filename: str | None = None):
        self.name = name
        self.line_number = line_number
        self.filename = filename

    def evaluate(self, context: EvaluationContext) -> Any:
        if context.is_strict_variables() and not context.has_variable(self.name):
            raise RootAttributeNotFoundError(
                f"Root attribute [{self.name}] does not exist or can not be accessed "
                "and strict variables is set to true.",
                attribute_name=self.name,
                line_number=self.line_number,
                filename=self.filename,
            )
        return context.get_variable(self.name)

    def __repr__(self) -> str:
        return f"ContextVariableExpression({self.name!r})"


class PositionalArgumentNode(Node):
    """One positional call argument."""

    def __init__(self, value_expression: Expression, line_number: int = 0):
        self.value_expression = value_expression
        self.line_number = line_number

    def children(self) -> Sequence[Node]:
        return (self.value_expression,)


class ArgumentsNode(Node):
    """Call argument list. An empty list still marks the access as a call."""

    def __init__(
        self, positional_args: Sequence[PositionalArgumentNode] = (), line_number: int = 0
    ):
        self.positional_args = tuple(positional_args)
        self.line_number = line_number

    def children(self) -> Sequence[Node]:
        return self.positional_args

    def evaluate_values(self, context: EvaluationContext) -> tuple[Any, ...]:
        """Evaluate every argument, strictly left to right."""
        return tuple(arg.value_expression.evaluate(context) for arg in self.positional_args)


__all__ = [
    "ArgumentsNode",
    "ContextVariableExpression",
    "Expression",
    "LiteralExpression",
    "Node",
    "PositionalArgumentNode",
]
