"""Tree traversal for analysis and printing tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .expressions import Node


class NodeVisitor:
    """
    Visitor dispatching to ``visit_<ClassName>`` methods.

    Nodes without a dedicated method fall back to ``generic_visit``, which
    visits the children in evaluation order.

    Example:
        class NameCollector(NodeVisitor):
            def __init__(self):
                self.names = []

            def visit_ContextVariableExpression(self, node):
                self.names.append(node.name)

        collector = NameCollector()
        expression.accept(collector)
    """

    def visit(self, node: Node) -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: Node) -> None:
        for child in node.children():
            child.accept(self)


__all__ = ["NodeVisitor"]
