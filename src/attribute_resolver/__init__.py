"""
Runtime attribute resolution for template expressions.

Resolves ``value.name`` and ``value.name(args)`` against values whose type is
only known at render time, using a fixed precedence:

1. Dynamic attribute providers
2. Mapping entries, tuple items, list items (plain access only)
3. ``get``/``is``/``has`` accessors, public methods, public fields, memoized
   per call site in an inline member cache

Strict variables mode turns missing attributes into errors; lenient mode
produces None.

Public API:
    - GetAttributeExpression: Attribute access node
    - ContextVariableExpression / LiteralExpression / ArgumentsNode: Child nodes
    - EvaluationContext: Render variables and strictness
    - DynamicAttributeProvider: Base class for self-resolving values
    - AttributeResolver / MemberCache: Resolution engine and its cache
    - EngineSettings / SettingsLoader: Configuration
    - ResolvingEnvironment: Jinja2 environment using the accessor conventions
    - TemplateError and subclasses: Error taxonomy
"""

from .config import EngineSettings, SettingsLoader
from .context import EvaluationContext
from .exceptions import (
    AttributeNotFoundError,
    InvocationFailureError,
    RootAttributeNotFoundError,
    TemplateError,
    UnsupportedKeyCoercionError,
)
from .expressions import (
    ArgumentsNode,
    ContextVariableExpression,
    Expression,
    LiteralExpression,
    Node,
    PositionalArgumentNode,
)
from .get_attribute import GetAttributeExpression
from .jinja_bridge import ResolvingEnvironment
from .resolution import (
    NOT_RESOLVED,
    AttributeResolver,
    DynamicAttributeProvider,
    FieldAccessor,
    MemberCache,
    MethodAccessor,
    ResolvedAttribute,
    SourceLocation,
)
from .visitor import NodeVisitor

__all__ = [
    "NOT_RESOLVED",
    "ArgumentsNode",
    "AttributeNotFoundError",
    "AttributeResolver",
    "ContextVariableExpression",
    "DynamicAttributeProvider",
    "EngineSettings",
    "EvaluationContext",
    "Expression",
    "FieldAccessor",
    "GetAttributeExpression",
    "InvocationFailureError",
    "LiteralExpression",
    "MemberCache",
    "MethodAccessor",
    "Node",
    "NodeVisitor",
    "PositionalArgumentNode",
    "ResolvedAttribute",
    "ResolvingEnvironment",
    "RootAttributeNotFoundError",
    "SettingsLoader",
    "SourceLocation",
    "TemplateError",
    "UnsupportedKeyCoercionError",
]
