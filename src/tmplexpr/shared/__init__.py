"""
Shared definitions: template nodes, expression trees, locations, errors
"""

from .source_location import Position, SourceLocation, location_from_source
from .nodes import (
    AttributeNode,
    DirectiveNode,
    ElementNode,
    ExpressionChild,
    ExpressionNode,
    InterpolationNode,
    NodeType,
    RootNode,
    TemplateChildNode,
    TemplateNode,
    TextNode,
    create_expression,
)
from .errors import (
    CompilerError,
    ErrorCode,
    ErrorHandler,
    ErrorReporter,
    ExpressionSyntaxError,
    create_compiler_error,
)
from .scope import ScopeChain, bound_names, declared_names, function_scope_names, scope_names
from .walker import iter_child_nodes, walk
