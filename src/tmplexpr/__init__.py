"""
tmplexpr - identifier prefixing for template expressions

Rewrites free identifiers in template binding expressions into reads from
the render context while keeping an accurate source location for every
rewritten identifier.
"""

__version__ = "0.1.0"

from .compiler import (
    ExpressionServices,
    TransformContext,
    create_transform_context,
    generate_expression,
    transform,
)
from .passes import process_expression, transform_expression
from .shared import (
    CompilerError,
    ErrorCode,
    ErrorReporter,
    ExpressionNode,
    Position,
    SourceLocation,
    create_expression,
)

__all__ = [
    "CompilerError",
    "ErrorCode",
    "ErrorReporter",
    "ExpressionNode",
    "ExpressionServices",
    "Position",
    "SourceLocation",
    "TransformContext",
    "create_expression",
    "create_transform_context",
    "generate_expression",
    "process_expression",
    "transform",
    "transform_expression",
]
