"""
tmplexpr compiler: transform context, traversal and expression codegen
"""

from .codegen import generate_expression
from .transform import (
    ExpressionServices,
    NodeTransform,
    TransformContext,
    create_transform_context,
    transform,
)

__all__ = [
    "ExpressionServices",
    "NodeTransform",
    "TransformContext",
    "create_transform_context",
    "generate_expression",
    "transform",
]
