"""
Parse-tree transformers for template expressions
"""

from .base import ExpressionTransformer

__all__ = ["ExpressionTransformer"]
