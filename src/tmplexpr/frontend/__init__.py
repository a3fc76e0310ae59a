"""
Expression frontend: grammar, parser and parse-tree transformer
"""

from .parser import ExpressionParser

__all__ = ["ExpressionParser"]
