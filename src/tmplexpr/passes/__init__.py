"""
Template expression passes
"""

from .identifier_resolver import IdentifierOccurrence, IdentifierResolver
from .prefix_policy import prefix_for, should_prefix
from .transform_expression import process_expression, splice_occurrences, transform_expression

__all__ = [
    "IdentifierOccurrence",
    "IdentifierResolver",
    "prefix_for",
    "process_expression",
    "should_prefix",
    "splice_occurrences",
    "transform_expression",
]
