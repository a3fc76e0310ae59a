"""
tmplexpr utilities package
"""

from .position import advance_position_with_clone

__all__ = ["advance_position_with_clone"]
