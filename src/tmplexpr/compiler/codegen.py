"""
Expression code generation

Renders the consumed form of an expression node: the compound children
when the node was rewritten, its raw content otherwise.
"""

from typing import List

from ..shared.nodes import ExpressionNode


def generate_expression(node: ExpressionNode) -> str:
    if not node.is_compound:
        return node.content
    parts: List[str] = []
    for child in node.children:
        if isinstance(child, str):
            parts.append(child)
        else:
            parts.append(generate_expression(child))
    return "".join(parts)
