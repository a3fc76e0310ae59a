"""
Pattern Parser - Extracted from ExpressionTransformer
Converts cover-grammar expressions into binding/assignment patterns
"""

from typing import List, Optional

from ...shared.errors import ExpressionSyntaxError
from ...shared.walker import walk
from ...shared.estree import (
    ArrayExpression,
    ArrayPattern,
    AssignmentExpression,
    AssignmentPattern,
    Identifier,
    JsNode,
    MemberExpression,
    ObjectExpression,
    ObjectPattern,
    Property,
    RestElement,
    SequenceExpression,
    SpreadElement,
)


class PatternParser:
    """
    Dedicated converter for destructuring targets.

    Arrow parameters, assignment targets and declarator ids are parsed as
    expressions first; this rewrites them in place of the expression nodes.
    Identifier objects are reused so that shorthand `{ a }` keeps key and
    value pointing at the same node.
    """

    def to_binding(self, node: JsNode) -> JsNode:
        """Pattern for a parameter or declarator id (no member targets)."""
        return self._convert(node, allow_member=False)

    def to_assignment_target(self, node: JsNode) -> JsNode:
        """Pattern for the left side of `=`."""
        return self._convert(node, allow_member=True)

    def to_params(self, items: List[JsNode]) -> List[JsNode]:
        """Flatten a parenthesized parameter list into binding patterns."""
        params: List[JsNode] = []
        for item in items:
            if isinstance(item, SequenceExpression):
                params.extend(self.to_binding(e) for e in item.expressions)
            else:
                params.append(self.to_binding(item))
        return params

    def _convert(self, node: Optional[JsNode], allow_member: bool) -> JsNode:
        if isinstance(node, Identifier):
            return node
        if isinstance(node, MemberExpression) and allow_member:
            return node
        if isinstance(node, ArrayExpression):
            return ArrayPattern(
                start=node.start,
                end=node.end,
                elements=[self._convert(e, allow_member) if e is not None else None for e in node.elements],
            )
        if isinstance(node, ObjectExpression):
            return ObjectPattern(
                start=node.start,
                end=node.end,
                properties=[self._convert_property(p, allow_member) for p in node.properties],
            )
        if isinstance(node, AssignmentExpression) and node.operator == "=":
            return AssignmentPattern(
                start=node.start,
                end=node.end,
                left=self._convert(node.left, allow_member),
                right=node.right,
            )
        if isinstance(node, SpreadElement):
            return RestElement(start=node.start, end=node.end, argument=self._convert(node.argument, allow_member))
        offset = node.start if node is not None else None
        raise ExpressionSyntaxError("Invalid destructuring target", offset)

    def _convert_property(self, node: JsNode, allow_member: bool) -> JsNode:
        if isinstance(node, SpreadElement):
            return self._convert(node, allow_member)
        if isinstance(node, Property) and not node.method and node.kind == "init":
            if node.shorthand:
                if _is_cover_initializer(node):
                    cover = node.value
                    node.value = AssignmentPattern(start=cover.start, end=cover.end, left=cover.left, right=cover.right)
                return node
            node.value = self._convert(node.value, allow_member)
            return node
        raise ExpressionSyntaxError("Invalid destructuring target", node.start)

    def reject_cover_initializers(self, node: JsNode) -> None:
        """`{ a = 1 }` left over outside any pattern is a syntax error."""
        def enter(n: JsNode, _parent: Optional[JsNode]) -> None:
            if _is_cover_initializer(n):
                raise ExpressionSyntaxError("Shorthand default outside a destructuring pattern", n.start)
        walk(node, enter)


def _is_cover_initializer(node: JsNode) -> bool:
    return isinstance(node, Property) and node.shorthand and isinstance(node.value, AssignmentExpression)
