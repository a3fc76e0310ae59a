"""
Expression transform

- Parse expressions in templates into compound expressions so that each
  identifier gets its own accurate source location.

- Prefix free identifiers with the context prefix so that they are read
  from the render context instead of the ambient scope.

A node keeps its raw `content` until at least one identifier is rewritten;
only then are `children` attached. Code generation reads `children` when
present and falls back to `content`.
"""

import logging
import re
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..shared.errors import ErrorCode, ExpressionSyntaxError, create_compiler_error
from ..shared.nodes import (
    DirectiveNode,
    ElementNode,
    ExpressionChild,
    ExpressionNode,
    TemplateNode,
    create_expression,
)
from ..shared.source_location import SourceLocation
from ..utils.position import advance_position_with_clone
from .identifier_resolver import IdentifierOccurrence, IdentifierResolver

if TYPE_CHECKING:
    from ..compiler.transform import ExpressionServices, TransformContext

logger = logging.getLogger("tmplexpr.passes.transform_expression")

SIMPLE_IDENTIFIER_RE = re.compile(r"[a-zA-Z$_][\w$]*", re.ASCII)


def transform_expression(node: TemplateNode, context: "TransformContext") -> None:
    """Node transform: rewrite dynamic expressions and directive expressions on elements."""
    if not context.prefix_identifiers:
        return
    if isinstance(node, ExpressionNode):
        if not node.is_static:
            process_expression(node, context)
    elif isinstance(node, ElementNode):
        for prop in node.props:
            if not isinstance(prop, DirectiveNode):
                continue
            if prop.exp is not None:
                process_expression(prop.exp, context)
            if prop.arg is not None and not prop.arg.is_static:
                process_expression(prop.arg, context)


def process_expression(
    node: ExpressionNode,
    context: "TransformContext",
    services: Optional["ExpressionServices"] = None,
) -> ExpressionNode:
    """
    Rewrite `node` in place and return it.

    A bare identifier takes the fast path and never reaches the parser.
    Invalid syntax is reported once through `context.on_error` and leaves the
    node untouched; nothing is raised to the caller.
    """
    services = services if services is not None else context.services

    if SIMPLE_IDENTIFIER_RE.fullmatch(node.content):
        if not context.identifiers.get(node.content):
            node.children = [context.context_prefix, create_expression(node.content, False, node.loc)]
            logger.debug("fast path: prefixed %r", node.content)
        return node

    parser = services.parser
    try:
        ast = parser.parse(node.content)
    except ExpressionSyntaxError as e:
        logger.debug("invalid expression %r: %s", node.content, e.message)
        context.on_error(
            create_compiler_error(ErrorCode.X_INVALID_EXPRESSION, node.loc, source=node.content, detail=e.message)
        )
        return node

    resolver = IdentifierResolver(
        known=context.identifiers,
        globals_=context.globals,
        context_prefix=context.context_prefix,
        walker=services.walker,
    )
    occurrences = resolver.resolve(ast)
    children = splice_occurrences(node, occurrences, parser.offset_correction)
    if children:
        node.children = children
    return node


def splice_occurrences(
    node: ExpressionNode,
    occurrences: Sequence[IdentifierOccurrence],
    offset_correction: int,
) -> List[ExpressionChild]:
    """
    Break `node.content` into literal fragments and one sub-expression per occurrence.

    Each fragment runs from the end of the previous identifier up to the next
    one and ends with that identifier's prefix. Occurrence offsets index the
    parser's buffer and are moved back by `offset_correction` first.
    Returns an empty list when there is nothing to rewrite.
    """
    full = node.content
    children: List[ExpressionChild] = []
    cursor = 0
    for occurrence in occurrences:
        start = occurrence.start - offset_correction
        end = occurrence.end - offset_correction
        children.append(full[cursor:start] + occurrence.prefix)
        children.append(create_expression(occurrence.name, False, _sub_location(node.loc, full, start, end)))
        cursor = end
    if children and cursor < len(full):
        children.append(full[cursor:])
    return children


def _sub_location(loc: Optional[SourceLocation], full: str, start: int, end: int) -> Optional[SourceLocation]:
    """Location of `full[start:end]` given that `full` begins at `loc.start`."""
    if loc is None:
        return None
    return SourceLocation(
        start=advance_position_with_clone(loc.start, full, start),
        end=advance_position_with_clone(loc.start, full, end),
        source=full[start:end],
    )
