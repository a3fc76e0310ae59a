"""
Prefixing eligibility

Decides, from an identifier and its immediate parent alone, whether the
identifier is a free reference that must be read through the render context.
Scope is not consulted here; the resolver checks the scope chain first.
"""

from typing import AbstractSet, Optional

from ..shared.estree import ArrayPattern, Identifier, JsNode, MemberExpression, Property, is_function
from ..utils.config import CONTEXT_PREFIX, DEFAULT_GLOBALS


def is_shorthand_property(identifier: Identifier, parent: Optional[JsNode]) -> bool:
    """`{ foo }` or `{ foo = 1 }`: the identifier is both key and (bound) value."""
    return isinstance(parent, Property) and parent.shorthand and parent.key is identifier


def should_prefix(
    identifier: Identifier,
    parent: Optional[JsNode],
    globals_: AbstractSet[str] = DEFAULT_GLOBALS,
) -> bool:
    # function name or one of its direct params
    if is_function(parent):
        if getattr(parent, "id", None) is identifier:
            return False
        if any(param is identifier for param in parent.params):
            return False

    # plain key of an object property; computed and shorthand keys are references
    if (
        isinstance(parent, Property)
        and parent.key is identifier
        and not parent.computed
        and not parent.shorthand
    ):
        return False

    # `b` in `a.b`
    if isinstance(parent, MemberExpression) and parent.property is identifier and not parent.computed:
        return False

    # binding position in `[a, b] = ...`
    if isinstance(parent, ArrayPattern):
        return False

    return identifier.name not in globals_


def prefix_for(identifier: Identifier, parent: Optional[JsNode], context_prefix: str = CONTEXT_PREFIX) -> str:
    """
    Text inserted before the identifier.

    A shorthand property is expanded into `name: <prefix>name`; the key is
    kept verbatim and only the value is routed through the context.
    """
    if is_shorthand_property(identifier, parent):
        return f"{identifier.name}: {context_prefix}"
    return context_prefix
