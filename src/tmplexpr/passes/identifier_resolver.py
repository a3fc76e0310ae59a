"""
Scope-aware identifier resolution

Walks a parsed expression once, keeping a scope chain of locally bound
names, and collects every identifier that has to be read through the render
context.
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Any, Callable, List, Mapping, Optional, Set

from ..shared.estree import Identifier, JsNode
from ..shared.scope import ScopeChain, scope_names
from ..shared.walker import walk
from ..utils.config import CONTEXT_PREFIX, DEFAULT_GLOBALS
from .prefix_policy import prefix_for, should_prefix

logger = logging.getLogger("tmplexpr.passes.identifier_resolver")

Walker = Callable[..., None]


@dataclass(frozen=True)
class IdentifierOccurrence:
    """
    One identifier to rewrite.

    `start`/`end` index the parser's working buffer; `prefix` is inserted
    immediately before the name.
    """
    name: str
    start: int
    end: int
    prefix: str


class IdentifierResolver:
    """
    Collects free identifier references.

    Entering a function, a `for (let ...)` loop or a catch clause pushes a
    frame with the names it binds; leaving that same node pops it, so inner
    bindings never leak outward. Each physical identifier contributes at most
    one occurrence: shorthand properties reach the same node as key and as
    value, and offsets are unique within one parse.
    """

    def __init__(
        self,
        known: Optional[Mapping[str, Any]] = None,
        globals_: AbstractSet[str] = DEFAULT_GLOBALS,
        context_prefix: str = CONTEXT_PREFIX,
        walker: Walker = walk,
    ) -> None:
        self.known = known if known is not None else {}
        self.globals = globals_
        self.context_prefix = context_prefix
        self.walker = walker

    def resolve(self, ast: JsNode) -> List[IdentifierOccurrence]:
        scope = ScopeChain(self.known)
        scope_owners: List[JsNode] = []
        collected: Set[int] = set()
        occurrences: List[IdentifierOccurrence] = []

        def enter(node: JsNode, parent: Optional[JsNode]) -> None:
            if isinstance(node, Identifier):
                if node.start in collected or scope.is_known(node.name):
                    return
                if not should_prefix(node, parent, self.globals):
                    return
                collected.add(node.start)
                occurrences.append(
                    IdentifierOccurrence(
                        name=node.name,
                        start=node.start,
                        end=node.end,
                        prefix=prefix_for(node, parent, self.context_prefix),
                    )
                )
            else:
                names = scope_names(node)
                if names is not None:
                    scope.push(names)
                    scope_owners.append(node)

        def leave(node: JsNode, parent: Optional[JsNode]) -> None:
            if scope_owners and scope_owners[-1] is node:
                scope_owners.pop()
                scope.pop()

        self.walker(ast, enter, leave)
        occurrences.sort(key=lambda occurrence: occurrence.start)
        logger.debug("collected %d identifier(s) to prefix", len(occurrences))
        return occurrences
