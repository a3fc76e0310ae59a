"""
Scope chain for identifier resolution.

A read-only base layer (the template's known identifiers) under a stack of
frames, one per enclosing function, `for (let ...)` loop or catch clause.
Lookup scans frames innermost first and falls back to the base; leaving the
owning node drops its whole frame.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, Iterator, List, Mapping, Optional

from .estree import (
    ArrayPattern,
    AssignmentPattern,
    BlockStatement,
    CatchClause,
    ForInStatement,
    ForStatement,
    Identifier,
    IfStatement,
    JsNode,
    ObjectPattern,
    Property,
    RestElement,
    TryStatement,
    VariableDeclaration,
    WhileStatement,
    is_function,
)


class ScopeChain:
    """
    Layered set of locally bound names.

    The base mapping is never written to; a name counts as known in the base
    when its value is truthy (templates keep a reference count there).
    """

    def __init__(self, base: Optional[Mapping[str, Any]] = None) -> None:
        self._base: Mapping[str, Any] = base if base is not None else {}
        self._frames: List[FrozenSet[str]] = []

    def push(self, names: Iterable[str]) -> None:
        self._frames.append(frozenset(names))

    def pop(self) -> FrozenSet[str]:
        return self._frames.pop()

    @property
    def depth(self) -> int:
        return len(self._frames)

    def is_known(self, name: str) -> bool:
        for frame in reversed(self._frames):
            if name in frame:
                return True
        return bool(self._base.get(name))


# -----------------------------------------------------------------------------
# Names bound by patterns and function scopes
# -----------------------------------------------------------------------------


def bound_names(pattern: Optional[JsNode]) -> Iterator[str]:
    """
    Yield every name a binding pattern introduces.

    Default values and computed keys are references, not bindings, and are
    skipped.
    """
    if pattern is None:
        return
    if isinstance(pattern, Identifier):
        yield pattern.name
    elif isinstance(pattern, ArrayPattern):
        for element in pattern.elements:
            yield from bound_names(element)
    elif isinstance(pattern, ObjectPattern):
        for prop in pattern.properties:
            if isinstance(prop, Property):
                yield from bound_names(prop.value)
            else:
                yield from bound_names(prop)
    elif isinstance(pattern, AssignmentPattern):
        yield from bound_names(pattern.left)
    elif isinstance(pattern, RestElement):
        yield from bound_names(pattern.argument)


def declared_names(body: Optional[JsNode]) -> Iterator[str]:
    """Names declared with const/let/var in a function body, not descending into nested functions."""
    if isinstance(body, VariableDeclaration):
        for declarator in body.declarations:
            yield from bound_names(declarator.id)
    elif isinstance(body, BlockStatement):
        for statement in body.body:
            yield from declared_names(statement)
    elif isinstance(body, IfStatement):
        yield from declared_names(body.consequent)
        yield from declared_names(body.alternate)
    elif isinstance(body, WhileStatement):
        yield from declared_names(body.body)
    elif isinstance(body, (ForStatement, ForInStatement)):
        head = body.init if isinstance(body, ForStatement) else body.left
        # let/const heads get their own frame
        if isinstance(head, VariableDeclaration) and head.kind == "var":
            yield from declared_names(head)
        yield from declared_names(body.body)
    elif isinstance(body, TryStatement):
        yield from declared_names(body.block)
        if body.handler is not None:
            yield from declared_names(body.handler.body)
        yield from declared_names(body.finalizer)


def function_scope_names(node: JsNode) -> FrozenSet[str]:
    """Everything a function literal binds for its own body: params, its name, body declarations."""
    if not is_function(node):
        return frozenset()
    names = set()
    for param in node.params:
        names.update(bound_names(param))
    function_id = getattr(node, "id", None)
    if function_id is not None:
        names.add(function_id.name)
    names.update(declared_names(node.body))
    return frozenset(names)


def scope_names(node: JsNode) -> Optional[FrozenSet[str]]:
    """
    Names bound for the subtree of `node`, or None when it opens no scope.

    Functions bind their params and body declarations; a `for` with a
    let/const head binds the head names over the whole loop; a catch
    clause binds its parameter over the handler.
    """
    if is_function(node):
        return function_scope_names(node)
    if isinstance(node, (ForStatement, ForInStatement)):
        head = node.init if isinstance(node, ForStatement) else node.left
        if isinstance(head, VariableDeclaration) and head.kind != "var":
            return frozenset(declared_names(head))
        return None
    if isinstance(node, CatchClause) and node.param is not None:
        return frozenset(bound_names(node.param))
    return None
