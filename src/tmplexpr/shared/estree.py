"""
ESTree-shaped expression nodes

Nodes built by the expression parser. Every node carries `start`/`end`
character offsets into the buffer that was parsed. `child_fields` lists the
attributes holding child nodes, in source order; the walker relies on it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, List, Optional, Tuple


@dataclass(eq=False)
class JsNode:
    start: int
    end: int

    child_fields: ClassVar[Tuple[str, ...]] = ()

    @property
    def type(self) -> str:
        return self.__class__.__name__


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class Identifier(JsNode):
    name: str = ""


@dataclass(eq=False)
class Literal(JsNode):
    value: Any = None
    raw: str = ""


@dataclass(eq=False)
class TemplateLiteral(JsNode):
    quasis: List[str] = field(default_factory=list)
    expressions: List[JsNode] = field(default_factory=list)

    child_fields: ClassVar[Tuple[str, ...]] = ("expressions",)


@dataclass(eq=False)
class ThisExpression(JsNode):
    pass


@dataclass(eq=False)
class ArrayExpression(JsNode):
    elements: List[Optional[JsNode]] = field(default_factory=list)

    child_fields: ClassVar[Tuple[str, ...]] = ("elements",)


@dataclass(eq=False)
class ObjectExpression(JsNode):
    properties: List[JsNode] = field(default_factory=list)

    child_fields: ClassVar[Tuple[str, ...]] = ("properties",)


@dataclass(eq=False)
class Property(JsNode):
    """
    Object literal entry. For shorthand `{ foo }`, `key` and `value` are the
    same Identifier object.
    """
    key: Optional[JsNode] = None
    value: Optional[JsNode] = None
    computed: bool = False
    shorthand: bool = False
    kind: str = "init"  # "get" / "set" for accessors
    method: bool = False

    child_fields: ClassVar[Tuple[str, ...]] = ("key", "value")


@dataclass(eq=False)
class SpreadElement(JsNode):
    argument: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("argument",)


@dataclass(eq=False)
class FunctionExpression(JsNode):
    id: Optional[Identifier] = None
    params: List[JsNode] = field(default_factory=list)
    body: Optional[JsNode] = None
    is_async: bool = False

    child_fields: ClassVar[Tuple[str, ...]] = ("id", "params", "body")


@dataclass(eq=False)
class ArrowFunctionExpression(JsNode):
    params: List[JsNode] = field(default_factory=list)
    body: Optional[JsNode] = None
    expression: bool = True
    is_async: bool = False

    child_fields: ClassVar[Tuple[str, ...]] = ("params", "body")


@dataclass(eq=False)
class AwaitExpression(JsNode):
    argument: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("argument",)


@dataclass(eq=False)
class UnaryExpression(JsNode):
    operator: str = ""
    argument: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("argument",)


@dataclass(eq=False)
class UpdateExpression(JsNode):
    operator: str = ""
    argument: Optional[JsNode] = None
    prefix: bool = False

    child_fields: ClassVar[Tuple[str, ...]] = ("argument",)


@dataclass(eq=False)
class BinaryExpression(JsNode):
    operator: str = ""
    left: Optional[JsNode] = None
    right: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("left", "right")


@dataclass(eq=False)
class LogicalExpression(BinaryExpression):
    pass


@dataclass(eq=False)
class AssignmentExpression(JsNode):
    operator: str = "="
    left: Optional[JsNode] = None
    right: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("left", "right")


@dataclass(eq=False)
class ConditionalExpression(JsNode):
    test: Optional[JsNode] = None
    consequent: Optional[JsNode] = None
    alternate: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("test", "consequent", "alternate")


@dataclass(eq=False)
class CallExpression(JsNode):
    callee: Optional[JsNode] = None
    arguments: List[JsNode] = field(default_factory=list)
    optional: bool = False

    child_fields: ClassVar[Tuple[str, ...]] = ("callee", "arguments")


@dataclass(eq=False)
class NewExpression(JsNode):
    callee: Optional[JsNode] = None
    arguments: List[JsNode] = field(default_factory=list)

    child_fields: ClassVar[Tuple[str, ...]] = ("callee", "arguments")


@dataclass(eq=False)
class MemberExpression(JsNode):
    object: Optional[JsNode] = None
    property: Optional[JsNode] = None
    computed: bool = False
    optional: bool = False

    child_fields: ClassVar[Tuple[str, ...]] = ("object", "property")


@dataclass(eq=False)
class SequenceExpression(JsNode):
    expressions: List[JsNode] = field(default_factory=list)

    child_fields: ClassVar[Tuple[str, ...]] = ("expressions",)


@dataclass(eq=False)
class TaggedTemplateExpression(JsNode):
    tag: Optional[JsNode] = None
    quasi: Optional[TemplateLiteral] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("tag", "quasi")


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ArrayPattern(JsNode):
    # None marks a hole: `[a, , b]`
    elements: List[Optional[JsNode]] = field(default_factory=list)

    child_fields: ClassVar[Tuple[str, ...]] = ("elements",)


@dataclass(eq=False)
class ObjectPattern(JsNode):
    properties: List[JsNode] = field(default_factory=list)

    child_fields: ClassVar[Tuple[str, ...]] = ("properties",)


@dataclass(eq=False)
class AssignmentPattern(JsNode):
    left: Optional[JsNode] = None
    right: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("left", "right")


@dataclass(eq=False)
class RestElement(JsNode):
    argument: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("argument",)


# ---------------------------------------------------------------------------
# Statements (function bodies)
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class BlockStatement(JsNode):
    body: List[JsNode] = field(default_factory=list)

    child_fields: ClassVar[Tuple[str, ...]] = ("body",)


@dataclass(eq=False)
class ExpressionStatement(JsNode):
    expression: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("expression",)


@dataclass(eq=False)
class ReturnStatement(JsNode):
    argument: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("argument",)


@dataclass(eq=False)
class IfStatement(JsNode):
    test: Optional[JsNode] = None
    consequent: Optional[JsNode] = None
    alternate: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("test", "consequent", "alternate")


@dataclass(eq=False)
class VariableDeclaration(JsNode):
    kind: str = "const"
    declarations: List[JsNode] = field(default_factory=list)

    child_fields: ClassVar[Tuple[str, ...]] = ("declarations",)


@dataclass(eq=False)
class VariableDeclarator(JsNode):
    id: Optional[JsNode] = None
    init: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("id", "init")


@dataclass(eq=False)
class ThrowStatement(JsNode):
    argument: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("argument",)


@dataclass(eq=False)
class BreakStatement(JsNode):
    pass


@dataclass(eq=False)
class ContinueStatement(JsNode):
    pass


@dataclass(eq=False)
class WhileStatement(JsNode):
    test: Optional[JsNode] = None
    body: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("test", "body")


@dataclass(eq=False)
class ForStatement(JsNode):
    init: Optional[JsNode] = None
    test: Optional[JsNode] = None
    update: Optional[JsNode] = None
    body: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("init", "test", "update", "body")


@dataclass(eq=False)
class ForInStatement(JsNode):
    left: Optional[JsNode] = None
    right: Optional[JsNode] = None
    body: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("left", "right", "body")


@dataclass(eq=False)
class ForOfStatement(ForInStatement):
    pass


@dataclass(eq=False)
class CatchClause(JsNode):
    param: Optional[JsNode] = None
    body: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("param", "body")


@dataclass(eq=False)
class TryStatement(JsNode):
    block: Optional[JsNode] = None
    handler: Optional[CatchClause] = None
    finalizer: Optional[JsNode] = None

    child_fields: ClassVar[Tuple[str, ...]] = ("block", "handler", "finalizer")


FunctionNode = (FunctionExpression, ArrowFunctionExpression)


def is_function(node: Optional[JsNode]) -> bool:
    return isinstance(node, FunctionNode)
