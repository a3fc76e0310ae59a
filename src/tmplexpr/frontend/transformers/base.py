"""
Expression AST Transformer
Converts the Lark parse tree of a template expression to ESTree-shaped nodes
"""

from typing import Any, List, Optional, Tuple, Union

from lark import Transformer, v_args
from lark.lexer import Token
from typing_extensions import TypeAlias

from ...shared.estree import (
    ArrayExpression,
    ArrowFunctionExpression,
    AssignmentExpression,
    AwaitExpression,
    BinaryExpression,
    BlockStatement,
    BreakStatement,
    CallExpression,
    CatchClause,
    ConditionalExpression,
    ContinueStatement,
    ExpressionStatement,
    ForInStatement,
    ForOfStatement,
    ForStatement,
    FunctionExpression,
    Identifier,
    IfStatement,
    JsNode,
    LogicalExpression,
    MemberExpression,
    NewExpression,
    ObjectExpression,
    Property,
    ReturnStatement,
    SequenceExpression,
    SpreadElement,
    TaggedTemplateExpression,
    TemplateLiteral,
    ThisExpression,
    ThrowStatement,
    TryStatement,
    UnaryExpression,
    UpdateExpression,
    VariableDeclaration,
    VariableDeclarator,
    WhileStatement,
)
from .literals import LiteralParser
from .patterns import PatternParser

# Lark Meta object carries start_pos/end_pos when propagate_positions is on
LarkMeta: TypeAlias = Any
Params: TypeAlias = List[JsNode]
# Object key and whether it is computed (`[expr]`)
PropertyKey: TypeAlias = Tuple[JsNode, bool]

LOGICAL_OPERATORS = frozenset(("&&", "||", "??"))


def _span(meta: LarkMeta) -> Tuple[int, int]:
    return meta.start_pos, meta.end_pos


def _identifier(token: Token) -> Identifier:
    return Identifier(start=token.start_pos, end=token.end_pos, name=str(token))


@v_args(inline=True, meta=True)
class ExpressionTransformer(Transformer):
    """
    Builds ESTree-shaped nodes whose offsets index the parsed buffer.

    Holds no per-parse state, so one instance serves every parse.
    """

    def __init__(self) -> None:
        super().__init__()
        self.literal_parser: LiteralParser = LiteralParser()
        self.pattern_parser: PatternParser = PatternParser()

    def __default__(self, data, children, meta):
        raise NotImplementedError(f"Missing transformer method for grammar rule '{data}'")

    def start(self, meta: LarkMeta, expression: JsNode) -> JsNode:
        self.pattern_parser.reject_cover_initializers(expression)
        return expression

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def sequence(self, meta: LarkMeta, left: JsNode, right: JsNode) -> SequenceExpression:
        start, end = _span(meta)
        if isinstance(left, SequenceExpression) and left.start == start:
            left.expressions.append(right)
            left.end = end
            return left
        return SequenceExpression(start=start, end=end, expressions=[left, right])

    def assign_op(self, meta: LarkMeta, op: Token) -> str:
        return str(op)

    def assignment_expression(self, meta: LarkMeta, left: JsNode, op: str, right: JsNode) -> AssignmentExpression:
        start, end = _span(meta)
        if op == "=":
            left = self.pattern_parser.to_assignment_target(left)
        return AssignmentExpression(start=start, end=end, operator=op, left=left, right=right)

    def conditional_expression(
        self, meta: LarkMeta, test: JsNode, consequent: JsNode, alternate: JsNode
    ) -> ConditionalExpression:
        start, end = _span(meta)
        return ConditionalExpression(start=start, end=end, test=test, consequent=consequent, alternate=alternate)

    def binary(self, meta: LarkMeta, left: JsNode, op: Token, right: JsNode) -> BinaryExpression:
        start, end = _span(meta)
        operator = str(op)
        node_class = LogicalExpression if operator in LOGICAL_OPERATORS else BinaryExpression
        return node_class(start=start, end=end, operator=operator, left=left, right=right)

    def unary_expression(self, meta: LarkMeta, op: Token, argument: JsNode) -> JsNode:
        start, end = _span(meta)
        if op.type == "AWAIT":
            return AwaitExpression(start=start, end=end, argument=argument)
        return UnaryExpression(start=start, end=end, operator=str(op), argument=argument)

    def prefix_update(self, meta: LarkMeta, op: Token, argument: JsNode) -> UpdateExpression:
        start, end = _span(meta)
        return UpdateExpression(start=start, end=end, operator=str(op), argument=argument, prefix=True)

    def postfix_update(self, meta: LarkMeta, argument: JsNode, op: Token) -> UpdateExpression:
        start, end = _span(meta)
        return UpdateExpression(start=start, end=end, operator=str(op), argument=argument, prefix=False)

    # ------------------------------------------------------------------
    # Member access and calls
    # ------------------------------------------------------------------

    def member(self, meta: LarkMeta, obj: JsNode, name: Token) -> MemberExpression:
        start, end = _span(meta)
        return MemberExpression(start=start, end=end, object=obj, property=_identifier(name))

    def optional_member(self, meta: LarkMeta, obj: JsNode, name: Token) -> MemberExpression:
        start, end = _span(meta)
        return MemberExpression(start=start, end=end, object=obj, property=_identifier(name), optional=True)

    def computed_member(self, meta: LarkMeta, obj: JsNode, prop: JsNode) -> MemberExpression:
        start, end = _span(meta)
        return MemberExpression(start=start, end=end, object=obj, property=prop, computed=True)

    def optional_computed_member(self, meta: LarkMeta, obj: JsNode, prop: JsNode) -> MemberExpression:
        start, end = _span(meta)
        return MemberExpression(start=start, end=end, object=obj, property=prop, computed=True, optional=True)

    def call(self, meta: LarkMeta, callee: JsNode, args: List[JsNode]) -> CallExpression:
        start, end = _span(meta)
        return CallExpression(start=start, end=end, callee=callee, arguments=args)

    def optional_call(self, meta: LarkMeta, callee: JsNode, args: List[JsNode]) -> CallExpression:
        start, end = _span(meta)
        return CallExpression(start=start, end=end, callee=callee, arguments=args, optional=True)

    def tagged_template(self, meta: LarkMeta, tag: JsNode, quasi: TemplateLiteral) -> TaggedTemplateExpression:
        start, end = _span(meta)
        return TaggedTemplateExpression(start=start, end=end, tag=tag, quasi=quasi)

    def arguments(self, meta: LarkMeta, *args: JsNode) -> List[JsNode]:
        return list(args)

    def new_expression(self, meta: LarkMeta, callee: JsNode, args: Optional[List[JsNode]] = None) -> NewExpression:
        start, end = _span(meta)
        return NewExpression(start=start, end=end, callee=callee, arguments=args or [])

    def spread(self, meta: LarkMeta, argument: JsNode) -> SpreadElement:
        start, end = _span(meta)
        return SpreadElement(start=start, end=end, argument=argument)

    # ------------------------------------------------------------------
    # Primary expressions
    # ------------------------------------------------------------------

    def identifier(self, meta: LarkMeta, name: Token) -> Identifier:
        return _identifier(name)

    def number_literal(self, meta: LarkMeta, token: Token) -> JsNode:
        return self.literal_parser.parse_number(token)

    def string_literal(self, meta: LarkMeta, token: Token) -> JsNode:
        return self.literal_parser.parse_string(token)

    def template(self, meta: LarkMeta, *parts: Union[Token, JsNode]) -> TemplateLiteral:
        start, end = _span(meta)
        return self.literal_parser.parse_template(start, end, parts)

    def regex_literal(self, meta: LarkMeta, token: Token) -> JsNode:
        return self.literal_parser.parse_regex(token)

    def true_literal(self, meta: LarkMeta, token: Token) -> JsNode:
        return self.literal_parser.parse_keyword(token, True)

    def false_literal(self, meta: LarkMeta, token: Token) -> JsNode:
        return self.literal_parser.parse_keyword(token, False)

    def null_literal(self, meta: LarkMeta, token: Token) -> JsNode:
        return self.literal_parser.parse_keyword(token, None)

    def this_expression(self, meta: LarkMeta, token: Token) -> ThisExpression:
        return ThisExpression(start=token.start_pos, end=token.end_pos)

    def array(self, meta: LarkMeta, *children: Union[Token, JsNode]) -> ArrayExpression:
        start, end = _span(meta)
        # children are "[" ... "]" with the commas kept; each comma opens a new slot
        elements: List[Optional[JsNode]] = [None]
        for child in children[1:-1]:
            if isinstance(child, Token):
                elements.append(None)
            else:
                elements[-1] = child
        if elements[-1] is None:
            elements.pop()
        return ArrayExpression(start=start, end=end, elements=elements)

    def object(self, meta: LarkMeta, *properties: JsNode) -> ObjectExpression:
        start, end = _span(meta)
        return ObjectExpression(start=start, end=end, properties=list(properties))

    # ------------------------------------------------------------------
    # Object properties
    # ------------------------------------------------------------------

    def plain_key(self, meta: LarkMeta, name: Token) -> PropertyKey:
        return _identifier(name), False

    def literal_key(self, meta: LarkMeta, token: Token) -> PropertyKey:
        if token.type == "NUMBER":
            return self.literal_parser.parse_number(token), False
        return self.literal_parser.parse_string(token), False

    def computed_key(self, meta: LarkMeta, key: JsNode) -> PropertyKey:
        return key, True

    def keyed_property(self, meta: LarkMeta, key: PropertyKey, value: JsNode) -> Property:
        start, end = _span(meta)
        key_node, computed = key
        return Property(start=start, end=end, key=key_node, value=value, computed=computed)

    def method_property(self, meta: LarkMeta, *children: Any) -> Property:
        start, end = _span(meta)
        modifier = children[0] if isinstance(children[0], Token) else None
        key, params, body = children[-3:]
        key_node, computed = key
        function = FunctionExpression(
            start=key_node.end,
            end=end,
            params=params,
            body=body,
            is_async=modifier is not None and modifier.type == "ASYNC",
        )
        kind = str(modifier) if modifier is not None and modifier.type == "ACCESSOR" else "init"
        return Property(
            start=start,
            end=end,
            key=key_node,
            value=function,
            computed=computed,
            kind=kind,
            method=kind == "init",
        )

    def shorthand_property(self, meta: LarkMeta, name: Identifier) -> Property:
        # key and value share one node, as ESTree parsers emit it
        return Property(start=name.start, end=name.end, key=name, value=name, shorthand=True)

    def shorthand_default(self, meta: LarkMeta, name: Identifier, default: JsNode) -> Property:
        start, end = _span(meta)
        cover = AssignmentExpression(start=start, end=end, operator="=", left=name, right=default)
        return Property(start=start, end=end, key=name, value=cover, shorthand=True)

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def formal_params(self, meta: LarkMeta, *items: JsNode) -> Params:
        return self.pattern_parser.to_params(list(items))

    def arrow_params(self, meta: LarkMeta, params: Union[Identifier, Params]) -> Params:
        if isinstance(params, Identifier):
            return [params]
        return params

    def arrow_function(self, meta: LarkMeta, params: Params, body: JsNode) -> ArrowFunctionExpression:
        start, end = _span(meta)
        return ArrowFunctionExpression(
            start=start,
            end=end,
            params=params,
            body=body,
            expression=not isinstance(body, BlockStatement),
        )

    def async_arrow_function(
        self, meta: LarkMeta, _async: Token, params: Params, body: JsNode
    ) -> ArrowFunctionExpression:
        node = self.arrow_function(meta, params, body)
        node.is_async = True
        return node

    def function_expression(self, meta: LarkMeta, *children: Any) -> FunctionExpression:
        start, end = _span(meta)
        is_async = isinstance(children[0], Token)
        if is_async:
            children = children[1:]
        if len(children) == 3:
            name, params, body = children
        else:
            name = None
            params, body = children
        return FunctionExpression(start=start, end=end, id=name, params=params, body=body, is_async=is_async)

    # ------------------------------------------------------------------
    # Statements (function bodies)
    # ------------------------------------------------------------------

    def block(self, meta: LarkMeta, *statements: JsNode) -> BlockStatement:
        start, end = _span(meta)
        return BlockStatement(start=start, end=end, body=list(statements))

    def expression_statement(self, meta: LarkMeta, expression: JsNode) -> ExpressionStatement:
        start, end = _span(meta)
        return ExpressionStatement(start=start, end=end, expression=expression)

    def return_statement(self, meta: LarkMeta, argument: Optional[JsNode] = None) -> ReturnStatement:
        start, end = _span(meta)
        return ReturnStatement(start=start, end=end, argument=argument)

    def throw_statement(self, meta: LarkMeta, argument: JsNode) -> ThrowStatement:
        start, end = _span(meta)
        return ThrowStatement(start=start, end=end, argument=argument)

    def break_statement(self, meta: LarkMeta) -> BreakStatement:
        start, end = _span(meta)
        return BreakStatement(start=start, end=end)

    def continue_statement(self, meta: LarkMeta) -> ContinueStatement:
        start, end = _span(meta)
        return ContinueStatement(start=start, end=end)

    def if_statement(
        self, meta: LarkMeta, test: JsNode, consequent: JsNode, alternate: Optional[JsNode] = None
    ) -> IfStatement:
        start, end = _span(meta)
        return IfStatement(start=start, end=end, test=test, consequent=consequent, alternate=alternate)

    def while_statement(self, meta: LarkMeta, test: JsNode, body: JsNode) -> WhileStatement:
        start, end = _span(meta)
        return WhileStatement(start=start, end=end, test=test, body=body)

    def for_init(self, meta: LarkMeta, init: Optional[JsNode] = None) -> Optional[JsNode]:
        return init

    def for_part(self, meta: LarkMeta, expression: Optional[JsNode] = None) -> Optional[JsNode]:
        return expression

    def for_statement(
        self,
        meta: LarkMeta,
        init: Optional[JsNode],
        test: Optional[JsNode],
        update: Optional[JsNode],
        body: JsNode,
    ) -> ForStatement:
        start, end = _span(meta)
        return ForStatement(start=start, end=end, init=init, test=test, update=update, body=body)

    def for_declaration(self, meta: LarkMeta, kind: Token, target: JsNode) -> VariableDeclaration:
        start, end = _span(meta)
        declarator = VariableDeclarator(
            start=target.start,
            end=target.end,
            id=self.pattern_parser.to_binding(target),
        )
        return VariableDeclaration(start=start, end=end, kind=str(kind), declarations=[declarator])

    def for_in_statement(self, meta: LarkMeta, left: JsNode, op: Token, right: JsNode, body: JsNode) -> ForInStatement:
        start, end = _span(meta)
        if not isinstance(left, VariableDeclaration):
            left = self.pattern_parser.to_assignment_target(left)
        node_class = ForOfStatement if op.type == "OF" else ForInStatement
        return node_class(start=start, end=end, left=left, right=right, body=body)

    def try_statement(self, meta: LarkMeta, block: BlockStatement, *clauses: JsNode) -> TryStatement:
        start, end = _span(meta)
        handler = next((c for c in clauses if isinstance(c, CatchClause)), None)
        finalizer = next((c for c in clauses if isinstance(c, BlockStatement)), None)
        return TryStatement(start=start, end=end, block=block, handler=handler, finalizer=finalizer)

    def catch_clause(self, meta: LarkMeta, *children: JsNode) -> CatchClause:
        start, end = _span(meta)
        param = self.pattern_parser.to_binding(children[0]) if len(children) == 2 else None
        return CatchClause(start=start, end=end, param=param, body=children[-1])

    def finally_clause(self, meta: LarkMeta, body: BlockStatement) -> BlockStatement:
        return body

    def variable_declaration(self, meta: LarkMeta, kind: Token, *declarations: JsNode) -> VariableDeclaration:
        start, end = _span(meta)
        return VariableDeclaration(start=start, end=end, kind=str(kind), declarations=list(declarations))

    def declarator(self, meta: LarkMeta, target: JsNode, init: Optional[JsNode] = None) -> VariableDeclarator:
        start, end = _span(meta)
        return VariableDeclarator(start=start, end=end, id=self.pattern_parser.to_binding(target), init=init)
