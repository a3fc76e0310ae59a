"""
Template AST Definitions

Nodes produced by the template parser and consumed by node transforms.
Only expression nodes are mutated by this package; the rest are walked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .source_location import SourceLocation


class NodeType(Enum):
    """Template AST node types"""
    ROOT = "root"
    ELEMENT = "element"
    TEXT = "text"
    INTERPOLATION = "interpolation"
    ATTRIBUTE = "attribute"
    DIRECTIVE = "directive"
    EXPRESSION = "expression"


@dataclass(eq=False)
class ExpressionNode:
    """
    A JavaScript expression embedded in a template.

    `children`, when present, is the compound form: literal text fragments
    interleaved with sub-expressions for rewritten identifiers. It supersedes
    `content` for every downstream consumer. It is either None or non-empty.
    """
    content: str
    is_static: bool
    loc: Optional[SourceLocation] = None
    children: Optional[List["ExpressionChild"]] = None
    node_type: NodeType = field(default=NodeType.EXPRESSION, init=False)

    @property
    def is_compound(self) -> bool:
        return self.children is not None


ExpressionChild = Union[str, ExpressionNode]


def create_expression(content: str, is_static: bool, loc: Optional[SourceLocation] = None) -> ExpressionNode:
    return ExpressionNode(content=content, is_static=is_static, loc=loc)


@dataclass(eq=False)
class TextNode:
    content: str
    loc: Optional[SourceLocation] = None
    node_type: NodeType = field(default=NodeType.TEXT, init=False)


@dataclass(eq=False)
class InterpolationNode:
    """{{ content }}"""
    content: ExpressionNode
    loc: Optional[SourceLocation] = None
    node_type: NodeType = field(default=NodeType.INTERPOLATION, init=False)


@dataclass(eq=False)
class AttributeNode:
    name: str
    value: Optional[TextNode] = None
    loc: Optional[SourceLocation] = None
    node_type: NodeType = field(default=NodeType.ATTRIBUTE, init=False)


@dataclass(eq=False)
class DirectiveNode:
    """
    v-name:arg.modifiers="exp"

    `arg` is static for `v-bind:id` and dynamic for `v-bind:[key]`.
    """
    name: str
    exp: Optional[ExpressionNode] = None
    arg: Optional[ExpressionNode] = None
    modifiers: List[str] = field(default_factory=list)
    loc: Optional[SourceLocation] = None
    node_type: NodeType = field(default=NodeType.DIRECTIVE, init=False)


@dataclass(eq=False)
class ElementNode:
    tag: str
    props: List[Union[AttributeNode, DirectiveNode]] = field(default_factory=list)
    children: List["TemplateChildNode"] = field(default_factory=list)
    loc: Optional[SourceLocation] = None
    node_type: NodeType = field(default=NodeType.ELEMENT, init=False)


@dataclass(eq=False)
class RootNode:
    children: List["TemplateChildNode"] = field(default_factory=list)
    loc: Optional[SourceLocation] = None
    node_type: NodeType = field(default=NodeType.ROOT, init=False)


TemplateChildNode = Union[ElementNode, InterpolationNode, TextNode, ExpressionNode]
TemplateNode = Union[RootNode, TemplateChildNode, AttributeNode, DirectiveNode]
