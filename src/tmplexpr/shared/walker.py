"""
Tree walker for ESTree-shaped nodes

enter(node, parent) runs before a node's children, leave(node, parent)
after them. Children are visited in source order.
"""

from typing import Callable, Iterator, Optional

from .estree import JsNode

Visitor = Callable[[JsNode, Optional[JsNode]], None]


def iter_child_nodes(node: JsNode) -> Iterator[JsNode]:
    """Yield the direct children of `node` in source order."""
    for name in node.child_fields:
        value = getattr(node, name)
        if value is None:
            continue
        if isinstance(value, list):
            for item in value:
                if item is not None:
                    yield item
        else:
            yield value


def walk(
    node: JsNode,
    enter: Optional[Visitor] = None,
    leave: Optional[Visitor] = None,
    parent: Optional[JsNode] = None,
) -> None:
    """Depth-first traversal of `node`."""
    if enter is not None:
        enter(node, parent)
    for child in iter_child_nodes(node):
        walk(child, enter, leave, node)
    if leave is not None:
        leave(node, parent)

