"""
Transform context and template traversal

The context carries what node transforms read (known identifiers, the
global allow-list, the context prefix) and the error sink they report
through. Parser and walker are built once as ExpressionServices and shared
by every context.
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Any, Callable, Dict, List, Mapping, Optional

from ..frontend.parser import ExpressionParser
from ..passes.identifier_resolver import Walker
from ..passes.transform_expression import transform_expression
from ..shared.errors import CompilerError, ErrorHandler, ErrorReporter
from ..shared.nodes import ElementNode, InterpolationNode, RootNode, TemplateNode
from ..shared.walker import walk
from ..utils.config import CONTEXT_PREFIX, DEFAULT_GLOBALS

logger = logging.getLogger("tmplexpr.compiler.transform")

NodeTransform = Callable[[TemplateNode, "TransformContext"], None]


@dataclass(frozen=True)
class ExpressionServices:
    """
    The stateless collaborators of the expression transform.

    Create once at startup and pass to every TransformContext; neither
    service keeps per-expression state, so sharing needs no locking.
    """
    parser: ExpressionParser
    walker: Walker

    @classmethod
    def create(cls) -> "ExpressionServices":
        logger.debug("building expression parser")
        return cls(parser=ExpressionParser(), walker=walk)


class TransformContext:
    """
    Per-template transform state.

    `services` is shared across contexts and must be supplied.
    `identifiers` is read as the base scope layer and never written by the
    expression transform; a name is known when its value is truthy.
    """

    def __init__(
        self,
        services: ExpressionServices,
        identifiers: Optional[Mapping[str, Any]] = None,
        on_error: Optional[ErrorHandler] = None,
        prefix_identifiers: bool = True,
        globals_: AbstractSet[str] = DEFAULT_GLOBALS,
        context_prefix: str = CONTEXT_PREFIX,
        node_transforms: Optional[List[NodeTransform]] = None,
        reporter: Optional[ErrorReporter] = None,
    ) -> None:
        self.services = services
        self.identifiers: Mapping[str, Any] = identifiers if identifiers is not None else {}
        self.prefix_identifiers = prefix_identifiers
        self.globals = globals_
        self.context_prefix = context_prefix
        self.node_transforms: List[NodeTransform] = (
            list(node_transforms) if node_transforms is not None else [transform_expression]
        )
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self._on_error = on_error if on_error is not None else self.reporter.report_error

    def on_error(self, error: CompilerError) -> None:
        self._on_error(error)

    def traverse(self, node: TemplateNode) -> None:
        """Apply every node transform to `node`, then descend into its children."""
        for node_transform in self.node_transforms:
            node_transform(node, self)
        if isinstance(node, InterpolationNode):
            self.traverse(node.content)
        elif isinstance(node, (RootNode, ElementNode)):
            for child in node.children:
                self.traverse(child)


def transform(root: RootNode, context: TransformContext) -> RootNode:
    context.traverse(root)
    return root


def create_transform_context(
    services: ExpressionServices,
    identifiers: Optional[Dict[str, Any]] = None,
    **options: Any,
) -> TransformContext:
    return TransformContext(services=services, identifiers=identifiers, **options)
