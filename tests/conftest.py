"""
Pytest configuration and shared fixtures for all tmplexpr tests.

Building the expression parser compiles the grammar, so one set of
ExpressionServices is shared by the whole session; contexts are cheap and
created per test.
"""

import sys
import pytest
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from tmplexpr.compiler import ExpressionServices, TransformContext, generate_expression
from tmplexpr.passes import process_expression
from tmplexpr.shared import ExpressionNode, Position, create_expression, location_from_source


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def services() -> ExpressionServices:
    """
    Session-scoped parser + walker shared across ALL tests.

    Safe to share: neither service keeps per-expression state.
    """
    return ExpressionServices.create()


@pytest.fixture(scope="session")
def parser(services):
    return services.parser


# =============================================================================
# Function-scoped fixtures (default - one per test)
# =============================================================================

@pytest.fixture
def make_context(services) -> Callable[..., TransformContext]:
    """Factory for contexts that collect errors in `context.reporter`."""
    def factory(identifiers: Optional[Dict[str, Any]] = None, **options: Any) -> TransformContext:
        return TransformContext(services=services, identifiers=identifiers, **options)
    return factory


@pytest.fixture
def rewrite(make_context) -> Callable[..., Tuple[ExpressionNode, TransformContext]]:
    """
    Run the expression transform on `text` placed at `start` in a template.

    Returns the (mutated) node and the context it ran in.
    """
    def run(
        text: str,
        identifiers: Optional[Dict[str, Any]] = None,
        start: Position = Position(0, 1, 1),
        **options: Any,
    ) -> Tuple[ExpressionNode, TransformContext]:
        context = make_context(identifiers, **options)
        node = create_expression(text, False, location_from_source(text, start))
        process_expression(node, context)
        return node, context
    return run


@pytest.fixture
def rewritten(rewrite) -> Callable[..., str]:
    """Generated code for `text` after the transform."""
    def run(text: str, identifiers: Optional[Dict[str, Any]] = None, **options: Any) -> str:
        node, _ = rewrite(text, identifiers, **options)
        return generate_expression(node)
    return run
