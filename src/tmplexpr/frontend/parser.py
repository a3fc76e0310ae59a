"""
Expression Parser

Turns raw template expression text into an ESTree-shaped tree whose nodes
carry character offsets into the parsed buffer.
"""

import logging
from pathlib import Path

from lark import Lark
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, VisitError

from ..shared.errors import ExpressionSyntaxError
from ..shared.estree import JsNode
from ..utils.config import EXPRESSION_CLOSE, EXPRESSION_OPEN, GRAMMAR_FILE_NAME
from .transformers.base import ExpressionTransformer

logger = logging.getLogger("tmplexpr.frontend.parser")


class ExpressionParser:
    """
    Parser for JavaScript expressions embedded in templates.

    The text is wrapped in `EXPRESSION_OPEN`/`EXPRESSION_CLOSE` before parsing
    so that object literals, sequences and keyword-led text parse as one
    expression. Offsets in the returned tree index the wrapped buffer;
    subtract `offset_correction` to index the original text.

    Building the grammar is the expensive part, so construct one parser and
    share it: `parse` keeps no state between calls.
    """

    def __init__(self) -> None:
        grammar_path = Path(__file__).parent / GRAMMAR_FILE_NAME
        self.parser = Lark.open(
            grammar_path,
            start="start",
            parser="earley",             # Cover grammar for arrow params and block/object bodies
            lexer="dynamic",             # Lexes by parser state: `/` vs regex, template pieces
            propagate_positions=True,    # start_pos/end_pos on every node
            maybe_placeholders=False,
        )
        self.transformer = ExpressionTransformer()
        logger.debug("built expression parser from %s", grammar_path)

    @property
    def offset_correction(self) -> int:
        """Distance between a wrapped-buffer offset and the original-text offset."""
        return len(EXPRESSION_OPEN)

    def wrap(self, text: str) -> str:
        return f"{EXPRESSION_OPEN}{text}{EXPRESSION_CLOSE}"

    def parse(self, text: str) -> JsNode:
        """
        Parse `text` as a single expression.

        Raises ExpressionSyntaxError with an offset into `text` (not into
        the wrapped buffer) when the text is not a valid expression.
        """
        try:
            return self._parse_buffer(self.wrap(text))
        except ExpressionSyntaxError as e:
            if e.offset is not None:
                e.offset = min(max(e.offset - self.offset_correction, 0), len(text))
            raise

    def _parse_buffer(self, buffer: str) -> JsNode:
        try:
            tree = self.parser.parse(buffer)
        except UnexpectedInput as e:
            logger.debug("parse failed: %s", type(e).__name__)
            raise self._syntax_error(e, buffer) from e
        try:
            return self.transformer.transform(tree)
        except VisitError as e:
            if isinstance(e.orig_exc, ExpressionSyntaxError):
                raise e.orig_exc from None
            raise

    @staticmethod
    def _syntax_error(e: UnexpectedInput, buffer: str) -> ExpressionSyntaxError:
        if isinstance(e, UnexpectedEOF):
            return ExpressionSyntaxError("Unexpected end of expression", len(buffer))
        offset = getattr(e, "pos_in_stream", None)
        if offset is None or offset < 0:
            offset = len(buffer)
        if isinstance(e, UnexpectedCharacters):
            return ExpressionSyntaxError(f"Unexpected character {buffer[offset:offset + 1]!r}", offset)
        token = getattr(e, "token", None)
        if token is not None and getattr(token, "type", None) == "$END":
            return ExpressionSyntaxError("Unexpected end of expression", len(buffer))
        return ExpressionSyntaxError(f"Unexpected token {str(token)!r}", offset)
