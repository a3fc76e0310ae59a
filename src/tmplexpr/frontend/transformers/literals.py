"""
Literal Parser - Extracted from ExpressionTransformer
Handles parsing of literal tokens (numbers, strings, templates, regexes)
"""

from typing import Any, List, Sequence, Union

from lark.lexer import Token

from ...shared.estree import JsNode, Literal, TemplateLiteral

_PLACEHOLDER_OPEN = "${"


class LiteralParser:
    """Dedicated parser for literal tokens"""

    def parse_number(self, token: Token) -> Literal:
        raw = str(token)
        return Literal(start=token.start_pos, end=token.end_pos, value=self._number_value(raw), raw=raw)

    def parse_string(self, token: Token) -> Literal:
        raw = str(token)
        # escapes are kept as written; only the range matters to the rewrite
        return Literal(start=token.start_pos, end=token.end_pos, value=raw[1:-1], raw=raw)

    def parse_regex(self, token: Token) -> Literal:
        raw = str(token)
        return Literal(start=token.start_pos, end=token.end_pos, value=raw, raw=raw)

    def parse_keyword(self, token: Token, value: Any) -> Literal:
        return Literal(start=token.start_pos, end=token.end_pos, value=value, raw=str(token))

    def parse_template(self, start: int, end: int, parts: Sequence[Union[Token, JsNode]]) -> TemplateLiteral:
        """
        Assemble a template literal from its lexed pieces.

        `parts` alternates text pieces and placeholder expressions, starting
        and ending with text: "`a${" x "}b${" y "}c`". The expressions were
        parsed in place, so their offsets already index the buffer.
        """
        quasis: List[str] = []
        expressions: List[JsNode] = []
        for part in parts:
            if isinstance(part, Token):
                quasis.append(self._quasi_text(str(part)))
            else:
                expressions.append(part)
        return TemplateLiteral(start=start, end=end, quasis=quasis, expressions=expressions)

    @staticmethod
    def _quasi_text(raw: str) -> str:
        # leading "`" or "}", trailing "`" or "${"
        text = raw[1:]
        if text.endswith(_PLACEHOLDER_OPEN):
            return text[:-len(_PLACEHOLDER_OPEN)]
        return text[:-1]

    def _number_value(self, raw: str) -> Any:
        text = raw.replace("_", "")
        if text.endswith("n"):
            return int(text[:-1], 0)
        lowered = text.lower()
        if lowered.startswith(("0x", "0b", "0o")):
            return int(text, 0)
        if "." in text or "e" in lowered:
            return float(text)
        return int(text)
